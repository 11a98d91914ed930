from pathlib import Path
from typing import Optional, Union

from vidcast.core.shared_types import MediaFile
from ..domain.models import TrimRequest, TrimWindow
from ..data.ffmpeg_adapter import FFprobeAdapter, FFmpegTrimAdapter


def probe_duration_ms(path: Union[str, Path]) -> Optional[int]:
    """
    Public Service API: advisory duration lookup.
    Never raises; an unreadable file yields None.
    """
    return FFprobeAdapter().probe_duration_ms(Path(path))


def trim_video(
    source_path: Union[str, Path],
    dest_path: Union[str, Path],
    start_ms: int,
    end_ms: Optional[int] = None
) -> None:
    """
    Public Service API: Produce a stream-copied excerpt of a video.

    Args:
        source_path: Path to the source video.
        dest_path: Path where the excerpt should be written.
        start_ms: Start offset in milliseconds.
        end_ms: Optional end offset; the excerpt runs to the source's end when omitted.
    """
    request = TrimRequest(
        source_video=MediaFile(Path(source_path), validate_exists=True),
        output_video=MediaFile(Path(dest_path), validate_exists=False),
        window=TrimWindow(start_ms=int(start_ms), end_ms=None if end_ms is None else int(end_ms))
    )
    FFmpegTrimAdapter().trim(request)
