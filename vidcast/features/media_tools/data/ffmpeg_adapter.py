import math
import subprocess
import logging
from pathlib import Path
from typing import Optional

from vidcast.core.config.settings import settings
from vidcast.core.common.errors import MediaToolError
from ..domain.interfaces import IMediaProber, IVideoTrimmer
from ..domain.models import TrimRequest, format_timestamp

logger = logging.getLogger(__name__)


class FFprobeAdapter(IMediaProber):

    def probe_duration_ms(self, path: Path) -> Optional[int]:
        cmd = [
            settings.FFPROBE_BINARY,
            "-v", "error",
            "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1",
            str(path)
        ]

        try:
            result = subprocess.run(cmd, check=True, capture_output=True, text=True)
        except (subprocess.CalledProcessError, OSError) as e:
            logger.warning(f"Duration probe failed for {path}: {e}")
            return None

        raw = (result.stdout or "").strip()
        try:
            seconds = float(raw)
        except ValueError:
            logger.warning(f"Duration probe returned non-numeric output for {path}: {raw!r}")
            return None

        if math.isnan(seconds) or math.isinf(seconds) or seconds < 0:
            return None
        return int(math.floor(seconds * 1000))


class FFmpegTrimAdapter(IVideoTrimmer):
    """
    Concrete implementation of IVideoTrimmer using FFmpeg stream copy.
    Cuts land on the nearest keyframe; nothing is re-encoded.
    """

    def build_command(self, request: TrimRequest) -> list:
        # -y: Overwrite output files without asking
        # -ss before -i: fast input seeking
        # -t: clip length, omitted for an open window
        # -c copy: no re-encode
        cmd = [
            settings.FFMPEG_BINARY,
            "-y",
            "-ss", format_timestamp(request.window.start_ms),
            "-i", str(request.source_video.path),
        ]
        if request.window.duration_ms is not None:
            cmd += ["-t", format_timestamp(request.window.duration_ms)]
        cmd += ["-c", "copy", str(request.output_video.path)]
        return cmd

    def trim(self, request: TrimRequest) -> None:
        request.output_video.ensure_parent_dir()
        cmd = self.build_command(request)

        logger.info(f"Executing FFmpeg Trim: {' '.join(cmd)}")

        try:
            subprocess.run(
                cmd,
                check=True,
                capture_output=True,
                text=True
            )
        except subprocess.CalledProcessError as e:
            error_message = e.stderr if e.stderr else "Unknown FFmpeg error"
            logger.error(f"FFmpeg Trim Failed. STDERR: {error_message}")
            raise MediaToolError(f"Video trim failed: {error_message}") from e
        except OSError as e:
            raise MediaToolError(f"Video trim failed: {e}") from e
