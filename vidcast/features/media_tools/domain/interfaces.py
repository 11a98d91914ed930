from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional

from .models import TrimRequest


class IMediaProber(ABC):
    @abstractmethod
    def probe_duration_ms(self, path: Path) -> Optional[int]:
        """
        Reads the container duration of a media file.

        Returns:
            Duration in whole milliseconds, or None when it cannot be determined.
        """
        pass


class IVideoTrimmer(ABC):
    """
    Contract for the clipping engine used at publish time.
    Abstracts away the underlying tool (FFmpeg) from the publish flow.
    """

    @abstractmethod
    def trim(self, request: TrimRequest) -> None:
        """
        Writes a time-clipped copy of the source without re-encoding.

        Raises:
            FileNotFoundError: If source does not exist.
            MediaToolError: If the underlying process exits non-zero.
        """
        pass
