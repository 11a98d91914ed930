from dataclasses import dataclass
from typing import Optional

from vidcast.core.shared_types import MediaFile


@dataclass(frozen=True)
class TrimWindow:
    """
    Value Object for a trim in milliseconds.
    An open window (end_ms=None) runs to the end of the source.
    """
    start_ms: int
    end_ms: Optional[int] = None

    def __post_init__(self):
        if self.start_ms < 0:
            raise ValueError(f"Start time cannot be negative: {self.start_ms}")
        if self.end_ms is not None and self.end_ms <= self.start_ms:
            raise ValueError(f"End time ({self.end_ms}) must be after start time ({self.start_ms})")

    @property
    def duration_ms(self) -> Optional[int]:
        if self.end_ms is None:
            return None
        return self.end_ms - self.start_ms


@dataclass(frozen=True)
class TrimRequest:
    source_video: MediaFile
    output_video: MediaFile
    window: TrimWindow


def format_timestamp(ms: int) -> str:
    """Renders milliseconds as HH:MM:SS.mmm for the clipping utility."""
    ms = max(0, int(ms))
    hours, rem = divmod(ms, 3_600_000)
    minutes, rem = divmod(rem, 60_000)
    seconds, millis = divmod(rem, 1000)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}.{millis:03d}"
