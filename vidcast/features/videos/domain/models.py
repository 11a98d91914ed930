from dataclasses import dataclass
from concurrent.futures import Future
from typing import Optional
from uuid import UUID


@dataclass(frozen=True)
class TrimSettings:
    """
    Value Object for a user-chosen publish trim.
    Either bound may be left open.
    """
    start_ms: Optional[int] = None
    end_ms: Optional[int] = None

    def __post_init__(self):
        for name, value in (("start", self.start_ms), ("end", self.end_ms)):
            if value is not None and (isinstance(value, bool) or not isinstance(value, int) or value < 0):
                raise ValueError(f"Invalid {name} time: {value!r}")
        if self.start_ms is not None and self.end_ms is not None and self.end_ms <= self.start_ms:
            raise ValueError("End time must be after start time")


@dataclass(frozen=True)
class ProcessingOutcome:
    """
    Result of driving one video through transcription.
    `metadata_task` is the detached metadata run, when one was spawned.
    """
    video_id: UUID
    ok: bool
    error: Optional[str] = None
    metadata_task: Optional[Future] = None
