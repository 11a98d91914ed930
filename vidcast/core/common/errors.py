# File: vidcast/core/common/errors.py

from typing import Any, Optional


class VidcastError(Exception):
    """Base class for pipeline errors recorded onto a Video or ImportRequest."""


class RecordNotFound(VidcastError):
    def __init__(self, kind: str, record_id: Any):
        super().__init__(f"{kind} {record_id} not found")
        self.kind = kind
        self.record_id = record_id


class InvalidStatusTransition(VidcastError):
    def __init__(self, current: Any, target: Any):
        current_value = getattr(current, "value", current)
        target_value = getattr(target, "value", target)
        super().__init__(f"Illegal status transition: {current_value} -> {target_value}")
        self.current = current
        self.target = target


class MediaToolError(VidcastError, RuntimeError):
    """An external media utility exited non-zero."""


class TranscriptionError(VidcastError, RuntimeError):
    pass


class CloudStorageError(VidcastError, RuntimeError):
    pass


class MissingTranscript(VidcastError, ValueError):
    def __init__(self, video_id: Any):
        super().__init__(f"Video {video_id} has no transcript")
        self.video_id = video_id


class PublishError(VidcastError, RuntimeError):
    """
    Failure reported by (or while talking to) the publishing platform.
    The message is assembled so it can be shown to the user verbatim.
    """

    def __init__(
        self,
        message: str = "",
        status_code: Optional[int] = None,
        reason: Optional[str] = None,
        error_body: Any = None,
        code: Optional[str] = None,
    ):
        self.status_code = status_code
        self.reason = reason
        self.error_body = error_body
        self.code = code
        super().__init__(self.describe(message))

    def describe(self, message: str = "") -> str:
        parts = []
        if self.status_code is not None:
            parts.append(f"HTTP {self.status_code}: {self.reason or message or 'Request failed'}")
        else:
            parts.append(message or self.reason or "Publish failed")

        if self.error_body:
            parts.append(f" - {self.error_body}")
        if self.code:
            parts.append(f" (Code: {self.code})")
        return "".join(parts)
