# File: vidcast/features/transcription/domain/models.py
from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class TranscriptionRequest:
    media_url: str
    language: str = "en"

    def __post_init__(self):
        if not self.media_url.strip():
            raise ValueError("Media URL cannot be empty.")


@dataclass(frozen=True)
class TranscriptionResult:
    """
    The output of the transcription service.
    Either field may be empty; a usable result has at least one.
    """
    text: str = ""
    captions: str = ""
    raw: Dict[str, Any] = field(default_factory=dict)

    @property
    def transcript(self) -> Optional[str]:
        """Caption track when present (it keeps timing), else plain text, else None."""
        if self.captions and self.captions.strip():
            return self.captions
        if self.text and self.text.strip():
            return self.text
        return None

    @property
    def is_empty(self) -> bool:
        return self.transcript is None
