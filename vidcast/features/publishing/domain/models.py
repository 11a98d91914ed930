from dataclasses import dataclass
from pathlib import Path
from typing import Optional


@dataclass(frozen=True)
class ThumbnailPayload:
    filename: str
    content: bytes
    content_type: str = "image/png"


@dataclass(frozen=True)
class PublishSubmission:
    """Everything that goes into one multi-part upload."""
    video_path: Path
    title: str
    channel_id: str
    description: str = ""
    tags: str = ""
    privacy: str = "public"
    thumbnail: Optional[ThumbnailPayload] = None
    captions: Optional[str] = None

    def __post_init__(self):
        if not str(self.channel_id).strip():
            raise ValueError("A target channel is required to publish.")
        if not self.title.strip():
            raise ValueError("A title is required to publish.")


@dataclass(frozen=True)
class PublishResult:
    platform_video_id: str
    url: Optional[str] = None
