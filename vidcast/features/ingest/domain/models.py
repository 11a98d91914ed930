from dataclasses import dataclass
from pathlib import PurePosixPath
from typing import Optional

VIDEO_EXTENSIONS = frozenset({".mp4", ".mov", ".avi", ".mkv", ".webm", ".m4v", ".wmv", ".flv", ".3gp"})


@dataclass(frozen=True)
class CloudFile:
    """An entry in a cloud-storage listing."""
    path: str
    name: str
    size: Optional[int] = None
    id: Optional[str] = None
    modified: Optional[str] = None
    is_folder: bool = False

    def __post_init__(self):
        if not self.path or not self.path.strip():
            raise ValueError("Cloud file path cannot be empty.")
        if not self.name or not self.name.strip():
            raise ValueError("Cloud file name cannot be empty.")

    @property
    def is_video(self) -> bool:
        return not self.is_folder and PurePosixPath(self.name).suffix.lower() in VIDEO_EXTENSIONS
