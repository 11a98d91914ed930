from dataclasses import dataclass
from pathlib import Path


@dataclass(frozen=True)
class MediaFile:
    """
    Value Object representing a media file path.
    Source files are validated on creation; outputs opt out with validate_exists=False.
    """
    path: Path
    validate_exists: bool = True

    def __post_init__(self):
        if str(self.path).strip() in ("", "."):
            raise ValueError("File path cannot be empty.")
        if self.validate_exists:
            if not self.path.exists():
                raise FileNotFoundError(f"Media file not found: {self.path}")
            if not self.path.is_file():
                raise ValueError(f"Path is not a file: {self.path}")

    def exists(self) -> bool:
        return self.path.exists()

    def ensure_parent_dir(self) -> None:
        """Creates the directory structure for this file if it doesn't exist."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
