import re
import time
import shutil
import logging
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from vidcast.core.config.settings import settings
from ..domain.interfaces import IScratchStorage

logger = logging.getLogger(__name__)

UNSAFE_CHARS = re.compile(r"[^a-zA-Z0-9.\-]")


def sanitize_filename(name: str) -> str:
    cleaned = UNSAFE_CHARS.sub("_", Path(name).name)
    return cleaned or "file"


def epoch_ms() -> int:
    return int(time.time() * 1000)


class LocalScratchStorage(IScratchStorage):
    def __init__(self, root: Optional[Path] = None, public_base_url: Optional[str] = None):
        self.root = Path(root) if root else settings.UPLOADS_DIR
        self.public_base_url = (public_base_url or settings.PUBLIC_BASE_URL).rstrip("/")

    def allocate(self, prefix: str, record_id: str, filename: str) -> Path:
        """Builds {prefix}_{record_id}_{epoch_ms}_{sanitized_name}."""
        return self.path_for(f"{prefix}_{record_id}_{epoch_ms()}_{sanitize_filename(filename)}")

    def path_for(self, name: str) -> Path:
        self.root.mkdir(parents=True, exist_ok=True)
        return self.root / name

    def write_stream(self, destination: Path, chunks: Iterable[bytes]) -> int:
        destination.parent.mkdir(parents=True, exist_ok=True)
        written = 0
        try:
            with open(destination, "wb") as fh:
                for chunk in chunks:
                    if chunk:
                        fh.write(chunk)
                        written += len(chunk)
        except Exception:
            # Drop partial downloads
            self.remove(destination)
            raise
        return written

    def save_upload(self, record_id: str, filename: str, stream: BinaryIO) -> Path:
        destination = self.allocate("upload", record_id, filename)
        with open(destination, "wb") as fh:
            shutil.copyfileobj(stream, fh)
        return destination

    def public_url(self, path: Path) -> str:
        return f"{self.public_base_url}/uploads/{Path(path).name}"

    def resolve_local(self, reference: str) -> Optional[Path]:
        if not reference or not reference.startswith("/uploads/"):
            return None
        candidate = self.root / Path(reference).name
        return candidate if candidate.is_file() else None

    def remove(self, path: Path) -> bool:
        try:
            Path(path).unlink()
            return True
        except FileNotFoundError:
            return False
        except OSError as e:
            logger.warning(f"Could not remove scratch file {path}: {e}")
            return False

    def find(self, pattern: str) -> List[Path]:
        if not self.root.exists():
            return []
        return sorted(self.root.glob(pattern))
