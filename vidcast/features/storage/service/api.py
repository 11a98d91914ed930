from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional

from ..data.local_fs import LocalScratchStorage, epoch_ms


class StorageService:
    """
    Facade for the scratch directory.
    Knows the naming conventions each pipeline stage writes under.
    """
    def __init__(self, backend: Optional[LocalScratchStorage] = None):
        self.fs = backend or LocalScratchStorage()

    def download_path(self, request_id, filename: str) -> Path:
        return self.fs.allocate("ingest", str(request_id), filename)

    def trimmed_path(self, video_id, source: Path) -> Path:
        """Publish-time trim output: trimmed_{video_id}_{epoch_ms}{ext}"""
        return self.fs.path_for(f"trimmed_{video_id}_{epoch_ms()}{Path(source).suffix}")

    def save_upload(self, record_id, filename: str, stream: BinaryIO) -> Path:
        return self.fs.save_upload(str(record_id), filename, stream)

    def write_stream(self, destination: Path, chunks: Iterable[bytes]) -> int:
        return self.fs.write_stream(destination, chunks)

    def stale_trims(self, video_id) -> List[Path]:
        return self.fs.find(f"trimmed_{video_id}_*")

    def public_url(self, path) -> str:
        return self.fs.public_url(Path(path))

    def resolve_local(self, reference: str) -> Optional[Path]:
        return self.fs.resolve_local(reference)

    def remove(self, path) -> bool:
        return self.fs.remove(Path(path))


# Singleton Instance for easy import
storage = StorageService()
