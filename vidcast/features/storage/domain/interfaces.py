from abc import ABC, abstractmethod
from pathlib import Path
from typing import BinaryIO, Iterable, List, Optional


class IScratchStorage(ABC):
    """
    Contract for the shared scratch directory.
    Every writer gets a name namespaced by its record id and a timestamp.
    """

    @abstractmethod
    def allocate(self, prefix: str, record_id: str, filename: str) -> Path:
        """Returns a fresh, collision-free path inside the scratch directory."""
        pass

    @abstractmethod
    def path_for(self, name: str) -> Path:
        pass

    @abstractmethod
    def write_stream(self, destination: Path, chunks: Iterable[bytes]) -> int:
        """Writes chunks to destination and returns the number of bytes written."""
        pass

    @abstractmethod
    def public_url(self, path: Path) -> str:
        """Maps a scratch file to the URL external services fetch it from."""
        pass

    @abstractmethod
    def resolve_local(self, reference: str) -> Optional[Path]:
        """Resolves a `/uploads/<name>` reference to an existing scratch file."""
        pass

    @abstractmethod
    def remove(self, path: Path) -> bool:
        pass

    @abstractmethod
    def find(self, pattern: str) -> List[Path]:
        """Glob inside the scratch directory."""
        pass

    @abstractmethod
    def save_upload(self, record_id: str, filename: str, stream: BinaryIO) -> Path:
        pass
