from abc import ABC, abstractmethod
from pathlib import Path
from typing import List

from .models import CloudFile


class ICloudStorageClient(ABC):
    """
    Contract for a provider-specific cloud-storage client.
    Calls are fallible and rate-limited; the per-user connection is resolved by the caller.
    """

    @abstractmethod
    def get_temporary_download_link(self, path: str) -> str:
        """
        Raises:
            CloudStorageError: If the provider rejects the request.
        """
        pass

    @abstractmethod
    def list_files(self, path: str) -> List[CloudFile]:
        pass


class IFileDownloader(ABC):
    @abstractmethod
    def download(self, url: str, destination: Path) -> int:
        """
        Streams `url` into `destination`.

        Returns:
            Bytes written.

        Raises:
            CloudStorageError: On transport failures or a non-2xx response.
        """
        pass
