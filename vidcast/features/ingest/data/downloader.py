import logging
from pathlib import Path
from typing import Optional

import requests

from vidcast.core.config.settings import settings
from vidcast.core.common.errors import CloudStorageError
from vidcast.features.storage.service.api import StorageService, storage
from ..domain.interfaces import IFileDownloader

logger = logging.getLogger(__name__)

CHUNK_SIZE = 1024 * 1024


class HttpFileDownloader(IFileDownloader):
    def __init__(
        self,
        timeout: Optional[float] = None,
        scratch: Optional[StorageService] = None,
        session: Optional[requests.Session] = None
    ):
        self.timeout = timeout or settings.CLOUD_DOWNLOAD_TIMEOUT_SECONDS
        self.scratch = scratch or storage
        self.http = session or requests.Session()

    def download(self, url: str, destination: Path) -> int:
        logger.info(f"Downloading to {destination}")
        try:
            with self.http.get(url, stream=True, timeout=float(self.timeout)) as resp:
                if resp.status_code >= 400:
                    raise CloudStorageError(f"Download failed ({resp.status_code})")
                written = self.scratch.write_stream(destination, resp.iter_content(chunk_size=CHUNK_SIZE))
        except requests.RequestException as e:
            raise CloudStorageError(f"Download failed: {e}") from e

        logger.info(f"Downloaded {written} bytes to {destination}")
        return written
