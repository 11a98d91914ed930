import logging
from typing import Any, Dict, List, Optional

import requests

from vidcast.core.config.settings import settings
from vidcast.core.common.errors import CloudStorageError
from ..domain.interfaces import ICloudStorageClient
from ..domain.models import CloudFile

logger = logging.getLogger(__name__)

LIST_PAGE_LIMIT = 2000


class DropboxClient(ICloudStorageClient):
    """
    Minimal Dropbox v2 HTTP client: temporary links and folder listings.
    """

    def __init__(
        self,
        access_token: Optional[str] = None,
        api_url: Optional[str] = None,
        timeout: float = 60.0,
        session: Optional[requests.Session] = None
    ):
        self.access_token = access_token if access_token is not None else settings.DROPBOX_ACCESS_TOKEN
        self.api_url = (api_url or settings.DROPBOX_API_URL).rstrip("/")
        self.timeout = timeout
        self.http = session or requests.Session()

    def _post(self, endpoint: str, body: Dict[str, Any]) -> Dict[str, Any]:
        if not self.access_token:
            raise CloudStorageError("Dropbox is not connected (missing access token)")

        try:
            resp = self.http.post(
                f"{self.api_url}/{endpoint}",
                json=body,
                headers={"Authorization": f"Bearer {self.access_token}"},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CloudStorageError(f"Dropbox request failed: {e}") from e

        if resp.status_code >= 400:
            raise CloudStorageError(f"Dropbox API error ({resp.status_code}): {resp.text[:500]}")
        return resp.json() or {}

    @staticmethod
    def _normalize(path: str) -> str:
        # The API addresses the root as "", not "/"
        return "" if path in ("", "/") else path

    @staticmethod
    def _to_cloud_file(entry: Dict[str, Any]) -> CloudFile:
        return CloudFile(
            id=entry.get("id"),
            name=entry.get("name") or "",
            path=entry.get("path_display") or entry.get("path_lower") or "",
            size=entry.get("size"),
            modified=entry.get("server_modified") or entry.get("client_modified"),
            is_folder=entry.get(".tag") == "folder",
        )

    def get_temporary_download_link(self, path: str) -> str:
        data = self._post("files/get_temporary_link", {"path": path})
        link = data.get("link")
        if not link:
            raise CloudStorageError(f"Dropbox returned no download link for {path}")
        return link

    def _list(self, path: str, recursive: bool) -> List[CloudFile]:
        data = self._post(
            "files/list_folder",
            {"path": self._normalize(path), "recursive": recursive, "limit": LIST_PAGE_LIMIT}
        )
        entries = list(data.get("entries") or [])
        while data.get("has_more"):
            data = self._post("files/list_folder/continue", {"cursor": data.get("cursor")})
            entries.extend(data.get("entries") or [])

        files = []
        for entry in entries:
            try:
                files.append(self._to_cloud_file(entry))
            except ValueError as e:
                logger.warning(f"Skipping malformed Dropbox entry: {e}")
        return files

    def list_files(self, path: str) -> List[CloudFile]:
        return self._list(path, recursive=False)

    def search_videos(self, base_path: str = "") -> List[CloudFile]:
        """Every video file under base_path, recursively."""
        videos = [f for f in self._list(base_path, recursive=True) if f.is_video]
        logger.info(f"Found {len(videos)} video(s) under '{base_path or '/'}'")
        return videos
