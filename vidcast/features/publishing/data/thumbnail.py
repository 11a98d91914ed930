import logging
import mimetypes
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

import requests

from vidcast.core.config.settings import settings
from vidcast.features.storage.service.api import StorageService, storage
from ..domain.interfaces import IThumbnailResolver
from ..domain.models import ThumbnailPayload

logger = logging.getLogger(__name__)


class ThumbnailResolver(IThumbnailResolver):
    def __init__(
        self,
        scratch: Optional[StorageService] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.scratch = scratch or storage
        self.timeout = timeout or settings.THUMBNAIL_FETCH_TIMEOUT_SECONDS
        self.http = session or requests.Session()

    def resolve(self, reference: Optional[str]) -> Optional[ThumbnailPayload]:
        if not reference:
            return None

        local = self.scratch.resolve_local(reference)
        if local is not None:
            try:
                content = local.read_bytes()
            except OSError as e:
                logger.warning(f"Thumbnail {local} could not be read: {e}")
                return None
            return ThumbnailPayload(
                filename=local.name,
                content=content,
                content_type=mimetypes.guess_type(local.name)[0] or "image/png",
            )

        if urlparse(reference).scheme not in ("http", "https"):
            logger.warning(f"Thumbnail reference not found locally and not a URL: {reference}")
            return None

        try:
            resp = self.http.get(reference, timeout=float(self.timeout))
        except requests.RequestException as e:
            logger.warning(f"Thumbnail fetch failed for {reference}: {e}")
            return None
        if resp.status_code >= 400:
            logger.warning(f"Thumbnail fetch failed for {reference}: HTTP {resp.status_code}")
            return None

        name = Path(urlparse(reference).path).name or "thumbnail.png"
        content_type = (resp.headers.get("Content-Type") or "").split(";")[0].strip()
        return ThumbnailPayload(
            filename=name,
            content=resp.content,
            content_type=content_type or mimetypes.guess_type(name)[0] or "image/png",
        )
