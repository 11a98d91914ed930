import json
import logging
import mimetypes
from typing import Any, Dict, Optional

import requests

from vidcast.core.config.settings import settings
from vidcast.core.common.errors import PublishError
from ..domain.interfaces import IPublishingPlatform
from ..domain.models import PublishResult, PublishSubmission

logger = logging.getLogger(__name__)


def _error_detail(data: Any) -> Optional[str]:
    """Body error object (serialized) or message, whichever the platform sent."""
    if not isinstance(data, dict):
        return None
    if data.get("error"):
        error = data["error"]
        return error if isinstance(error, str) else json.dumps(error)
    if data.get("message"):
        return str(data["message"])
    return None


class HttpPublishingClient(IPublishingPlatform):
    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.endpoint = endpoint or settings.PUBLISH_URL
        self.timeout = timeout or settings.PUBLISH_TIMEOUT_SECONDS
        self.http = session or requests.Session()

    def _form(self, submission: PublishSubmission) -> Dict[str, str]:
        return {
            "title": submission.title,
            "channel_id": submission.channel_id,
            "description": submission.description,
            "tags": submission.tags,
            "privacy": submission.privacy,
        }

    def submit(self, submission: PublishSubmission) -> PublishResult:
        video_type = mimetypes.guess_type(submission.video_path.name)[0] or "application/octet-stream"
        logger.info(f"Uploading {submission.video_path.name} to channel {submission.channel_id}")

        try:
            with open(submission.video_path, "rb") as fh:
                files = {"video": (submission.video_path.name, fh, video_type)}
                if submission.thumbnail is not None:
                    thumb = submission.thumbnail
                    files["thumbnail"] = (thumb.filename, thumb.content, thumb.content_type)
                if submission.captions:
                    files["english_captions"] = ("captions.vtt", submission.captions.encode("utf-8"), "text/vtt")

                resp = self.http.post(
                    self.endpoint,
                    data=self._form(submission),
                    files=files,
                    timeout=float(self.timeout),
                )
        except requests.RequestException as e:
            raise PublishError(str(e), code=type(e).__name__) from e

        try:
            data = resp.json()
        except ValueError:
            data = None
        body = data if isinstance(data, dict) else {}

        if resp.status_code >= 400:
            raise PublishError(
                status_code=resp.status_code,
                reason=resp.reason or body.get("message"),
                error_body=_error_detail(body) or (resp.text[:500] if data is None else None),
                code=body.get("code"),
            )

        if not body.get("success") or not body.get("video_id"):
            error = body.get("error")
            raise PublishError(
                body.get("message") or "Publishing platform returned an unexpected response",
                error_body=None if error is None else (error if isinstance(error, str) else json.dumps(error)),
                code=body.get("code"),
            )

        return PublishResult(platform_video_id=str(body["video_id"]), url=body.get("url"))
