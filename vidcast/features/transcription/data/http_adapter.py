import logging
from typing import Optional

import requests

from vidcast.core.config.settings import settings
from vidcast.core.common.errors import TranscriptionError
from ..domain.interfaces import ITranscriber
from ..domain.models import TranscriptionRequest, TranscriptionResult

logger = logging.getLogger(__name__)


class HttpTranscriptionAdapter(ITranscriber):
    """
    Client for the remote transcription service.
    Sends a form-encoded body (video_url, language_code) and reads back
    {text, srt} or {text, captions}.
    """

    def __init__(
        self,
        endpoint: Optional[str] = None,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None
    ):
        self.endpoint = endpoint or settings.TRANSCRIPTION_URL
        self.timeout = timeout or settings.TRANSCRIPTION_TIMEOUT_SECONDS
        self.http = session or requests.Session()

    def transcribe(self, request: TranscriptionRequest) -> TranscriptionResult:
        logger.info(f"Requesting transcription for {request.media_url} ({request.language})")

        try:
            resp = self.http.post(
                self.endpoint,
                data={"video_url": request.media_url, "language_code": request.language},
                timeout=float(self.timeout),
            )
        except requests.RequestException as e:
            raise TranscriptionError(f"Transcription request failed: {e}") from e

        if resp.status_code >= 400:
            raise TranscriptionError(f"Transcription failed ({resp.status_code}): {resp.text[:500]}")

        try:
            data = resp.json() or {}
        except ValueError as e:
            raise TranscriptionError(f"Transcription service returned invalid JSON: {e}") from e

        if not isinstance(data, dict):
            raise TranscriptionError("Transcription service returned an unexpected payload")

        captions = data.get("srt") or data.get("captions") or ""
        text = data.get("text") or ""
        return TranscriptionResult(text=str(text), captions=str(captions), raw=data)
