from typing import Optional

from vidcast.core.config.settings import settings
from ..data.http_adapter import HttpTranscriptionAdapter
from ..domain.models import TranscriptionRequest, TranscriptionResult


def run_transcription(media_url: str, language: Optional[str] = None) -> TranscriptionResult:
    """
    Standalone API for transcribing a public media URL.
    Useful for testing or CLI tools without the processing pipeline.
    """
    adapter = HttpTranscriptionAdapter()
    return adapter.transcribe(
        TranscriptionRequest(media_url=media_url, language=language or settings.TRANSCRIPTION_LANGUAGE)
    )
