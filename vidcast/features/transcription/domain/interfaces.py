from abc import ABC, abstractmethod
from .models import TranscriptionRequest, TranscriptionResult


class ITranscriber(ABC):
    """
    Contract for the speech-to-text collaborator.
    The pipeline only ever hands it a publicly reachable media URL.
    """
    @abstractmethod
    def transcribe(self, request: TranscriptionRequest) -> TranscriptionResult:
        """
        Transcribes the media behind request.media_url.

        Returns:
            TranscriptionResult (possibly empty; callers decide whether that is fatal).

        Raises:
            TranscriptionError: On transport failures or a non-2xx response.
        """
        pass
