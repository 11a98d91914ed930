from abc import ABC, abstractmethod
from typing import Optional

from .models import PublishResult, PublishSubmission, ThumbnailPayload


class IPublishingPlatform(ABC):
    """
    Contract for the external video host.
    """

    @abstractmethod
    def submit(self, submission: PublishSubmission) -> PublishResult:
        """
        Uploads the video with its metadata, thumbnail and captions.

        Raises:
            PublishError: On transport failure, a non-2xx status or a response
                that does not report success.
        """
        pass


class IThumbnailResolver(ABC):
    @abstractmethod
    def resolve(self, reference: Optional[str]) -> Optional[ThumbnailPayload]:
        """
        Loads a thumbnail from a local `/uploads/...` reference or a remote URL.
        Returns None when there is nothing usable; never raises.
        """
        pass
