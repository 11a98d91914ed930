from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from vidcast.core.common.enums import VideoStatus


class IVideoRepository(ABC):
    """
    Persistence contract for Video records.
    Implementations validate every status change against VIDEO_TRANSITIONS.
    """

    @abstractmethod
    def create(self, **fields):
        pass

    @abstractmethod
    def get(self, video_id: UUID):
        """Returns the record or None."""
        pass

    @abstractmethod
    def require(self, video_id: UUID):
        """
        Raises:
            RecordNotFound: If no video has this id.
        """
        pass

    @abstractmethod
    def update(self, video_id: UUID, **fields):
        pass

    @abstractmethod
    def transition(self, video_id: UUID, target: VideoStatus, **fields):
        """
        Moves the video to `target` and applies `fields` in the same commit.

        Raises:
            InvalidStatusTransition: If the current status cannot reach `target`.
        """
        pass

    @abstractmethod
    def list_for_user(self, user_id: str, parent_video_id: Optional[UUID] = None) -> List:
        pass
