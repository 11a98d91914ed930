from concurrent.futures import Future
from uuid import UUID

from vidcast.core.tasks import tasks
from .orchestrator import publisher


def request_publish(video_id: UUID, channel_id: str) -> Future:
    """
    Public Service API: start a publish attempt.
    The video is `publishing` when this returns; the upload itself runs in the
    background and its outcome is observed by polling the video status.
    """
    publisher.begin(video_id, channel_id)
    return tasks.spawn(f"publish:{video_id}", publisher.run, video_id, channel_id)


def publish_now(video_id: UUID, channel_id: str):
    """Synchronous variant, for CLI use and tests."""
    return publisher.publish(video_id, channel_id)
