import logging
import uuid
from concurrent.futures import Future
from pathlib import Path
from typing import BinaryIO, List, Optional
from uuid import UUID

from vidcast.core.common.enums import VideoStatus, PrivacyStatus
from vidcast.core.common.errors import MissingTranscript
from vidcast.core.tasks import tasks
from vidcast.features.storage.service.api import storage
from ..data.repository import video_repo
from ..data.sql_models import VideoModel
from ..domain.models import TrimSettings
from .processor import processor

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("title", "description", "tags", "hashtags", "thumbnail_prompt", "thumbnail_url", "language")


def register_upload(user_id: str, filename: str, stream: BinaryIO) -> VideoModel:
    """
    Public Service API: direct upload path.
    Saves the file to scratch, creates the video in `uploading` and starts
    processing in the background without going through the ingest queue.
    """
    upload_key = uuid.uuid4().hex
    stored = storage.save_upload(upload_key, filename, stream)

    video = video_repo.create(
        user_id=user_id,
        original_filename=filename,
        storage_path=str(stored),
        title=Path(filename).stem,
        status=VideoStatus.UPLOADING,
    )
    tasks.spawn(f"process:{video.id}", processor.process, video.id)
    return video


def get_video(video_id: UUID) -> VideoModel:
    return video_repo.require(video_id)


def get_video_status(video_id: UUID) -> VideoStatus:
    """Lightweight polling read: the bare status field."""
    return video_repo.require(video_id).status


def list_videos(user_id: str) -> List[VideoModel]:
    return video_repo.list_for_user(user_id)


def update_video_details(video_id: UUID, privacy_status: Optional[str] = None, **fields) -> VideoModel:
    unknown = set(fields) - set(EDITABLE_FIELDS)
    if unknown:
        raise ValueError(f"Fields not editable: {sorted(unknown)}")
    if privacy_status is not None:
        fields["privacy_status"] = PrivacyStatus(privacy_status)
    return video_repo.update(video_id, **fields)


def set_trim(video_id: UUID, start_ms: Optional[int] = None, end_ms: Optional[int] = None) -> VideoModel:
    """
    Stores the publish trim. Passing None clears a bound.

    Raises:
        ValueError: Negative bounds, or end not after start.
    """
    trim = TrimSettings(start_ms=start_ms, end_ms=end_ms)
    video_repo.require(video_id)
    return video_repo.update(video_id, trim_start_ms=trim.start_ms, trim_end_ms=trim.end_ms)


def reset_failed_video(video_id: UUID) -> VideoModel:
    """Manual retry: failed -> ready_to_edit, clearing the error."""
    video = video_repo.transition(video_id, VideoStatus.READY_TO_EDIT, error_message=None)
    logger.info(f"Video {video_id} reset for retry")
    return video


def regenerate_metadata(video_id: UUID) -> Future:
    """User-triggered metadata run. Requires a transcript."""
    video = video_repo.require(video_id)
    if not video.transcript:
        raise MissingTranscript(video_id)
    if video.status != VideoStatus.READY_TO_EDIT:
        raise ValueError(f"Video {video_id} is {video.status.value}, expected ready_to_edit")
    return processor.spawn_metadata(video_id)
