import logging
from typing import List
from uuid import UUID

from vidcast.core.common.enums import VideoStatus
from vidcast.features.videos.data.repository import video_repo
from vidcast.features.videos.data.sql_models import VideoModel
from ..domain.models import ClipSpec

logger = logging.getLogger(__name__)


def _owned_parent(parent_id: UUID, user_id: str) -> VideoModel:
    parent = video_repo.require(parent_id)
    if parent.user_id != user_id:
        raise PermissionError(f"User {user_id} does not own video {parent_id}")
    return parent


def create_clip(parent_id: UUID, user_id: str, spec: ClipSpec) -> VideoModel:
    """
    Public Service API: create a clip as a new video referencing the parent's file.
    The clip starts out `ready_to_edit`; its start/end are not adjusted for the
    parent's publish trim.
    """
    parent = _owned_parent(parent_id, user_id)

    clip = video_repo.create(
        user_id=user_id,
        original_filename=f"clip_{parent.id}_{spec.start_sec:g}-{spec.end_sec:g}.mp4",
        storage_path=parent.storage_path,
        status=VideoStatus.READY_TO_EDIT,
        parent_video_id=parent.id,
        start_sec=float(spec.start_sec),
        end_sec=float(spec.end_sec),
        language=parent.language,
        **spec.sanitized(),
    )
    logger.info(f"Clip {clip.id} created from parent {parent.id} ({spec.start_sec}s - {spec.end_sec}s)")
    return clip


def list_clips(parent_id: UUID, user_id: str) -> List[VideoModel]:
    _owned_parent(parent_id, user_id)
    return video_repo.list_for_user(user_id, parent_video_id=parent_id)
