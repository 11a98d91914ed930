import logging
from uuid import UUID
from typing import List, Optional

from sqlalchemy import update

from vidcast.core.database.connection import SessionLocal
from vidcast.core.common.enums import VideoStatus, VIDEO_TRANSITIONS, ensure_transition
from vidcast.core.common.errors import InvalidStatusTransition, RecordNotFound
from .sql_models import VideoModel
from ..domain.interfaces import IVideoRepository

logger = logging.getLogger(__name__)


class SqlVideoRepo(IVideoRepository):
    def create(self, **fields) -> VideoModel:
        with SessionLocal() as db:
            video = VideoModel(**fields)
            db.add(video)
            db.commit()
            db.refresh(video)
            logger.info(f"Video Created: {video.id} [{video.status.value}] {video.original_filename}")
            return video

    def get(self, video_id: UUID) -> Optional[VideoModel]:
        with SessionLocal() as db:
            return db.get(VideoModel, video_id)

    def require(self, video_id: UUID) -> VideoModel:
        video = self.get(video_id)
        if video is None:
            raise RecordNotFound("Video", video_id)
        return video

    def update(self, video_id: UUID, **fields) -> VideoModel:
        with SessionLocal() as db:
            video = db.get(VideoModel, video_id)
            if video is None:
                raise RecordNotFound("Video", video_id)
            for key, value in fields.items():
                setattr(video, key, value)
            db.commit()
            db.refresh(video)
            return video

    def transition(self, video_id: UUID, target: VideoStatus, **fields) -> VideoModel:
        with SessionLocal() as db:
            video = db.get(VideoModel, video_id)
            if video is None:
                raise RecordNotFound("Video", video_id)

            previous = video.status
            ensure_transition(VIDEO_TRANSITIONS, previous, target)

            result = db.execute(
                update(VideoModel)
                .where(VideoModel.id == video_id)
                .where(VideoModel.status == previous)
                .values(status=target, **fields)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount != 1:
                # Moved by someone else since it was read
                db.rollback()
                db.refresh(video)
                raise InvalidStatusTransition(video.status, target)

            db.commit()
            db.refresh(video)
            logger.info(f"Video {video_id}: {previous.value} -> {target.value}")
            return video

    def list_for_user(self, user_id: str, parent_video_id: Optional[UUID] = None) -> List[VideoModel]:
        with SessionLocal() as db:
            query = db.query(VideoModel).filter(VideoModel.user_id == user_id)
            if parent_video_id is not None:
                query = query.filter(VideoModel.parent_video_id == parent_video_id)
            return query.order_by(VideoModel.created_at.desc()).all()


video_repo = SqlVideoRepo()
