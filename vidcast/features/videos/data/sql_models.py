import uuid
from datetime import datetime, timezone
from sqlalchemy import (
    Column, String, Integer, Float, Text, DateTime, ForeignKey, CheckConstraint, Enum as SQLEnum
)
from sqlalchemy.orm import relationship
from sqlalchemy.dialects.postgresql import UUID
from vidcast.core.database.base import Base
from vidcast.core.common.enums import VideoStatus, PrivacyStatus, ConfidentialityStatus


def utc_now():
    return datetime.now(timezone.utc)


class VideoModel(Base):
    __tablename__ = "videos"
    __table_args__ = (
        CheckConstraint(
            "trim_end_ms IS NULL OR trim_start_ms IS NULL OR trim_end_ms > trim_start_ms",
            name="ck_videos_trim_window"
        ),
    )

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, index=True)
    original_filename = Column(String, nullable=False)
    status = Column(SQLEnum(VideoStatus), nullable=False, default=VideoStatus.UPLOADING, index=True)
    storage_path = Column(String, nullable=False)

    # --- Transcription ---
    transcript = Column(Text, nullable=True)
    language = Column(String, nullable=False, default="en")
    duration_ms = Column(Integer, nullable=True)

    # --- Pipeline trim (applied at publish time) ---
    trim_start_ms = Column(Integer, nullable=True)
    trim_end_ms = Column(Integer, nullable=True)
    suggested_start_ms = Column(Integer, nullable=True)
    suggested_end_ms = Column(Integer, nullable=True)

    # --- Publish metadata ---
    title = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    tags = Column(Text, nullable=True)
    hashtags = Column(Text, nullable=True)
    thumbnail_prompt = Column(Text, nullable=True)
    thumbnail_url = Column(String, nullable=True)
    privacy_status = Column(SQLEnum(PrivacyStatus), nullable=False, default=PrivacyStatus.PRIVATE)

    # --- Publishing platform ---
    platform_video_id = Column(String, nullable=True)
    platform_url = Column(String, nullable=True)

    error_message = Column(Text, nullable=True)

    confidentiality_status = Column(SQLEnum(ConfidentialityStatus), nullable=True)
    last_confidentiality_check_id = Column(UUID(as_uuid=True), nullable=True)

    # --- Clips: offsets into the parent's timeline, independent of trim_* ---
    parent_video_id = Column(UUID(as_uuid=True), ForeignKey("videos.id"), nullable=True, index=True)
    start_sec = Column(Float, nullable=True)
    end_sec = Column(Float, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)

    parent = relationship("VideoModel", remote_side=[id], back_populates="clips")
    clips = relationship("VideoModel", back_populates="parent")

    @property
    def is_clip(self) -> bool:
        return self.parent_video_id is not None
