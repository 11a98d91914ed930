import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, BigInteger, Text, DateTime, ForeignKey, Enum as SQLEnum, JSON
from sqlalchemy.dialects.postgresql import UUID
from vidcast.core.database.base import Base
from vidcast.core.common.enums import IngestStatus


def utc_now():
    return datetime.now(timezone.utc)


class ImportRequestModel(Base):
    __tablename__ = "video_ingest_requests"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(String, nullable=False, index=True)
    provider = Column(String, nullable=False)
    source_path = Column(String, nullable=False)
    source_file_name = Column(String, nullable=False)
    source_size = Column(BigInteger, nullable=True)

    status = Column(SQLEnum(IngestStatus), nullable=False, default=IngestStatus.QUEUED, index=True)
    progress = Column(JSON, default=dict)
    error_message = Column(Text, nullable=True)

    # Set once, right after the local download produced a Video
    video_id = Column(UUID(as_uuid=True), ForeignKey("videos.id"), nullable=True)
    downloaded_path = Column(String, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now, index=True)
    updated_at = Column(DateTime(timezone=True), default=utc_now, onupdate=utc_now)
    started_at = Column(DateTime(timezone=True), nullable=True)
    completed_at = Column(DateTime(timezone=True), nullable=True)
