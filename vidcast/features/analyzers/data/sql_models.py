import uuid
from datetime import datetime, timezone
from sqlalchemy import Column, String, Integer, Text, DateTime, ForeignKey, Enum as SQLEnum, JSON
from sqlalchemy.dialects.postgresql import UUID
from vidcast.core.database.base import Base
from vidcast.core.common.enums import CheckStatus


def utc_now():
    return datetime.now(timezone.utc)


class ConfidentialityCheckModel(Base):
    __tablename__ = "confidentiality_checks"

    id = Column(UUID(as_uuid=True), primary_key=True, default=uuid.uuid4)
    video_id = Column(UUID(as_uuid=True), ForeignKey("videos.id"), nullable=False, index=True)
    status = Column(SQLEnum(CheckStatus), nullable=False, default=CheckStatus.PENDING)
    overall_status = Column(String, nullable=True)  # clear | flagged

    segments = Column(JSON, default=list)
    summary = Column(Text, nullable=True)
    high_count = Column(Integer, default=0)
    medium_count = Column(Integer, default=0)
    low_count = Column(Integer, default=0)

    model_used = Column(String, nullable=True)
    triggered_by = Column(String, nullable=True)
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utc_now)
    completed_at = Column(DateTime(timezone=True), nullable=True)
