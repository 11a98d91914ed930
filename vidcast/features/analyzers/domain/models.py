from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional
from uuid import UUID

SEVERITIES = ("low", "medium", "high")
CATEGORIES = ("proprietary", "financial", "personal_health", "company_secret", "other")
RESOLUTIONS = ("pending", "resolved", "ignored")


@dataclass(frozen=True)
class VideoMetadata:
    """Publish metadata proposed by the LLM. Any field may be missing."""
    title: Optional[str] = None
    description: Optional[str] = None
    tags: Optional[str] = None
    thumbnail_prompt: Optional[str] = None

    def as_fields(self) -> Dict[str, str]:
        """Only the fields that were actually produced, ready for a repo update."""
        values = {
            "title": self.title,
            "description": self.description,
            "tags": self.tags,
            "thumbnail_prompt": self.thumbnail_prompt,
        }
        return {k: v for k, v in values.items() if v}


@dataclass(frozen=True)
class MetadataOutcome:
    """Tagged result of a detached metadata run. Consumed for logging only."""
    video_id: UUID
    metadata: Optional[VideoMetadata] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass(frozen=True)
class BoundarySuggestion:
    """A suggested trim point. `ms` is None when the model recommends no cut."""
    ms: Optional[int]
    reason: str = ""
    confidence: str = "low"
    should_trim: bool = True


@dataclass
class FlaggedSegment:
    id: str
    start_time: str
    end_time: str
    category: str
    severity: str
    reason: str = ""
    confidence: float = 0.0
    resolution_status: str = "pending"
    resolution_note: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "category": self.category,
            "severity": self.severity,
            "reason": self.reason,
            "confidence": self.confidence,
            "resolutionStatus": self.resolution_status,
            "resolutionNote": self.resolution_note,
        }


@dataclass
class ConfidentialityReport:
    summary: Optional[str]
    segments: List[FlaggedSegment] = field(default_factory=list)

    @property
    def flagged(self) -> bool:
        return len(self.segments) > 0

    def count(self, severity: str) -> int:
        return sum(1 for s in self.segments if s.severity == severity)


@dataclass(frozen=True)
class ClipSuggestion:
    start_sec: float
    end_sec: float
    title: str = ""
    description: str = ""
    hashtags: str = ""
    sentiment: str = ""
    priority: int = 0
    reason: str = ""
