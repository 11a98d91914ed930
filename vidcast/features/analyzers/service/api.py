import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from vidcast.core.common.enums import CheckStatus, ConfidentialityStatus
from vidcast.core.common.errors import MissingTranscript
from vidcast.features.videos.data.repository import SqlVideoRepo
from ..data import prompts
from ..data.llm_client import OpenAICompatibleClient
from ..data.parsing import extract_json_object, as_int, as_float, as_text
from ..data.repository import SqlConfidentialityRepo
from ..data.sql_models import ConfidentialityCheckModel
from ..domain.interfaces import ILLMClient
from ..domain.models import (
    VideoMetadata, BoundarySuggestion, FlaggedSegment, ConfidentialityReport, ClipSuggestion,
    CATEGORIES, SEVERITIES, RESOLUTIONS
)

logger = logging.getLogger(__name__)


def _require_owner(video, user_id: Optional[str]):
    if user_id is not None and video.user_id != user_id:
        raise PermissionError(f"User {user_id} does not own video {video.id}")


class ContentAnalyzer:
    """
    LLM-backed helpers that annotate a transcript.
    Stateless apart from the hints they persist onto the Video and the
    confidentiality check records.
    """

    def __init__(
        self,
        llm: Optional[ILLMClient] = None,
        videos: Optional[SqlVideoRepo] = None,
        checks: Optional[SqlConfidentialityRepo] = None
    ):
        self.llm = llm or OpenAICompatibleClient()
        self.videos = videos or SqlVideoRepo()
        self.checks = checks or SqlConfidentialityRepo()

    def _transcript_of(self, video_id: UUID, user_id: Optional[str] = None):
        video = self.videos.require(video_id)
        _require_owner(video, user_id)
        if not video.transcript:
            raise MissingTranscript(video_id)
        return video

    # --- Metadata ---

    def generate_metadata(self, transcript: str) -> VideoMetadata:
        """
        Asks for title/description/tags/thumbnail prompt from the transcript prefix.

        Raises:
            ValueError: If the completion holds no JSON object.
        """
        raw = self.llm.complete(prompts.metadata_prompt(transcript), system=prompts.METADATA_SYSTEM)
        data = extract_json_object(raw)
        if data is None:
            raise ValueError("Metadata response contained no JSON object")

        return VideoMetadata(
            title=as_text(data.get("title")),
            description=as_text(data.get("description")),
            tags=as_text(data.get("tags")),
            thumbnail_prompt=as_text(data.get("thumbnail_prompt")),
        )

    # --- Content boundaries ---

    def suggest_content_start(self, video_id: UUID) -> BoundarySuggestion:
        video = self._transcript_of(video_id)
        raw = self.llm.complete(prompts.content_start_prompt(video.transcript), system=prompts.CONTENT_START_SYSTEM)
        data = extract_json_object(raw) or {}

        start_ms = max(0, as_int(data.get("suggestedStartMs")) or 0)
        suggestion = BoundarySuggestion(
            ms=start_ms,
            reason=str(data.get("reason") or ""),
            confidence=str(data.get("confidence") or "low"),
        )
        self.videos.update(video_id, suggested_start_ms=start_ms)
        logger.info(f"Content start for {video_id}: {start_ms}ms ({suggestion.confidence})")
        return suggestion

    def suggest_content_end(self, video_id: UUID) -> BoundarySuggestion:
        video = self._transcript_of(video_id)
        raw = self.llm.complete(prompts.content_end_prompt(video.transcript), system=prompts.CONTENT_END_SYSTEM)
        data = extract_json_object(raw)
        if data is None:
            raise RuntimeError("Content end analysis returned no JSON object")

        should_trim = bool(data.get("shouldTrim"))
        end_ms = as_int(data.get("suggestedEndMs")) if should_trim else None
        if end_ms is not None and end_ms <= 0:
            end_ms = None

        if end_ms is not None:
            self.videos.update(video_id, suggested_end_ms=end_ms)

        return BoundarySuggestion(
            ms=end_ms,
            reason=str(data.get("reason") or ""),
            confidence=str(data.get("confidence") or "low"),
            should_trim=should_trim,
        )

    # --- Confidentiality ---

    def _parse_report(self, check_id: UUID, data: dict) -> ConfidentialityReport:
        segments: List[FlaggedSegment] = []
        for idx, item in enumerate(data.get("segments") or []):
            if not isinstance(item, dict):
                continue
            category = str(item.get("category") or "other")
            severity = str(item.get("severity") or "low").lower()
            segments.append(FlaggedSegment(
                id=f"seg_{check_id}_{idx}",
                start_time=str(item.get("startTime") or ""),
                end_time=str(item.get("endTime") or ""),
                category=category if category in CATEGORIES else "other",
                severity=severity if severity in SEVERITIES else "low",
                reason=str(item.get("reason") or ""),
                confidence=as_float(item.get("confidence")),
            ))
        return ConfidentialityReport(summary=data.get("summary"), segments=segments)

    def run_confidentiality_check(
        self, video_id: UUID, triggered_by: Optional[str] = None
    ) -> ConfidentialityCheckModel:
        """
        Runs a compliance pass over the transcript and stores the result.
        The video ends in `clear`, `flagged` or `error`; the check record keeps
        the segments with per-severity counts.
        """
        video = self._transcript_of(video_id, triggered_by)

        check = self.checks.create(
            video_id=video_id,
            status=CheckStatus.RUNNING,
            triggered_by=triggered_by,
            model_used=getattr(self.llm, "model", None),
        )
        self.videos.update(
            video_id,
            confidentiality_status=ConfidentialityStatus.CHECKING,
            last_confidentiality_check_id=check.id
        )
        logger.info(f"Confidentiality check {check.id} started for video {video_id}")

        try:
            raw = self.llm.complete(prompts.confidentiality_prompt(video.transcript), max_tokens=3000)
            data = extract_json_object(raw)
            if data is None:
                raise ValueError("Failed to parse AI response")

            report = self._parse_report(check.id, data)
            check = self.checks.update(
                check.id,
                status=CheckStatus.COMPLETED,
                overall_status="flagged" if report.flagged else "clear",
                segments=[s.to_dict() for s in report.segments],
                summary=report.summary,
                high_count=report.count("high"),
                medium_count=report.count("medium"),
                low_count=report.count("low"),
                completed_at=datetime.now(timezone.utc),
            )
            self.videos.update(
                video_id,
                confidentiality_status=ConfidentialityStatus.FLAGGED if report.flagged else ConfidentialityStatus.CLEAR
            )
            logger.info(f"Confidentiality check {check.id}: {len(report.segments)} segment(s) flagged")
            return check

        except Exception as e:
            logger.exception(f"Confidentiality check {check.id} failed: {e}")
            self.checks.update(
                check.id,
                status=CheckStatus.ERROR,
                error_message=str(e) or "AI analysis failed",
                completed_at=datetime.now(timezone.utc),
            )
            self.videos.update(video_id, confidentiality_status=ConfidentialityStatus.ERROR)
            raise

    def latest_confidentiality_check(self, video_id: UUID) -> Optional[ConfidentialityCheckModel]:
        return self.checks.latest_for_video(video_id)

    def resolve_segment(
        self, check_id: UUID, segment_id: str, resolution_status: str, note: Optional[str] = None
    ) -> ConfidentialityCheckModel:
        if resolution_status not in RESOLUTIONS:
            raise ValueError(f"Unknown resolution status: {resolution_status}")

        check = self.checks.get(check_id)
        if check is None:
            raise LookupError(f"Confidentiality check {check_id} not found")

        segments = [dict(s) for s in (check.segments or [])]
        for segment in segments:
            if segment.get("id") == segment_id:
                segment["resolutionStatus"] = resolution_status
                segment["resolutionNote"] = note
                break
        else:
            raise LookupError(f"Segment {segment_id} not found in check {check_id}")

        return self.checks.update(check_id, segments=segments)

    # --- Clips ---

    def suggest_clips(
        self, video_id: UUID, user_id: Optional[str] = None, guidance: Optional[str] = None
    ) -> List[ClipSuggestion]:
        """
        Proposes short excerpts of a published video. Times are relative to the
        published (trimmed) timeline; the model is told the trim offset.
        """
        video = self._transcript_of(video_id, user_id)
        if not video.platform_video_id:
            raise ValueError("Video must be published before clips can be suggested")

        offset_sec = (video.trim_start_ms or 0) // 1000
        logger.info(f"Suggesting clips for {video_id} (trim offset: {offset_sec}s)")

        raw = self.llm.complete(
            prompts.clip_suggestions_prompt(video.transcript, offset_sec, guidance or ""),
            max_tokens=2000
        )
        data = extract_json_object(raw)
        if data is None:
            raise RuntimeError("Failed to parse AI suggestions")

        suggestions = []
        for item in data.get("clips") or []:
            if not isinstance(item, dict):
                continue
            start = as_float(item.get("startSec"), -1.0)
            end = as_float(item.get("endSec"), -1.0)
            if start < 0 or end <= start:
                logger.warning(f"Discarding clip suggestion with invalid window: {start}-{end}")
                continue
            suggestions.append(ClipSuggestion(
                start_sec=start,
                end_sec=end,
                title=str(item.get("title") or ""),
                description=str(item.get("description") or ""),
                hashtags=as_text(item.get("hashtags")) or "",
                sentiment=str(item.get("sentiment") or ""),
                priority=as_int(item.get("priority")) or 0,
                reason=str(item.get("reason") or ""),
            ))
        return suggestions


# Singleton Instance for easy import
analyzer = ContentAnalyzer()


def suggest_content_start(video_id: UUID) -> BoundarySuggestion:
    return analyzer.suggest_content_start(video_id)


def suggest_content_end(video_id: UUID) -> BoundarySuggestion:
    return analyzer.suggest_content_end(video_id)


def run_confidentiality_check(video_id: UUID, triggered_by: Optional[str] = None) -> ConfidentialityCheckModel:
    return analyzer.run_confidentiality_check(video_id, triggered_by)


def suggest_clips(video_id: UUID, user_id: Optional[str] = None, guidance: Optional[str] = None) -> List[ClipSuggestion]:
    return analyzer.suggest_clips(video_id, user_id, guidance)
