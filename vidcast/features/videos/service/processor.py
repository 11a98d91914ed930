import logging
from concurrent.futures import Future
from pathlib import Path
from typing import Optional
from uuid import UUID

from vidcast.core.config.settings import settings
from vidcast.core.common.enums import VideoStatus
from vidcast.core.common.errors import InvalidStatusTransition, TranscriptionError
from vidcast.core.tasks import TaskRunner, tasks
from vidcast.features.analyzers.domain.models import MetadataOutcome
from vidcast.features.analyzers.service.api import ContentAnalyzer, analyzer
from vidcast.features.media_tools.data.ffmpeg_adapter import FFprobeAdapter
from vidcast.features.media_tools.domain.interfaces import IMediaProber
from vidcast.features.storage.service.api import StorageService, storage
from vidcast.features.transcription.data.http_adapter import HttpTranscriptionAdapter
from vidcast.features.transcription.domain.interfaces import ITranscriber
from vidcast.features.transcription.domain.models import TranscriptionRequest
from ..data.repository import SqlVideoRepo
from ..domain.models import ProcessingOutcome

logger = logging.getLogger(__name__)


class VideoProcessor:
    """
    Drives a single video from `uploading` to `ready_to_edit`.
    Shared by direct uploads and the ingest worker.
    """

    def __init__(
        self,
        videos: Optional[SqlVideoRepo] = None,
        transcriber: Optional[ITranscriber] = None,
        prober: Optional[IMediaProber] = None,
        content: Optional[ContentAnalyzer] = None,
        scratch: Optional[StorageService] = None,
        runner: Optional[TaskRunner] = None
    ):
        self.videos = videos or SqlVideoRepo()
        self.transcriber = transcriber or HttpTranscriptionAdapter()
        self.prober = prober or FFprobeAdapter()
        self.content = content or analyzer
        self.scratch = scratch or storage
        self.runner = runner or tasks

    def process(self, video_id: UUID) -> ProcessingOutcome:
        """
        Probe, transcribe, persist, then spawn metadata generation.
        Never raises for pipeline failures; they are recorded on the video
        and reported through the outcome.
        """
        try:
            video = self.videos.require(video_id)

            # 1. Duration (advisory)
            duration_ms = self.prober.probe_duration_ms(Path(video.storage_path))
            if duration_ms is not None:
                self.videos.update(video_id, duration_ms=duration_ms)

            # 2. Transcribe
            self.videos.transition(video_id, VideoStatus.TRANSCRIBING)
            media_url = self.scratch.public_url(video.storage_path)
            result = self.transcriber.transcribe(
                TranscriptionRequest(media_url=media_url, language=video.language or settings.TRANSCRIPTION_LANGUAGE)
            )

            # 3. Nothing usable is terminal
            if result.is_empty:
                raise TranscriptionError("No transcript returned from API")

            # 4. Persist
            self.videos.transition(video_id, VideoStatus.READY_TO_EDIT, transcript=result.transcript, error_message=None)
            logger.info(f"Video {video_id} transcribed ({len(result.transcript)} chars)")

        except Exception as e:
            logger.exception(f"Processing failed for video {video_id}: {e}")
            self._mark_failed(video_id, str(e))
            return ProcessingOutcome(video_id=video_id, ok=False, error=str(e))

        # 5. Detached metadata enhancement
        metadata_task = self.spawn_metadata(video_id)
        return ProcessingOutcome(video_id=video_id, ok=True, metadata_task=metadata_task)

    def _mark_failed(self, video_id: UUID, message: str):
        try:
            self.videos.transition(video_id, VideoStatus.FAILED, error_message=message)
        except Exception as e:
            logger.error(f"Could not mark video {video_id} failed: {e}")

    def spawn_metadata(self, video_id: UUID) -> Optional[Future]:
        return self.runner.spawn(f"metadata:{video_id}", self.generate_metadata, video_id)

    def generate_metadata(self, video_id: UUID) -> MetadataOutcome:
        """
        ready_to_edit -> generating_metadata -> ready_to_edit, whatever happens in between.
        """
        try:
            video = self.videos.transition(video_id, VideoStatus.GENERATING_METADATA)
        except InvalidStatusTransition as e:
            # Video moved on, e.g. a publish started
            logger.warning(f"Skipping metadata for video {video_id}: {e}")
            return MetadataOutcome(video_id=video_id, error=str(e))

        try:
            metadata = self.content.generate_metadata(video.transcript or "")
            fields = metadata.as_fields()
            self.videos.transition(video_id, VideoStatus.READY_TO_EDIT, **fields)
            outcome = MetadataOutcome(video_id=video_id, metadata=metadata)
            logger.info(f"Metadata generated for video {video_id}: {sorted(fields)}")
        except Exception as e:
            logger.error(f"Metadata generation failed for video {video_id}: {e}")
            outcome = MetadataOutcome(video_id=video_id, error=str(e))
            self.videos.transition(video_id, VideoStatus.READY_TO_EDIT)

        return outcome


processor = VideoProcessor()
