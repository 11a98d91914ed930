import logging
from pathlib import Path
from typing import Optional, Tuple
from uuid import UUID

from vidcast.core.config.settings import settings
from vidcast.core.common.enums import VideoStatus
from vidcast.core.shared_types import MediaFile
from vidcast.features.captions.service.api import shift_captions, count_cues, to_webvtt
from vidcast.features.media_tools.data.ffmpeg_adapter import FFmpegTrimAdapter
from vidcast.features.media_tools.domain.interfaces import IVideoTrimmer
from vidcast.features.media_tools.domain.models import TrimRequest, TrimWindow
from vidcast.features.storage.service.api import StorageService, storage
from vidcast.features.videos.data.repository import SqlVideoRepo
from vidcast.features.videos.data.sql_models import VideoModel
from ..data.platform_client import HttpPublishingClient
from ..data.thumbnail import ThumbnailResolver
from ..domain.interfaces import IPublishingPlatform, IThumbnailResolver
from ..domain.models import PublishSubmission

logger = logging.getLogger(__name__)


class PublishOrchestrator:
    """
    One publish attempt: ready_to_edit -> publishing -> (published | failed).

    Trimming and thumbnails are best-effort. A failed attempt leaves its
    trimmed file behind; the next attempt for the same video removes it.
    """

    def __init__(
        self,
        videos: Optional[SqlVideoRepo] = None,
        platform: Optional[IPublishingPlatform] = None,
        trimmer: Optional[IVideoTrimmer] = None,
        thumbnails: Optional[IThumbnailResolver] = None,
        scratch: Optional[StorageService] = None
    ):
        self.videos = videos or SqlVideoRepo()
        self.platform = platform or HttpPublishingClient()
        self.trimmer = trimmer or FFmpegTrimAdapter()
        self.thumbnails = thumbnails or ThumbnailResolver()
        self.scratch = scratch or storage

    def begin(self, video_id: UUID, channel_id: str) -> VideoModel:
        """
        Validates the request and moves the video to `publishing`.

        Raises:
            ValueError: Missing channel.
            InvalidStatusTransition: Video is not ready_to_edit.
        """
        if not channel_id or not str(channel_id).strip():
            raise ValueError("A target channel is required to publish.")
        return self.videos.transition(video_id, VideoStatus.PUBLISHING, error_message=None)

    def publish(self, video_id: UUID, channel_id: str) -> VideoModel:
        self.begin(video_id, channel_id)
        return self.run(video_id, channel_id)

    def run(self, video_id: UUID, channel_id: str) -> VideoModel:
        """Executes an attempt for a video already in `publishing`."""
        trimmed: Optional[Path] = None
        try:
            video = self.videos.require(video_id)
            source = Path(video.storage_path)

            self._cleanup_stale(video_id)
            upload_path, trimmed, offset_ms = self._resolve_media(video, source)
            captions = self._resolve_captions(video.transcript, offset_ms)
            thumbnail = self.thumbnails.resolve(video.thumbnail_url)

            submission = PublishSubmission(
                video_path=upload_path,
                title=video.title or Path(video.original_filename).stem,
                channel_id=str(channel_id),
                description=video.description or "",
                tags=video.tags or "",
                privacy=video.privacy_status.value if video.privacy_status else settings.PUBLISH_DEFAULT_PRIVACY,
                thumbnail=thumbnail,
                captions=captions,
            )
            result = self.platform.submit(submission)

        except Exception as e:
            logger.exception(f"Publish failed for video {video_id}: {e}")
            return self._mark_failed(video_id, str(e))

        if trimmed is not None:
            self.scratch.remove(trimmed)

        try:
            video = self.videos.transition(
                video_id,
                VideoStatus.PUBLISHED,
                platform_video_id=result.platform_video_id,
                platform_url=result.url,
            )
        except Exception as e:
            # The upload went through; keep its id on the record
            logger.exception(f"Video {video_id} uploaded as {result.platform_video_id} but could not be saved: {e}")
            return self._mark_failed(
                video_id,
                f"Uploaded as {result.platform_video_id} ({result.url}) but the result could not be saved: {e}",
                platform_video_id=result.platform_video_id,
                platform_url=result.url,
            )

        logger.info(f"Video {video_id} published as {result.platform_video_id} ({result.url})")
        return video

    def _mark_failed(self, video_id: UUID, message: str, **fields) -> Optional[VideoModel]:
        try:
            return self.videos.transition(video_id, VideoStatus.FAILED, error_message=message, **fields)
        except Exception as e:
            logger.error(f"Could not mark video {video_id} failed: {e}")
            return self.videos.get(video_id)

    def _cleanup_stale(self, video_id: UUID):
        for stale in self.scratch.stale_trims(video_id):
            if self.scratch.remove(stale):
                logger.info(f"Removed stale trim {stale.name}")

    def _resolve_media(self, video: VideoModel, source: Path) -> Tuple[Path, Optional[Path], int]:
        """
        Returns (upload_path, trimmed_path_or_None, applied_offset_ms).
        Any trim failure falls back to the untrimmed source.
        """
        start_ms = video.trim_start_ms or 0
        end_ms = video.trim_end_ms
        # Only a start offset triggers a cut; the end bound is applied with it
        if start_ms <= 0:
            return source, None, 0

        destination = self.scratch.trimmed_path(video.id, source)
        try:
            request = TrimRequest(
                source_video=MediaFile(source, validate_exists=True),
                output_video=MediaFile(destination, validate_exists=False),
                window=TrimWindow(start_ms=start_ms, end_ms=end_ms),
            )
            self.trimmer.trim(request)
        except Exception as e:
            logger.warning(f"Trim failed for video {video.id}, publishing untrimmed original: {e}")
            return source, None, 0

        return destination, destination, start_ms

    def _resolve_captions(self, transcript: Optional[str], offset_ms: int) -> Optional[str]:
        if not transcript or count_cues(transcript) == 0:
            return None
        track = shift_captions(transcript, offset_ms) if offset_ms > 0 else transcript
        if count_cues(track) == 0:
            return None
        return to_webvtt(track)


publisher = PublishOrchestrator()
