import logging
import threading
from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, Optional
from uuid import UUID

from vidcast.core.config.settings import settings
from vidcast.core.common.enums import CloudProvider, IngestStatus, VideoStatus
from vidcast.core.common.errors import CloudStorageError, InvalidStatusTransition
from vidcast.features.storage.service.api import StorageService, storage
from vidcast.features.videos.data.repository import SqlVideoRepo
from vidcast.features.videos.service.processor import VideoProcessor, processor
from ..data.downloader import HttpFileDownloader
from ..data.dropbox_client import DropboxClient
from ..data.repository import SqlImportRequestRepo
from ..data.sql_models import ImportRequestModel
from ..domain.interfaces import ICloudStorageClient, IFileDownloader

logger = logging.getLogger(__name__)


def utc_now():
    return datetime.now(timezone.utc)


class IngestWorker:
    """
    Single polling loop that drains the import queue one request at a time.

    The request currently being worked on is held by this instance; while it
    is set, ticks do nothing. Claiming a row is a conditional UPDATE, so
    running more than one worker would not double-process a row, but the
    one-at-a-time backpressure only holds per instance.
    """

    def __init__(
        self,
        repo: Optional[SqlImportRequestRepo] = None,
        videos: Optional[SqlVideoRepo] = None,
        video_processor: Optional[VideoProcessor] = None,
        providers: Optional[Dict[CloudProvider, ICloudStorageClient]] = None,
        downloader: Optional[IFileDownloader] = None,
        scratch: Optional[StorageService] = None,
        interval: Optional[float] = None
    ):
        self.repo = repo or SqlImportRequestRepo()
        self.videos = videos or SqlVideoRepo()
        self.processor = video_processor or processor
        self.providers = providers if providers is not None else {CloudProvider.DROPBOX: DropboxClient()}
        self.downloader = downloader or HttpFileDownloader()
        self.scratch = scratch or storage
        self.interval = interval if interval is not None else settings.INGEST_POLL_INTERVAL_SECONDS

        self.current_request_id: Optional[UUID] = None
        self._busy = threading.Lock()
        self._stop = threading.Event()
        self._thread: Optional[threading.Thread] = None

    @property
    def busy(self) -> bool:
        return self.current_request_id is not None

    # --- Loop control ---

    def start(self):
        if self._thread is not None and self._thread.is_alive():
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._loop, name="ingest-worker", daemon=True)
        self._thread.start()
        logger.info(f"Ingest worker started (interval {self.interval}s)")

    def stop(self, timeout: Optional[float] = None):
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
        logger.info("Ingest worker stopped")

    def _loop(self):
        while not self._stop.is_set():
            try:
                self.run_once()
            except Exception as e:
                logger.exception(f"Ingest tick failed: {e}")
            self._stop.wait(self.interval)

    # --- One tick ---

    def run_once(self) -> Optional[UUID]:
        """
        Claims and fully processes the oldest queued request.

        Returns:
            The id of the request handled this tick, or None if idle or busy.
        """
        if not self._busy.acquire(blocking=False):
            return None
        try:
            request = self.repo.claim_next()
            if request is None:
                return None

            self.current_request_id = request.id
            logger.info(f"Processing import {request.id}: {request.source_file_name}")
            self._process(request)
            return request.id
        finally:
            self.current_request_id = None
            self._busy.release()

    def _process(self, request: ImportRequestModel):
        video_id = None
        try:
            # 1. Download (already `downloading` via the claim)
            local_path = self._download(request)
            self.repo.transition(request.id, IngestStatus.PROCESSING, downloaded_path=str(local_path))

            # 2. Video record
            video = self.videos.create(
                user_id=request.user_id,
                original_filename=request.source_file_name,
                storage_path=str(local_path),
                title=Path(request.source_file_name).stem,
                status=VideoStatus.UPLOADING,
            )
            video_id = video.id
            self.repo.attach_video(request.id, video_id)

            # 3. Transcription + metadata
            self.repo.transition(request.id, IngestStatus.TRANSCRIBING)
            outcome = self.processor.process(video_id)
            if not outcome.ok:
                raise RuntimeError(outcome.error or "Video processing failed")

            if outcome.metadata_task is not None:
                try:
                    meta = outcome.metadata_task.result()
                    if not meta.ok:
                        logger.warning(f"Import {request.id}: metadata skipped ({meta.error})")
                except Exception as e:
                    logger.warning(f"Import {request.id}: metadata task errored: {e}")

            # 4. Done
            self.repo.transition(request.id, IngestStatus.READY, completed_at=utc_now())
            logger.info(f"Import {request.id} ready (video {video_id})")

        except Exception as e:
            logger.exception(f"Import {request.id} failed: {e}")
            self._fail(request.id, video_id, str(e))

    def _download(self, request: ImportRequestModel) -> Path:
        try:
            provider = CloudProvider(request.provider)
        except ValueError:
            raise CloudStorageError(f"Unsupported provider: {request.provider}")

        client = self.providers.get(provider)
        if client is None:
            raise CloudStorageError(f"Unsupported provider: {provider.value}")

        link = client.get_temporary_download_link(request.source_path)
        destination = self.scratch.download_path(request.id, request.source_file_name)
        written = self.downloader.download(link, destination)
        self.repo.update(request.id, progress={"stage": "downloaded", "bytes": written})
        return destination

    def _fail(self, request_id: UUID, video_id: Optional[UUID], message: str):
        try:
            self.repo.transition(request_id, IngestStatus.FAILED, error_message=message, completed_at=utc_now())
        except Exception as e:
            logger.error(f"Could not mark import {request_id} failed: {e}")

        if video_id is None:
            return
        video = self.videos.get(video_id)
        if video is None or video.status == VideoStatus.FAILED:
            return
        try:
            self.videos.transition(video_id, VideoStatus.FAILED, error_message=message)
        except InvalidStatusTransition as e:
            logger.warning(f"Video {video_id} left as {video.status.value}: {e}")
        except Exception as e:
            logger.error(f"Could not mark video {video_id} failed: {e}")
