import json
import pytest

from vidcast.core.common.enums import CloudProvider, IngestStatus, VideoStatus, ConfidentialityStatus
from vidcast.features.analyzers.domain.interfaces import ILLMClient
from vidcast.features.analyzers.service.api import ContentAnalyzer
from vidcast.features.clips.domain.models import ClipSpec
from vidcast.features.clips.service.api import create_clip
from vidcast.features.ingest.data.repository import SqlImportRequestRepo
from vidcast.features.ingest.domain.interfaces import ICloudStorageClient, IFileDownloader
from vidcast.features.ingest.domain.models import CloudFile
from vidcast.features.ingest.service.worker import IngestWorker
from vidcast.features.media_tools.domain.interfaces import IMediaProber, IVideoTrimmer
from vidcast.features.publishing.domain.interfaces import IPublishingPlatform, IThumbnailResolver
from vidcast.features.publishing.domain.models import PublishResult
from vidcast.features.publishing.service.orchestrator import PublishOrchestrator
from vidcast.features.storage.data.local_fs import LocalScratchStorage
from vidcast.features.storage.service.api import StorageService
from vidcast.features.transcription.domain.interfaces import ITranscriber
from vidcast.features.transcription.domain.models import TranscriptionResult
from vidcast.features.videos.data.repository import SqlVideoRepo
from vidcast.features.videos.service.api import set_trim
from vidcast.features.videos.service.processor import VideoProcessor

CAPTIONS = """1
00:00:00,000 --> 00:00:08,000
Give it a second, people are still joining.

2
00:00:08,000 --> 00:00:30,000
Today we launch the new onboarding flow.

3
00:00:30,000 --> 00:01:00,000
Thanks for watching.
"""


class Cloud(ICloudStorageClient):
    def get_temporary_download_link(self, path):
        return f"https://dl.example.com{path}"

    def list_files(self, path):
        return []


class Downloader(IFileDownloader):
    def __init__(self, scratch):
        self.scratch = scratch

    def download(self, url, destination):
        return self.scratch.write_stream(destination, [b"\x00" * 64])


class Transcriber(ITranscriber):
    def transcribe(self, request):
        return TranscriptionResult(text="launch talk", captions=CAPTIONS)


class Prober(IMediaProber):
    def probe_duration_ms(self, path):
        return 60000


class LLM(ILLMClient):
    """Answers by prompt type so call order does not matter."""
    model = "fake-model"

    def complete(self, prompt, system=None, max_tokens=None):
        if "metadata" in (system or ""):
            return json.dumps({"title": "Onboarding Launch", "description": "New flow.", "tags": ["launch"]})
        if "substantive content begins" in (system or ""):
            return json.dumps({"suggestedStartMs": 8000, "reason": "Waiting for attendees", "confidence": "high"})
        return json.dumps({"status": "clear", "summary": "Nothing sensitive", "segments": []})


class Trimmer(IVideoTrimmer):
    def __init__(self):
        self.windows = []

    def trim(self, request):
        self.windows.append(request.window)
        request.output_video.path.write_bytes(b"cut")


class Platform(IPublishingPlatform):
    def __init__(self):
        self.captions = None

    def submit(self, submission):
        self.captions = submission.captions
        return PublishResult(platform_video_id="yt_launch", url="https://youtu.be/yt_launch")


class NoThumbnails(IThumbnailResolver):
    def resolve(self, reference):
        return None


def test_cloud_import_to_published_clip(tmp_path, inline_runner):
    scratch = StorageService(LocalScratchStorage(root=tmp_path / "uploads", public_base_url="https://media.example.com"))
    videos = SqlVideoRepo()
    imports = SqlImportRequestRepo()
    content = ContentAnalyzer(llm=LLM(), videos=videos)
    processor = VideoProcessor(
        videos=videos, transcriber=Transcriber(), prober=Prober(),
        content=content, scratch=scratch, runner=inline_runner
    )
    worker = IngestWorker(
        repo=imports, videos=videos, video_processor=processor,
        providers={CloudProvider.DROPBOX: Cloud()}, downloader=Downloader(scratch),
        scratch=scratch, interval=0
    )
    trimmer, platform = Trimmer(), Platform()
    publisher = PublishOrchestrator(
        videos=videos, platform=platform, trimmer=trimmer, thumbnails=NoThumbnails(), scratch=scratch
    )

    print("\n☁️  Step 1: Queue and import from cloud storage...")
    (request,) = imports.enqueue_many("user_1", "dropbox", [CloudFile(path="/Talks/launch.mp4", name="launch.mp4", size=64)])
    assert worker.run_once() == request.id

    request = imports.get(request.id)
    assert request.status == IngestStatus.READY
    video = videos.get(request.video_id)
    assert video.status == VideoStatus.READY_TO_EDIT
    assert video.title == "Onboarding Launch"
    assert video.duration_ms == 60000

    print("🔍 Step 2: Analyze content...")
    start = content.suggest_content_start(video.id)
    check = content.run_confidentiality_check(video.id, triggered_by="user_1")
    assert check.overall_status == "clear"
    assert videos.get(video.id).confidentiality_status == ConfidentialityStatus.CLEAR

    print("✂️  Step 3: Trim and publish...")
    set_trim(video.id, start.ms, None)
    published = publisher.publish(video.id, "UC_launch")

    assert published.status == VideoStatus.PUBLISHED
    assert trimmer.windows[0].start_ms == 8000
    assert trimmer.windows[0].end_ms is None
    assert "Give it a second" not in platform.captions
    assert "00:00:00.000 --> 00:00:22.000" in platform.captions
    assert scratch.stale_trims(video.id) == []

    print("🎞️  Step 4: Cut a clip from the published video...")
    clip = create_clip(video.id, "user_1", ClipSpec(start_sec=0, end_sec=22, title="The launch"))
    assert clip.parent_video_id == video.id
    assert clip.status == VideoStatus.READY_TO_EDIT
    print("✅ Pipeline complete")
