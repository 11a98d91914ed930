import pytest

from vidcast.core.common.enums import VideoStatus
from vidcast.core.common.errors import TranscriptionError
from vidcast.features.analyzers.domain.models import VideoMetadata
from vidcast.features.media_tools.domain.interfaces import IMediaProber
from vidcast.features.transcription.domain.interfaces import ITranscriber
from vidcast.features.transcription.domain.models import TranscriptionResult
from vidcast.features.videos.data.repository import SqlVideoRepo
from vidcast.features.videos.service.processor import VideoProcessor


class FakeTranscriber(ITranscriber):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.requests = []

    def transcribe(self, request):
        self.requests.append(request)
        if self.error:
            raise self.error
        return self.result


class FakeProber(IMediaProber):
    def __init__(self, duration_ms=None):
        self.duration_ms = duration_ms

    def probe_duration_ms(self, path):
        return self.duration_ms


class FakeContent:
    def __init__(self, metadata=None, error=None):
        self.metadata = metadata
        self.error = error

    def generate_metadata(self, transcript):
        if self.error:
            raise self.error
        return self.metadata


@pytest.fixture
def videos():
    return SqlVideoRepo()


@pytest.fixture
def uploaded(videos):
    return videos.create(
        user_id="user_1",
        original_filename="talk.mp4",
        storage_path="/data/uploads/upload_abc_1_talk.mp4",
        status=VideoStatus.UPLOADING,
    )


def _processor(videos, runner, transcriber, prober=None, content=None):
    return VideoProcessor(
        videos=videos,
        transcriber=transcriber,
        prober=prober or FakeProber(),
        content=content or FakeContent(VideoMetadata(title="Generated")),
        runner=runner,
    )


def test_empty_transcription_fails_video_and_skips_metadata(videos, uploaded, inline_runner):
    """
    1. SETUP: Transcriber returns neither text nor captions
    2. EXECUTE: process
    3. VERIFY: video failed with the message, metadata never spawned
    """
    proc = _processor(videos, inline_runner, FakeTranscriber(TranscriptionResult()))

    outcome = proc.process(uploaded.id)

    assert outcome.ok is False
    video = videos.get(uploaded.id)
    assert video.status == VideoStatus.FAILED
    assert video.error_message == "No transcript returned from API"
    assert inline_runner.spawned == []


def test_transcriber_error_fails_video(videos, uploaded, inline_runner):
    proc = _processor(videos, inline_runner, FakeTranscriber(error=TranscriptionError("Transcription failed (500): boom")))

    outcome = proc.process(uploaded.id)

    assert not outcome.ok
    assert "500" in videos.get(uploaded.id).error_message
    assert videos.get(uploaded.id).status == VideoStatus.FAILED


def test_success_stores_transcript_and_runs_metadata(videos, uploaded, inline_runner):
    transcriber = FakeTranscriber(TranscriptionResult(text="hello", captions="1\n00:00:00,000 --> 00:00:01,000\nhello\n"))
    proc = _processor(
        videos, inline_runner, transcriber,
        prober=FakeProber(61000),
        content=FakeContent(VideoMetadata(title="Hello World", tags="greeting")),
    )

    outcome = proc.process(uploaded.id)

    assert outcome.ok
    assert inline_runner.spawned == [f"metadata:{uploaded.id}"]
    assert outcome.metadata_task.result().ok

    video = videos.get(uploaded.id)
    assert video.status == VideoStatus.READY_TO_EDIT
    assert video.transcript.startswith("1\n00:00:00,000")
    assert video.duration_ms == 61000
    assert video.title == "Hello World"
    assert video.tags == "greeting"

    # The transcriber only ever sees a public URL for the scratch file
    assert transcriber.requests[0].media_url.endswith("/uploads/upload_abc_1_talk.mp4")


def test_metadata_failure_returns_to_ready_to_edit(videos, uploaded, inline_runner):
    proc = _processor(
        videos, inline_runner, FakeTranscriber(TranscriptionResult(text="hello")),
        content=FakeContent(error=RuntimeError("LLM request failed (429)")),
    )

    outcome = proc.process(uploaded.id)

    metadata = outcome.metadata_task.result()
    assert metadata.ok is False
    assert "429" in metadata.error
    assert videos.get(uploaded.id).status == VideoStatus.READY_TO_EDIT


def test_metadata_skipped_when_video_moved_on(videos, inline_runner):
    publishing = videos.create(
        user_id="u", original_filename="a.mp4", storage_path="/tmp/a.mp4",
        status=VideoStatus.PUBLISHING, transcript="hi"
    )
    proc = _processor(videos, inline_runner, FakeTranscriber())

    outcome = proc.generate_metadata(publishing.id)

    assert not outcome.ok
    assert videos.get(publishing.id).status == VideoStatus.PUBLISHING
