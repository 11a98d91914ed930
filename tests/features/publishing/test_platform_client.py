import pytest
import requests
from pathlib import Path

from vidcast.core.common.errors import PublishError
from vidcast.features.publishing.data.platform_client import HttpPublishingClient
from vidcast.features.publishing.data.thumbnail import ThumbnailResolver
from vidcast.features.publishing.domain.models import PublishSubmission, ThumbnailPayload
from vidcast.features.storage.data.local_fs import LocalScratchStorage
from vidcast.features.storage.service.api import StorageService


class FakeSession:
    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        if self.error:
            raise self.error
        return self.response

    def get(self, url, **kwargs):
        return self.post(url, **kwargs)


@pytest.fixture
def submission(tmp_path):
    video = tmp_path / "talk.mp4"
    video.write_bytes(b"video")
    return PublishSubmission(
        video_path=video,
        title="All Hands",
        channel_id="UC_channel",
        tags="a, b",
        thumbnail=ThumbnailPayload(filename="t.png", content=b"png"),
        captions="WEBVTT\n\n00:00:00.000 --> 00:00:01.000\nhi\n",
    )


def _client(session):
    return HttpPublishingClient(endpoint="https://publish.example.com/upload", timeout=5, session=session)


def test_multipart_request(http_response, submission):
    session = FakeSession(http_response(json_body={"success": True, "video_id": "yt_1", "url": "https://youtu.be/yt_1"}))

    result = _client(session).submit(submission)

    assert (result.platform_video_id, result.url) == ("yt_1", "https://youtu.be/yt_1")
    url, kwargs = session.calls[0]
    assert kwargs["data"]["channel_id"] == "UC_channel"
    assert kwargs["data"]["privacy"] == "public"
    assert set(kwargs["files"]) == {"video", "thumbnail", "english_captions"}
    assert kwargs["files"]["english_captions"][0] == "captions.vtt"
    assert kwargs["files"]["english_captions"][2] == "text/vtt"


def test_http_500_json_error(http_response, submission):
    session = FakeSession(http_response(
        status_code=500, reason="Internal Server Error",
        json_body={"error": "Upload quota exceeded", "code": "QUOTA"}
    ))

    with pytest.raises(PublishError) as exc:
        _client(session).submit(submission)

    message = str(exc.value)
    assert "500" in message
    assert "Upload quota exceeded" in message
    assert message == "HTTP 500: Internal Server Error - Upload quota exceeded (Code: QUOTA)"


def test_http_error_with_text_body(http_response, submission):
    session = FakeSession(http_response(status_code=502, reason="Bad Gateway", body=b"upstream died"))

    with pytest.raises(PublishError, match="HTTP 502: Bad Gateway - upstream died"):
        _client(session).submit(submission)


def test_unsuccessful_body(http_response, submission):
    session = FakeSession(http_response(json_body={"success": False, "message": "Channel not linked"}))
    with pytest.raises(PublishError, match="Channel not linked"):
        _client(session).submit(submission)


def test_transport_error(submission):
    session = FakeSession(error=requests.Timeout("read timed out"))
    with pytest.raises(PublishError) as exc:
        _client(session).submit(submission)
    assert exc.value.code == "Timeout"
    assert "read timed out" in str(exc.value)


def test_thumbnail_resolution(tmp_path, http_response):
    scratch = StorageService(LocalScratchStorage(root=tmp_path))
    (tmp_path / "thumb.jpg").write_bytes(b"jpeg")

    local = ThumbnailResolver(scratch=scratch, session=FakeSession()).resolve("/uploads/thumb.jpg")
    assert (local.filename, local.content, local.content_type) == ("thumb.jpg", b"jpeg", "image/jpeg")

    remote = ThumbnailResolver(
        scratch=scratch,
        session=FakeSession(http_response(body=b"png", headers={"Content-Type": "image/png; charset=binary"}))
    ).resolve("https://cdn.example.com/art/cover.png")
    assert (remote.filename, remote.content_type) == ("cover.png", "image/png")

    broken = ThumbnailResolver(scratch=scratch, session=FakeSession(http_response(status_code=404)))
    assert broken.resolve("https://cdn.example.com/missing.png") is None
    assert broken.resolve("/uploads/missing.png") is None
    assert broken.resolve(None) is None


def test_unreadable_local_thumbnail_is_skipped(tmp_path, monkeypatch):
    scratch = StorageService(LocalScratchStorage(root=tmp_path))
    (tmp_path / "thumb.jpg").write_bytes(b"jpeg")

    def denied(self):
        raise PermissionError(13, "Permission denied", str(self))

    monkeypatch.setattr(Path, "read_bytes", denied)

    assert ThumbnailResolver(scratch=scratch, session=FakeSession()).resolve("/uploads/thumb.jpg") is None
