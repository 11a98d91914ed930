import pytest
import requests

from vidcast.features.analyzers.data.llm_client import OpenAICompatibleClient


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


def _client(session):
    return OpenAICompatibleClient(
        base_url="https://llm.example.com/v1/", api_key="sk-test", model="tiny", timeout=5, session=session
    )


def test_chat_completion_request(http_response):
    session = FakeSession(http_response(json_body={"choices": [{"message": {"content": '  {"title": "x"}  '}}]}))

    content = _client(session).complete("Summarize this", system="Be brief", max_tokens=300)

    assert content == '{"title": "x"}'
    url, kwargs = session.calls[0]
    assert url == "https://llm.example.com/v1/chat/completions"
    assert kwargs["headers"]["Authorization"] == "Bearer sk-test"
    assert kwargs["json"]["model"] == "tiny"
    assert kwargs["json"]["max_tokens"] == 300
    assert [m["role"] for m in kwargs["json"]["messages"]] == ["system", "user"]


def test_missing_choices_is_empty_text(http_response):
    assert _client(FakeSession(http_response(json_body={"choices": []}))).complete("hi") == ""


def test_errors_raise_runtime_error(http_response):
    with pytest.raises(RuntimeError, match="429"):
        _client(FakeSession(http_response(status_code=429, body=b"rate limited"))).complete("hi")
    with pytest.raises(RuntimeError, match="unreachable"):
        _client(FakeSession(error=requests.ConnectionError("unreachable"))).complete("hi")
