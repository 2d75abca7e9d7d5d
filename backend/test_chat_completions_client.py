import pytest
import requests

from micro_niche.errors import UpstreamError
from micro_niche.inference import chat_completions_client as module
from micro_niche.inference.chat_completions_client import ChatCompletionsClient


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self.ok = 200 <= status_code < 300
        self._payload = payload

    def json(self):
        if self._payload is None:
            raise ValueError("not json")
        return self._payload


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


@pytest.fixture
def client():
    return ChatCompletionsClient(
        base_url="https://llm.example.test/v1/",
        model="test-model",
        api_key="sk-test",
        temperature=0.3,
        timeout=5,
    )


def test_generate_posts_json_mode_request(monkeypatch, client):
    captured = {}

    def fake_post(url, headers, json, timeout):
        captured.update(url=url, headers=headers, json=json, timeout=timeout)
        return FakeResponse(payload=_completion('{"ok": true}'))

    monkeypatch.setattr(module.requests, "post", fake_post)

    out = client.generate([{"role": "user", "content": "hi"}])

    assert out == '{"ok": true}'
    assert captured["url"] == "https://llm.example.test/v1/chat/completions"
    assert captured["headers"]["Authorization"] == "Bearer sk-test"
    assert captured["json"]["model"] == "test-model"
    assert captured["json"]["response_format"] == {"type": "json_object"}
    assert captured["json"]["temperature"] == 0.3
    assert captured["timeout"] == 5


def test_generate_strips_markdown_fences(monkeypatch, client):
    monkeypatch.setattr(
        module.requests,
        "post",
        lambda *a, **kw: FakeResponse(payload=_completion('```json\n{"a": 1}\n```')),
    )

    assert client.generate([]) == '{"a": 1}'


def test_generate_surfaces_provider_error_message(monkeypatch, client):
    monkeypatch.setattr(
        module.requests,
        "post",
        lambda *a, **kw: FakeResponse(401, {"error": {"message": "Incorrect API key provided"}}),
    )

    with pytest.raises(UpstreamError) as exc_info:
        client.generate([])

    assert exc_info.value.message == "Incorrect API key provided"
    assert exc_info.value.status_code == 500


def test_generate_non_json_error_body(monkeypatch, client):
    monkeypatch.setattr(module.requests, "post", lambda *a, **kw: FakeResponse(502, None))

    with pytest.raises(UpstreamError) as exc_info:
        client.generate([])

    assert exc_info.value.message == "Model request failed: 502"


def test_generate_timeout_fails_request(monkeypatch, client):
    def boom(*a, **kw):
        raise requests.Timeout("read timed out")

    monkeypatch.setattr(module.requests, "post", boom)

    with pytest.raises(UpstreamError, match="timed out"):
        client.generate([])


def test_generate_connection_error(monkeypatch, client):
    def boom(*a, **kw):
        raise requests.ConnectionError("refused")

    monkeypatch.setattr(module.requests, "post", boom)

    with pytest.raises(UpstreamError, match="Model request failed"):
        client.generate([])


@pytest.mark.parametrize("payload", [_completion(""), {"choices": []}, {}])
def test_generate_empty_content(monkeypatch, client, payload):
    monkeypatch.setattr(module.requests, "post", lambda *a, **kw: FakeResponse(payload=payload))

    with pytest.raises(UpstreamError, match="empty content"):
        client.generate([])
