import pytest
import requests

from captionkit.captions import build_caption_index
from captionkit.errors import TranslationError
from captionkit.translation import TranslationClient, build_translation_messages


class FakeResponse:
    def __init__(self, payload, status_code=200):
        self.payload = payload
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        return self.payload


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def post(self, url, **kwargs):
        self.calls.append((url, kwargs))
        return self.response


def _completion(content):
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def test_messages_ask_to_preserve_timestamps():
    messages = build_translation_messages("Spanish", "0.00::1.00::Hi\n")
    assert messages[0]["role"] == "system"
    assert "into Spanish" in messages[1]["content"]
    assert "preserving all timestamps" in messages[1]["content"]
    assert messages[1]["content"].endswith("0.00::1.00::Hi\n")


def test_translate_returns_content_usable_as_transcript():
    session = FakeSession(FakeResponse(_completion("0.00::2.00::Hola\n2.00::3.00::Mundo")))
    client = TranslationClient(api_key="sk-test", session=session)

    translated = client.translate("Spanish", "0.00::2.00::Hello\n2.00::3.00::World\n")

    assert translated.endswith("\n")
    index = build_caption_index(translated.splitlines())
    assert index.lookup(1) == "Hola"
    assert index.lookup(2) == "Mundo"

    url, kwargs = session.calls[0]
    assert url == "https://api.openai.com/v1/chat/completions"
    assert kwargs["json"]["model"] == "gpt-4o-mini"
    assert kwargs["json"]["temperature"] == 0


def test_translate_http_failure():
    client = TranslationClient(api_key="sk-test", session=FakeSession(FakeResponse({}, 429)))
    with pytest.raises(TranslationError):
        client.translate("French", "0::1::Hi")


def test_translate_unexpected_payload():
    client = TranslationClient(api_key="sk-test", session=FakeSession(FakeResponse({"choices": []})))
    with pytest.raises(TranslationError):
        client.translate("French", "0::1::Hi")


def test_translate_requires_key(monkeypatch):
    monkeypatch.delenv("OPENAI_API_KEY", raising=False)
    client = TranslationClient(session=FakeSession(FakeResponse(_completion("x"))))
    with pytest.raises(TranslationError):
        client.translate("French", "0::1::Hi")
