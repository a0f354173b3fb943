"""Unit tests for the Gemini transcription backend."""

import base64
import logging
from unittest.mock import Mock, patch

import aiohttp
import pytest

from geminiscribe.transcription import (
    GeminiTranscriptionBackend,
    GeminiAPIError,
    MissingAPIKeyError,
    NoTranscriptionError,
    TRANSCRIPTION_PROMPT,
)
from geminiscribe.transcription.gemini_backend import extract_text


class FakeResponse:
    def __init__(self, status=200, payload=None, body=""):
        self.status = status
        self.payload = payload if payload is not None else {}
        self.body = body

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    async def json(self):
        return self.payload

    async def text(self):
        return self.body


class FakeClientSession:
    """Records the request and answers with a canned response."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requests = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *args):
        return False

    def post(self, url, headers=None, json=None):
        self.requests.append({"url": url, "headers": headers, "json": json})
        if self.error is not None:
            raise self.error
        return self.response


def text_payload(*texts):
    return {"candidates": [{"content": {"parts": [{"text": t} for t in texts], "role": "model"}}]}


@pytest.fixture
def api_key(monkeypatch):
    monkeypatch.delenv("API_KEY", raising=False)
    monkeypatch.setenv("GEMINI_API_KEY", "test-key")
    return "test-key"


@pytest.fixture
def backend():
    return GeminiTranscriptionBackend(model="gemini-flash-latest", base_url="https://example.test/v1beta/")


def patch_session(fake):
    return patch("geminiscribe.transcription.gemini_backend.aiohttp.ClientSession", return_value=fake)


@pytest.mark.unit
class TestGeminiTranscriptionBackend:

    @pytest.mark.asyncio
    async def test_returns_text_verbatim(self, backend, sample_media, api_key):
        fake = FakeClientSession(FakeResponse(payload=text_payload("Hello world")))

        with patch_session(fake):
            result = await backend.transcribe(sample_media)

        assert result.text == "Hello world"
        assert result.model == "gemini-flash-latest"
        assert result.file_name == sample_media.name

    @pytest.mark.asyncio
    async def test_request_inlines_payload_and_prompt(self, backend, sample_media, api_key):
        fake = FakeClientSession(FakeResponse(payload=text_payload("ok")))

        with patch_session(fake):
            await backend.transcribe(sample_media)

        request = fake.requests[0]
        assert request["url"] == "https://example.test/v1beta/models/gemini-flash-latest:generateContent"
        assert request["headers"]["x-goog-api-key"] == "test-key"

        inline, instruction = request["json"]["contents"][0]["parts"]
        assert inline["inline_data"]["mime_type"] == "audio/mpeg"
        assert base64.b64decode(inline["inline_data"]["data"]) == sample_media.read_bytes()
        assert instruction["text"] == TRANSCRIPTION_PROMPT

    def test_prompt_rules(self):
        assert "verbatim" in TRANSCRIPTION_PROMPT
        assert "Speaker 1:" in TRANSCRIPTION_PROMPT
        assert "English translation" in TRANSCRIPTION_PROMPT
        assert "Return ONLY the transcription text" in TRANSCRIPTION_PROMPT

    @pytest.mark.asyncio
    async def test_joins_multiple_text_parts(self, backend, sample_media, api_key):
        fake = FakeClientSession(FakeResponse(payload=text_payload("Speaker 1: Hi.", "\nSpeaker 2: Hello.")))

        with patch_session(fake):
            result = await backend.transcribe(sample_media)

        assert result.text == "Speaker 1: Hi.\nSpeaker 2: Hello."

    @pytest.mark.asyncio
    async def test_missing_key_fails_before_network(self, backend, sample_media, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.delenv("API_KEY", raising=False)
        session_factory = Mock()

        with patch("geminiscribe.transcription.gemini_backend.aiohttp.ClientSession", session_factory), \
             patch("geminiscribe.transcription.gemini_backend.encode_file") as encode:
            with pytest.raises(MissingAPIKeyError, match="API Key not found"):
                await backend.transcribe(sample_media)

        session_factory.assert_not_called()
        encode.assert_not_called()

    @pytest.mark.asyncio
    async def test_fallback_api_key_variable(self, backend, sample_media, monkeypatch):
        monkeypatch.delenv("GEMINI_API_KEY", raising=False)
        monkeypatch.setenv("API_KEY", "fallback-key")
        fake = FakeClientSession(FakeResponse(payload=text_payload("ok")))

        with patch_session(fake):
            await backend.transcribe(sample_media)

        assert fake.requests[0]["headers"]["x-goog-api-key"] == "fallback-key"

    @pytest.mark.asyncio
    @pytest.mark.parametrize("payload", [
        {},
        {"candidates": []},
        {"candidates": [{"content": {"parts": []}}]},
        {"candidates": [{"finishReason": "SAFETY"}]},
        text_payload(""),
    ])
    async def test_no_text_raises(self, backend, sample_media, api_key, payload):
        fake = FakeClientSession(FakeResponse(payload=payload))

        with patch_session(fake):
            with pytest.raises(NoTranscriptionError, match="No transcription generated"):
                await backend.transcribe(sample_media)

    @pytest.mark.asyncio
    async def test_api_error_status(self, backend, sample_media, api_key):
        fake = FakeClientSession(FakeResponse(status=429, body="RESOURCE_EXHAUSTED"))

        with patch_session(fake):
            with pytest.raises(GeminiAPIError) as excinfo:
                await backend.transcribe(sample_media)

        assert excinfo.value.status == 429
        assert "RESOURCE_EXHAUSTED" in str(excinfo.value)

    @pytest.mark.asyncio
    async def test_transport_error_propagates_unchanged(self, backend, sample_media, api_key):
        error = aiohttp.ClientConnectionError("connection refused")
        fake = FakeClientSession(error=error)

        with patch_session(fake):
            with pytest.raises(aiohttp.ClientConnectionError) as excinfo:
                await backend.transcribe(sample_media)

        assert excinfo.value is error
        assert len(fake.requests) == 1

    @pytest.mark.asyncio
    async def test_each_call_is_a_new_request(self, backend, sample_media, api_key):
        fake = FakeClientSession(FakeResponse(payload=text_payload("same")))

        with patch_session(fake):
            await backend.transcribe(sample_media)
            await backend.transcribe(sample_media)

        assert len(fake.requests) == 2

    @pytest.mark.asyncio
    async def test_malformed_response_is_logged(self, backend, sample_media, api_key, caplog):
        fake = FakeClientSession(FakeResponse(payload={"candidates": ["not-a-candidate"]}))

        with patch_session(fake), caplog.at_level(logging.ERROR):
            with pytest.raises(AttributeError):
                await backend.transcribe(sample_media)

        assert f"Transcription error for {sample_media.name}" in caplog.text


@pytest.mark.unit
def test_extract_text_ignores_non_text_parts():
    payload = {"candidates": [{"content": {"parts": [{"inline_data": {}}, {"text": "words"}]}}]}
    assert extract_text(payload) == "words"
