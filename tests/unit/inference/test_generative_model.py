import json
from typing import Any, Final

import aiohttp
import pytest
from aioresponses import CallbackResult, aioresponses

from vertex_chat.core.auth import StaticTokenProvider
from vertex_chat.core.configs import GenerationParams, RemoteParams, SafetySetting
from vertex_chat.core.types.content import (
    Content,
    FileData,
    FinishReason,
    HarmBlockThreshold,
    HarmCategory,
    Part,
    Role,
)
from vertex_chat.core.types.exceptions import (
    InvalidFileUriError,
    RemoteServiceError,
    RequestValidationError,
    StreamParseError,
    TransportError,
)
from vertex_chat.core.types.requests import (
    CountTokensRequest,
    GenerateContentRequest,
    StartChatParams,
)
from vertex_chat.inference import GenerativeModel

_MODEL_URL: Final[str] = (
    "https://us-central1-aiplatform.googleapis.com/v1/projects/test-project"
    "/locations/us-central1/publishers/google/models/gemini-1.0-pro"
)
_STREAM_URL: Final[str] = f"{_MODEL_URL}:streamGenerateContent?alt=sse"
_COUNT_TOKENS_URL: Final[str] = f"{_MODEL_URL}:countTokens"


#
# Fixtures
#
@pytest.fixture
def mock_aioresponse():
    with aioresponses() as m:
        yield m


def _get_default_remote_params() -> RemoteParams:
    return RemoteParams(project="test-project", location="us-central1")


def _create_model(**kwargs) -> GenerativeModel:
    return GenerativeModel(
        "gemini-1.0-pro",
        remote_params=kwargs.pop("remote_params", _get_default_remote_params()),
        token_provider=StaticTokenProvider("fake_token"),
        **kwargs,
    )


def _create_request(text: str = "Hello", **kwargs) -> GenerateContentRequest:
    return GenerateContentRequest(
        contents=[Content(role=Role.USER, parts=[Part(text=text)])], **kwargs
    )


def _sse_body(*chunks: dict[str, Any]) -> bytes:
    return b"".join(f"data: {json.dumps(chunk)}\r\n\r\n".encode() for chunk in chunks)


def _text_chunk(text: str, **candidate_fields) -> dict[str, Any]:
    return {
        "candidates": [
            {"index": 0, "content": {"parts": [{"text": text}]}, **candidate_fields}
        ]
    }


class _RequestRecorder:
    """Records request kwargs and replies with a fixed body."""

    def __init__(self, body: bytes, status: int = 200):
        self.body = body
        self.status = status
        self.calls: list[dict[str, Any]] = []

    def __call__(self, url, **kwargs):
        self.calls.append(kwargs)
        return CallbackResult(status=self.status, body=self.body)


#
# Tests
#
class TestGenerateContent:
    @pytest.mark.asyncio
    async def test_merges_streamed_chunks(self, mock_aioresponse):
        mock_aioresponse.post(
            _STREAM_URL,
            status=200,
            body=_sse_body(
                _text_chunk("How "),
                _text_chunk("can I "),
                _text_chunk("help?", finishReason="STOP"),
            ),
        )
        result = await _create_model().generate_content(_create_request())

        candidate = result.response.candidates[0]
        assert candidate.content.role == Role.MODEL
        assert candidate.content.text == "How can I help?"
        assert candidate.finish_reason == FinishReason.STOP

    @pytest.mark.asyncio
    async def test_sends_headers_and_body(self, mock_aioresponse):
        recorder = _RequestRecorder(_sse_body(_text_chunk("Hi")))
        mock_aioresponse.post(_STREAM_URL, callback=recorder)

        model = _create_model()
        await model.generate_content(
            _create_request(
                generation_config=GenerationParams(temperature=0.5, top_k=0),
                safety_settings=[
                    SafetySetting(
                        category=HarmCategory.HARM_CATEGORY_HATE_SPEECH,
                        threshold=HarmBlockThreshold.BLOCK_ONLY_HIGH,
                    )
                ],
            )
        )

        assert len(recorder.calls) == 1
        call = recorder.calls[0]
        assert call["headers"] == {
            "Authorization": "Bearer fake_token",
            "Content-Type": "application/json",
        }
        assert call["json"] == {
            "contents": [{"role": "user", "parts": [{"text": "Hello"}]}],
            "generationConfig": {"temperature": 0.5},
            "safetySettings": [
                {
                    "category": "HARM_CATEGORY_HATE_SPEECH",
                    "threshold": "BLOCK_ONLY_HIGH",
                }
            ],
        }

    @pytest.mark.asyncio
    async def test_top_k_in_range_is_sent(self, mock_aioresponse):
        recorder = _RequestRecorder(_sse_body(_text_chunk("Hi")))
        mock_aioresponse.post(_STREAM_URL, callback=recorder)

        await _create_model().generate_content(
            _create_request(generation_config=GenerationParams(top_k=1))
        )
        assert recorder.calls[0]["json"]["generationConfig"] == {"topK": 1}

    @pytest.mark.asyncio
    async def test_model_defaults_fill_in(self, mock_aioresponse):
        recorder = _RequestRecorder(_sse_body(_text_chunk("Hi")))
        mock_aioresponse.post(_STREAM_URL, callback=recorder)

        model = _create_model(generation_config=GenerationParams(max_output_tokens=8))
        await model.generate_content(_create_request())

        body = recorder.calls[0]["json"]
        assert body["generationConfig"] == {"maxOutputTokens": 8}
        assert "safetySettings" not in body

    @pytest.mark.asyncio
    async def test_custom_api_endpoint(self, mock_aioresponse):
        url = (
            "https://my-endpoint.example.com/v1/projects/test-project/locations/"
            "us-central1/publishers/google/models/gemini-1.0-pro"
            ":streamGenerateContent?alt=sse"
        )
        mock_aioresponse.post(url, status=200, body=_sse_body(_text_chunk("Hi")))

        model = _create_model(
            remote_params=RemoteParams(
                project="test-project",
                location="us-central1",
                api_endpoint="my-endpoint.example.com",
            )
        )
        result = await model.generate_content(_create_request())
        assert result.response.candidates[0].content.text == "Hi"

    @pytest.mark.asyncio
    async def test_empty_stream_gives_no_candidates(self, mock_aioresponse):
        mock_aioresponse.post(_STREAM_URL, status=200, body=b"")
        result = await _create_model().generate_content(_create_request())
        assert result.response.candidates == []

    @pytest.mark.asyncio
    async def test_http_error(self, mock_aioresponse):
        mock_aioresponse.post(
            _STREAM_URL,
            status=403,
            payload={"error": {"code": 403, "message": "Permission denied"}},
        )
        with pytest.raises(TransportError, match="Permission denied") as exc_info:
            await _create_model().generate_content(_create_request())
        assert exc_info.value.status_code == 403

    @pytest.mark.asyncio
    async def test_http_error_without_json_body(self, mock_aioresponse):
        mock_aioresponse.post(_STREAM_URL, status=500, body=b"Internal Server Error")
        with pytest.raises(TransportError, match="HTTP 500") as exc_info:
            await _create_model().generate_content(_create_request())
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_aioresponse):
        mock_aioresponse.post(
            _STREAM_URL, exception=aiohttp.ClientConnectionError("unreachable")
        )
        with pytest.raises(TransportError, match="unreachable") as exc_info:
            await _create_model().generate_content(_create_request())
        assert exc_info.value.status_code is None

    @pytest.mark.asyncio
    async def test_malformed_chunk(self, mock_aioresponse):
        mock_aioresponse.post(
            _STREAM_URL,
            status=200,
            body=_sse_body(_text_chunk("Hi")) + b"data: {oops\r\n\r\n",
        )
        with pytest.raises(StreamParseError):
            await _create_model().generate_content(_create_request())

    @pytest.mark.asyncio
    async def test_invalid_file_uri_fails_before_network(self, mock_aioresponse):
        request = GenerateContentRequest(
            contents=[
                Content(
                    role=Role.USER,
                    parts=[
                        Part(text="What is this?"),
                        Part(
                            file_data=FileData(
                                mime_type="image/jpeg", file_uri="test_image.jpeg"
                            )
                        ),
                    ],
                )
            ]
        )
        with pytest.raises(InvalidFileUriError):
            await _create_model().generate_content(request)
        assert len(mock_aioresponse.requests) == 0

    @pytest.mark.asyncio
    async def test_empty_contents_fail_before_network(self, mock_aioresponse):
        with pytest.raises(RequestValidationError):
            await _create_model().generate_content(GenerateContentRequest(contents=[]))
        assert len(mock_aioresponse.requests) == 0


class TestGenerateContentStream:
    @pytest.mark.asyncio
    async def test_stream_yields_chunks_in_order(self, mock_aioresponse):
        mock_aioresponse.post(
            _STREAM_URL,
            status=200,
            body=_sse_body(_text_chunk("A"), _text_chunk("B"), _text_chunk("C")),
        )
        result = await _create_model().generate_content_stream(_create_request())

        texts = [chunk.candidates[0].content.text async for chunk in result.stream]
        assert texts == ["A", "B", "C"]

        response = await result.response
        assert response.candidates[0].content.text == "ABC"

    @pytest.mark.asyncio
    async def test_http_error_is_raised_before_streaming(self, mock_aioresponse):
        mock_aioresponse.post(_STREAM_URL, status=404, body=b"")
        with pytest.raises(TransportError):
            await _create_model().generate_content_stream(_create_request())


class TestCountTokens:
    @pytest.mark.asyncio
    async def test_count_tokens(self, mock_aioresponse):
        recorder = _RequestRecorder(
            json.dumps({"totalTokens": 7, "totalBillableCharacters": 20}).encode()
        )
        mock_aioresponse.post(_COUNT_TOKENS_URL, callback=recorder)

        response = await _create_model().count_tokens(
            CountTokensRequest(
                contents=[Content(role=Role.USER, parts=[Part(text="Hello")])]
            )
        )
        assert response.total_tokens == 7
        assert response.total_billable_characters == 20
        assert recorder.calls[0]["json"] == {
            "contents": [{"role": "user", "parts": [{"text": "Hello"}]}]
        }

    @pytest.mark.asyncio
    async def test_count_tokens_invalid_response(self, mock_aioresponse):
        mock_aioresponse.post(
            _COUNT_TOKENS_URL, status=200, payload={"totalTokens": "many"}
        )
        with pytest.raises(RemoteServiceError, match="Invalid countTokens"):
            await _create_model().count_tokens(
                CountTokensRequest(
                    contents=[Content(role=Role.USER, parts=[Part(text="Hello")])]
                )
            )

    @pytest.mark.asyncio
    async def test_count_tokens_http_error(self, mock_aioresponse):
        mock_aioresponse.post(
            _COUNT_TOKENS_URL,
            status=400,
            payload=[{"error": {"code": 400, "message": "Bad request"}}],
        )
        with pytest.raises(TransportError, match="Bad request"):
            await _create_model().count_tokens(
                CountTokensRequest(
                    contents=[Content(role=Role.USER, parts=[Part(text="Hello")])]
                )
            )


class TestStartChat:
    def test_start_chat_uses_model_defaults(self):
        generation_config = GenerationParams(temperature=0.1)
        model = _create_model(generation_config=generation_config)
        chat = model.start_chat()
        assert chat.history == []
        assert chat._generation_config is generation_config

    def test_start_chat_with_params(self, single_turn_history):
        override = GenerationParams(temperature=0.9)
        model = _create_model(generation_config=GenerationParams(temperature=0.1))
        chat = model.start_chat(
            StartChatParams(history=single_turn_history, generation_config=override)
        )
        assert chat.history == single_turn_history
        assert chat._generation_config is override

    def test_empty_model_name_is_rejected(self):
        with pytest.raises(ValueError):
            GenerativeModel(
                "",
                remote_params=_get_default_remote_params(),
                token_provider=StaticTokenProvider("fake_token"),
            )
