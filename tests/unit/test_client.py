import json
from typing import Final

import pytest
from aioresponses import aioresponses

from vertex_chat import (
    ClientConfig,
    Content,
    GenerationParams,
    GoogleAuthTokenProvider,
    ModelParams,
    Part,
    RemoteParams,
    Role,
    SafetySetting,
    StaticTokenProvider,
    VertexAI,
)
from vertex_chat.core.types.content import HarmBlockThreshold, HarmCategory
from vertex_chat.core.types.exceptions import ConfigurationError

_STREAM_URL: Final[str] = (
    "https://europe-west4-aiplatform.googleapis.com/v1/projects/test-project"
    "/locations/europe-west4/publishers/google/models/gemini-1.0-pro"
    ":streamGenerateContent?alt=sse"
)


def _sse_body(*texts: str) -> bytes:
    return b"".join(
        "data: {}\n\n".format(
            json.dumps({"candidates": [{"content": {"parts": [{"text": text}]}}]})
        ).encode()
        for text in texts
    )


def test_get_generative_model():
    client = VertexAI(
        project="test-project",
        location="europe-west4",
        token_provider=StaticTokenProvider("fake_token"),
    )
    model = client.preview.get_generative_model(
        "gemini-1.0-pro", generation_config=GenerationParams(temperature=0.3)
    )
    assert model.model_name == "gemini-1.0-pro"
    assert model.generation_config == GenerationParams(temperature=0.3)
    assert model.safety_settings is None


def test_default_token_provider_is_google_auth():
    client = VertexAI(project="test-project", location="us-central1")
    assert isinstance(client.token_provider, GoogleAuthTokenProvider)


def test_missing_project_is_rejected():
    with pytest.raises(ConfigurationError, match="project"):
        VertexAI(project="", location="us-central1")


def test_invalid_timeout_is_rejected():
    with pytest.raises(ConfigurationError, match="timeout"):
        VertexAI(project="p", location="us-central1", connection_timeout=-5)


def test_model_name_is_required():
    client = VertexAI(
        project="test-project",
        location="us-central1",
        token_provider=StaticTokenProvider("fake_token"),
    )
    with pytest.raises(ConfigurationError, match="model name"):
        client.preview.get_generative_model()


def test_from_config():
    config = ClientConfig(
        model=ModelParams(model_name="gemini-1.0-pro"),
        generation=GenerationParams(top_k=10),
        safety_settings=[
            SafetySetting(
                category=HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT,
                threshold=HarmBlockThreshold.BLOCK_LOW_AND_ABOVE,
            )
        ],
        remote=RemoteParams(
            project="test-project",
            location="europe-west4",
            api_key="fake_token",
        ),
    )
    client = VertexAI.from_config(config)

    assert isinstance(client.token_provider, StaticTokenProvider)
    assert client.remote_params.location == "europe-west4"

    model = client.preview.get_generative_model()
    assert model.model_name == "gemini-1.0-pro"
    assert model.generation_config == GenerationParams(top_k=10)
    assert model.safety_settings == config.safety_settings


def test_from_config_requires_project():
    config = ClientConfig(model=ModelParams(model_name="gemini-1.0-pro"))
    with pytest.raises(ConfigurationError, match="project"):
        VertexAI.from_config(config)


@pytest.mark.asyncio
async def test_end_to_end_chat():
    client = VertexAI(
        project="test-project",
        location="europe-west4",
        token_provider=StaticTokenProvider("fake_token"),
    )
    model = client.preview.get_generative_model("gemini-1.0-pro")
    chat = model.start_chat()

    with aioresponses() as m:
        m.post(
            _STREAM_URL,
            status=200,
            body=_sse_body("Bon", "jour"),
        )
        result = await chat.send_message("Say hello in French")

    assert result.response.candidates[0].content.text == "Bonjour"
    assert chat.history[-1] == Content(role=Role.MODEL, parts=[Part(text="Bonjour")])

