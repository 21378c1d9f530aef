# Copyright 2025 - Oumi
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

import asyncio
from collections.abc import AsyncIterator
from typing import Any, Optional

import aiohttp
import pydantic

from vertex_chat.chat.chat_session import ChatSession
from vertex_chat.core.auth import TokenProvider
from vertex_chat.core.configs.params.generation_params import GenerationParams
from vertex_chat.core.configs.params.remote_params import RemoteParams
from vertex_chat.core.configs.params.safety_params import SafetySetting
from vertex_chat.core.types.content import CountTokensResponse
from vertex_chat.core.types.exceptions import RemoteServiceError, TransportError
from vertex_chat.core.types.requests import (
    CountTokensRequest,
    GenerateContentRequest,
    StartChatParams,
)
from vertex_chat.core.types.streaming import (
    GenerateContentResult,
    StreamGenerateContentResult,
)
from vertex_chat.inference.stream_aggregator import process_stream
from vertex_chat.utils.http import build_request_headers, get_failure_reason
from vertex_chat.utils.logging import logger
from vertex_chat.utils.validation import validate_contents

_API_VERSION = "v1"
_READ_BUFFER_SIZE = 2**20


class GenerativeModel:
    """A publisher model reachable through the generative API.

    Instances are cheap; each call opens its own HTTP session, which is closed
    once the response body has been fully read.
    """

    def __init__(
        self,
        model_name: str,
        remote_params: RemoteParams,
        token_provider: TokenProvider,
        generation_config: Optional[GenerationParams] = None,
        safety_settings: Optional[list[SafetySetting]] = None,
    ):
        """Initializes the model.

        Args:
            model_name: Name of the publisher model, e.g. ``gemini-1.0-pro``.
            remote_params: Project, location and endpoint of the API.
            token_provider: Source of the bearer token sent with each call.
            generation_config: Default generation config for requests that do
                not carry one.
            safety_settings: Default safety settings for requests that do not
                carry any.
        """
        if not model_name:
            raise ValueError("model_name must be a non-empty string.")
        self._model_name = model_name
        self._remote_params = remote_params
        self._token_provider = token_provider
        self._generation_config = generation_config
        self._safety_settings = list(safety_settings) if safety_settings else None

    @property
    def model_name(self) -> str:
        """Name of the publisher model."""
        return self._model_name

    @property
    def generation_config(self) -> Optional[GenerationParams]:
        """Default generation config of the model."""
        return self._generation_config

    @property
    def safety_settings(self) -> Optional[list[SafetySetting]]:
        """Default safety settings of the model."""
        return self._safety_settings

    def _get_model_url(self) -> str:
        """Returns the resource URL of the model, without a method suffix."""
        api_endpoint = (
            self._remote_params.api_endpoint
            or f"{self._remote_params.location}-aiplatform.googleapis.com"
        )
        return (
            f"https://{api_endpoint}/{_API_VERSION}"
            f"/projects/{self._remote_params.project}"
            f"/locations/{self._remote_params.location}"
            f"/publishers/google/models/{self._model_name}"
        )

    def _build_request_body(self, request: GenerateContentRequest) -> dict[str, Any]:
        """Converts a request to the JSON body sent to the API.

        The model's defaults are used for a generation config or safety
        settings the request does not carry.
        """
        body: dict[str, Any] = {
            "contents": [content.to_dict() for content in request.contents]
        }

        generation_config = request.generation_config or self._generation_config
        if generation_config is not None:
            generation_config_json = generation_config.to_request_dict()
            if generation_config_json:
                body["generationConfig"] = generation_config_json

        safety_settings = request.safety_settings or self._safety_settings
        if safety_settings:
            body["safetySettings"] = [
                setting.to_request_dict() for setting in safety_settings
            ]
        return body

    def _create_session(self) -> aiohttp.ClientSession:
        timeout = aiohttp.ClientTimeout(
            total=self._remote_params.connection_timeout or None
        )
        return aiohttp.ClientSession(timeout=timeout, read_bufsize=_READ_BUFFER_SIZE)

    async def _post(
        self, session: aiohttp.ClientSession, url: str, body: dict[str, Any]
    ) -> aiohttp.ClientResponse:
        """Posts a request, returning the response only on a 2xx status.

        Raises:
            TransportError: On a connection failure or a non-2xx status.
        """
        headers = build_request_headers(await self._token_provider.get_token())
        logger.debug(f"POST {url}")
        try:
            response = await session.post(url, json=body, headers=headers)
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            logger.error(f"Request to {url} failed: {e}")
            raise TransportError(f"Request to {url} failed: {e}") from e

        if not 200 <= response.status < 300:
            failure_reason = await get_failure_reason(response)
            response.close()
            logger.error(f"Request to {url} failed with {failure_reason}")
            raise TransportError(failure_reason, status_code=response.status)
        return response

    async def generate_content(
        self, request: GenerateContentRequest
    ) -> GenerateContentResult:
        """Generates a response and waits for it to complete.

        Args:
            request: The contents to respond to, with optional overrides.

        Returns:
            The merged response.

        Raises:
            RequestValidationError: If the request is invalid.
            TransportError: If the API call fails.
            StreamParseError: If the response cannot be parsed.
        """
        result = await self.generate_content_stream(request)
        return GenerateContentResult(response=await result.response)

    async def generate_content_stream(
        self, request: GenerateContentRequest
    ) -> StreamGenerateContentResult:
        """Generates a response, exposing chunks as they arrive.

        The returned result is available as soon as the API accepts the
        request. Failures after that point are raised from its ``stream`` and
        ``response``.

        Raises:
            RequestValidationError: If the request is invalid.
            TransportError: If the API rejects the request or is unreachable.
        """
        validate_contents(request.contents)
        url = f"{self._get_model_url()}:streamGenerateContent?alt=sse"
        body = self._build_request_body(request)

        session = self._create_session()
        try:
            response = await self._post(session, url, body)
        except Exception:
            await session.close()
            raise

        async def _lines() -> AsyncIterator[bytes]:
            try:
                async for line in response.content:
                    yield line
            except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
                raise TransportError(
                    f"Reading the stream from {url} failed: {e}"
                ) from e

        async def _close() -> None:
            response.close()
            await session.close()

        return process_stream(_lines(), on_close=_close)

    async def count_tokens(self, request: CountTokensRequest) -> CountTokensResponse:
        """Counts the tokens of the given contents.

        Raises:
            RequestValidationError: If the request is invalid.
            TransportError: If the API call fails.
            RemoteServiceError: If the response cannot be parsed.
        """
        validate_contents(request.contents)
        url = f"{self._get_model_url()}:countTokens"
        body = {"contents": [content.to_dict() for content in request.contents]}

        async with self._create_session() as session:
            response = await self._post(session, url, body)
            try:
                response_json = await response.json(content_type=None)
            except (aiohttp.ClientError, ValueError) as e:
                raise RemoteServiceError(
                    f"Failed to read the countTokens response: {e}"
                ) from e
            finally:
                response.close()

        try:
            return CountTokensResponse.model_validate(response_json)
        except pydantic.ValidationError as e:
            raise RemoteServiceError(f"Invalid countTokens response: {e}") from e

    def start_chat(self, params: Optional[StartChatParams] = None) -> ChatSession:
        """Starts a chat session with this model.

        Args:
            params: Optional seed history and overrides of the model's
                generation config and safety settings.
        """
        params = params or StartChatParams()
        return ChatSession(
            model=self,
            history=params.history,
            generation_config=params.generation_config or self._generation_config,
            safety_settings=params.safety_settings or self._safety_settings,
        )

    def __repr__(self) -> str:
        """Returns a string representation of the model."""
        return f"GenerativeModel(model_name={self._model_name!r})"
