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

"""Entry point of the client."""

from typing import Optional

from omegaconf import MISSING

from vertex_chat.core.auth import (
    GoogleAuthTokenProvider,
    TokenProvider,
    build_token_provider,
)
from vertex_chat.core.configs.client_config import ClientConfig
from vertex_chat.core.configs.params.generation_params import GenerationParams
from vertex_chat.core.configs.params.remote_params import RemoteParams
from vertex_chat.core.configs.params.safety_params import SafetySetting
from vertex_chat.core.types.exceptions import ConfigurationError
from vertex_chat.inference.generative_model import GenerativeModel
from vertex_chat.utils.logging import logger


class _PreviewModels:
    """Model factories exposed under ``VertexAI.preview``."""

    def __init__(self, client: "VertexAI"):
        self._client = client

    def get_generative_model(
        self,
        model: Optional[str] = None,
        generation_config: Optional[GenerationParams] = None,
        safety_settings: Optional[list[SafetySetting]] = None,
    ) -> GenerativeModel:
        """Returns a handle on a publisher model.

        Args:
            model: Name of the model. Defaults to the configured model.
            generation_config: Default generation config of the model.
                Defaults to the configured generation config.
            safety_settings: Default safety settings of the model. Defaults to
                the configured safety settings.

        Raises:
            ConfigurationError: If no model name is given or configured.
        """
        client = self._client
        model_name = model or client.default_model_name
        if not model_name:
            raise ConfigurationError(
                "A model name is required. Pass `model` or set model.model_name "
                "in your config file."
            )
        return GenerativeModel(
            model_name,
            remote_params=client.remote_params,
            token_provider=client.token_provider,
            generation_config=generation_config or client.default_generation_config,
            safety_settings=safety_settings or client.default_safety_settings,
        )


class VertexAI:
    """Client for the generative API of one project and location.

    Example:
        >>> client = VertexAI(project="my-project", location="us-central1")
        >>> model = client.preview.get_generative_model("gemini-1.0-pro")
        >>> result = await model.generate_content(request)
    """

    def __init__(
        self,
        project: str,
        location: str,
        api_endpoint: Optional[str] = None,
        token_provider: Optional[TokenProvider] = None,
        connection_timeout: float = 300.0,
    ):
        """Initializes the client.

        Args:
            project: Cloud project that owns the requests.
            location: Region serving the models, e.g. ``us-central1``.
            api_endpoint: Host of the API. Defaults to
                ``{location}-aiplatform.googleapis.com``.
            token_provider: Source of bearer tokens. Defaults to Google
                Application Default Credentials.
            connection_timeout: Timeout in seconds for a request.

        Raises:
            ConfigurationError: If a parameter is missing or invalid.
        """
        if not project:
            raise ConfigurationError(
                "A project is required. Set remote.project in your config file."
            )
        try:
            self._remote_params = RemoteParams(
                project=project,
                location=location,
                api_endpoint=api_endpoint,
                connection_timeout=connection_timeout,
            )
        except ValueError as e:
            raise ConfigurationError(str(e)) from e
        self._token_provider = token_provider or GoogleAuthTokenProvider()

        self.default_model_name: Optional[str] = None
        self.default_generation_config: Optional[GenerationParams] = None
        self.default_safety_settings: Optional[list[SafetySetting]] = None
        self.preview = _PreviewModels(self)

    @property
    def remote_params(self) -> RemoteParams:
        """Project, location and endpoint of the API."""
        return self._remote_params

    @property
    def token_provider(self) -> TokenProvider:
        """Source of the bearer tokens sent with each call."""
        return self._token_provider

    @classmethod
    def from_config(cls, config: ClientConfig) -> "VertexAI":
        """Builds a client from a configuration object.

        The configured model, generation config and safety settings become the
        defaults of `VertexAI.preview.get_generative_model`.

        Raises:
            ConfigurationError: If the configuration is invalid.
        """
        remote = config.remote
        if not remote.project:
            raise ConfigurationError(
                "A project is required. Set remote.project in your config file."
            )
        client = cls(
            project=remote.project,
            location=remote.location,
            api_endpoint=remote.api_endpoint,
            token_provider=build_token_provider(remote),
            connection_timeout=remote.connection_timeout,
        )
        if config.model.model_name and config.model.model_name != MISSING:
            client.default_model_name = config.model.model_name
        client.default_generation_config = config.generation
        client.default_safety_settings = list(config.safety_settings) or None
        logger.debug(
            f"Created client for project {remote.project} in {remote.location}."
        )
        return client
