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

"""Bearer token providers for authenticating API calls."""

import asyncio
import os
from abc import ABC, abstractmethod
from typing import Optional

import google.auth
import google.auth.exceptions
from google.auth.transport.requests import Request
from google.oauth2 import service_account
from typing_extensions import override

from vertex_chat.core.configs.params.remote_params import RemoteParams
from vertex_chat.core.types.exceptions import ConfigurationError
from vertex_chat.utils.logging import logger

_CLOUD_PLATFORM_SCOPES = ["https://www.googleapis.com/auth/cloud-platform"]


class TokenProvider(ABC):
    """Supplies the bearer token attached to each API call."""

    @abstractmethod
    async def get_token(self) -> str:
        """Returns a currently valid bearer token."""
        raise NotImplementedError


class StaticTokenProvider(TokenProvider):
    """Returns the same token on every call."""

    def __init__(self, token: str):
        """Initializes the provider.

        Raises:
            ConfigurationError: If the token is empty.
        """
        if not token:
            raise ConfigurationError("A static bearer token must not be empty.")
        self._token = token

    @override
    async def get_token(self) -> str:
        return self._token


class GoogleAuthTokenProvider(TokenProvider):
    """Mints tokens from Google credentials.

    Uses the service-account key file when one is given, and Application
    Default Credentials otherwise. Credentials are loaded lazily and refreshed
    whenever they are no longer valid. Both steps may block on I/O, so they run
    in a worker thread.
    """

    def __init__(
        self,
        scopes: Optional[list[str]] = None,
        service_account_file: Optional[str] = None,
    ):
        """Initializes the provider.

        Args:
            scopes: OAuth scopes to request. Defaults to the cloud-platform scope.
            service_account_file: Optional path to a service-account key file.
        """
        self._scopes = list(scopes) if scopes else list(_CLOUD_PLATFORM_SCOPES)
        self._service_account_file = service_account_file
        self._credentials = None

    def _load_credentials(self):
        if self._service_account_file:
            return service_account.Credentials.from_service_account_file(
                filename=self._service_account_file,
                scopes=self._scopes,
            )
        credentials, _ = google.auth.default(scopes=self._scopes)
        return credentials

    def _get_token_blocking(self) -> str:
        if self._credentials is None:
            self._credentials = self._load_credentials()
        if not self._credentials.valid:
            logger.debug("Refreshing Google credentials.")
            self._credentials.refresh(Request())
        return self._credentials.token

    @override
    async def get_token(self) -> str:
        """Returns a valid token, refreshing the credentials if needed.

        Raises:
            ConfigurationError: If credentials cannot be found or refreshed.
        """
        try:
            return await asyncio.to_thread(self._get_token_blocking)
        except google.auth.exceptions.GoogleAuthError as e:
            logger.error(f"Failed to obtain Google credentials: {e}")
            raise ConfigurationError(
                f"Failed to obtain Google credentials: {e}"
            ) from e


def build_token_provider(remote_params: RemoteParams) -> TokenProvider:
    """Selects a token provider from remote parameters.

    In order of precedence: the explicit ``api_key``, the environment variable
    named by ``api_key_env_varname``, the ``service_account_file``, and finally
    Application Default Credentials.
    """
    if remote_params.api_key:
        return StaticTokenProvider(remote_params.api_key)

    if remote_params.api_key_env_varname:
        token = os.environ.get(remote_params.api_key_env_varname)
        if token:
            return StaticTokenProvider(token)
        logger.warning(
            f"Environment variable {remote_params.api_key_env_varname} is not set. "
            "Falling back to Google credentials."
        )

    return GoogleAuthTokenProvider(
        service_account_file=remote_params.service_account_file
    )
