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

import math
from dataclasses import dataclass
from typing import Optional

from vertex_chat.core.configs.params.base_params import BaseParams


@dataclass
class RemoteParams(BaseParams):
    """Parameters for reaching the generative API."""

    project: Optional[str] = None
    """Cloud project that owns the requests."""

    location: str = "us-central1"
    """Region serving the model."""

    api_endpoint: Optional[str] = None
    """Host of the API. Defaults to ``{location}-aiplatform.googleapis.com``."""

    api_key: Optional[str] = None
    """Bearer token to use for authentication."""

    api_key_env_varname: Optional[str] = None
    """Name of the environment variable containing the bearer token."""

    service_account_file: Optional[str] = None
    """Path to a service-account key file used to mint bearer tokens."""

    connection_timeout: float = 300.0
    """Timeout in seconds for a request to the API."""

    def __post_init__(self):
        """Validate the remote parameters."""
        if self.connection_timeout < 0:
            raise ValueError("Connection timeout must be greater than or equal to 0.")
        if not math.isfinite(self.connection_timeout):
            raise ValueError("Connection timeout must be finite.")
        if not self.location:
            raise ValueError("Location must be a non-empty string.")
