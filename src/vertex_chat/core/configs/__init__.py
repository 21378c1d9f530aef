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

"""Configuration classes for the vertex_chat client.

- :class:`~vertex_chat.core.configs.client_config.ClientConfig`
- :class:`~vertex_chat.core.configs.params.generation_params.GenerationParams`
- :class:`~vertex_chat.core.configs.params.model_params.ModelParams`
- :class:`~vertex_chat.core.configs.params.remote_params.RemoteParams`
- :class:`~vertex_chat.core.configs.params.safety_params.SafetySetting`

Example:
    >>> from vertex_chat.core.configs import ClientConfig
    >>> config = ClientConfig.from_yaml("client.yaml") # doctest: +SKIP
"""

from vertex_chat.core.configs.base_config import BaseConfig
from vertex_chat.core.configs.client_config import ClientConfig
from vertex_chat.core.configs.params.base_params import BaseParams
from vertex_chat.core.configs.params.generation_params import GenerationParams
from vertex_chat.core.configs.params.model_params import ModelParams
from vertex_chat.core.configs.params.remote_params import RemoteParams
from vertex_chat.core.configs.params.safety_params import SafetySetting

__all__ = [
    "BaseConfig",
    "BaseParams",
    "ClientConfig",
    "GenerationParams",
    "ModelParams",
    "RemoteParams",
    "SafetySetting",
]
