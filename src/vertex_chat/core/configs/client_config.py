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

from dataclasses import dataclass, field
from typing import List

from vertex_chat.core.configs.base_config import BaseConfig
from vertex_chat.core.configs.params.generation_params import GenerationParams
from vertex_chat.core.configs.params.model_params import ModelParams
from vertex_chat.core.configs.params.remote_params import RemoteParams
from vertex_chat.core.configs.params.safety_params import SafetySetting


@dataclass
class ClientConfig(BaseConfig):
    """Everything needed to build a client and its default model.

    Example YAML::

        model:
          model_name: gemini-1.0-pro
        generation:
          temperature: 0.2
          top_k: 20
        safety_settings:
          - category: HARM_CATEGORY_HATE_SPEECH
            threshold: BLOCK_ONLY_HIGH
        remote:
          project: my-project
          location: us-central1
    """

    model: ModelParams = field(default_factory=ModelParams)
    """Parameters of the default generative model."""

    generation: GenerationParams = field(default_factory=GenerationParams)
    """Default generation config of the model."""

    safety_settings: List[SafetySetting] = field(default_factory=list)
    """Default safety settings of the model."""

    remote: RemoteParams = field(default_factory=RemoteParams)
    """Parameters for reaching the API."""
