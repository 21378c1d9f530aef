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

"""Request types accepted by the generative model and chat session."""

from dataclasses import dataclass, field
from typing import Optional

from vertex_chat.core.configs.params.generation_params import GenerationParams
from vertex_chat.core.configs.params.safety_params import SafetySetting
from vertex_chat.core.types.content import Content


@dataclass
class GenerateContentRequest:
    contents: list[Content]
    """The conversation so far, oldest turn first. Must not be empty."""

    generation_config: Optional[GenerationParams] = None
    """Overrides the model's default generation config."""

    safety_settings: Optional[list[SafetySetting]] = None
    """Overrides the model's default safety settings."""


@dataclass
class CountTokensRequest:
    contents: list[Content]


@dataclass
class StartChatParams:
    history: list[Content] = field(default_factory=list)
    """Turns to seed the session with."""

    generation_config: Optional[GenerationParams] = None
    safety_settings: Optional[list[SafetySetting]] = None
