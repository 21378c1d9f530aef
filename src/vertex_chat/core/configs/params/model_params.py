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

from dataclasses import dataclass

from omegaconf import MISSING

from vertex_chat.core.configs.params.base_params import BaseParams


@dataclass
class ModelParams(BaseParams):
    model_name: str = MISSING
    """Name of the publisher model, e.g. ``gemini-1.0-pro``."""

    def __validate__(self) -> None:
        """Checks that a model name was provided."""
        if not self.model_name or not self.model_name.strip():
            raise ValueError("model_name must be a non-empty string.")
