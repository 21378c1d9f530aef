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
from typing import Dict

from vertex_chat.core.configs.params.base_params import BaseParams
from vertex_chat.core.types.content import HarmBlockThreshold, HarmCategory


@dataclass
class SafetySetting(BaseParams):
    """Blocking threshold for one harm category."""

    category: HarmCategory = HarmCategory.HARM_CATEGORY_UNSPECIFIED
    threshold: HarmBlockThreshold = HarmBlockThreshold.HARM_BLOCK_THRESHOLD_UNSPECIFIED

    def __post_init__(self):
        """Coerces plain strings to their enum members."""
        self.category = HarmCategory(self.category)
        self.threshold = HarmBlockThreshold(self.threshold)

    def to_request_dict(self) -> Dict[str, str]:
        """Converts the setting to its wire format."""
        return {"category": str(self.category), "threshold": str(self.threshold)}
