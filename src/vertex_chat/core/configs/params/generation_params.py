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
from typing import Any, Dict, List, Optional

from vertex_chat.core.configs.params.base_params import BaseParams

_MAX_TOP_K = 40


@dataclass
class GenerationParams(BaseParams):
    """Sampling parameters sent as the ``generationConfig`` of a request.

    Every field is optional; unset fields are left out of the request so the
    service applies its own defaults.
    """

    temperature: Optional[float] = None
    """Controls randomness in the output.

    Higher values (e.g., 1.0) make output more random, while lower values (e.g., 0.2)
    make it more focused and deterministic.
    """

    top_p: Optional[float] = None
    """Nucleus sampling: the cumulative probability threshold for token selection."""

    top_k: Optional[int] = None
    """Number of highest-probability tokens considered at each step.

    Must be between 0 and 40. A value of 0 means "unset" and is not sent.
    """

    candidate_count: Optional[int] = None
    """Number of alternatives to generate."""

    max_output_tokens: Optional[int] = None
    """The maximum number of tokens to generate per candidate."""

    stop_sequences: Optional[List[str]] = None
    """Sequences at which the model stops generating further tokens."""

    def __post_init__(self):
        """Validates generation-specific parameters."""
        if self.temperature is not None and self.temperature < 0:
            raise ValueError("Temperature must be non-negative.")

        if self.top_p is not None and not 0 <= self.top_p <= 1:
            raise ValueError("top_p must be between 0 and 1.")

        if self.top_k is not None and not 0 <= self.top_k <= _MAX_TOP_K:
            raise ValueError(f"top_k must be between 0 and {_MAX_TOP_K}.")

        if self.candidate_count is not None and self.candidate_count < 1:
            raise ValueError("candidate_count must be greater than or equal to 1.")

        if self.max_output_tokens is not None and self.max_output_tokens < 1:
            raise ValueError("max_output_tokens must be greater than or equal to 1.")

    def to_request_dict(self) -> Dict[str, Any]:
        """Converts the parameters to the ``generationConfig`` wire format."""
        request: Dict[str, Any] = {}
        if self.temperature is not None:
            request["temperature"] = self.temperature
        if self.top_p is not None:
            request["topP"] = self.top_p
        if self.top_k:
            request["topK"] = self.top_k
        if self.candidate_count is not None:
            request["candidateCount"] = self.candidate_count
        if self.max_output_tokens is not None:
            request["maxOutputTokens"] = self.max_output_tokens
        if self.stop_sequences:
            request["stopSequences"] = list(self.stop_sequences)
        return request
