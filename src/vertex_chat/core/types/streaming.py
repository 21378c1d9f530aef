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

"""Result types returned by content generation calls."""

from collections.abc import AsyncIterator, Awaitable
from dataclasses import dataclass

from vertex_chat.core.types.content import GenerateContentResponse


@dataclass
class GenerateContentResult:
    """Result of a non-streaming call."""

    response: GenerateContentResponse
    """The merged response."""


@dataclass
class StreamGenerateContentResult:
    """Result of a streaming call.

    Both members observe the same underlying transport, which is drained
    exactly once. ``stream`` may be iterated at most once; ``response`` resolves
    only after the last chunk has been received, whether or not ``stream`` is
    consumed.

    Example:
        >>> result = await model.generate_content_stream(request)
        >>> async for chunk in result.stream:
        ...     print(chunk.candidates[0].content.text, end="", flush=True)
        >>> merged = await result.response
    """

    stream: AsyncIterator[GenerateContentResponse]
    """Chunks in arrival order."""

    response: Awaitable[GenerateContentResponse]
    """The merged response of all chunks."""
