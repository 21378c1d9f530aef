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

"""Types module for the vertex_chat client.

This module provides the wire types, result types and exceptions used
throughout the client.

Exceptions:
    :class:`VertexChatError`: Base class for all client errors.
    :class:`ConfigurationError`: Configuration-related errors.
    :class:`RequestValidationError`: Request rejected before sending.
    :class:`InvalidFileUriError`: File reference with an unsupported scheme.
    :class:`RemoteServiceError`: External service communication errors.
    :class:`TransportError`: Non-2xx status or connection failure.
    :class:`StreamParseError`: Malformed chunk in a streamed response.
    :class:`EmptyResponseError`: Response without candidates.
    :class:`ChatSessionBusyError`: Chat call issued while another is in flight.

Note:
    Request types live in :mod:`vertex_chat.core.types.requests`, since they
    depend on the configuration classes.
"""

from vertex_chat.core.types.content import (
    Blob,
    Candidate,
    CitationMetadata,
    CitationSource,
    Content,
    CountTokensResponse,
    FileData,
    FinishReason,
    GenerateContentResponse,
    HarmBlockThreshold,
    HarmCategory,
    HarmProbability,
    Part,
    Role,
    SafetyRating,
    UsageMetadata,
)
from vertex_chat.core.types.exceptions import (
    ChatSessionBusyError,
    ConfigurationError,
    EmptyResponseError,
    InvalidFileUriError,
    RemoteServiceError,
    RequestValidationError,
    StreamParseError,
    TransportError,
    VertexChatError,
)
from vertex_chat.core.types.streaming import (
    GenerateContentResult,
    StreamGenerateContentResult,
)

__all__ = [
    # Exceptions
    "VertexChatError",
    "ConfigurationError",
    "RequestValidationError",
    "InvalidFileUriError",
    "RemoteServiceError",
    "TransportError",
    "StreamParseError",
    "EmptyResponseError",
    "ChatSessionBusyError",
    # Wire types
    "Blob",
    "Candidate",
    "CitationMetadata",
    "CitationSource",
    "Content",
    "CountTokensResponse",
    "FileData",
    "FinishReason",
    "GenerateContentResponse",
    "HarmBlockThreshold",
    "HarmCategory",
    "HarmProbability",
    "Part",
    "Role",
    "SafetyRating",
    "UsageMetadata",
    # Results
    "GenerateContentResult",
    "StreamGenerateContentResult",
]
