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

"""Client SDK for the Vertex AI generative content API.

Provides typed requests and responses, streamed generation with incremental
merging of partial responses, and multi-turn chat sessions.

Example:
    >>> from vertex_chat import VertexAI
    >>> client = VertexAI(project="my-project", location="us-central1")
    >>> model = client.preview.get_generative_model("gemini-1.0-pro")
    >>> chat = model.start_chat()
    >>> result = await chat.send_message("Hello")  # doctest: +SKIP
"""

from vertex_chat.chat.chat_session import ChatSession
from vertex_chat.client import VertexAI
from vertex_chat.core.auth import (
    GoogleAuthTokenProvider,
    StaticTokenProvider,
    TokenProvider,
)
from vertex_chat.core.configs import (
    ClientConfig,
    GenerationParams,
    ModelParams,
    RemoteParams,
    SafetySetting,
)
from vertex_chat.core.types import (
    Blob,
    Candidate,
    Content,
    CountTokensResponse,
    FileData,
    FinishReason,
    GenerateContentResponse,
    GenerateContentResult,
    HarmBlockThreshold,
    HarmCategory,
    HarmProbability,
    Part,
    Role,
    StreamGenerateContentResult,
)
from vertex_chat.core.types.requests import (
    CountTokensRequest,
    GenerateContentRequest,
    StartChatParams,
)
from vertex_chat.inference.generative_model import GenerativeModel

__all__ = [
    "Blob",
    "Candidate",
    "ChatSession",
    "ClientConfig",
    "Content",
    "CountTokensRequest",
    "CountTokensResponse",
    "FileData",
    "FinishReason",
    "GenerateContentRequest",
    "GenerateContentResponse",
    "GenerateContentResult",
    "GenerationParams",
    "GenerativeModel",
    "GoogleAuthTokenProvider",
    "HarmBlockThreshold",
    "HarmCategory",
    "HarmProbability",
    "ModelParams",
    "Part",
    "RemoteParams",
    "Role",
    "SafetySetting",
    "StartChatParams",
    "StaticTokenProvider",
    "StreamGenerateContentResult",
    "TokenProvider",
    "VertexAI",
]
