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

"""Custom exceptions for the vertex_chat SDK.

Exception Hierarchy:
    VertexChatError (base for all SDK errors)
    ├── ConfigurationError (invalid or missing configuration)
    ├── RequestValidationError (request rejected before any network call)
    │   └── InvalidFileUriError (file reference without a recognized scheme)
    ├── RemoteServiceError (external service communication)
    │   ├── TransportError (non-2xx status or connection failure)
    │   └── StreamParseError (malformed chunk in a streamed response)
    ├── EmptyResponseError (the model returned no candidates)
    └── ChatSessionBusyError (a chat call is already in flight)
"""

from typing import Optional


class VertexChatError(Exception):
    """Base class for all errors raised by the SDK.

    Callers that want to handle any SDK failure uniformly can catch this
    class; the subclasses below identify the failure kind.
    """

    pass


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(VertexChatError):
    """Raised when client configuration values are missing or invalid.

    Example:
        raise ConfigurationError(
            "A project is required. Set remote.project in your config file."
        )
    """

    pass


# =============================================================================
# Request Validation Errors
# =============================================================================


class RequestValidationError(VertexChatError, ValueError):
    """A request was rejected before it was sent.

    Raised by request validation; the network is never touched when this
    error is raised.
    """

    pass


class InvalidFileUriError(RequestValidationError):
    """A file reference does not use a recognized remote-storage scheme.

    Example:
        raise InvalidFileUriError(
            "File URI 'test_image.jpeg' must start with 'gs://'."
        )
    """

    pass


# =============================================================================
# Remote Service Errors
# =============================================================================


class RemoteServiceError(VertexChatError):
    """Base class for errors communicating with the generative API."""

    pass


class TransportError(RemoteServiceError):
    """The API returned a non-2xx status, or the connection failed.

    Attributes:
        status_code: The HTTP status code, or None for connection failures.
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        """Initializes the error with an optional HTTP status code."""
        super().__init__(message)
        self.status_code = status_code


class StreamParseError(RemoteServiceError):
    """A line of a streamed response could not be parsed.

    Parsing failures are fatal for the whole stream; no partial result is
    returned.
    """

    pass


# =============================================================================
# Chat Errors
# =============================================================================


class EmptyResponseError(VertexChatError):
    """The merged model response contains no candidates."""

    pass


class ChatSessionBusyError(VertexChatError, RuntimeError):
    """A chat session call was issued while another call is in flight."""

    pass
