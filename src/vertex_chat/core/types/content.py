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

"""Wire types for contents, candidates and responses.

All models are immutable and accept both ``camelCase`` and ``snake_case`` keys,
since the API and older payloads use either. Serialization always uses the
``camelCase`` aliases.
"""

import base64
from enum import Enum
from typing import Any, Optional, Union

import pydantic
from pydantic.alias_generators import to_camel

_WIRE_MODEL_CONFIG = pydantic.ConfigDict(
    frozen=True,
    alias_generator=to_camel,
    populate_by_name=True,  # Accept both field names and aliases
)


class Role(str, Enum):
    """Role of the entity that produced a turn."""

    USER = "user"
    """Represents a turn issued by the user."""

    MODEL = "model"
    """Represents a turn generated by the model."""

    def __str__(self) -> str:
        """Return the string representation of the Role enum."""
        return self.value


class HarmCategory(str, Enum):
    """Harm categories used by safety settings and ratings."""

    HARM_CATEGORY_UNSPECIFIED = "HARM_CATEGORY_UNSPECIFIED"
    HARM_CATEGORY_HATE_SPEECH = "HARM_CATEGORY_HATE_SPEECH"
    HARM_CATEGORY_DANGEROUS_CONTENT = "HARM_CATEGORY_DANGEROUS_CONTENT"
    HARM_CATEGORY_HARASSMENT = "HARM_CATEGORY_HARASSMENT"
    HARM_CATEGORY_SEXUALLY_EXPLICIT = "HARM_CATEGORY_SEXUALLY_EXPLICIT"

    def __str__(self) -> str:
        """Return the string representation of the HarmCategory enum."""
        return self.value


class HarmBlockThreshold(str, Enum):
    """Probability thresholds at which content is blocked."""

    HARM_BLOCK_THRESHOLD_UNSPECIFIED = "HARM_BLOCK_THRESHOLD_UNSPECIFIED"
    BLOCK_LOW_AND_ABOVE = "BLOCK_LOW_AND_ABOVE"
    BLOCK_MEDIUM_AND_ABOVE = "BLOCK_MEDIUM_AND_ABOVE"
    BLOCK_ONLY_HIGH = "BLOCK_ONLY_HIGH"
    BLOCK_NONE = "BLOCK_NONE"

    def __str__(self) -> str:
        """Return the string representation of the HarmBlockThreshold enum."""
        return self.value


class HarmProbability(str, Enum):
    """Probability that a piece of content is harmful."""

    HARM_PROBABILITY_UNSPECIFIED = "HARM_PROBABILITY_UNSPECIFIED"
    NEGLIGIBLE = "NEGLIGIBLE"
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    def __str__(self) -> str:
        """Return the string representation of the HarmProbability enum."""
        return self.value


class FinishReason(str, Enum):
    """Reason the model stopped generating a candidate."""

    FINISH_REASON_UNSPECIFIED = "FINISH_REASON_UNSPECIFIED"
    """The finish reason is unspecified."""

    STOP = "STOP"
    """Natural stop point of the model or a provided stop sequence."""

    MAX_TOKENS = "MAX_TOKENS"
    """The maximum number of tokens specified in the request was reached."""

    SAFETY = "SAFETY"
    """The candidate was flagged for safety reasons."""

    RECITATION = "RECITATION"
    """The candidate was flagged for unauthorized citations."""

    OTHER = "OTHER"
    """All other reasons that stopped the candidate."""

    def __str__(self) -> str:
        """Return the string representation of the FinishReason enum."""
        return self.value


# Protobuf ordinals, as sent by some endpoints instead of the enum names.
_FINISH_REASON_BY_ORDINAL: tuple[FinishReason, ...] = (
    FinishReason.FINISH_REASON_UNSPECIFIED,
    FinishReason.STOP,
    FinishReason.MAX_TOKENS,
    FinishReason.SAFETY,
    FinishReason.RECITATION,
    FinishReason.OTHER,
)

# Wire values outside these sets are read as the UNSPECIFIED or OTHER member.
_HARM_CATEGORY_VALUES = frozenset(member.value for member in HarmCategory)
_HARM_PROBABILITY_VALUES = frozenset(member.value for member in HarmProbability)
_FINISH_REASON_VALUES = frozenset(member.value for member in FinishReason)


class Blob(pydantic.BaseModel):
    """Raw bytes sent inline with a request."""

    model_config = _WIRE_MODEL_CONFIG

    mime_type: str
    """The IANA MIME type of the data, e.g. ``image/jpeg``."""

    data: bytes
    """The raw bytes. Serialized as base64."""

    @pydantic.field_serializer("data")
    def _encode_data(self, value: bytes) -> str:
        """Encode bytes as a base64 ASCII string, as required by JSON."""
        return base64.b64encode(value).decode("ascii")

    @pydantic.field_validator("data", mode="before")
    def _decode_data(cls, value: Union[str, bytes]) -> bytes:
        if isinstance(value, str):
            return base64.b64decode(value)
        return value


class FileData(pydantic.BaseModel):
    """A reference to a file held in remote storage."""

    model_config = _WIRE_MODEL_CONFIG

    mime_type: str
    """The IANA MIME type of the file."""

    file_uri: str
    """The URI of the file, e.g. ``gs://bucket/image.jpeg``."""


class Part(pydantic.BaseModel):
    """A single payload unit of a `Content`.

    Exactly one of ``text``, ``inline_data`` or ``file_data`` must be set.

    Examples:
        Text::

            Part(text="What is in this picture?")

        Inline bytes::

            Part(inline_data=Blob(mime_type="image/png", data=png_bytes))

        Remote file::

            Part(file_data=FileData(
                mime_type="image/jpeg", file_uri="gs://bucket/image.jpeg"
            ))
    """

    model_config = _WIRE_MODEL_CONFIG

    text: Optional[str] = None
    """Text payload."""

    inline_data: Optional[Blob] = None
    """Inline binary payload."""

    file_data: Optional[FileData] = None
    """Remote file reference."""

    def model_post_init(self, __context) -> None:
        """Checks that exactly one payload field is set.

        Raises:
            ValueError: If zero or several payload fields are set.
        """
        num_payloads = sum(
            value is not None for value in (self.text, self.inline_data, self.file_data)
        )
        if num_payloads != 1:
            raise ValueError(
                "Exactly one of 'text', 'inline_data' or 'file_data' must be set "
                f"on a part, got {num_payloads}."
            )

    def is_text(self) -> bool:
        """Checks if the part carries text."""
        return self.text is not None

    def __repr__(self) -> str:
        """Returns a string representation of the part."""
        if self.text is not None:
            return self.text
        if self.inline_data is not None:
            return f"<INLINE_DATA {self.inline_data.mime_type}>"
        return f"<FILE_DATA {self.file_data.file_uri}>"  # type: ignore[union-attr]


class Content(pydantic.BaseModel):
    """One turn of a conversation."""

    model_config = _WIRE_MODEL_CONFIG

    role: Optional[Role] = None
    """The producer of the turn. Absent on some model responses."""

    parts: list[Part] = pydantic.Field(default_factory=list)
    """Ordered payload units of the turn."""

    @property
    def text(self) -> str:
        """Joins the text of all text parts."""
        return "".join(part.text for part in self.parts if part.text is not None)

    def to_dict(self) -> dict[str, Any]:
        """Serializes the content to its wire representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def __repr__(self) -> str:
        """Returns a string representation of the content."""
        role = str(self.role).upper() if self.role else "UNKNOWN"
        return f"{role}: " + " | ".join(repr(part) for part in self.parts)


class SafetyRating(pydantic.BaseModel):
    """Safety rating of a candidate for one harm category."""

    model_config = _WIRE_MODEL_CONFIG

    category: HarmCategory
    probability: HarmProbability
    blocked: Optional[bool] = None

    @pydantic.field_validator("category", mode="before")
    def _unknown_category_to_unspecified(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in _HARM_CATEGORY_VALUES:
            return HarmCategory.HARM_CATEGORY_UNSPECIFIED
        return value

    @pydantic.field_validator("probability", mode="before")
    def _unknown_probability_to_unspecified(cls, value: Any) -> Any:
        if isinstance(value, str) and value not in _HARM_PROBABILITY_VALUES:
            return HarmProbability.HARM_PROBABILITY_UNSPECIFIED
        return value


class CitationSource(pydantic.BaseModel):
    """A source cited by a span of a candidate's text."""

    model_config = _WIRE_MODEL_CONFIG

    start_index: Optional[int] = None
    """Start of the cited span, in characters."""

    end_index: Optional[int] = None
    """End of the cited span, in characters."""

    uri: Optional[str] = None
    """URI of the cited source."""

    license: Optional[str] = None
    """License of the cited source, if any."""


class CitationMetadata(pydantic.BaseModel):
    """Citations attached to a candidate."""

    model_config = _WIRE_MODEL_CONFIG

    citation_sources: list[CitationSource] = pydantic.Field(default_factory=list)


class Candidate(pydantic.BaseModel):
    """One generated alternative."""

    model_config = _WIRE_MODEL_CONFIG

    index: int = 0
    """Position of the candidate among the alternatives of a response."""

    content: Content = pydantic.Field(
        default_factory=lambda: Content(role=Role.MODEL)
    )
    """The generated turn. Its role is always set, defaulting to `Role.MODEL`."""

    finish_reason: Optional[FinishReason] = None
    finish_message: Optional[str] = None
    safety_ratings: list[SafetyRating] = pydantic.Field(default_factory=list)
    citation_metadata: Optional[CitationMetadata] = None

    @pydantic.field_validator("content", mode="after")
    def _default_model_role(cls, value: Content) -> Content:
        if value.role is None:
            return value.model_copy(update={"role": Role.MODEL})
        return value

    @pydantic.field_validator("finish_reason", mode="before")
    def _finish_reason_from_ordinal(cls, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            if not 0 <= value < len(_FINISH_REASON_BY_ORDINAL):
                return FinishReason.OTHER
            return _FINISH_REASON_BY_ORDINAL[value]
        if isinstance(value, str) and value not in _FINISH_REASON_VALUES:
            return FinishReason.OTHER
        return value


class UsageMetadata(pydantic.BaseModel):
    """Token counts for a request/response pair."""

    model_config = _WIRE_MODEL_CONFIG

    prompt_token_count: int = 0
    candidates_token_count: int = 0
    total_token_count: int = 0


class GenerateContentResponse(pydantic.BaseModel):
    """A full response, or one streamed chunk of a response."""

    model_config = _WIRE_MODEL_CONFIG

    candidates: list[Candidate] = pydantic.Field(default_factory=list)
    usage_metadata: Optional[UsageMetadata] = None

    def to_dict(self) -> dict[str, Any]:
        """Serializes the response to its wire representation."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class CountTokensResponse(pydantic.BaseModel):
    """Response of a token counting call."""

    model_config = _WIRE_MODEL_CONFIG

    total_tokens: int = 0
    total_billable_characters: Optional[int] = None
