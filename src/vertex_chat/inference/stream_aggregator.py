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

"""Incremental parsing and merging of streamed responses.

The API streams a response as a sequence of partial JSON objects, one per
line. This module decodes those lines into typed chunks and reduces them into
a single merged response, while still exposing every chunk as it arrives.
"""

import asyncio
import json
from collections.abc import AsyncIterable, AsyncIterator, Awaitable, Iterable
from dataclasses import dataclass, field
from typing import Callable, Optional, Union

import pydantic

from vertex_chat.core.async_utils import create_deferred_task
from vertex_chat.core.types.content import (
    Candidate,
    CitationMetadata,
    CitationSource,
    Content,
    FinishReason,
    GenerateContentResponse,
    Part,
    Role,
    SafetyRating,
    UsageMetadata,
)
from vertex_chat.core.types.exceptions import StreamParseError, TransportError
from vertex_chat.core.types.streaming import StreamGenerateContentResult
from vertex_chat.utils.http import extract_error_message
from vertex_chat.utils.logging import logger

_SSE_DATA_PREFIX = "data:"
_SSE_DONE_MARKER = "[DONE]"


def parse_stream_line(line: Union[str, bytes]) -> Optional[GenerateContentResponse]:
    """Decodes one line of a streamed response.

    Accepts both server-sent-event framing (``data: {...}``) and JSON array
    framing (``[{...}``, ``,{...}``, ``]``).

    Args:
        line: One raw line of the response body.

    Returns:
        The parsed chunk, or None if the line carries no payload.

    Raises:
        StreamParseError: If the payload is not a valid chunk.
        TransportError: If the payload is an error object sent mid-stream.
    """
    if isinstance(line, bytes):
        try:
            line = line.decode("utf-8")
        except UnicodeDecodeError as e:
            raise StreamParseError(f"Stream line is not valid UTF-8: {e}") from e

    payload = line.strip()
    if payload.startswith(":"):
        # SSE comment.
        return None
    if payload.startswith(_SSE_DATA_PREFIX):
        payload = payload[len(_SSE_DATA_PREFIX) :].strip()
    if payload == _SSE_DONE_MARKER:
        return None
    payload = payload.lstrip("[,").rstrip("],").strip()
    if not payload:
        return None

    try:
        response_json = json.loads(payload)
    except json.JSONDecodeError as e:
        raise StreamParseError(f"Malformed JSON in stream: {payload!r}") from e

    if not isinstance(response_json, dict):
        raise StreamParseError(
            f"Expected a JSON object in stream, got: {type(response_json).__name__}"
        )

    error_msg = extract_error_message(response_json)
    if error_msg:
        raise TransportError(f"Error received mid-stream: {error_msg}")

    try:
        return GenerateContentResponse.model_validate(response_json)
    except (pydantic.ValidationError, ValueError) as e:
        raise StreamParseError(f"Invalid response chunk: {e}") from e


@dataclass
class _CandidateRecord:
    """Mutable accumulator for all chunks of one candidate index."""

    index: int
    role: Optional[Role] = None
    parts: list[Part] = field(default_factory=list)
    finish_reason: Optional[FinishReason] = None
    finish_message: Optional[str] = None
    safety_ratings: list[SafetyRating] = field(default_factory=list)
    citation_sources: list[CitationSource] = field(default_factory=list)
    has_citation_metadata: bool = False

    def merge(self, candidate: Candidate) -> None:
        if self.role is None and candidate.content.role is not None:
            self.role = candidate.content.role

        for position, incoming in enumerate(candidate.content.parts):
            if position >= len(self.parts):
                self.parts.append(incoming)
                continue
            existing = self.parts[position]
            if existing.is_text() and incoming.is_text():
                self.parts[position] = Part(text=existing.text + incoming.text)  # type: ignore[operator]
            else:
                self.parts[position] = incoming

        if candidate.finish_reason not in (
            None,
            FinishReason.FINISH_REASON_UNSPECIFIED,
        ):
            self.finish_reason = candidate.finish_reason
        if candidate.finish_message:
            self.finish_message = candidate.finish_message
        if candidate.safety_ratings:
            self.safety_ratings = list(candidate.safety_ratings)
        if candidate.citation_metadata is not None:
            self.has_citation_metadata = True
            self.citation_sources.extend(
                candidate.citation_metadata.citation_sources
            )

    def build(self) -> Candidate:
        return Candidate(
            index=self.index,
            content=Content(role=self.role or Role.MODEL, parts=list(self.parts)),
            finish_reason=self.finish_reason,
            finish_message=self.finish_message,
            safety_ratings=list(self.safety_ratings),
            citation_metadata=(
                CitationMetadata(citation_sources=list(self.citation_sources))
                if self.has_citation_metadata
                else None
            ),
        )


class ResponseAggregator:
    """Reduces streamed chunks into one response.

    For each candidate index:

    - text parts at the same position are concatenated in arrival order;
      any other part at an existing position is replaced by the newer one,
      and extra parts are appended;
    - citation sources accumulate in arrival order;
    - the latest finish reason, finish message and safety ratings win;
    - the first role seen is kept.

    The usage metadata of the latest chunk that carries one wins. Candidates
    are emitted in ascending index order.
    """

    def __init__(self):
        """Initializes an empty aggregator."""
        self._records: dict[int, _CandidateRecord] = {}
        self._usage_metadata: Optional[UsageMetadata] = None
        self._num_chunks = 0

    @property
    def num_chunks(self) -> int:
        """Number of chunks added so far."""
        return self._num_chunks

    def add(self, chunk: GenerateContentResponse) -> None:
        """Merges one chunk into the accumulated state."""
        self._num_chunks += 1
        for candidate in chunk.candidates:
            record = self._records.get(candidate.index)
            if record is None:
                record = _CandidateRecord(index=candidate.index)
                self._records[candidate.index] = record
            record.merge(candidate)
        if chunk.usage_metadata is not None:
            self._usage_metadata = chunk.usage_metadata

    def build(self) -> GenerateContentResponse:
        """Returns the merged response of all chunks added so far."""
        return GenerateContentResponse(
            candidates=[
                self._records[index].build() for index in sorted(self._records)
            ],
            usage_metadata=self._usage_metadata,
        )


def aggregate_responses(
    chunks: Iterable[GenerateContentResponse],
) -> GenerateContentResponse:
    """Merges an in-memory sequence of chunks into one response."""
    aggregator = ResponseAggregator()
    for chunk in chunks:
        aggregator.add(chunk)
    return aggregator.build()


@dataclass
class _StreamFailure:
    error: BaseException


_STREAM_END = object()


def process_stream(
    lines: AsyncIterable[Union[str, bytes]],
    on_close: Optional[Callable[[], Awaitable[None]]] = None,
) -> StreamGenerateContentResult:
    """Drains a line source, exposing chunks and the merged response.

    A single task consumes ``lines``. Each parsed chunk is merged and queued
    for the returned ``stream``; the returned ``response`` resolves with the
    merged result once ``lines`` is exhausted. Any failure is raised from both.

    Must be called from a running event loop.

    Args:
        lines: Raw lines of the response body.
        on_close: Awaited once draining ends, successfully or not. Used to
            release the underlying connection.

    Returns:
        The stream of chunks and the deferred merged response.
    """
    queue: asyncio.Queue = asyncio.Queue()
    aggregator = ResponseAggregator()

    async def _drain() -> GenerateContentResponse:
        try:
            try:
                async for line in lines:
                    chunk = parse_stream_line(line)
                    if chunk is None:
                        continue
                    aggregator.add(chunk)
                    queue.put_nowait(chunk)
            finally:
                if on_close is not None:
                    await on_close()
        except Exception as e:
            logger.error(f"Streaming failed after {aggregator.num_chunks} chunks: {e}")
            queue.put_nowait(_StreamFailure(e))
            raise
        except asyncio.CancelledError as e:
            logger.warning(
                f"Streaming cancelled after {aggregator.num_chunks} chunks."
            )
            queue.put_nowait(_StreamFailure(e))
            raise
        queue.put_nowait(_STREAM_END)
        logger.debug(f"Stream completed with {aggregator.num_chunks} chunks.")
        return aggregator.build()

    async def _read_queue() -> AsyncIterator[GenerateContentResponse]:
        while True:
            item = await queue.get()
            if item is _STREAM_END:
                return
            if isinstance(item, _StreamFailure):
                raise item.error
            yield item

    response = create_deferred_task(_drain())
    return StreamGenerateContentResult(stream=_read_queue(), response=response)
