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

from collections.abc import Sequence
from typing import TYPE_CHECKING, Optional, Union

from vertex_chat.core.async_utils import create_deferred_task
from vertex_chat.core.configs.params.generation_params import GenerationParams
from vertex_chat.core.configs.params.safety_params import SafetySetting
from vertex_chat.core.types.content import Content, GenerateContentResponse, Part, Role
from vertex_chat.core.types.exceptions import (
    ChatSessionBusyError,
    EmptyResponseError,
    RequestValidationError,
)
from vertex_chat.core.types.requests import GenerateContentRequest
from vertex_chat.core.types.streaming import (
    GenerateContentResult,
    StreamGenerateContentResult,
)
from vertex_chat.utils.logging import logger

if TYPE_CHECKING:
    from vertex_chat.inference.generative_model import GenerativeModel

MessageInput = Union[str, Part, Content, Sequence[Union[str, Part]]]
"""Accepted forms of a user message."""


def to_user_content(message: MessageInput) -> Content:
    """Normalizes a message into a single user turn.

    Strings become text parts. A `Content` is passed through unchanged.

    Raises:
        RequestValidationError: If the message is empty or of an unsupported type.
    """
    if isinstance(message, Content):
        return message
    if isinstance(message, (str, Part)):
        message = [message]

    parts: list[Part] = []
    for item in message:
        if isinstance(item, str):
            parts.append(Part(text=item))
        elif isinstance(item, Part):
            parts.append(item)
        else:
            raise RequestValidationError(
                f"Unsupported message part type: {type(item).__name__}"
            )
    if not parts:
        raise RequestValidationError("A message must contain at least one part.")
    return Content(role=Role.USER, parts=parts)


class ChatSession:
    """A multi-turn conversation with a generative model.

    The session keeps the conversation history in memory and sends it with
    every new message. A turn is added to the history only once the model has
    answered it, so a failed call leaves the history unchanged.

    Only one call may be in flight at a time. A call issued while another is
    pending raises `ChatSessionBusyError`; a streaming call stays pending until
    its merged response resolves.

    Example:
        >>> chat = model.start_chat()
        >>> result = await chat.send_message("Hello")
        >>> print(result.response.candidates[0].content.text)
    """

    def __init__(
        self,
        model: "GenerativeModel",
        history: Optional[list[Content]] = None,
        generation_config: Optional[GenerationParams] = None,
        safety_settings: Optional[list[SafetySetting]] = None,
    ):
        """Initializes the session.

        Args:
            model: The model answering the messages.
            history: Turns to seed the session with. The list is copied.
            generation_config: Generation config sent with every message.
            safety_settings: Safety settings sent with every message.
        """
        self._model = model
        self._history: list[Content] = list(history or [])
        self._generation_config = generation_config
        self._safety_settings = safety_settings
        self._in_flight = False

    @property
    def history(self) -> list[Content]:
        """A copy of the conversation so far, oldest turn first."""
        return list(self._history)

    def _acquire(self) -> None:
        if self._in_flight:
            raise ChatSessionBusyError(
                "A message is already being sent on this chat session. "
                "Wait for its response before sending another one."
            )
        self._in_flight = True

    def _release(self) -> None:
        self._in_flight = False

    def _build_request(self, user_content: Content) -> GenerateContentRequest:
        return GenerateContentRequest(
            contents=[*self._history, user_content],
            generation_config=self._generation_config,
            safety_settings=self._safety_settings,
        )

    def _commit(
        self, user_content: Content, response: GenerateContentResponse
    ) -> None:
        """Appends the user turn and the model's answer to the history."""
        if not response.candidates:
            logger.warning("The model returned no candidates. History unchanged.")
            raise EmptyResponseError("The model returned no candidates.")
        self._history.append(user_content)
        self._history.append(response.candidates[0].content)

    async def send_message(self, message: MessageInput) -> GenerateContentResult:
        """Sends a message and waits for the full answer.

        Args:
            message: A string, a part, a list of strings and parts, or a
                complete `Content`.

        Returns:
            The merged answer of the model.

        Raises:
            ChatSessionBusyError: If another call is in flight.
            EmptyResponseError: If the model returned no candidates.
        """
        self._acquire()
        try:
            user_content = to_user_content(message)
            result = await self._model.generate_content(
                self._build_request(user_content)
            )
            self._commit(user_content, result.response)
            return result
        finally:
            self._release()

    async def send_message_stream(
        self, message: MessageInput
    ) -> StreamGenerateContentResult:
        """Sends a message, exposing the answer as it arrives.

        The returned ``response`` resolves once the answer is complete and the
        history has been updated. The session stays busy until then.

        Raises:
            ChatSessionBusyError: If another call is in flight.
        """
        self._acquire()
        try:
            user_content = to_user_content(message)
            result = await self._model.generate_content_stream(
                self._build_request(user_content)
            )
        except Exception:
            self._release()
            raise

        async def _complete() -> GenerateContentResponse:
            try:
                response = await result.response
                self._commit(user_content, response)
                return response
            finally:
                self._release()

        return StreamGenerateContentResult(
            stream=result.stream, response=create_deferred_task(_complete())
        )
