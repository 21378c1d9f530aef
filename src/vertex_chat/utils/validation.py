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

from vertex_chat.core.types.content import Content
from vertex_chat.core.types.exceptions import (
    InvalidFileUriError,
    RequestValidationError,
)
from vertex_chat.utils.logging import logger

_SUPPORTED_FILE_URI_SCHEMES = ("gs://",)


def validate_file_uri(file_uri: str) -> None:
    """Checks that a file URI points to remote storage.

    Raises:
        InvalidFileUriError: If the URI does not start with a supported scheme.
    """
    if not file_uri.startswith(_SUPPORTED_FILE_URI_SCHEMES):
        logger.error(f"Rejected file URI: {file_uri}")
        raise InvalidFileUriError(
            f"File URI '{file_uri}' must start with one of: "
            f"{', '.join(_SUPPORTED_FILE_URI_SCHEMES)}"
        )


def validate_contents(contents: Sequence[Content]) -> None:
    """Validates request contents before anything is sent.

    Raises:
        RequestValidationError: If ``contents`` is empty.
        InvalidFileUriError: If a file part references an unsupported URI.
    """
    if not contents:
        raise RequestValidationError("Request contents must not be empty.")

    for content in contents:
        for part in content.parts:
            if part.file_data is not None:
                validate_file_uri(part.file_data.file_uri)
