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

from typing import Any

import aiohttp


def build_request_headers(token: str) -> dict[str, str]:
    """Builds the headers sent with every API call."""
    return {
        "Authorization": f"Bearer {token}",
        "Content-Type": "application/json",
    }


def extract_error_message(response_json: Any) -> Any:
    """Returns ``error.message`` from an API error body, if present."""
    if isinstance(response_json, list):
        # Streaming endpoints wrap errors in a one-element array.
        response_json = response_json[0] if response_json else None
    if not isinstance(response_json, dict):
        return None
    error = response_json.get("error")
    if not isinstance(error, dict):
        return None
    return error.get("message")


async def get_failure_reason(response: aiohttp.ClientResponse) -> str:
    """Describes why a non-2xx response failed."""
    try:
        response_json = await response.json(content_type=None)
    except (aiohttp.ClientError, ValueError):
        return f"HTTP {response.status}"

    error_msg = extract_error_message(response_json)
    if not error_msg:
        return f"HTTP {response.status}"
    return f"HTTP {response.status}: {error_msg}"
