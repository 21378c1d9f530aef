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

import asyncio
from collections.abc import Coroutine
from typing import Any, TypeVar

T = TypeVar("T")


def _retrieve_exception(task: asyncio.Task) -> None:
    if not task.cancelled():
        task.exception()


def create_deferred_task(coro: Coroutine[Any, Any, T]) -> "asyncio.Task[T]":
    """Schedules a coroutine whose result may never be awaited.

    The task's exception, if any, is marked as retrieved so that an unawaited
    failure is not reported when the task is garbage collected. Awaiting the
    task still raises the exception.

    Args:
        coro: The coroutine to schedule on the running event loop.

    Returns:
        The scheduled task.
    """
    task = asyncio.create_task(coro)
    task.add_done_callback(_retrieve_exception)
    return task
