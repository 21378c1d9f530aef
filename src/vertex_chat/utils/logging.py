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

import logging
from typing import Optional


def get_logger(
    name: str, level: str = "info", log_format: Optional[str] = None
) -> logging.Logger:
    """Get a logger instance with the specified name and log level.

    A console handler is attached the first time a given name is requested;
    later calls return the same logger untouched.

    Args:
        name: The name of the logger.
        level: The log level to set for the logger. Defaults to "info".
        log_format: Optional format string overriding the default.

    Returns:
        logging.Logger: The logger instance.
    """
    if name in logging.Logger.manager.loggerDict:
        return logging.getLogger(name)

    logger = logging.getLogger(name)
    logger.setLevel(level.upper())

    formatter = logging.Formatter(
        log_format
        or "[%(asctime)s][%(name)s][%(levelname)s][%(pathname)s:%(lineno)s] %(message)s"
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level.upper())

    logger.addHandler(console_handler)
    logger.propagate = False

    return logger


def update_logger_level(name: str, level: str = "info") -> None:
    """Sets the level of a logger and of all its handlers."""
    logger = get_logger(name)
    logger.setLevel(level.upper())
    for handler in logger.handlers:
        handler.setLevel(level.upper())


logger = get_logger("vertex_chat")
