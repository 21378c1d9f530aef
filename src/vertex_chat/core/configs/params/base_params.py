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

import dataclasses
from dataclasses import dataclass
from typing import Any, Iterator, Optional, Set, Tuple


@dataclass
class BaseParams:
    def validate(self, validated: Optional[Set[int]] = None) -> None:
        """Recursively validates the parameters.

        Nested params, and params held in lists or dicts, are validated before
        their parent. Each object is validated at most once.
        """
        if validated is None:
            validated = set()

        if id(self) in validated:
            return
        validated.add(id(self))

        # Only one level of container nesting is supported, e.g.
        # `List[SafetySetting]` but not `List[List[SafetySetting]]`.
        for _attr_name, attr_value in self:
            if isinstance(attr_value, BaseParams):
                attr_value.validate(validated)
            elif isinstance(attr_value, list):
                for item in attr_value:
                    if isinstance(item, BaseParams):
                        item.validate(validated)
            elif isinstance(attr_value, dict):
                for item in attr_value.values():
                    if isinstance(item, BaseParams):
                        item.validate(validated)

        self.__validate__()

    def __validate__(self) -> None:
        """Validates the parameters of this object.

        Subclasses override this to implement custom validation logic, raising
        a `ValueError` on invalid values.
        """

    def __iter__(self) -> Iterator[Tuple[str, Any]]:
        """Returns an iterator over field names and values."""
        for param in dataclasses.fields(self):
            yield param.name, getattr(self, param.name)
