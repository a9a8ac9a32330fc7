# Copyright 2026 Firefly Software Solutions Inc.
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
"""Capture core types — CapturedMethod descriptor, session states and placeholders."""

from __future__ import annotations

import enum
import inspect
from dataclasses import dataclass
from typing import Any

NoneType = type(None)


class MemberKind(enum.Enum):
    """How a captured member is read from an instance."""

    METHOD = "method"
    PROPERTY = "property"


class SessionState(enum.Enum):
    """States of a capture session."""

    EMPTY = "empty"
    CAPTURED = "captured"


@dataclass(frozen=True)
class CapturedMethod:
    """Identifies the zero-argument member invoked on a stand-in.

    Attributes:
        target_type: The type passed to ``create_stand_in``.
        declaring_type: First class in the target's MRO defining the member.
        name: Attribute name of the member.
        kind: Whether the member is called (method) or read (property).
        return_type: Resolved return annotation, ``inspect.Signature.empty``
            when the member is unannotated.
        required_parameters: Parameters without defaults, excluding ``self``.
    """

    target_type: type
    declaring_type: type
    name: str
    kind: MemberKind
    return_type: Any = inspect.Signature.empty
    required_parameters: int = 0

    @property
    def qualified_name(self) -> str:
        return f"{self.declaring_type.__qualname__}.{self.name}"

    @property
    def is_annotated(self) -> bool:
        return self.return_type is not inspect.Signature.empty

    @property
    def returns_none(self) -> bool:
        return self.return_type is None or self.return_type is NoneType

    @property
    def returns_bool(self) -> bool:
        return self.return_type is bool

    def __str__(self) -> str:
        suffix = "()" if self.kind is MemberKind.METHOD else ""
        return f"{self.qualified_name}{suffix}"


def placeholder_for(return_type: Any) -> Any:
    """Dummy value handed back from an intercepted call.

    ``False`` for bool, a zero for the numeric builtins and ``None`` for
    everything else.
    """
    if not isinstance(return_type, type):
        return None
    if issubclass(return_type, bool):
        return False
    if issubclass(return_type, int):
        return 0
    if issubclass(return_type, float):
        return 0.0
    if issubclass(return_type, complex):
        return 0j
    return None
