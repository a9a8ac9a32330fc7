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
"""Capture interceptor — records the one member invoked on a stand-in."""

from __future__ import annotations

from typing import Any

import structlog

from fluentlambda.capture.slots import SessionSlot
from fluentlambda.capture.types import CapturedMethod, placeholder_for
from fluentlambda.kernel.exceptions import (
    DoubleCaptureError,
    InvalidCaptureTargetError,
    WrongReceiverTypeError,
)

logger = structlog.get_logger("fluentlambda.capture.interceptor")


class CaptureInterceptor:
    """Intercept handler installed on every member of a stand-in.

    On each call it:

    1. rejects members that take arguments or return ``None``;
    2. fails with :class:`DoubleCaptureError` (and empties the slot) when a
       previous capture was never consumed;
    3. rejects receivers that are not instances of *target_type*;
    4. records the member into *slot*; the record itself is atomic, so a
       capture racing in from another caller sharing the slot is still
       reported as a double capture;
    5. returns a placeholder matching the declared return type.
    """

    def __init__(
        self,
        target_type: type,
        slot: SessionSlot,
        require_return_annotation: bool = False,
    ) -> None:
        self._target_type = target_type
        self._slot = slot
        self._require_return_annotation = require_return_annotation

    @property
    def target_type(self) -> type:
        return self._target_type

    def __call__(self, receiver: Any, member: CapturedMethod, args: tuple, kwargs: dict) -> Any:
        self._check_shape(member, args, kwargs)

        if self._slot.peek() is not None:
            self._slot.clear()
            raise self._double_capture(member)

        if self._target_type not in type(receiver).__mro__:
            raise WrongReceiverTypeError(
                f"Expected object of type: {self._target_type.__qualname__}",
                code="WRONG_RECEIVER_TYPE",
                context={"target": self._target_type.__qualname__, "receiver": type(receiver).__qualname__},
            )

        if not self._slot.record(member):
            raise self._double_capture(member)

        logger.debug("member_captured", member=str(member))
        return placeholder_for(member.return_type)

    def _check_shape(self, member: CapturedMethod, args: tuple, kwargs: dict) -> None:
        context = {"target": self._target_type.__qualname__, "member": member.name}
        if args or kwargs or member.required_parameters:
            raise InvalidCaptureTargetError(
                f"Method must have no parameters: {member.qualified_name}",
                code="HAS_PARAMETERS",
                context=context,
            )
        if member.returns_none:
            raise InvalidCaptureTargetError(
                f"Method must return a value: {member.qualified_name}",
                code="RETURNS_NONE",
                context=context,
            )
        if self._require_return_annotation and not member.is_annotated:
            raise InvalidCaptureTargetError(
                f"Method has no return annotation: {member.qualified_name}",
                code="UNANNOTATED",
                context=context,
            )

    def _double_capture(self, member: CapturedMethod) -> DoubleCaptureError:
        return DoubleCaptureError(
            f"Improper usage: {member} invoked while a previous capture was still pending. "
            "Pass each stand-in invocation straight to for_method() or for_predicate().",
            code="DOUBLE_CAPTURE",
            context={"target": self._target_type.__qualname__, "member": member.name},
        )
