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
"""Functor builder — turn a pending capture into a reusable Functor or Predicate."""

from __future__ import annotations

import inspect
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import structlog

from fluentlambda.capture.slots import SessionSlot
from fluentlambda.capture.types import CapturedMethod, MemberKind
from fluentlambda.kernel.exceptions import (
    InvalidReceiverError,
    NoCaptureStartedError,
    ReflectiveAccessError,
    TargetInvocationError,
    WrongReturnTypeError,
)

logger = structlog.get_logger("fluentlambda.capture.functors")

X = TypeVar("X")
Y = TypeVar("Y")


@dataclass(frozen=True)
class Functor(Generic[X, Y]):
    """Unary operation invoking a captured zero-argument member.

    Calling the functor is the same as calling :meth:`apply`, so it can be
    handed to ``map``, ``sorted(key=...)`` and friends.
    """

    method: CapturedMethod
    log_failures: bool = True

    def apply(self, instance: X) -> Y:
        return invoke_member(self.method, instance, self.log_failures)

    def __call__(self, instance: X) -> Y:
        return self.apply(instance)

    def __repr__(self) -> str:
        return f"Functor({self.method})"


@dataclass(frozen=True)
class Predicate(Generic[X]):
    """Boolean test invoking a captured zero-argument ``-> bool`` member."""

    method: CapturedMethod
    log_failures: bool = True

    def test(self, instance: X | None) -> bool:
        return bool(invoke_member(self.method, instance, self.log_failures))

    def __call__(self, instance: X | None) -> bool:
        return self.test(instance)

    def __repr__(self) -> str:
        return f"Predicate({self.method})"


def build_functor(slot: SessionSlot, invocation: Any = None, log_failures: bool = True) -> Functor[Any, Any]:
    """Consume the pending capture in *slot* and wrap it in a :class:`Functor`.

    *invocation* is the placeholder returned by the stand-in call and is
    ignored. The slot is empty afterwards whether or not this succeeds.

    Raises:
        NoCaptureStartedError: Nothing was captured in this session.
    """
    return Functor(_take_capture(slot), log_failures=log_failures)


def build_predicate(slot: SessionSlot, invocation: Any = False, log_failures: bool = True) -> Predicate[Any]:
    """Consume the pending capture in *slot* and wrap it in a :class:`Predicate`.

    Raises:
        NoCaptureStartedError: Nothing was captured in this session.
        WrongReturnTypeError: The captured member is not annotated ``-> bool``.
    """
    method = _take_capture(slot)
    if not method.returns_bool:
        raise WrongReturnTypeError(
            f"Method does not return a bool: {method.qualified_name}",
            code="NOT_BOOLEAN",
            context={"member": method.qualified_name, "return_type": _type_name(method.return_type)},
        )
    return Predicate(method, log_failures=log_failures)


def invoke_member(method: CapturedMethod, instance: Any, log_failures: bool = True) -> Any:
    """Invoke *method* on *instance* with no arguments and return the result.

    Raises:
        InvalidReceiverError: *instance* is not of the declaring type.
        ReflectiveAccessError: The member cannot be looked up or called.
        TargetInvocationError: The member's own body raised.
    """
    if not accepts_receiver(method, instance):
        raise InvalidReceiverError(
            f"Expected object of type: {method.declaring_type.__qualname__}, got {type(instance).__qualname__}",
            code="INVALID_RECEIVER",
            context={"member": method.qualified_name, "receiver": type(instance).__qualname__},
        )

    if method.kind is MemberKind.PROPERTY:
        _resolve_static(method, instance, log_failures)
        try:
            return getattr(instance, method.name)
        except Exception as exc:
            raise _target_failure(method, instance, exc, log_failures) from exc

    try:
        bound = getattr(instance, method.name)
    except AttributeError as exc:
        raise _access_failure(method, instance, str(exc), log_failures) from exc
    if not callable(bound):
        raise _access_failure(
            method, instance, f"'{method.name}' is not callable on {type(instance).__qualname__}", log_failures
        )

    try:
        return bound()
    except Exception as exc:
        raise _target_failure(method, instance, exc, log_failures) from exc


def accepts_receiver(method: CapturedMethod, instance: Any) -> bool:
    """True if *method* may be invoked on *instance*.

    Instances of the declaring type (or its subclasses) are accepted. A
    declaring type that is a ``typing.Protocol`` without
    ``@runtime_checkable`` cannot be used with ``isinstance``; for those,
    any non-None instance whose class provides the member is accepted.
    """
    declaring = method.declaring_type
    if declaring in type(instance).__mro__:
        return True
    if getattr(declaring, "_is_protocol", False) and not getattr(declaring, "_is_runtime_protocol", False):
        return instance is not None and hasattr(type(instance), method.name)
    return isinstance(instance, declaring)


def _take_capture(slot: SessionSlot) -> CapturedMethod:
    method = slot.take()
    if method is None:
        raise NoCaptureStartedError(
            "Improper usage: no member was captured; call a method on of_class(...) first",
            code="NO_CAPTURE",
        )
    return method


def _resolve_static(method: CapturedMethod, instance: Any, log_failures: bool) -> None:
    try:
        inspect.getattr_static(instance, method.name)
    except AttributeError as exc:
        raise _access_failure(method, instance, str(exc), log_failures) from exc


def _access_failure(method: CapturedMethod, instance: Any, message: str, log_failures: bool) -> ReflectiveAccessError:
    if log_failures:
        logger.error("member_access_failed", member=method.qualified_name, error=message)
    return ReflectiveAccessError(
        message,
        code="ACCESS_FAILED",
        context={"member": method.qualified_name, "receiver": type(instance).__qualname__},
    )


def _target_failure(
    method: CapturedMethod, instance: Any, exc: Exception, log_failures: bool
) -> TargetInvocationError:
    if log_failures:
        logger.error("target_invocation_failed", member=method.qualified_name, error=str(exc), exc_info=exc)
    return TargetInvocationError(
        str(exc),
        cause=exc,
        code="TARGET_FAILED",
        context={"member": method.qualified_name, "receiver": type(instance).__qualname__},
    )


def _type_name(tp: Any) -> str:
    if tp is inspect.Signature.empty:
        return "<unannotated>"
    return getattr(tp, "__qualname__", repr(tp))
