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
"""Stand-in factory — runtime subclasses whose members route to a handler."""

from __future__ import annotations

import functools
import inspect
import types
from collections.abc import Callable
from typing import Any

import structlog

from fluentlambda.capture.introspection import iter_members
from fluentlambda.capture.types import CapturedMethod, MemberKind
from fluentlambda.kernel.exceptions import TypeNotExtensibleError

logger = structlog.get_logger("fluentlambda.capture.proxy")

InterceptHandler = Callable[[Any, CapturedMethod, tuple, dict], Any]

STAND_IN_MARKER = "__fluentlambda_stand_in_for__"


class ProxyFactory:
    """Build intercepting instances of arbitrary classes.

    Every public instance method of the target (and every property, when
    *intercept_properties* is true) is overridden on a generated subclass by
    a wrapper that hands the receiver, the member descriptor and the call
    arguments to the handler. The handler's return value becomes the call's
    result. The generated instance is created without running the target's
    ``__init__``.
    """

    def __init__(self, intercept_properties: bool = True) -> None:
        self._intercept_properties = intercept_properties

    def create_intercepting_instance(self, target_type: type, handler: InterceptHandler) -> Any:
        """Return an instance of a generated subclass of *target_type*.

        Raises:
            TypeNotExtensibleError: *target_type* is not a class, is marked
                ``@typing.final``, or cannot be subclassed or instantiated.
        """
        if not isinstance(target_type, type):
            raise TypeNotExtensibleError(
                f"Expected a class, got {target_type!r}",
                code="NOT_A_CLASS",
                context={"target": repr(target_type)},
            )
        if getattr(target_type, "__final__", False):
            raise TypeNotExtensibleError(
                f"{target_type.__qualname__} is marked final and cannot be extended",
                code="FINAL_TYPE",
                context={"target": target_type.__qualname__},
            )

        namespace = self._build_namespace(target_type, handler)
        try:
            stand_in_cls = types.new_class(
                f"{target_type.__name__}StandIn",
                (target_type,),
                exec_body=lambda ns: ns.update(namespace),
            )
        except TypeError as exc:
            raise TypeNotExtensibleError(
                f"{target_type.__qualname__} cannot be subclassed: {exc}",
                code="NOT_SUBCLASSABLE",
                context={"target": target_type.__qualname__},
            ) from exc

        if getattr(stand_in_cls, "__abstractmethods__", None):
            stand_in_cls.__abstractmethods__ = frozenset()

        instance = _instantiate(stand_in_cls, target_type)
        logger.debug("stand_in_created", target=target_type.__qualname__)
        return instance

    def _build_namespace(self, target_type: type, handler: InterceptHandler) -> dict[str, Any]:
        namespace: dict[str, Any] = {
            "__module__": target_type.__module__,
            "__qualname__": f"{target_type.__qualname__}StandIn",
            STAND_IN_MARKER: target_type,
        }
        for member in iter_members(target_type, include_properties=self._intercept_properties):
            if member.kind is MemberKind.PROPERTY:
                namespace[member.name] = _intercepting_property(member, handler)
            else:
                original = inspect.getattr_static(target_type, member.name)
                namespace[member.name] = _intercepting_method(member, original, handler)
        namespace["__repr__"] = _stand_in_repr
        return namespace


def is_stand_in(obj: Any) -> bool:
    """True if *obj* was produced by :class:`ProxyFactory`."""
    return STAND_IN_MARKER in vars(type(obj))


def _intercepting_method(member: CapturedMethod, original: Any, handler: InterceptHandler) -> Any:
    @functools.wraps(original)
    def intercepted(self: Any, *args: Any, **kwargs: Any) -> Any:
        return handler(self, member, args, kwargs)

    return intercepted


def _intercepting_property(member: CapturedMethod, handler: InterceptHandler) -> property:
    def fget(self: Any) -> Any:
        return handler(self, member, (), {})

    fget.__name__ = member.name
    return property(fget)


def _stand_in_repr(self: Any) -> str:
    target = getattr(type(self), STAND_IN_MARKER)
    return f"<stand-in for {target.__module__}.{target.__qualname__}>"


def _instantiate(stand_in_cls: type, target_type: type) -> Any:
    try:
        return object.__new__(stand_in_cls)
    except TypeError:
        fields = getattr(target_type, "_fields", None)
        try:
            if issubclass(target_type, tuple) and isinstance(fields, tuple):
                # named tuples need one value per field
                return tuple.__new__(stand_in_cls, (None,) * len(fields))
            # subclasses of builtins such as str or int need their own __new__
            return stand_in_cls.__new__(stand_in_cls)
        except TypeError as exc:
            raise TypeNotExtensibleError(
                f"{target_type.__qualname__} cannot be instantiated without arguments: {exc}",
                code="NOT_INSTANTIABLE",
                context={"target": target_type.__qualname__},
            ) from exc
