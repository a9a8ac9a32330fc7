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
"""Member introspection — find interceptable members and describe their shape."""

from __future__ import annotations

import functools
import inspect
import types
import typing
from collections.abc import Iterator
from typing import Any

from fluentlambda.capture.types import CapturedMethod, MemberKind, NoneType

_BUILTIN_METHOD_TYPES = (types.MethodDescriptorType, types.WrapperDescriptorType)

# Return annotations that stay strings when hints cannot be resolved.
_STRING_ANNOTATIONS: dict[str, Any] = {
    "None": NoneType,
    "bool": bool,
    "int": int,
    "float": float,
    "complex": complex,
}


def iter_members(target_type: type, include_properties: bool = True) -> Iterator[CapturedMethod]:
    """Yield a descriptor for every public instance member a stand-in overrides.

    Static methods, class methods and plain data attributes are skipped.
    Callable decorator objects that bind like functions (``functools.cache``,
    ``functools.lru_cache``) count as methods.
    Properties (and ``functools.cached_property``) are yielded only when
    *include_properties* is true.
    """
    for name in dir(target_type):
        if name.startswith("_"):
            continue
        member = describe_member(target_type, name)
        if member is None:
            continue
        if member.kind is MemberKind.PROPERTY and not include_properties:
            continue
        yield member


def describe_member(target_type: type, name: str) -> CapturedMethod | None:
    """Describe attribute *name* of *target_type*, or None if it cannot be captured."""
    try:
        attr = inspect.getattr_static(target_type, name)
    except AttributeError:
        return None

    if isinstance(attr, (staticmethod, classmethod)):
        return None

    if isinstance(attr, property):
        if attr.fget is None:
            return None
        kind, func = MemberKind.PROPERTY, attr.fget
    elif isinstance(attr, functools.cached_property):
        kind, func = MemberKind.PROPERTY, attr.func
    elif inspect.isfunction(attr) or isinstance(attr, _BUILTIN_METHOD_TYPES):
        kind, func = MemberKind.METHOD, attr
    elif _binds_like_method(attr):
        kind, func = MemberKind.METHOD, inspect.unwrap(attr)
    else:
        return None

    return CapturedMethod(
        target_type=target_type,
        declaring_type=_declaring_type(target_type, name),
        name=name,
        kind=kind,
        return_type=resolve_return_type(func),
        required_parameters=0 if kind is MemberKind.PROPERTY else count_required_parameters(func),
    )


def resolve_return_type(func: Any) -> Any:
    """Resolve the return annotation of *func*.

    Returns ``inspect.Signature.empty`` when there is no annotation. Forward
    references that cannot be evaluated fall back to the raw annotation, with
    the builtin names mapped back to their types.
    """
    try:
        hints = typing.get_type_hints(func)
    except (NameError, SyntaxError, TypeError, AttributeError):
        hints = None

    if hints is not None:
        return hints.get("return", inspect.Signature.empty)

    try:
        annotation = inspect.signature(func).return_annotation
    except (TypeError, ValueError):
        return inspect.Signature.empty
    if isinstance(annotation, str):
        return _STRING_ANNOTATIONS.get(annotation.strip(), annotation)
    return annotation


def count_required_parameters(func: Any) -> int:
    """Number of parameters of *func* without defaults, not counting ``self``.

    Builtins without an introspectable signature report zero; arguments
    passed at call time are still rejected by the interceptor.
    """
    try:
        signature = inspect.signature(func)
    except (TypeError, ValueError):
        return 0

    params = list(signature.parameters.values())[1:]
    return sum(
        1
        for p in params
        if p.default is inspect.Parameter.empty
        and p.kind not in (inspect.Parameter.VAR_POSITIONAL, inspect.Parameter.VAR_KEYWORD)
    )


def _declaring_type(target_type: type, name: str) -> type:
    for klass in target_type.__mro__:
        if name in vars(klass):
            return klass
    return target_type


def _binds_like_method(attr: Any) -> bool:
    # decorator objects such as functools.cache / lru_cache wrappers
    return callable(attr) and hasattr(type(attr), "__get__") and not isinstance(attr, type)
