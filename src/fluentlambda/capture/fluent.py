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
"""Module-level fluent API backed by a context-scoped default session.

Usage::

    from fluentlambda import for_method, for_predicate, of_class

    get_id = for_method(of_class(User).get_id())
    is_active = for_predicate(of_class(User).is_active())

    ids = [get_id(u) for u in users]
    active = list(filter(is_active, users))

The default session stores its pending capture in a ``ContextVar``, so
captures in different threads or asyncio tasks never see each other.
"""

from __future__ import annotations

from typing import Any, TypeVar

import structlog

from fluentlambda.capture.functors import Functor, Predicate
from fluentlambda.capture.session import CaptureSession
from fluentlambda.capture.slots import ContextSlot
from fluentlambda.config.properties.capture import CaptureProperties
from fluentlambda.core.config import Config
from fluentlambda.logging.port import LoggingPort
from fluentlambda.logging.structlog_adapter import StructlogAdapter

T = TypeVar("T")

logger = structlog.get_logger("fluentlambda.capture.fluent")

_default_session = CaptureSession(slot=ContextSlot("fluentlambda_default_capture"))


def default_session() -> CaptureSession:
    """The session used by :func:`of_class`, :func:`for_method` and :func:`for_predicate`."""
    return _default_session


def of_class(target_type: type[T]) -> T:
    """Return a stand-in of *target_type* that records the next member call.

    Must be followed by exactly one zero-argument member call whose result
    is passed directly to :func:`for_method` or :func:`for_predicate`.
    """
    return _default_session.create_stand_in(target_type)


def for_method(invocation: Any) -> Functor[Any, Any]:
    """Build a :class:`Functor` from the member just called on an :func:`of_class` stand-in.

    Example::

        id_extractor = for_method(of_class(User).get_id())
    """
    return _default_session.build_functor(invocation)


def for_predicate(invocation: bool) -> Predicate[Any]:
    """Build a :class:`Predicate` from the ``-> bool`` member just called on a stand-in.

    Example::

        active_user = for_predicate(of_class(User).is_active())
    """
    return _default_session.build_predicate(invocation)


def configure(config: Config, logging_port: LoggingPort | None = None) -> CaptureSession:
    """Apply *config* to logging and to the default session.

    Any capture pending in the current context is kept.
    """
    global _default_session

    (logging_port or StructlogAdapter()).configure(config)
    properties = config.bind(CaptureProperties)
    _default_session = CaptureSession(slot=_default_session.slot, properties=properties)
    logger.info("fluentlambda_configured", **properties.model_dump())
    return _default_session
