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
"""Capture sessions — tie stand-in creation to functor building.

A session owns one slot. ``create_stand_in`` hands out stand-ins bound to
that slot; invoking a member on one fills the slot, and ``build_functor``
or ``build_predicate`` empties it again::

    session = CaptureSession()
    get_id = session.build_functor(session.create_stand_in(User).get_id())

The stand-in invocation must be the whole argument expression: the value it
returns is a placeholder (``None``, ``False`` or a zero) and means nothing.
"""

from __future__ import annotations

from typing import Any, TypeVar

from fluentlambda.capture.functors import Functor, Predicate, build_functor, build_predicate
from fluentlambda.capture.interceptor import CaptureInterceptor
from fluentlambda.capture.proxy import ProxyFactory
from fluentlambda.capture.slots import LocalSlot, SessionSlot
from fluentlambda.capture.types import SessionState
from fluentlambda.config.properties.capture import CaptureProperties

T = TypeVar("T")


class CaptureSession:
    """Explicit capture session handle.

    Args:
        slot: Storage for the pending capture. Defaults to a
            :class:`LocalSlot`, private to this session object.
        properties: Capture settings; defaults to :class:`CaptureProperties`.
    """

    def __init__(
        self,
        slot: SessionSlot | None = None,
        properties: CaptureProperties | None = None,
    ) -> None:
        self._slot: SessionSlot = slot if slot is not None else LocalSlot()
        self._properties = properties or CaptureProperties()
        self._proxy_factory = ProxyFactory(intercept_properties=self._properties.intercept_properties)

    @property
    def properties(self) -> CaptureProperties:
        return self._properties

    @property
    def slot(self) -> SessionSlot:
        return self._slot

    @property
    def state(self) -> SessionState:
        return SessionState.EMPTY if self._slot.peek() is None else SessionState.CAPTURED

    def create_stand_in(self, target_type: type[T]) -> T:
        """Return a stand-in of *target_type* that records the next member call."""
        interceptor = CaptureInterceptor(
            target_type,
            self._slot,
            require_return_annotation=self._properties.require_return_annotation,
        )
        return self._proxy_factory.create_intercepting_instance(target_type, interceptor)

    def build_functor(self, invocation: Any = None) -> Functor[Any, Any]:
        """Build a :class:`Functor` from the member captured in this session."""
        return build_functor(self._slot, invocation, log_failures=self._properties.log_invocation_failures)

    def build_predicate(self, invocation: Any = False) -> Predicate[Any]:
        """Build a :class:`Predicate` from the ``-> bool`` member captured in this session."""
        return build_predicate(self._slot, invocation, log_failures=self._properties.log_invocation_failures)

    def reset(self) -> None:
        """Drop any pending capture."""
        self._slot.clear()
