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
"""Method capture: stand-ins, sessions, and the functors built from them."""

from fluentlambda.capture.fluent import configure, default_session, for_method, for_predicate, of_class
from fluentlambda.capture.functors import Functor, Predicate, build_functor, build_predicate, invoke_member
from fluentlambda.capture.interceptor import CaptureInterceptor
from fluentlambda.capture.proxy import ProxyFactory, is_stand_in
from fluentlambda.capture.session import CaptureSession
from fluentlambda.capture.slots import ContextSlot, LocalSlot, SessionSlot
from fluentlambda.capture.types import CapturedMethod, MemberKind, SessionState, placeholder_for

__all__ = [
    "CaptureInterceptor",
    "CaptureSession",
    "CapturedMethod",
    "ContextSlot",
    "Functor",
    "LocalSlot",
    "MemberKind",
    "Predicate",
    "ProxyFactory",
    "SessionSlot",
    "SessionState",
    "build_functor",
    "build_predicate",
    "configure",
    "default_session",
    "for_method",
    "for_predicate",
    "invoke_member",
    "is_stand_in",
    "of_class",
    "placeholder_for",
]
