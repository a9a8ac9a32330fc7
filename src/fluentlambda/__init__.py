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
"""fluentlambda — build functors and predicates from an example method call."""

from fluentlambda.capture import (
    CaptureSession,
    Functor,
    Predicate,
    configure,
    default_session,
    for_method,
    for_predicate,
    of_class,
)
from fluentlambda.core.config import Config
from fluentlambda.kernel.exceptions import (
    DoubleCaptureError,
    FluentLambdaException,
    InvalidCaptureTargetError,
    InvalidReceiverError,
    NoCaptureStartedError,
    ReflectiveAccessError,
    TargetInvocationError,
    TypeNotExtensibleError,
    WrongReceiverTypeError,
    WrongReturnTypeError,
)

__version__ = "0.1.0"

__all__ = [
    "CaptureSession",
    "Config",
    "DoubleCaptureError",
    "FluentLambdaException",
    "Functor",
    "InvalidCaptureTargetError",
    "InvalidReceiverError",
    "NoCaptureStartedError",
    "Predicate",
    "ReflectiveAccessError",
    "TargetInvocationError",
    "TypeNotExtensibleError",
    "WrongReceiverTypeError",
    "WrongReturnTypeError",
    "configure",
    "default_session",
    "for_method",
    "for_predicate",
    "of_class",
]
