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
"""Unified exception hierarchy for fluentlambda.

All errors inherit from FluentLambdaException. They signal programmer
errors in the capture idiom and are never retried.

Categories:
- CaptureException: raised while creating or calling a stand-in
- BuildException: raised while turning a capture into a functor
- InvocationException: raised while applying a built functor
"""

from __future__ import annotations


# =============================================================================
# Base Exception
# =============================================================================


class FluentLambdaException(Exception):
    """Base exception for all fluentlambda errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "DOUBLE_CAPTURE").
        context: Arbitrary key-value pairs describing the failing capture.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Capture Exceptions
# =============================================================================


class CaptureException(FluentLambdaException):
    """Stand-in creation or interception failed."""


class TypeNotExtensibleError(CaptureException):
    """The target type cannot be subclassed to produce a stand-in."""


class InvalidCaptureTargetError(CaptureException):
    """The invoked member takes arguments or returns None."""


class DoubleCaptureError(CaptureException):
    """A second member was invoked before the first capture was consumed."""


class WrongReceiverTypeError(CaptureException):
    """The intercepted receiver is not an instance of the requested type."""


# =============================================================================
# Build Exceptions
# =============================================================================


class BuildException(FluentLambdaException):
    """A functor or predicate could not be built from the session."""


class NoCaptureStartedError(BuildException):
    """No member was captured before the functor was requested."""


class WrongReturnTypeError(BuildException):
    """A predicate was requested for a member that does not return bool."""


# =============================================================================
# Invocation Exceptions
# =============================================================================


class InvocationException(FluentLambdaException):
    """Applying a built functor to an instance failed."""


class InvalidReceiverError(InvocationException):
    """The instance is not of the captured member's declaring type."""


class ReflectiveAccessError(InvocationException):
    """The captured member could not be looked up or called on the instance."""


class TargetInvocationError(InvocationException):
    """The captured member's own body raised.

    The message is the original error's message and the original error is
    available as ``cause`` (and as ``__cause__`` when raised ``from`` it).
    """

    def __init__(
        self,
        message: str,
        cause: BaseException,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message, code=code, context=context)
        self.cause = cause
