"""Tests for fluentlambda exception hierarchy."""

import pytest

from fluentlambda.kernel.exceptions import (
    BuildException,
    CaptureException,
    DoubleCaptureError,
    FluentLambdaException,
    InvalidCaptureTargetError,
    InvalidReceiverError,
    InvocationException,
    NoCaptureStartedError,
    ReflectiveAccessError,
    TargetInvocationError,
    TypeNotExtensibleError,
    WrongReceiverTypeError,
    WrongReturnTypeError,
)


class TestFluentLambdaException:
    def test_basic_creation(self):
        exc = FluentLambdaException("something went wrong")
        assert str(exc) == "something went wrong"
        assert exc.code is None
        assert exc.context == {}

    def test_with_error_code(self):
        exc = FluentLambdaException("twice", code="DOUBLE_CAPTURE")
        assert exc.code == "DOUBLE_CAPTURE"

    def test_with_context(self):
        exc = FluentLambdaException("bad member", code="HAS_PARAMETERS", context={"member": "User.rename"})
        assert exc.context["member"] == "User.rename"

    def test_context_defaults_to_empty_dict(self):
        exc = FluentLambdaException("test")
        exc.context["key"] = "value"
        exc2 = FluentLambdaException("test2")
        assert exc2.context == {}


class TestTargetInvocationError:
    def test_keeps_cause(self):
        cause = ValueError("boom")
        exc = TargetInvocationError("boom", cause=cause, code="TARGET_FAILED")
        assert str(exc) == "boom"
        assert exc.cause is cause
        assert exc.code == "TARGET_FAILED"

    def test_chained_when_raised_from(self):
        cause = KeyError("missing")
        with pytest.raises(TargetInvocationError) as info:
            raise TargetInvocationError(str(cause), cause=cause) from cause
        assert info.value.__cause__ is cause


class TestExceptionHierarchy:
    @pytest.mark.parametrize(
        "exc_type",
        [TypeNotExtensibleError, InvalidCaptureTargetError, DoubleCaptureError, WrongReceiverTypeError],
    )
    def test_capture_errors(self, exc_type):
        assert issubclass(exc_type, CaptureException)

    @pytest.mark.parametrize("exc_type", [NoCaptureStartedError, WrongReturnTypeError])
    def test_build_errors(self, exc_type):
        assert issubclass(exc_type, BuildException)

    @pytest.mark.parametrize(
        "exc_type",
        [InvalidReceiverError, ReflectiveAccessError, TargetInvocationError],
    )
    def test_invocation_errors(self, exc_type):
        assert issubclass(exc_type, InvocationException)

    def test_categories_are_fluentlambda_exceptions(self):
        for category in (CaptureException, BuildException, InvocationException):
            assert issubclass(category, FluentLambdaException)

    def test_catch_all_fluentlambda_exceptions(self):
        """Verify all exceptions can be caught with a single handler."""
        exceptions = [
            DoubleCaptureError("twice"),
            NoCaptureStartedError("nothing", code="NO_CAPTURE"),
            InvalidReceiverError("wrong type"),
            TargetInvocationError("boom", cause=RuntimeError("boom")),
        ]
        for exc in exceptions:
            try:
                raise exc
            except FluentLambdaException as caught:
                assert caught is exc
