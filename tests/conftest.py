"""Shared fixtures: every test starts with an empty default session."""

from __future__ import annotations

import pytest
import structlog

from fluentlambda.capture.fluent import default_session


@pytest.fixture(autouse=True)
def _clean_capture_state():
    default_session().reset()
    yield
    default_session().reset()
    structlog.reset_defaults()
