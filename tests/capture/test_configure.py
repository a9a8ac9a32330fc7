"""Tests for configure() — applying Config to logging and the default session."""

from __future__ import annotations

from typing import Any

import pytest

from fluentlambda.capture import fluent
from fluentlambda.capture.fluent import configure, default_session, for_method, for_predicate, of_class
from fluentlambda.capture.types import SessionState
from fluentlambda.core.config import Config
from fluentlambda.kernel.exceptions import InvalidCaptureTargetError
from fluentlambda.logging.port import LoggingPort


class RecordingLoggingPort:
    def __init__(self) -> None:
        self.configured: list[Config] = []

    def configure(self, config: Config) -> None:
        self.configured.append(config)

    def get_logger(self, name: str) -> Any:
        return None

    def set_level(self, name: str, level: str) -> None:
        pass


class Item:
    def name(self) -> str:
        return "item"

    def loose(self):
        return "loose"

    def is_stocked(self) -> bool:
        return True

    @property
    def label(self) -> str:
        return "label"


@pytest.fixture(autouse=True)
def _restore_default_session(monkeypatch):
    monkeypatch.setattr(fluent, "_default_session", fluent._default_session)


def _config(**capture: Any) -> Config:
    return Config({"fluentlambda": {"capture": {k.replace("_", "-"): v for k, v in capture.items()}}})


class TestConfigure:
    def test_logging_port_receives_config(self):
        port = RecordingLoggingPort()
        config = _config()
        configure(config, logging_port=port)
        assert isinstance(port, LoggingPort)
        assert port.configured == [config]

    def test_returns_new_default_session(self):
        session = configure(_config(), logging_port=RecordingLoggingPort())
        assert default_session() is session

    def test_properties_applied(self):
        session = configure(
            _config(intercept_properties=False, log_invocation_failures=False),
            logging_port=RecordingLoggingPort(),
        )
        assert session.properties.intercept_properties is False
        assert for_method(of_class(Item).name()).log_failures is False
        # the real getter runs and nothing is captured
        assert of_class(Item).label == "label"
        assert default_session().state is SessionState.EMPTY

    def test_require_return_annotation(self):
        configure(_config(require_return_annotation=True), logging_port=RecordingLoggingPort())
        with pytest.raises(InvalidCaptureTargetError):
            of_class(Item).loose()

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("FLUENTLAMBDA_CAPTURE_REQUIRE_RETURN_ANNOTATION", "true")
        session = configure(_config(require_return_annotation=False), logging_port=RecordingLoggingPort())
        assert session.properties.require_return_annotation is True

    def test_invalid_value_rejected(self):
        with pytest.raises(ValueError, match="CaptureProperties"):
            configure(_config(intercept_properties="sometimes"), logging_port=RecordingLoggingPort())

    def test_pending_capture_kept(self):
        of_class(Item).is_stocked()
        configure(_config(), logging_port=RecordingLoggingPort())
        assert for_predicate(False)(Item()) is True

    def test_defaults_from_packaged_file(self, tmp_path):
        config = Config.from_file(tmp_path / "missing.yaml")
        session = configure(config, logging_port=RecordingLoggingPort())
        assert session.properties.intercept_properties is True
        assert session.properties.require_return_annotation is False
