"""Tests for structured logging setup and build events"""

import json
import logging

import pytest
import structlog
from structlog.testing import capture_logs

from multibuild.application.multibuild import MultiBuild
from multibuild.application.options import MultiBuildOptions
from multibuild.config.settings import MultiBuildSettings
from multibuild.infra.observability import get_logger, log_error, log_performance, setup_logging
from tests.fakes import FakeBundler


@pytest.fixture
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestLoggingSetup:
    """structlog 설정"""

    def test_json_format(self, reset_structlog, caplog):
        caplog.set_level(logging.INFO)
        setup_logging(level="INFO", format="json", cache_logger=False)

        get_logger("multibuild.test").info("target_build_started", target="app")

        payload = json.loads(caplog.records[-1].getMessage())
        assert payload["message"] == "target_build_started"
        assert payload["target"] == "app"
        assert payload["level"] == "info"
        assert "timestamp" in payload

    def test_console_format(self, reset_structlog, caplog):
        caplog.set_level(logging.INFO)
        setup_logging(level="INFO", format="console", include_timestamp=False, cache_logger=False)

        get_logger("multibuild.test").info("changed_targets_selected", targets=["app"])

        message = caplog.records[-1].getMessage()
        assert "changed_targets_selected" in message
        assert "targets" in message


class TestLogHelpers:
    """log_error / log_performance"""

    def test_log_error_extracts_error_fields(self):
        with capture_logs() as logs:
            log_error(get_logger(__name__), "target_build_failed", error=ValueError("bad"), target="spec")

        assert logs == [
            {
                "event": "target_build_failed",
                "log_level": "error",
                "error_type": "ValueError",
                "error_message": "bad",
                "target": "spec",
            }
        ]

    def test_log_performance_flags_slow(self):
        with capture_logs() as logs:
            log_performance(get_logger(__name__), "target_build", 50.0, slow_threshold_ms=10.0, target="app")
            log_performance(get_logger(__name__), "target_build", 5.0, slow_threshold_ms=10.0, target="app")

        assert [entry["event"] for entry in logs] == ["slow_operation", "operation_complete"]
        assert logs[0]["slow"] is True


class TestBuildEvents:
    """MultiBuild 이벤트 로깅"""

    @pytest.mark.asyncio
    async def test_build_lifecycle_events(self, settings):
        bundler = FakeBundler({"app": ["app.js"]})
        bundler.fail("spec", RuntimeError("boom"))
        options = MultiBuildOptions.create(targets=["app", "spec"], entry=lambda t: t, error_handler=lambda e: None)

        with capture_logs() as logs:
            build = MultiBuild(options, bundler, settings=settings)
            await build.run_all()
            await build.changed("nothing.js")

        events = [entry["event"] for entry in logs]
        assert "multibuild_registered" in events
        assert events.count("target_build_started") == 3
        assert events.count("target_build_finished") == 1
        assert "target_build_error_handled" in events
        assert "changed_targets_selected" in events

        handled = next(entry for entry in logs if entry["event"] == "target_build_error_handled")
        assert handled["target"] == "spec"
        assert handled["error_type"] == "RuntimeError"

    @pytest.mark.asyncio
    async def test_build_finished_event_and_slow_warning(self):
        settings = MultiBuildSettings(_env_file=None, slow_build_ms=0.0)
        bundler = FakeBundler({"app": ["app.js", "util.js"]})
        options = MultiBuildOptions.create(targets=["app"], entry=lambda t: t)

        with capture_logs() as logs:
            await MultiBuild(options, bundler, settings=settings).run_all()

        finished = [entry for entry in logs if entry["event"] == "target_build_finished"]
        assert len(finished) == 1
        assert finished[0]["target"] == "app"
        assert finished[0]["modules"] == 2
        assert "duration_ms" in finished[0]

        slow = next(entry for entry in logs if entry["event"] == "slow_operation")
        assert slow["operation"] == "target_build"
        assert slow["log_level"] == "warning"
