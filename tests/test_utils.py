import logging
from pathlib import Path

import pytest

from config import AppConfig
from utils import ResourceMonitor, setup_logging


def test_resource_monitor_disabled_without_limits(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("resource_limits:\n  max_cpu_percent: 0\n", encoding="utf-8")

    assert ResourceMonitor.from_config(AppConfig.load(config_path)) is None


def test_resource_monitor_gives_up_after_max_throttle(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "resource_limits:\n  max_cpu_percent: 50\n  max_throttle_seconds: 0\n", encoding="utf-8"
    )
    monitor = ResourceMonitor.from_config(AppConfig.load(config_path))
    assert monitor is not None
    checks = []

    def always_busy() -> bool:
        checks.append(True)
        return True

    monkeypatch.setattr(monitor, "over_limit", always_busy)
    monitor.throttle()
    monitor.throttle()

    assert len(checks) == 1


def test_setup_logging_returns_named_loggers(tmp_path: Path) -> None:
    loggers = setup_logging(tmp_path / "logs")

    assert loggers["main"].name == "media_hygiene"
    assert loggers["performance"].name == "media_hygiene.performance"
    assert loggers["performance"].propagate is False
    assert logging.getLogger("media_hygiene").handlers
