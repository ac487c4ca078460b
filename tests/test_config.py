from pathlib import Path

import pytest

from config import AppConfig, AuditSettings


def test_config_resolves_paths(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths:\n  logs: \"logs\"\n", encoding="utf-8")

    config = AppConfig.load(config_path)
    logs_path = config.resolve_path("paths", "logs")

    assert logs_path == config_path.parent / "logs"
    assert config.get("missing", default=123) == 123


def test_config_missing_required_path_raises(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text("paths: {}\n", encoding="utf-8")

    config = AppConfig.load(config_path)

    with pytest.raises(KeyError):
        config.resolve_path("paths", "storage_root")


def test_config_load_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    config_path = tmp_path / "env.yaml"
    config_path.write_text("audit:\n  max_orphan_files: 7\n", encoding="utf-8")
    monkeypatch.setenv("MEDIA_HYGIENE_CONFIG", str(config_path))

    config = AppConfig.load()

    assert config.get("audit", "max_orphan_files") == 7


def test_config_missing_file_raises(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        AppConfig.load(tmp_path / "absent.yaml")


def test_audit_settings_defaults_and_overrides(tmp_path: Path) -> None:
    config_path = tmp_path / "config.yaml"
    config_path.write_text(
        "\n".join(
            [
                "audit:",
                "  large_file_threshold_bytes: 1024",
                "  max_orphan_files: 2",
                "  walk_deadline_seconds: 1.5",
            ]
        ),
        encoding="utf-8",
    )

    settings = AuditSettings.from_config(AppConfig.load(config_path))

    assert settings.large_file_threshold == 1024
    assert settings.max_orphan_files == 2
    assert settings.walk_deadline_seconds == 1.5
    assert settings.attachment_page_size == 500
    assert settings.missing_featured_limit == 100
    assert AuditSettings().large_file_threshold == 5 * 1024 * 1024
    assert AuditSettings().max_orphan_files == 300


@pytest.mark.parametrize(
    "kwargs",
    [
        {"large_file_threshold": 0},
        {"max_orphan_files": -1},
        {"attachment_page_size": 0},
        {"walk_deadline_seconds": -1},
    ],
)
def test_audit_settings_rejects_invalid_values(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        AuditSettings(**kwargs)
