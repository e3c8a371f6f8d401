"""
Tests for settings sources.
"""

from task_reminder.infra.config import Settings


def test_defaults(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    settings = Settings(config_dir=tmp_path / "cfg", data_dir=tmp_path / "data")

    assert settings.journal_ws_url == "ws://localhost:8080"
    assert settings.test_preview_ms == 3000
    assert settings.time_presets == [5, 15, 30, 60]
    assert settings.get_db_url() == f"sqlite:///{tmp_path / 'data' / 'taskreminder.db'}"


def test_environment_overrides(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("TASKREMINDER_JOURNAL_WS_URL", "ws://journal.local:9000")

    settings = Settings(config_dir=tmp_path / "cfg", data_dir=tmp_path / "data")

    assert settings.journal_ws_url == "ws://journal.local:9000"


def test_yaml_in_config_dir_is_applied(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    config_dir = tmp_path / "cfg"
    config_dir.mkdir()
    (config_dir / "settings.yaml").write_text(
        "max_minutes: 90\nextend_presets: [1, 2]\nunknown_key: 1\n", encoding="utf-8"
    )

    settings = Settings(config_dir=config_dir, data_dir=tmp_path / "data")

    assert settings.max_minutes == 90
    assert settings.extend_presets == [1, 2]
