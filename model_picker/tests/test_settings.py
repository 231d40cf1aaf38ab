"""Settings merge order: defaults -> config file -> environment -> overrides."""

from __future__ import annotations

import json

from model_picker.config import CatalogSettings, get_settings
from model_picker.config.defaults import DEFAULT_DB_PATH


def test_defaults_without_env():
    settings = get_settings(environ={})
    assert settings == CatalogSettings()
    assert settings.db_path == str(DEFAULT_DB_PATH)
    assert settings.prefetch is False
    assert settings.json_logs is True


def test_file_then_env_then_overrides(tmp_path):
    cfg = tmp_path / "picker.json"
    cfg.write_text(json.dumps({"db_path": "/from/file.db", "prefetch": True, "log_level": "DEBUG"}), encoding="utf-8")
    env = {
        "MODEL_PICKER_CONFIG_FILE": str(cfg),
        "MODEL_PICKER_DB_PATH": "/from/env.db",
        "MODEL_PICKER_JSON_LOGS": "no",
    }
    settings = get_settings({"log_level": "error", "prefetch": None}, environ=env)
    assert settings.db_path == "/from/env.db"
    assert settings.prefetch is True
    assert settings.json_logs is False
    assert settings.log_level == "error"


def test_env_flags_parse_truthy_values():
    assert get_settings(environ={"MODEL_PICKER_PREFETCH": "Yes"}).prefetch is True
    assert get_settings(environ={"MODEL_PICKER_PREFETCH": "0"}).prefetch is False
    assert get_settings(environ={"MODEL_PICKER_LOG_LEVEL": " warning "}).log_level == "WARNING"


def test_unreadable_config_file_is_ignored(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text("{not json", encoding="utf-8")
    assert get_settings(environ={"MODEL_PICKER_CONFIG_FILE": str(bad)}) == CatalogSettings()
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]", encoding="utf-8")
    assert get_settings(environ={"MODEL_PICKER_CONFIG_FILE": str(listed)}) == CatalogSettings()
    assert get_settings(environ={"MODEL_PICKER_CONFIG_FILE": str(tmp_path / "missing.json")}) == CatalogSettings()
