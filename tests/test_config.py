from pathlib import Path

import pytest

from screenwork.core.config import ScreenworkConfig, load_config
from screenwork.core.errors import ConfigError


def test_defaults_without_sources():
    config = load_config(environ={})

    assert config == ScreenworkConfig()
    assert config.logging_enabled
    assert config.log_level == "INFO"
    assert config.log_file is None


def test_yaml_file_flat_and_nested(tmp_path):
    flat = tmp_path / "flat.yaml"
    flat.write_text("log_level: debug\nlog_backups: 5\n")
    nested = tmp_path / "nested.yaml"
    nested.write_text("screenwork:\n  log_level: warning\n  view_modules: [app.views]\n")

    assert load_config(flat, environ={}).log_backups == 5
    assert load_config(flat, environ={}).log_level == "DEBUG"
    config = load_config(nested, environ={})
    assert config.log_level == "WARNING"
    assert config.view_modules == ["app.views"]


def test_config_path_from_environment(tmp_path):
    path = tmp_path / "screenwork.yaml"
    path.write_text("log_level: ERROR\n")

    config = load_config(environ={"SCREENWORK_CONFIG": str(path)})

    assert config.log_level == "ERROR"


def test_precedence_overrides_then_env_then_file(tmp_path):
    path = tmp_path / "screenwork.yaml"
    path.write_text("log_level: ERROR\nlog_file: from-file.log\nlogging_enabled: true\n")
    environ = {"SCREENWORK_LOG_LEVEL": "warning", "SCREENWORK_LOGGING": "off"}

    config = load_config(path, {"log_level": "debug", "log_file": None}, environ)

    assert config.log_level == "DEBUG"
    assert config.log_file == Path("from-file.log")
    assert config.logging_enabled is False


def test_numeric_log_level_is_accepted():
    assert load_config(overrides={"log_level": 30}, environ={}).log_level == "WARNING"


def test_missing_file_raises(tmp_path):
    with pytest.raises(ConfigError, match="not found"):
        load_config(tmp_path / "nope.yaml", environ={})


def test_invalid_yaml_raises(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text("log_level: [unclosed\n")

    with pytest.raises(ConfigError, match="not valid YAML"):
        load_config(path, environ={})


def test_non_mapping_file_raises(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n")

    with pytest.raises(ConfigError, match="mapping"):
        load_config(path, environ={})


@pytest.mark.parametrize("overrides", [{"log_level": "chatty"}, {"log_max_bytes": 0}, {"log_backups": -1}])
def test_invalid_values_raise(overrides):
    with pytest.raises(ConfigError, match="Invalid screenwork configuration"):
        load_config(overrides=overrides, environ={})
