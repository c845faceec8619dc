from pathlib import Path

import pytest

from diffjson import config as config_module
from diffjson.config import ConfigError, DiffConfig, load_config

ENV_VARS = ("DIFFJSON_CONFIG", "DIFFJSON_IGNORE_ORDER", "DIFFJSON_INDENT", "DIFFJSON_LOG_LEVEL")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATH", tmp_path / "absent.yaml")


def test_defaults_without_config_file():
    assert load_config() == DiffConfig()


def test_bundled_config_is_valid():
    bundled = Path(config_module.__file__).resolve().parents[1] / "config" / "diffjson.yaml"
    assert load_config(bundled) == DiffConfig()


def test_yaml_values_and_env_overrides(tmp_path, monkeypatch):
    path = tmp_path / "diffjson.yaml"
    path.write_text("ignore_array_order: true\nindent: 4\nlog_level: info\n", encoding="utf-8")
    config = load_config(path)
    assert config.ignore_array_order is True
    assert config.indent == 4
    assert config.log_level == "INFO"

    monkeypatch.setenv("DIFFJSON_IGNORE_ORDER", "no")
    monkeypatch.setenv("DIFFJSON_INDENT", "0")
    overridden = load_config(path)
    assert overridden.ignore_array_order is False
    assert overridden.indent == 0


def test_config_path_from_environment(tmp_path, monkeypatch):
    path = tmp_path / "env.yaml"
    path.write_text("ensure_ascii: true\n", encoding="utf-8")
    monkeypatch.setenv("DIFFJSON_CONFIG", str(path))
    assert load_config().ensure_ascii is True


def test_empty_config_file_uses_defaults(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == DiffConfig()


@pytest.mark.parametrize(
    "content",
    [
        "unknown_key: 1\n",
        "indent: wide\n",
        "indent: true\n",
        "ignore_array_order: maybe\n",
        "- a list\n",
        "indent: [1\n",
        "log_level: LOUD\n",
    ],
)
def test_invalid_config_raises(tmp_path, content):
    path = tmp_path / "bad.yaml"
    path.write_text(content, encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(path)


def test_missing_explicit_config(tmp_path):
    with pytest.raises(ConfigError):
        load_config(tmp_path / "nope.yaml")


def test_invalid_env_override(monkeypatch):
    monkeypatch.setenv("DIFFJSON_INDENT", "two")
    with pytest.raises(ConfigError):
        load_config()
