"""Tests for configuration loading."""
import pytest

from subview.config_loader import ConfigLoader, Settings, build_settings, DEFAULT_FEED_PATH
from subview.exceptions import ConfigurationError


def test_load_config(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("feed_path: /tmp/other.json\ndisplay_count: 5\n")
    assert ConfigLoader().load_config(str(path)) == {"feed_path": "/tmp/other.json", "display_count": 5}


def test_empty_config_file_is_empty_mapping(tmp_path):
    path = tmp_path / "config.yaml"
    path.write_text("")
    assert ConfigLoader().load_config(str(path)) == {}


def test_missing_config_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        ConfigLoader().load_config(str(tmp_path / "missing.yaml"))


def test_directory_is_not_a_config_file(tmp_path):
    with pytest.raises(ConfigurationError):
        ConfigLoader().load_config(str(tmp_path))


@pytest.mark.parametrize("content", ["feed_path: [unclosed", "- just\n- a list\n"])
def test_invalid_yaml(tmp_path, content):
    path = tmp_path / "config.yaml"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        ConfigLoader().load_config(str(path))


def test_build_settings_defaults():
    settings = build_settings({})
    assert settings.feed_path == DEFAULT_FEED_PATH
    assert settings.display_count == 10
    assert settings.poll_interval == 0.25
    assert settings.script_path.endswith("subtitle-monitor.lua")


def test_build_settings_overrides_and_clamps():
    settings = build_settings({"feed_path": "/x/feed.json", "display_count": 500, "poll_interval": "1"})
    assert settings.feed_path == "/x/feed.json"
    assert settings.display_count == 50
    assert settings.poll_interval == 1.0
    assert build_settings({"display_count": 0}).display_count == 1


@pytest.mark.parametrize("config", [{"poll_interval": 0}, {"poll_interval": "fast"}, {"display_count": "many"}])
def test_build_settings_rejects_bad_values(config):
    with pytest.raises(ConfigurationError):
        build_settings(config)


def test_default_script_path_uses_home(monkeypatch):
    monkeypatch.setenv("HOME", "/home/viewer")
    assert Settings().script_path == "/home/viewer/.config/mpv/scripts/subtitle-monitor.lua"
