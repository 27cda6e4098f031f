# tests/core/test_config_management.py
import json

import pytest

from html_loader.managers.config_manager import ConfigManager
from html_loader.utils.path_utils import PathUtils

# Een standaard, voorspelbare configuratie voor onze tests
MOCK_SETTINGS_CONTENT = {
    "debug": {
        "level": "WARNING",
        "silenced": {"bs4": "ERROR"}
    },
    "loader": {
        "ignoreLinks": ["polymer.html"],
        "ignorePathReWrite": []
    },
    "cli": {
        "workers": 2,
        "write_source_maps": True
    }
}


@pytest.fixture
def settings_file(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps(MOCK_SETTINGS_CONTENT))
    return path


@pytest.fixture
def config_env(settings_file, monkeypatch):
    """
    Een fixture die een geïsoleerde testomgeving opzet voor de ConfigManager:
    - Plaatst een nep 'settings.json' bestand in een tijdelijke map.
    - Monkeypatched PathUtils om naar dit bestand te wijzen.
    """
    monkeypatch.setattr(PathUtils, 'get_settings_file', lambda: settings_file)

    # De singleton is al geladen; forceer herladen vanuit ons nep-bestand
    manager = ConfigManager()
    manager.reset()
    yield manager

    monkeypatch.undo()
    manager.reset()


def test_config_manager_get_nested(config_env):
    """Test het ophalen van geneste waarden."""
    assert config_env.get_nested("cli.workers") == 2
    assert config_env.get_nested("loader.ignoreLinks") == ["polymer.html"]
    assert config_env.get_nested("non.existent.key", "default") == "default"
    assert config_env.get_nested("debug.level.deeper", "x") == "x"


def test_config_manager_reset_reloads_from_disk(config_env, settings_file):
    """Test of de reset-functie de configuratie herlaadt vanaf schijf."""
    settings_file.write_text(json.dumps({"debug": {"level": "DEBUG"}}))
    assert config_env.get_nested("debug.level") == "WARNING"

    config_env.reset()
    assert config_env.get_nested("debug.level") == "DEBUG"


def test_loader_options_layer_host_values(config_env):
    merged = config_env.loader_options({"ignorePathReWrite": ["x/"], "ignoreLinks": None})
    assert merged == {"ignoreLinks": ["polymer.html"], "ignorePathReWrite": ["x/"]}


def test_logging_settings(config_env):
    assert config_env.logging_settings() == {
        "general_level": "WARNING",
        "module_specific_levels": None,
        "silenced_loggers": {"bs4": "ERROR"},
    }
    assert config_env.logging_settings("DEBUG")["general_level"] == "DEBUG"


def test_batch_settings_command_line_wins(config_env):
    assert config_env.batch_settings() == {"workers": 2, "write_source_maps": True}
    assert config_env.batch_settings(workers=8, no_map=True) == {"workers": 8, "write_source_maps": False}


def test_missing_settings_file_gives_empty_config(tmp_path, monkeypatch):
    monkeypatch.setattr(PathUtils, 'get_settings_file', lambda: tmp_path / "absent.json")
    manager = ConfigManager()
    manager.reset()
    assert manager.get_nested("loader", "none") == "none"
    assert manager.loader_options({"ignoreLinks": ["a"]}) == {"ignoreLinks": ["a"]}
    monkeypatch.undo()
    manager.reset()


def test_invalid_settings_file_gives_empty_config(tmp_path, monkeypatch):
    broken = tmp_path / "settings.json"
    broken.write_text("{not json")
    monkeypatch.setattr(PathUtils, 'get_settings_file', lambda: broken)
    manager = ConfigManager()
    manager.reset()
    assert manager.get_nested("debug.level", "WARNING") == "WARNING"
    monkeypatch.undo()
    manager.reset()


def test_packaged_settings_provide_loader_defaults():
    manager = ConfigManager()
    manager.reset()
    assert manager.get_nested("loader.registerTemplateModule") == "polymer-webpack-loader/register-html-template"
    assert manager.get_nested("debug.level") == "WARNING"
