"""Tests for the settings updater."""
import pytest
import yaml
from pydantic import ValidationError
from armflow.config.settings import SettingsLoader
from armflow.config.updater import SettingsUpdater

def test_creates_file(tmp_path):
    """Test updating a settings file that does not exist yet."""
    settings_path = tmp_path / "conf" / "armflow.yaml"

    settings = SettingsUpdater.update_field(str(settings_path), "layout.orientation", "left-right")

    assert settings.layout.orientation == "left-right"
    assert yaml.safe_load(settings_path.read_text()) == {"layout": {"orientation": "left-right"}}

def test_values_parsed_as_yaml(tmp_path):
    """Test numeric and list values given as strings."""
    settings_path = tmp_path / "armflow.yaml"
    settings_path.write_text("layout:\n  orientation: left-right\n")

    SettingsUpdater.update_field(str(settings_path), "layout.node_width", "240")
    SettingsUpdater.update_field(str(settings_path), "resolver.strategies", "[type, exact]")

    settings = SettingsLoader.load(str(settings_path))
    assert settings.layout.orientation == "left-right"
    assert settings.layout.node_width == 240
    assert settings.resolver.strategies == ["type", "exact"]

def test_unknown_key(tmp_path):
    """Test rejecting a key that is not a settings field."""
    settings_path = tmp_path / "armflow.yaml"
    with pytest.raises(KeyError):
        SettingsUpdater.update_field(str(settings_path), "layout.colour", "red")
    with pytest.raises(KeyError):
        SettingsUpdater.update_field(str(settings_path), "theme.colour", "red")
    assert not settings_path.exists()

def test_invalid_value_leaves_file_untouched(tmp_path):
    """Test that an invalid value is not written."""
    settings_path = tmp_path / "armflow.yaml"
    settings_path.write_text("layout:\n  node_width: 150\n")

    with pytest.raises(ValidationError):
        SettingsUpdater.update_field(str(settings_path), "layout.node_width", "-5")

    assert SettingsLoader.load(str(settings_path)).layout.node_width == 150
