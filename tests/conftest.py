import pytest

from complex_calculator import config_manager


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point the settings file at a temporary path for every test."""
    config_file = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", config_file)
    return config_file
