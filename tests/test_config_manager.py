import json

from calcy import config_manager


def test_missing_file_gives_defaults(tmp_path):
    settings = config_manager.load_setting_value("all", tmp_path / "missing.json")
    assert settings == config_manager.DEFAULT_SETTINGS


def test_file_overrides_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"datatype": "u8", "benchmark": True}), encoding="utf-8")

    assert config_manager.load_setting_value("datatype", path) == "u8"
    assert config_manager.load_setting_value("benchmark", path) is True
    assert config_manager.load_setting_value("history_file", path) == "calcy-history.txt"


def test_unknown_key_returns_zero(tmp_path):
    assert config_manager.load_setting_value("darkmode", tmp_path / "missing.json") == 0


def test_broken_files_fall_back_to_defaults(tmp_path):
    broken = tmp_path / "broken.json"
    broken.write_text("{not json", encoding="utf-8")
    listed = tmp_path / "list.json"
    listed.write_text("[1, 2]", encoding="utf-8")

    assert config_manager.load_setting_value("all", broken) == config_manager.DEFAULT_SETTINGS
    assert config_manager.load_setting_value("all", listed) == config_manager.DEFAULT_SETTINGS


def test_environment_variable_selects_the_file(tmp_path, monkeypatch):
    path = tmp_path / "env.json"
    path.write_text(json.dumps({"datatype": "decimal"}), encoding="utf-8")
    monkeypatch.setenv("CALCY_CONFIG", str(path))

    assert config_manager.settings_path() == path
    assert config_manager.load_setting_value("datatype") == "decimal"
