import json

from lcuhelper.config import AppConfig, default_config_path, load_config


def test_defaults():
    cfg = AppConfig()
    assert cfg.auto_accept_enabled is True
    assert cfg.auto_accept_delay_secs == 5
    assert cfg.auto_honor_skip is True
    assert cfg.premade_champ_select is True
    assert cfg.premade_ingame is True
    assert cfg.memory_monitor is True
    assert cfg.memory_threshold_mb == 1500
    assert cfg.opacity == 95


def test_default_path_uses_appdata(tmp_path):
    path = default_config_path({"APPDATA": str(tmp_path)})
    assert path == tmp_path / "lol-lcu" / "config.json"


def test_default_path_without_appdata():
    from pathlib import Path

    assert default_config_path({}) == Path(".") / "lol-lcu" / "config.json"


def test_save_and_load_round_trip(tmp_path):
    path = tmp_path / "nested" / "config.json"
    cfg = AppConfig(auto_accept_enabled=False, auto_accept_delay_secs=12, opacity=40)
    cfg.save(path)
    assert path.exists()
    assert load_config(path) == cfg


def test_saved_file_is_pretty_json(tmp_path):
    path = tmp_path / "config.json"
    AppConfig().save(path)
    text = path.read_text(encoding="utf-8")
    assert '\n  "auto_accept_enabled": true' in text
    assert json.loads(text)["memory_threshold_mb"] == 1500


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(tmp_path / "absent.json") == AppConfig()


def test_missing_fields_take_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"opacity": 50, "extra": "ignored"}), encoding="utf-8")
    cfg = load_config(path)
    assert cfg.opacity == 50
    assert cfg.auto_accept_delay_secs == 5


def test_invalid_json_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("{not json", encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_wrong_type_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"opacity": 50, "memory_monitor": "yes"}), encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_out_of_range_byte_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"opacity": 300}), encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_negative_integer_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text(json.dumps({"auto_accept_delay_secs": -1}), encoding="utf-8")
    assert load_config(path) == AppConfig()


def test_non_object_gives_defaults(tmp_path):
    path = tmp_path / "config.json"
    path.write_text("[1, 2]", encoding="utf-8")
    assert load_config(path) == AppConfig()