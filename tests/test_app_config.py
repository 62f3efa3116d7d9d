import json
import logging

import pytest

from app_config import config_path, get_log_level, load_config, save_config
from constants import DEFAULT_CONFIG


def test_missing_file_gives_defaults(tmp_path):
    assert load_config(str(tmp_path / "nope.json")) == DEFAULT_CONFIG


def test_partial_file_merges_over_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"dark_mode": False, "monitor_index": 2, "extra": 1}))
    config = load_config(str(path))
    assert config["dark_mode"] is False
    assert config["monitor_index"] == 2
    assert config["window_width"] == DEFAULT_CONFIG["window_width"]
    assert "extra" not in config


def test_wrong_types_fall_back_to_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"dark_mode": "yes", "window_width": True}))
    config = load_config(str(path))
    assert config["dark_mode"] is DEFAULT_CONFIG["dark_mode"]
    assert config["window_width"] == DEFAULT_CONFIG["window_width"]


@pytest.mark.parametrize("key,value", [
    ("window_width", 0),
    ("window_width", -960),
    ("window_height", 0),
    ("window_height", -1),
    ("monitor_index", -1),
])
def test_out_of_range_values_fall_back_to_defaults(tmp_path, key, value):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({key: value, "dark_mode": False}))
    config = load_config(str(path))
    assert config[key] == DEFAULT_CONFIG[key]
    assert config["dark_mode"] is False


def test_in_range_sizes_are_kept(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({"window_width": 1280, "window_height": 800, "monitor_index": 0}))
    config = load_config(str(path))
    assert (config["window_width"], config["window_height"]) == (1280, 800)


def test_broken_json_gives_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("{not json")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_non_object_gives_defaults(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2, 3]")
    assert load_config(str(path)) == DEFAULT_CONFIG


def test_saved_theme_is_loaded_back(tmp_path):
    path = str(tmp_path / "cfg.json")
    config = dict(DEFAULT_CONFIG, dark_mode=False)
    assert save_config(config, path)
    assert load_config(path)["dark_mode"] is False


def test_save_failure_is_reported(tmp_path):
    assert not save_config(DEFAULT_CONFIG, str(tmp_path / "missing_dir" / "cfg.json"))


def test_config_path_from_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("SYSMON_CONFIG", str(tmp_path / "x.json"))
    assert config_path() == str(tmp_path / "x.json")


def test_log_level_names():
    assert get_log_level("debug") == logging.DEBUG
    assert get_log_level("nonsense") == logging.INFO
