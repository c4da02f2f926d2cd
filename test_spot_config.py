"""
spot_admin.json handling.
"""

import json

import pytest

import spot_config


@pytest.fixture
def config_path(tmp_path, monkeypatch):
    path = tmp_path / "config" / "spot_admin.json"
    monkeypatch.setenv("SPOT_CONFIG_PATH", str(path))
    return path


def test_defaults_written_on_first_load(config_path):
    cfg = spot_config.load_config()

    assert config_path.exists()
    assert cfg["match_distance_miles"] == 0.5
    assert cfg["leaderboard_size"] == 5
    assert cfg["nearby_limit_miles"] == 20.0


def test_save_then_load(config_path):
    spot_config.save_config({"match_distance_miles": 0.75, "leaderboard_size": 3})

    assert json.loads(config_path.read_text())["match_distance_miles"] == 0.75
    settings = spot_config.get_aggregation_settings()
    assert settings == {
        "match_distance_miles": 0.75,
        "leaderboard_size": 3,
        "nearby_limit_miles": 20.0,
    }


def test_invalid_file_values_fall_back_to_defaults(config_path):
    spot_config.save_config({"match_distance_miles": -1})
    settings = spot_config.get_aggregation_settings()
    assert settings["match_distance_miles"] == 0.5
    assert settings["leaderboard_size"] == 5


@pytest.mark.parametrize(
    "cfg",
    [
        {"match_distance_miles": 0},
        {"match_distance_miles": 12},
        {"match_distance_miles": "far"},
        {"leaderboard_size": 0},
        {"leaderboard_size": 500},
        {"nearby_limit_miles": -3},
    ],
)
def test_validate_settings_rejects_out_of_range(cfg):
    with pytest.raises(ValueError):
        spot_config.validate_settings(cfg)


def test_validate_settings_fills_missing_keys():
    assert spot_config.validate_settings({"leaderboard_size": "7"}) == {
        "match_distance_miles": 0.5,
        "leaderboard_size": 7,
        "nearby_limit_miles": 20.0,
    }


def test_one_bad_key_keeps_the_other_admin_values(config_path):
    spot_config.save_config({"match_distance_miles": 0.75, "leaderboard_size": 0})

    settings = spot_config.get_aggregation_settings()

    assert settings["match_distance_miles"] == 0.75
    assert settings["leaderboard_size"] == 5
    assert settings["nearby_limit_miles"] == 20.0


def test_each_bad_key_is_logged(config_path, caplog):
    spot_config.save_config({"leaderboard_size": 0, "nearby_limit_miles": "far"})

    with caplog.at_level("WARNING", logger="spot_config"):
        spot_config.get_aggregation_settings()

    warned = " ".join(r.getMessage() for r in caplog.records)
    assert "leaderboard_size" in warned
    assert "nearby_limit_miles" in warned
    assert "match_distance_miles" not in warned


@pytest.mark.parametrize("contents", ["{not json", "[1, 2, 3]", "\"0.5\""])
def test_unreadable_file_gives_defaults(config_path, contents):
    config_path.parent.mkdir(parents=True, exist_ok=True)
    config_path.write_text(contents, encoding="utf-8")

    assert spot_config.get_aggregation_settings() == {
        "match_distance_miles": 0.5,
        "leaderboard_size": 5,
        "nearby_limit_miles": 20.0,
    }


@pytest.mark.parametrize("key", ["match_distance_miles", "leaderboard_size", "nearby_limit_miles"])
@pytest.mark.parametrize("value", [float("nan"), float("inf"), float("-inf")])
def test_validate_settings_rejects_non_finite(key, value):
    with pytest.raises(ValueError):
        spot_config.validate_settings({key: value})


@pytest.mark.parametrize("value", [5.9, True, False, "5.5"])
def test_validate_settings_rejects_non_integral_board_size(value):
    with pytest.raises(ValueError):
        spot_config.validate_settings({"leaderboard_size": value})


def test_validate_settings_accepts_whole_float_board_size():
    assert spot_config.validate_settings({"leaderboard_size": 4.0})["leaderboard_size"] == 4
