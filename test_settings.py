"""Tests for settings loading and persistence."""

import json
from datetime import date

import pytest

import settings as settings_mod
from calendar_logic import MAX_DATE, MIN_DATE, SUNDAY
from settings import bounds, load_settings, save_settings


@pytest.fixture
def settings_path(tmp_path, monkeypatch):
    path = tmp_path / "settings.json"
    monkeypatch.setattr(settings_mod, "_SETTINGS_PATH", str(path))
    return path


def test_defaults_when_file_missing(settings_path):
    settings = load_settings()
    assert settings["first_weekday"] == SUNDAY
    assert settings["require_title"] is False
    assert settings["log_level"] == "WARNING"
    assert bounds(settings) == (MIN_DATE, MAX_DATE)


def test_defaults_when_file_corrupt(settings_path):
    settings_path.write_text("{not json", encoding="utf-8")
    assert load_settings() == settings_mod._DEFAULTS


def test_defaults_when_file_not_an_object(settings_path):
    settings_path.write_text("[1, 2]", encoding="utf-8")
    assert load_settings() == settings_mod._DEFAULTS


def test_invalid_values_are_ignored(settings_path):
    settings_path.write_text(json.dumps({
        "first_weekday": 9,
        "require_title": "yes",
        "log_level": "LOUD",
        "min_date": "1970-13-01",
    }), encoding="utf-8")
    assert load_settings() == settings_mod._DEFAULTS


def test_bool_is_not_a_weekday(settings_path):
    settings_path.write_text(json.dumps({"first_weekday": True}), encoding="utf-8")
    assert load_settings()["first_weekday"] == SUNDAY


def test_inverted_bounds_are_ignored(settings_path):
    settings_path.write_text(json.dumps({
        "min_date": "2030-01-01", "max_date": "2020-01-01",
    }), encoding="utf-8")
    assert bounds(load_settings()) == (MIN_DATE, MAX_DATE)


def test_round_trip(settings_path):
    settings = load_settings()
    settings["first_weekday"] = 0
    settings["require_title"] = True
    settings["log_level"] = "DEBUG"
    settings["min_date"] = "2000-01-01"
    settings["max_date"] = "2099-12-31"
    save_settings(settings)

    loaded = load_settings()
    assert loaded["first_weekday"] == 0
    assert loaded["require_title"] is True
    assert loaded["log_level"] == "DEBUG"
    assert bounds(loaded) == (date(2000, 1, 1), date(2099, 12, 31))


def test_bounds_are_clamped_to_representable_months(settings_path):
    settings_path.write_text(json.dumps({
        "min_date": "0001-01-01", "max_date": "9999-12-31",
    }), encoding="utf-8")
    assert bounds(load_settings()) == (date(1, 2, 1), date(9999, 11, 30))


def test_bounds_entirely_in_edge_month_are_ignored(settings_path):
    settings_path.write_text(json.dumps({
        "min_date": "0001-01-02", "max_date": "0001-01-20",
    }), encoding="utf-8")
    assert bounds(load_settings()) == (MIN_DATE, MAX_DATE)


def test_log_file_setting(settings_path):
    assert load_settings()["log_file"] is None
    settings_path.write_text(json.dumps({"log_file": "  calendar.log "}), encoding="utf-8")
    assert load_settings()["log_file"] == "calendar.log"
    settings_path.write_text(json.dumps({"log_file": 42}), encoding="utf-8")
    assert load_settings()["log_file"] is None
