from pathlib import Path

from ottplay_player.settings import (
    DEFAULT_PLAYER_SETTINGS,
    get_settings,
    load_language_setting,
    load_player_settings,
    save_language_setting,
    save_player_settings,
)


def test_settings_file_lives_in_user_data_dir(user_data_home):
    assert Path(get_settings().fileName()) == user_data_home / "settings.ini"


def test_defaults_when_nothing_saved(qt_app):
    assert load_player_settings() == DEFAULT_PLAYER_SETTINGS


def test_save_and_load(qt_app):
    save_player_settings({"hide_delay_ms": 5000, "skip_seconds": 15, "hwdec": "no", "renderer": "gpu-next"})
    loaded = load_player_settings()
    assert loaded["hide_delay_ms"] == 5000
    assert loaded["skip_seconds"] == 15
    assert loaded["hwdec"] == "no"
    assert loaded["renderer"] == "gpu-next"
    assert loaded["network_timeout"] == DEFAULT_PLAYER_SETTINGS["network_timeout"]


def test_out_of_range_values_are_clamped(qt_app):
    save_player_settings({"hide_delay_ms": 10, "skip_seconds": 5000, "network_timeout": 0})
    loaded = load_player_settings()
    assert loaded["hide_delay_ms"] == 500
    assert loaded["skip_seconds"] == 600
    assert loaded["network_timeout"] == 1


def test_invalid_values_fall_back_to_defaults(qt_app):
    settings = get_settings()
    settings.setValue("player/hide_delay_ms", "soon")
    settings.setValue("video/hwdec", "quantum")
    settings.sync()
    loaded = load_player_settings()
    assert loaded["hide_delay_ms"] == DEFAULT_PLAYER_SETTINGS["hide_delay_ms"]
    assert loaded["hwdec"] == DEFAULT_PLAYER_SETTINGS["hwdec"]


def test_language_setting(qt_app):
    assert load_language_setting("en") == "en"
    save_language_setting("hi")
    assert load_language_setting() == "hi"
