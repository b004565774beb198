import pytest

from ottplay_player.logic import (
    PANEL_NONE,
    PANEL_QUALITY,
    PANEL_SPEED,
    PANEL_VOLUME,
    QUALITY_AUTO,
    PanelState,
    PlaybackSession,
    QualityLevel,
    SeekDrag,
    SpeedSelection,
    build_quality_levels,
    is_hd_quality,
    quality_height,
    quality_options,
    ratio_from_position,
)


def test_session_defaults():
    session = PlaybackSession("https://cdn.example.com/master.m3u8")
    assert session.current_time == 0.0
    assert session.duration == 0.0
    assert not session.is_playing
    assert session.volume == 1.0
    assert session.playback_rate == 1.0
    assert session.quality == QUALITY_AUTO
    assert session.progress_percent == 0.0


def test_session_clamps_current_time_to_duration():
    session = PlaybackSession()
    session.set_duration(100)
    session.set_current_time(150)
    assert session.current_time == 100
    session.set_current_time(-4)
    assert session.current_time == 0
    session.set_current_time(25)
    assert session.progress_percent == 25.0


def test_session_duration_shrink_clamps_position():
    session = PlaybackSession()
    session.set_duration(100)
    session.set_current_time(80)
    session.set_duration(50)
    assert session.current_time == 50


def test_session_unknown_duration():
    session = PlaybackSession()
    session.set_duration(None)
    session.set_current_time(12)
    assert session.duration == 0.0
    assert session.current_time == 12
    assert session.progress_percent == 0.0


def test_session_mute_keeps_last_volume():
    session = PlaybackSession()
    session.set_volume(0.6, False)
    session.set_volume(0.0, True)
    assert session.is_muted
    assert session.volume == 0.6
    assert session.effective_volume == 0.0
    session.set_volume(0.6, False)
    assert session.effective_volume == 0.6


def test_session_volume_is_clamped():
    session = PlaybackSession()
    session.set_volume(1.7, False)
    assert session.volume == 1.0


def test_session_reset_keeps_window_and_audio_state():
    session = PlaybackSession("a.m3u8")
    session.is_fullscreen = True
    session.set_volume(0.3, True)
    session.set_duration(100)
    session.set_current_time(40)
    session.quality = "720p"
    session.playback_rate = 1.5
    session.is_playing = True
    session.reset("b.m3u8")
    assert session.source_url == "b.m3u8"
    assert session.current_time == 0.0
    assert session.duration == 0.0
    assert session.quality == QUALITY_AUTO
    assert session.playback_rate == 1.0
    assert not session.is_playing
    assert session.is_fullscreen
    assert session.volume == 0.3
    assert session.is_muted


def test_panel_toggle_is_mutually_exclusive():
    panels = PanelState()
    assert not panels.is_open
    assert panels.toggle(PANEL_QUALITY) == PANEL_QUALITY
    assert panels.toggle(PANEL_VOLUME) == PANEL_VOLUME
    assert panels.active == PANEL_VOLUME
    assert panels.toggle(PANEL_VOLUME) == PANEL_NONE
    assert not panels.is_open


def test_panel_close_reports_whether_anything_was_open():
    panels = PanelState()
    assert panels.close() is False
    panels.toggle(PANEL_SPEED)
    assert panels.close() is True
    assert panels.active == PANEL_NONE


def test_panel_toggle_rejects_unknown_name():
    with pytest.raises(ValueError):
        PanelState().toggle("subtitles")


def test_speed_selection_apply_and_cancel():
    speed = SpeedSelection()
    speed.open()
    assert speed.choose(1.5)
    assert speed.pending == 1.5
    assert speed.applied == 1.0
    speed.cancel()
    assert speed.pending == 1.0

    speed.choose(0.75)
    assert speed.apply() == 0.75
    speed.choose(2.0)
    speed.open()
    assert speed.pending == 0.75


def test_speed_selection_ignores_unsupported_rates():
    speed = SpeedSelection()
    assert not speed.choose(3.0)
    assert speed.pending == 1.0


def test_build_quality_levels_dedupes_and_sorts():
    levels = build_quality_levels([720, 1080, None, 0, 1080, 360, "bad", -1])
    assert [level.label for level in levels] == ["1080p", "720p", "360p"]
    assert levels[0] == QualityLevel(1080)
    assert levels[0].is_hd
    assert not levels[1].is_hd


def test_quality_options_prepend_auto():
    options = quality_options(build_quality_levels([480, 720]))
    assert options[0] == (QUALITY_AUTO, "Auto")
    assert [value for value, _label in options[1:]] == ["720p", "480p"]
    assert quality_options([]) == [(QUALITY_AUTO, "Auto")]


def test_quality_value_helpers():
    assert quality_height("1080p") == 1080
    assert quality_height(QUALITY_AUTO) == 0
    assert is_hd_quality("1080p")
    assert is_hd_quality("2160p")
    assert not is_hd_quality("720p")
    assert not is_hd_quality(QUALITY_AUTO)


def test_ratio_from_position_clamps():
    assert ratio_from_position(50, 200) == 0.25
    assert ratio_from_position(-10, 200) == 0.0
    assert ratio_from_position(300, 200) == 1.0
    assert ratio_from_position(10, 0) == 0.0


def test_seek_drag_session():
    drag = SeekDrag()
    assert drag.move(10, 100) is None
    assert drag.end() is None

    assert drag.begin(20, 100) == 0.2
    assert drag.active
    assert drag.move(60, 100) == 0.6
    assert drag.move(140, 100) == 1.0
    assert drag.end() == 1.0
    assert not drag.active
    assert drag.move(30, 100) is None
