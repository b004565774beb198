import logging

import pytest

import ottplay_player.engine as engine_module
from ottplay_player.app_logging import mpv_log_handler, mpv_log_level
from ottplay_player.engine import (
    EngineUnavailableError,
    PlaybackEngine,
    QualityLevelsExtension,
    default_engine_factory,
)

from conftest import TRACK_LIST, NoTrackListMpv, make_factory

URL = "https://cdn.example.com/show/master.m3u8"


def record(signal):
    calls = []
    signal.connect(lambda *args: calls.append(args))
    return calls


def test_initialize_disables_builtin_chrome_and_starts_paused(engine, mpv_factory):
    handle = engine.initialize(URL, wid=42)
    assert engine.is_active
    assert handle is mpv_factory.created[-1]
    assert handle.options["osc"] is False
    assert handle.options["input_default_bindings"] is False
    assert handle.options["input_vo_keyboard"] is False
    assert handle.options["wid"] == "42"
    assert handle.pause is True
    assert handle.played == [URL]
    assert engine.source_url == URL


def test_initialize_passes_video_options(qt_app, mpv_factory):
    engine = PlaybackEngine(
        factory=mpv_factory,
        options={"hwdec": "no", "renderer": "gpu-next", "network_timeout": 5},
    )
    handle = engine.initialize(URL)
    assert handle.options["hwdec"] == "no"
    assert handle.options["vo"] == "gpu-next"
    assert handle.options["network_timeout"] == 5
    assert "wid" not in handle.options
    engine.dispose()


def test_mpv_log_lines_go_to_python_logging(engine, caplog):
    handle = engine.initialize(URL)
    assert handle.options["log_handler"] is mpv_log_handler
    assert handle.options["loglevel"] in {"v", "info", "warn", "error"}

    with caplog.at_level(logging.DEBUG, logger="mpv"):
        handle.options["log_handler"]("error", "ffmpeg", "HTTP error 403 Forbidden\n")
        handle.options["log_handler"]("v", "cplayer", "")

    mpv_records = [r for r in caplog.records if r.name == "mpv"]
    assert [(r.levelno, r.getMessage()) for r in mpv_records] == [
        (logging.ERROR, "[ffmpeg] HTTP error 403 Forbidden")
    ]


def test_mpv_log_level_follows_python_level():
    assert mpv_log_level(logging.DEBUG) == "v"
    assert mpv_log_level(logging.INFO) == "info"
    assert mpv_log_level(logging.WARNING) == "warn"
    assert mpv_log_level(logging.ERROR) == "error"


def test_property_events_are_delivered_on_the_event_loop(qt_app, engine):
    handle = engine.initialize(URL)
    playing = record(engine.playingChanged)
    positions = record(engine.positionChanged)
    durations = record(engine.durationChanged)
    volumes = record(engine.volumeChanged)
    rates = record(engine.rateChanged)

    handle.fire("pause", False)
    handle.fire("duration", 120.0)
    handle.fire("time-pos", 30.5)
    handle.fire("volume", 40.0)
    handle.fire("mute", True)
    handle.fire("speed", 1.5)
    assert playing == []

    qt_app.processEvents()
    assert playing == [(True,)]
    assert durations == [(120.0,)]
    assert positions == [(30.5,)]
    assert volumes == [(0.4, False), (0.4, True)]
    assert rates == [(1.5,)]
    assert engine.position == 30.5
    assert engine.duration == 120.0


def test_end_of_stream_reports_not_playing(qt_app, engine):
    handle = engine.initialize(URL)
    playing = record(engine.playingChanged)
    handle.fire("eof-reached", False)
    handle.fire("eof-reached", True)
    qt_app.processEvents()
    assert playing == [(False,)]


def test_missing_time_pos_is_ignored(qt_app, engine):
    handle = engine.initialize(URL)
    positions = record(engine.positionChanged)
    handle.fire("time-pos", None)
    qt_app.processEvents()
    assert positions == []


def test_seek_absolute_targets_ratio_of_duration(qt_app, engine):
    handle = engine.initialize(URL)
    handle.fire("duration", 100.0)
    qt_app.processEvents()
    positions = record(engine.positionChanged)

    engine.seek_absolute(0.42)
    assert handle.commands[-1] == ("seek", pytest.approx(42.0), "absolute")
    assert positions == [(pytest.approx(42.0),)]

    engine.seek_absolute(1.7)
    assert handle.commands[-1] == ("seek", 100.0, "absolute")


def test_seek_absolute_waits_for_duration(qt_app, engine):
    handle = engine.initialize(URL)
    engine.seek_absolute(0.5)
    assert handle.commands == []


@pytest.mark.parametrize(
    "position, delta, expected",
    [(5.0, -10, 0.0), (95.0, 10, 100.0), (50.0, 10, 60.0), (50.0, -10, 40.0)],
)
def test_skip_relative_clamps_to_stream(qt_app, engine, position, delta, expected):
    handle = engine.initialize(URL)
    handle.fire("duration", 100.0)
    handle.fire("time-pos", position)
    qt_app.processEvents()
    engine.skip_relative(delta)
    assert handle.commands[-1] == ("seek", expected, "absolute")
    assert engine.position == expected


def test_toggle_play_flips_pause(engine):
    handle = engine.initialize(URL)
    engine.toggle_play()
    assert handle.pause is False
    engine.toggle_play()
    assert handle.pause is True


def test_set_volume(engine):
    handle = engine.initialize(URL)
    engine.set_volume(0.4)
    assert handle.volume == pytest.approx(40.0)
    assert handle.mute is False

    engine.set_volume(0)
    assert handle.mute is True
    assert handle.volume == pytest.approx(40.0)

    engine.set_volume(1.8)
    assert handle.volume == pytest.approx(100.0)
    assert handle.mute is False

    engine.set_volume(-1)
    assert handle.mute is True


def test_toggle_mute_and_rate(engine):
    handle = engine.initialize(URL)
    engine.toggle_mute()
    assert handle.mute is True
    engine.set_playback_rate(1.25)
    assert handle.speed == 1.25


def test_quality_levels_from_track_list(qt_app, engine):
    handle = engine.initialize(URL)
    assert engine.quality_supported
    emitted = record(engine.qualityLevelsChanged)

    handle.fire("track-list", TRACK_LIST)
    handle.fire("track-list", list(TRACK_LIST))
    qt_app.processEvents()

    assert len(emitted) == 1
    assert [level.label for level in emitted[0][0]] == ["1080p", "720p", "360p"]
    assert [level.value for level in engine.quality_levels] == ["1080p", "720p", "360p"]


def test_select_quality(qt_app, engine):
    handle = engine.initialize(URL)
    handle.fire("track-list", TRACK_LIST)
    qt_app.processEvents()

    assert engine.select_quality("720p")
    assert handle.vid == 1
    assert engine.select_quality("1080p")
    assert handle.vid == 2
    assert engine.select_quality("auto")
    assert handle.vid == "auto"
    assert not engine.select_quality("480p")
    assert handle.vid == "auto"


def test_quality_capability_missing_keeps_playing(qt_app, caplog):
    factory = make_factory(NoTrackListMpv)
    engine = PlaybackEngine(factory=factory)
    handle = engine.initialize(URL)
    assert not engine.quality_supported
    assert engine.quality_levels == []
    assert handle.played == [URL]
    assert "Quality levels unavailable" in caplog.text
    assert not engine.select_quality("720p")
    engine.dispose()


def test_playback_failure_event(qt_app, engine):
    handle = engine.initialize(URL)
    failures = record(engine.playbackFailed)
    handle.fire_end_file_error(-13)
    qt_app.processEvents()
    assert len(failures) == 1
    assert "-13" in failures[0][0]


def test_dispose_terminates_and_is_idempotent(engine):
    handle = engine.initialize(URL)
    engine.dispose()
    assert handle.terminated
    assert not engine.is_active
    assert all(not handlers for handlers in handle.observers.values())
    assert handle.event_callbacks == []
    engine.dispose()


def test_commands_after_dispose_are_noops(engine):
    handle = engine.initialize(URL)
    engine.dispose()
    engine.toggle_play()
    engine.seek_absolute(0.5)
    engine.skip_relative(10)
    engine.set_volume(0.2)
    engine.toggle_mute()
    engine.set_playback_rate(2.0)
    assert engine.select_quality("720p") is False
    assert handle.commands == []
    assert handle.pause is True


def test_commands_before_initialize_are_noops(qt_app, mpv_factory):
    engine = PlaybackEngine(factory=mpv_factory)
    engine.toggle_play()
    engine.set_volume(0.5)
    engine.dispose()
    assert mpv_factory.created == []


def test_events_from_disposed_handle_are_dropped(qt_app, engine):
    old = engine.initialize(URL)
    stale_observer = old.observers["time-pos"][0]
    positions = record(engine.positionChanged)

    stale_observer("time-pos", 12.0)
    new = engine.initialize(URL + "?v=2")
    qt_app.processEvents()

    assert old.terminated
    assert not new.terminated
    assert positions == []


def test_reinitialize_replaces_handle(engine, mpv_factory):
    first = engine.initialize(URL)
    second = engine.initialize(URL)
    assert first.terminated
    assert second is mpv_factory.created[-1]
    assert len(mpv_factory.created) == 2


def test_default_factory_without_mpv(monkeypatch):
    monkeypatch.setattr(engine_module, "MPV_AVAILABLE", False)
    monkeypatch.setattr(engine_module, "MPV_IMPORT_ERROR", "OSError: libmpv not found")
    with pytest.raises(EngineUnavailableError, match="libmpv not found"):
        default_engine_factory()


def test_extension_attach_requires_observer():
    extension = QualityLevelsExtension()
    with pytest.raises(AttributeError):
        extension.attach(object(), lambda name, value: None)
