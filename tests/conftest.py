import os
from types import SimpleNamespace
from typing import cast

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

from PySide6.QtCore import QCoreApplication, QEvent
from PySide6.QtWidgets import QApplication

from ottplay_player.engine import MPV_END_FILE_REASON_ERROR, MPV_EVENT_END_FILE, PlaybackEngine


@pytest.fixture(scope="session")
def qt_app() -> QApplication:
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    return cast(QApplication, app)


def dispose_widget(widget):
    """Delete a top-level test widget now instead of at interpreter exit."""
    shutdown = getattr(widget, "shutdown", None)
    if callable(shutdown):
        shutdown()
    widget.deleteLater()
    QCoreApplication.sendPostedEvents(None, QEvent.DeferredDelete)


@pytest.fixture(autouse=True)
def user_data_home(tmp_path, monkeypatch):
    monkeypatch.setenv("OTTPLAY_PLAYER_HOME", str(tmp_path))
    return tmp_path


class FakeMpv:
    """Stands in for mpv.MPV: records what the engine does to it and lets a
    test fire property changes the way mpv's event thread would."""

    def __init__(self, **options):
        self.options = options
        self.observers = {}
        self.event_callbacks = []
        self.commands = []
        self.played = []
        self.terminated = False
        self.pause = False
        self.volume = 100.0
        self.mute = False
        self.speed = 1.0
        self.vid = "auto"

    def observe_property(self, name, handler):
        self.observers.setdefault(name, []).append(handler)

    def unobserve_property(self, name, handler):
        self.observers[name].remove(handler)

    def register_event_callback(self, callback):
        self.event_callbacks.append(callback)

    def unregister_event_callback(self, callback):
        self.event_callbacks.remove(callback)

    def play(self, url):
        self.played.append(url)

    def command(self, *args):
        self.commands.append(args)

    def terminate(self):
        self.terminated = True

    def fire(self, name, value):
        for handler in list(self.observers.get(name, [])):
            handler(name, value)

    def fire_end_file_error(self, error=-13):
        event = SimpleNamespace(
            event_id=SimpleNamespace(value=MPV_EVENT_END_FILE),
            data=SimpleNamespace(reason=MPV_END_FILE_REASON_ERROR, error=error),
        )
        for callback in list(self.event_callbacks):
            callback(event)


class NoTrackListMpv(FakeMpv):
    def observe_property(self, name, handler):
        if name == "track-list":
            raise AttributeError("track-list is not observable")
        super().observe_property(name, handler)


def make_factory(cls=FakeMpv):
    created = []

    def factory(**options):
        handle = cls(**options)
        created.append(handle)
        return handle

    factory.created = created
    return factory


@pytest.fixture
def mpv_factory():
    return make_factory()


@pytest.fixture
def engine(qt_app, mpv_factory):
    engine = PlaybackEngine(factory=mpv_factory)
    yield engine
    engine.dispose()


TRACK_LIST = [
    {"type": "video", "id": 1, "demux-h": 720},
    {"type": "video", "id": 2, "demux-h": 1080},
    {"type": "video", "id": 3, "demux-h": 1080},
    {"type": "video", "id": 4, "demux-h": 360},
    {"type": "audio", "id": 1},
    {"type": "video", "id": 9, "demux-h": 600, "albumart": True},
]
