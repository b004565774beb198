import logging

from PySide6.QtCore import QObject, Qt, Signal

from .app_logging import mpv_log_handler, mpv_log_level
from .logic import QUALITY_AUTO, build_quality_levels, quality_height
from .utils import clamp

try:
    import mpv
    MPV_AVAILABLE = True
    MPV_IMPORT_ERROR = ""
except Exception as e:
    # python-mpv raises OSError when libmpv itself cannot be loaded.
    mpv = None
    MPV_AVAILABLE = False
    MPV_IMPORT_ERROR = f"{type(e).__name__}: {e}"

# libmpv client.h values.
MPV_EVENT_END_FILE = 7
MPV_END_FILE_REASON_ERROR = 4

OBSERVED_PROPERTIES = ("pause", "eof-reached", "time-pos", "duration", "volume", "mute", "speed")


class EngineUnavailableError(RuntimeError):
    pass


def default_engine_factory():
    if not MPV_AVAILABLE:
        raise EngineUnavailableError(f"mpv backend unavailable: {MPV_IMPORT_ERROR}")
    return mpv.MPV


class QualityLevelsExtension:
    """Rendition discovery and selection over mpv's track list.

    mpv exposes each HLS variant as a video track; its ``demux-h`` is the
    rendition height.
    """

    PROPERTY = "track-list"

    def __init__(self):
        self._tracks: list[dict] = []
        self.levels = []

    def attach(self, handle, handler):
        observe = getattr(handle, "observe_property", None)
        if not callable(observe):
            raise AttributeError("engine handle cannot observe properties")
        observe(self.PROPERTY, handler)

    def update(self, track_list) -> bool:
        tracks = []
        for track in track_list or []:
            if not isinstance(track, dict) or track.get("type") != "video":
                continue
            if track.get("albumart") or track.get("image"):
                continue
            tracks.append(track)
        levels = build_quality_levels(t.get("demux-h") for t in tracks)
        self._tracks = tracks
        if levels == self.levels:
            return False
        self.levels = levels
        return True

    def select(self, handle, value: str) -> bool:
        if value == QUALITY_AUTO:
            handle.vid = "auto"
            return True
        height = quality_height(value)
        for track in self._tracks:
            if int(track.get("demux-h") or 0) == height and track.get("id") is not None:
                # Selecting one video track deselects every other rendition.
                handle.vid = track["id"]
                return True
        logging.warning("No rendition matches quality %s", value)
        return False


class PlaybackEngine(QObject):
    playingChanged = Signal(bool)
    positionChanged = Signal(float)
    durationChanged = Signal(float)
    volumeChanged = Signal(float, bool)
    rateChanged = Signal(float)
    qualityLevelsChanged = Signal(list)
    playbackFailed = Signal(str)

    _property_signal = Signal(int, str, object)
    _event_signal = Signal(int, str)

    def __init__(self, factory=None, options: dict | None = None, parent=None):
        super().__init__(parent)
        self._factory = factory
        self._options = dict(options or {})
        self._handle = None
        self._quality = None
        self._generation = 0
        self._observers = {}
        self._event_callback = None
        self._source_url = ""
        self._position = 0.0
        self._duration = 0.0
        self._volume = 1.0
        self._muted = False

        self._property_signal.connect(self._dispatch_property, Qt.QueuedConnection)
        self._event_signal.connect(self._dispatch_event, Qt.QueuedConnection)

    @property
    def is_active(self) -> bool:
        return self._handle is not None

    @property
    def quality_supported(self) -> bool:
        return self._quality is not None

    @property
    def quality_levels(self) -> list:
        return list(self._quality.levels) if self._quality is not None else []

    @property
    def source_url(self) -> str:
        return self._source_url

    @property
    def position(self) -> float:
        return self._position

    @property
    def duration(self) -> float:
        return self._duration

    def initialize(self, source_url: str, wid=None):
        self.dispose()
        factory = self._factory or default_engine_factory()

        self._generation += 1
        generation = self._generation
        self._position = 0.0
        self._duration = 0.0
        self._source_url = str(source_url or "")

        kwargs = dict(
            osc=False,
            input_default_bindings=False,
            input_vo_keyboard=False,
            input_cursor=False,
            keep_open="yes",
            hr_seek="yes",
            ytdl=False,
            vo=self._options.get("renderer", "gpu"),
            hwdec=self._options.get("hwdec", "auto-safe"),
            network_timeout=int(self._options.get("network_timeout", 30)),
            log_handler=mpv_log_handler,
            loglevel=mpv_log_level(logging.getLogger().getEffectiveLevel()),
        )
        if wid is not None:
            kwargs["wid"] = str(int(wid))
        handle = factory(**kwargs)
        self._handle = handle
        logging.info("Engine initialized: generation=%d url=%s", generation, self._source_url)

        for name in OBSERVED_PROPERTIES:
            observer = self._make_observer(generation)
            handle.observe_property(name, observer)
            self._observers[name] = observer

        try:
            callback = self._make_event_callback(generation)
            handle.register_event_callback(callback)
            self._event_callback = callback
        except Exception as e:
            logging.warning("Engine event callback unavailable: %s", e)

        quality = QualityLevelsExtension()
        try:
            observer = self._make_observer(generation)
            quality.attach(handle, observer)
            self._observers[QualityLevelsExtension.PROPERTY] = observer
            self._quality = quality
        except Exception as e:
            logging.warning("Quality levels unavailable, continuing without: %s", e)
            self._quality = None

        handle.pause = True
        handle.play(self._source_url)
        return handle

    def dispose(self):
        handle = self._handle
        if handle is None:
            return
        self._handle = None
        self._quality = None
        # Queued events from this handle are dropped from here on.
        self._generation += 1
        for name, observer in self._observers.items():
            try:
                handle.unobserve_property(name, observer)
            except Exception as e:
                logging.debug("Unobserve %s skipped: %s", name, e)
        self._observers = {}
        if self._event_callback is not None:
            try:
                handle.unregister_event_callback(self._event_callback)
            except Exception as e:
                logging.debug("Event callback removal skipped: %s", e)
            self._event_callback = None
        try:
            handle.terminate()
        except Exception as e:
            logging.warning("Engine terminate failed: %s", e)
        logging.info("Engine disposed: url=%s", self._source_url)

    def _make_observer(self, generation: int):
        def _observer(name, value):
            self._property_signal.emit(generation, str(name), value)
        return _observer

    def _make_event_callback(self, generation: int):
        def _callback(event):
            event_id = getattr(event, "event_id", None)
            if getattr(event_id, "value", event_id) != MPV_EVENT_END_FILE:
                return
            data = getattr(event, "data", None)
            if getattr(data, "reason", None) != MPV_END_FILE_REASON_ERROR:
                return
            error = getattr(data, "error", "")
            self._event_signal.emit(generation, f"end-file error {error}".strip())
        return _callback

    def _dispatch_property(self, generation: int, name: str, value):
        if generation != self._generation or self._handle is None:
            return
        if name == "pause":
            self.playingChanged.emit(not bool(value))
        elif name == "eof-reached":
            if value:
                self.playingChanged.emit(False)
        elif name == "time-pos":
            if value is None:
                return
            self._position = max(0.0, float(value))
            self.positionChanged.emit(self._position)
        elif name == "duration":
            self._duration = max(0.0, float(value or 0.0))
            self.durationChanged.emit(self._duration)
        elif name == "volume":
            if value is None:
                return
            self._volume = clamp(float(value) / 100.0, 0.0, 1.0)
            self.volumeChanged.emit(self._volume, self._muted)
        elif name == "mute":
            self._muted = bool(value)
            self.volumeChanged.emit(self._volume, self._muted)
        elif name == "speed":
            if value:
                self.rateChanged.emit(float(value))
        elif name == QualityLevelsExtension.PROPERTY:
            if self._quality is not None and self._quality.update(value):
                logging.info(
                    "Quality levels: %s", [level.label for level in self._quality.levels]
                )
                self.qualityLevelsChanged.emit(list(self._quality.levels))

    def _dispatch_event(self, generation: int, message: str):
        if generation != self._generation:
            return
        logging.error("Playback failed: url=%s %s", self._source_url, message)
        self.playbackFailed.emit(message)

    def _live_handle(self, command: str):
        if self._handle is None:
            logging.debug("Ignoring %s: no live engine", command)
        return self._handle

    def toggle_play(self):
        handle = self._live_handle("toggle_play")
        if handle is None:
            return
        handle.pause = not bool(handle.pause)

    def seek_absolute(self, ratio: float):
        handle = self._live_handle("seek_absolute")
        if handle is None or self._duration <= 0:
            return
        self._seek_to(handle, clamp(float(ratio), 0.0, 1.0) * self._duration)

    def skip_relative(self, delta_seconds: float):
        handle = self._live_handle("skip_relative")
        if handle is None:
            return
        target = clamp(self._position + float(delta_seconds), 0.0, max(0.0, self._duration))
        self._seek_to(handle, target)

    def _seek_to(self, handle, target: float):
        try:
            handle.command("seek", target, "absolute")
        except Exception as e:
            # mpv rejects seeks while a file is still loading.
            logging.debug("Seek to %.2f rejected: %s", target, e)
            return
        self._position = target
        self.positionChanged.emit(target)

    def set_volume(self, volume: float):
        handle = self._live_handle("set_volume")
        if handle is None:
            return
        value = clamp(float(volume), 0.0, 1.0)
        if value <= 0:
            handle.mute = True
            return
        handle.volume = value * 100.0
        handle.mute = False

    def toggle_mute(self):
        handle = self._live_handle("toggle_mute")
        if handle is None:
            return
        handle.mute = not bool(handle.mute)

    def set_playback_rate(self, rate: float):
        handle = self._live_handle("set_playback_rate")
        if handle is None:
            return
        handle.speed = float(rate)

    def select_quality(self, value: str) -> bool:
        handle = self._live_handle("select_quality")
        if handle is None or self._quality is None:
            return False
        selected = self._quality.select(handle, value)
        if selected:
            logging.info("Quality selected: %s", value)
        return selected
