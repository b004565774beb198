import logging

from PySide6.QtCore import QEvent, QPoint, Qt, QTimer, Signal
from PySide6.QtGui import QColor, QCursor
from PySide6.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QLabel,
    QVBoxLayout,
    QWidget,
)

from .auto_hide import AutoHideController
from .engine import PlaybackEngine
from .i18n import tr
from .logic import (
    PANEL_QUALITY,
    PANEL_SPEED,
    PANEL_VOLUME,
    QUALITY_AUTO,
    PanelState,
    PlaybackSession,
    SpeedSelection,
    is_hd_quality,
)
from .settings import DEFAULT_PLAYER_SETTINGS
from .ui.icons import (
    get_app_icon,
    icon_back,
    icon_exit_fullscreen,
    icon_fullscreen,
    icon_gauge,
    icon_pause,
    icon_play,
    icon_settings,
    icon_skip_back,
    icon_skip_forward,
    icon_volume,
    icon_volume_muted,
)
from .ui.panels import QualityPanel, SpeedPanel, VolumePanel
from .ui.styles import CENTER_CONTROLS_STYLE, CONTROL_BAR_STYLE, TOP_BAR_STYLE
from .ui.widgets import (
    CaptionedButton,
    IconButton,
    OverlayWindow,
    PillOverlayWindow,
    SeekBar,
)
from .utils import NORMAL_RATE, clamp, format_rate, format_time

VOLUME_KEY_STEP = 0.05
CURSOR_POLL_MS = 100
FULLSCREEN_VERIFY_MS = 250

TOP_BAR_HEIGHT = 64
CONTROL_BAR_HEIGHT = 112
PANEL_GAP = 8


def _styled_background(parent: QWidget, name: str) -> QWidget:
    bg = QWidget(parent)
    bg.setObjectName(name)
    bg.setAttribute(Qt.WA_StyledBackground, True)
    layout = QVBoxLayout(parent)
    layout.setContentsMargins(0, 0, 0, 0)
    layout.addWidget(bg)
    return bg


class PlayerWidget(QWidget):
    """Playback surface for one stream: the mpv video plus its own chrome.

    The chrome lives in frameless tool windows kept aligned over the video,
    because mpv draws into a native child window that would cover ordinary
    child widgets.
    """

    closeRequested = Signal()

    def __init__(
        self,
        source_url: str = "",
        title: str = "",
        certification: str = "",
        on_close_requested=None,
        config: dict | None = None,
        engine: PlaybackEngine | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.config = dict(DEFAULT_PLAYER_SETTINGS)
        self.config.update(config or {})
        self.skip_seconds = int(self.config["skip_seconds"])

        self.session = PlaybackSession(source_url)
        self.panels = PanelState()
        self.speed = SpeedSelection(NORMAL_RATE)
        self.quality_levels = []
        self._is_shut_down = False
        self._host_window = None
        self._fullscreen_target = None
        self._last_cursor_pos = None

        self.setMouseTracking(True)
        self.setFocusPolicy(Qt.StrongFocus)
        self.setMinimumSize(480, 270)
        palette = self.palette()
        palette.setColor(self.backgroundRole(), QColor(0, 0, 0))
        self.setPalette(palette)
        self.setAutoFillBackground(True)

        self.video_container = QWidget(self)
        self.video_container.setAttribute(Qt.WA_NativeWindow, True)
        self.video_container.setAttribute(Qt.WA_DontCreateNativeAncestors, True)
        self.video_container.setMouseTracking(True)
        self.video_container.installEventFilter(self)

        self.engine = engine if engine is not None else PlaybackEngine(options=self.config, parent=self)
        self.engine.playingChanged.connect(self._on_playing_changed)
        self.engine.positionChanged.connect(self._on_position_changed)
        self.engine.durationChanged.connect(self._on_duration_changed)
        self.engine.volumeChanged.connect(self._on_volume_changed)
        self.engine.rateChanged.connect(self._on_rate_changed)
        self.engine.qualityLevelsChanged.connect(self._on_quality_levels_changed)
        self.engine.playbackFailed.connect(self._on_playback_failed)

        self.auto_hide = AutoHideController(int(self.config["hide_delay_ms"]), self)
        self.auto_hide.visibilityChanged.connect(self._apply_controls_visibility)

        self.setup_ui()

        self.mouse_timer = QTimer(self)
        self.mouse_timer.setInterval(CURSOR_POLL_MS)
        self.mouse_timer.timeout.connect(self.check_mouse_pos)

        self.status_timer = QTimer(self)
        self.status_timer.setSingleShot(True)
        self.status_timer.timeout.connect(self.status_pill.hide)
        self._status_default_ms = 1200
        self._status_error_ms = 6000

        self._fullscreen_timer = QTimer(self)
        self._fullscreen_timer.setSingleShot(True)
        self._fullscreen_timer.setInterval(FULLSCREEN_VERIFY_MS)
        self._fullscreen_timer.timeout.connect(self._verify_fullscreen)

        if on_close_requested is not None:
            self.closeRequested.connect(on_close_requested)

        self.set_title(title, certification)
        self.update_ui()
        if source_url:
            self.set_source(source_url)

    # UI construction

    def setup_ui(self):
        self.top_bar = OverlayWindow(self)
        top_bg = _styled_background(self.top_bar.panel, "TopBarBg")
        self.top_bar.panel.setStyleSheet(TOP_BAR_STYLE)
        self.back_btn = IconButton(tooltip=tr("Back"), icon=icon_back(24), parent=top_bg)
        self.back_btn.clicked.connect(self.request_close)
        self.title_label = QLabel("", top_bg)
        self.title_label.setObjectName("TitleLabel")
        self.cert_badge = QLabel("", top_bg)
        self.cert_badge.setObjectName("CertificationBadge")
        top_layout = QHBoxLayout(top_bg)
        top_layout.setContentsMargins(12, 8, 16, 16)
        top_layout.setSpacing(10)
        top_layout.addWidget(self.back_btn)
        top_layout.addWidget(self.title_label)
        top_layout.addWidget(self.cert_badge)
        top_layout.addStretch()

        self.center_controls = OverlayWindow(self)
        self.center_controls.panel.setStyleSheet(CENTER_CONTROLS_STYLE)
        self.skip_back_btn = IconButton(
            tooltip=tr("Skip back {} seconds", self.skip_seconds),
            icon=icon_skip_back(44, seconds=self.skip_seconds),
            parent=self.center_controls.panel,
        )
        self.skip_back_btn.clicked.connect(lambda: self.skip(-1))
        self.play_btn = IconButton(tooltip=tr("Play / Pause"), parent=self.center_controls.panel)
        self.play_btn.clicked.connect(self.toggle_play)
        self.skip_forward_btn = IconButton(
            tooltip=tr("Skip forward {} seconds", self.skip_seconds),
            icon=icon_skip_forward(44, seconds=self.skip_seconds),
            parent=self.center_controls.panel,
        )
        self.skip_forward_btn.clicked.connect(lambda: self.skip(1))
        center_layout = QHBoxLayout(self.center_controls.panel)
        center_layout.setContentsMargins(0, 0, 0, 0)
        center_layout.setSpacing(36)
        center_layout.addWidget(self.skip_back_btn)
        center_layout.addWidget(self.play_btn)
        center_layout.addWidget(self.skip_forward_btn)
        self.center_controls.setFixedSize(320, 96)

        self.control_bar = OverlayWindow(self)
        bar_bg = _styled_background(self.control_bar.panel, "ControlBarBg")
        self.control_bar.panel.setStyleSheet(CONTROL_BAR_STYLE)
        self.seek_bar = SeekBar(bar_bg)
        self.seek_bar.seekRequested.connect(self._on_seek_requested)
        self.seek_bar.dragStarted.connect(self.auto_hide.register_interaction)
        self.seek_bar.dragFinished.connect(self._on_seek_finished)
        self.time_label = QLabel("0:00 / 0:00", bar_bg)
        self.time_label.setObjectName("TimeLabel")
        self.time_label.setMinimumWidth(96)
        self.time_label.setAlignment(Qt.AlignRight | Qt.AlignVCenter)

        self.volume_btn = CaptionedButton(tr("Volume"), parent=bar_bg)
        self.volume_btn.clicked.connect(lambda: self.toggle_panel(PANEL_VOLUME))
        self.quality_btn = CaptionedButton(tr("Settings"), icon_settings(22), parent=bar_bg)
        self.quality_btn.clicked.connect(lambda: self.toggle_panel(PANEL_QUALITY))
        self.speed_btn = CaptionedButton(tr("Speed"), icon_gauge(22), parent=bar_bg)
        self.speed_btn.clicked.connect(lambda: self.toggle_panel(PANEL_SPEED))
        self.fullscreen_btn = CaptionedButton(tr("Full Screen"), icon_fullscreen(22), parent=bar_bg)
        self.fullscreen_btn.clicked.connect(self.toggle_fullscreen)

        seek_row = QHBoxLayout()
        seek_row.setSpacing(12)
        seek_row.addWidget(self.seek_bar, 1)
        seek_row.addWidget(self.time_label)
        button_row = QHBoxLayout()
        button_row.setSpacing(18)
        button_row.addWidget(self.volume_btn)
        button_row.addStretch()
        button_row.addWidget(self.quality_btn)
        button_row.addWidget(self.speed_btn)
        button_row.addWidget(self.fullscreen_btn)
        bar_layout = QVBoxLayout(bar_bg)
        bar_layout.setContentsMargins(20, 16, 20, 10)
        bar_layout.setSpacing(6)
        bar_layout.addLayout(seek_row)
        bar_layout.addLayout(button_row)

        self.volume_panel = VolumePanel(self)
        self.volume_panel.volumeRequested.connect(self.set_volume)
        self.quality_panel = QualityPanel(self)
        self.quality_panel.qualitySelected.connect(self.select_quality)
        self.quality_panel.closeRequested.connect(self.close_panel)
        self.speed_panel = SpeedPanel(self, self.speed)
        self.speed_panel.rateApplied.connect(self.apply_speed)
        self.speed_panel.closeRequested.connect(self.close_panel)
        self._panel_windows = {
            PANEL_VOLUME: self.volume_panel,
            PANEL_QUALITY: self.quality_panel,
            PANEL_SPEED: self.speed_panel,
        }

        self.status_pill = PillOverlayWindow(self)

    def _overlay_windows(self):
        return [
            self.top_bar,
            self.center_controls,
            self.control_bar,
            self.volume_panel,
            self.quality_panel,
            self.speed_panel,
            self.status_pill,
        ]

    # Public state

    @property
    def controls_visible(self) -> bool:
        return self.auto_hide.is_visible

    @property
    def active_panel(self) -> str:
        return self.panels.active

    @property
    def is_fullscreen(self) -> bool:
        return self.session.is_fullscreen

    def set_title(self, title: str, certification: str = ""):
        self.title_label.setText(str(title or ""))
        self.cert_badge.setText(str(certification or ""))
        self.cert_badge.setVisible(bool(certification))

    def set_source(self, source_url: str):
        self.close_panel()
        self.session.reset(source_url)
        self.speed.applied = NORMAL_RATE
        self.speed.open()
        self.quality_levels = []
        self.quality_panel.set_levels([], QUALITY_AUTO)
        self.seek_bar.drag.end()
        self.update_ui()

        try:
            self.engine.initialize(source_url, wid=int(self.video_container.winId()))
        except Exception as e:
            logging.error("Failed to start playback for %s: %s", source_url, e)
            self.show_status_overlay(tr("Playback failed: {}", e))
            return
        self.auto_hide.register_interaction()

    # Engine events

    def _on_playing_changed(self, playing: bool):
        self.session.is_playing = bool(playing)
        self.update_transport_icons()

    def _on_position_changed(self, seconds: float):
        self.session.set_current_time(seconds)
        self.update_progress()

    def _on_duration_changed(self, seconds: float):
        self.session.set_duration(seconds)
        self.update_progress()

    def _on_volume_changed(self, volume: float, muted: bool):
        self.session.set_volume(volume, muted)
        self.volume_panel.set_volume(self.session.effective_volume)
        self.update_volume_icon()

    def _on_rate_changed(self, rate: float):
        self.session.playback_rate = float(rate)
        if self.panels.active != PANEL_SPEED:
            self.speed.applied = self.session.playback_rate
            self.speed.open()

    def _on_quality_levels_changed(self, levels):
        self.quality_levels = list(levels)
        values = {level.value for level in self.quality_levels}
        if self.session.quality != QUALITY_AUTO and self.session.quality not in values:
            self.session.quality = QUALITY_AUTO
        self.quality_panel.set_levels(self.quality_levels, self.session.quality)
        self.update_quality_badge()

    def _on_playback_failed(self, message: str):
        self.session.is_playing = False
        self.update_transport_icons()
        self.show_status_overlay(tr("Playback failed: {}", message))

    def _on_seek_requested(self, ratio: float):
        self.auto_hide.register_interaction()
        if self.session.duration <= 0:
            # Nothing to seek into yet; the bar stays empty.
            self.seek_bar.set_progress(0.0)
        self.engine.seek_absolute(ratio)

    def _on_seek_finished(self, _ratio: float):
        self.auto_hide.register_interaction()
        self.update_progress()

    # Commands

    def toggle_play(self):
        self.show_status_overlay(tr("Paused") if self.session.is_playing else tr("Playing"))
        self.engine.toggle_play()
        self.auto_hide.register_interaction()

    def skip(self, direction: int):
        delta = self.skip_seconds if direction > 0 else -self.skip_seconds
        self.engine.skip_relative(delta)
        self.show_status_overlay(tr("Seek {}s", f"{delta:+d}"))
        self.auto_hide.register_interaction()

    def set_volume(self, volume: float):
        self.engine.set_volume(volume)

    def adjust_volume(self, delta: float):
        target = clamp(self.session.effective_volume + delta, 0.0, 1.0)
        self.engine.set_volume(target)
        self.show_status_overlay(tr("Volume: {}%", int(round(target * 100))))

    def toggle_mute(self):
        self.show_status_overlay(tr("Unmuted") if self.session.is_muted else tr("Muted"))
        self.engine.toggle_mute()

    def select_quality(self, value: str):
        if not self.engine.select_quality(value):
            logging.info("Quality %s not applied, keeping %s", value, self.session.quality)
            self.quality_panel.mark_current(self.session.quality)
            return
        self.session.quality = value
        self.quality_panel.mark_current(value)
        self.update_quality_badge()
        label = tr("Auto") if value == QUALITY_AUTO else value
        self.show_status_overlay(tr("Quality: {}", label))

    def apply_speed(self, rate: float):
        self.engine.set_playback_rate(rate)
        self.session.playback_rate = float(rate)
        self.show_status_overlay(tr("Speed: {}", format_rate(rate)))

    def toggle_panel(self, name: str):
        previous = self.panels.active
        self.panels.toggle(name)
        self._on_panel_changed(previous)

    def close_panel(self) -> bool:
        previous = self.panels.active
        if not self.panels.close():
            return False
        self._on_panel_changed(previous)
        return True

    def _on_panel_changed(self, previous: str):
        active = self.panels.active
        if previous == PANEL_SPEED and active != PANEL_SPEED:
            self.speed_panel.discard()
        if active == PANEL_SPEED:
            self.speed_panel.open_with(self.speed.applied)
        elif active == PANEL_QUALITY:
            self.quality_panel.set_levels(self.quality_levels, self.session.quality)
        elif active == PANEL_VOLUME:
            self.volume_panel.set_volume(self.session.effective_volume)
        self.auto_hide.on_panel_change(active)
        self._sync_panel_windows()

    def handle_tap(self):
        """Tap on the video: an open panel wins over play/pause."""
        if self.close_panel():
            self.auto_hide.register_interaction()
            return
        self.toggle_play()

    def handle_escape(self):
        if self.close_panel():
            return
        if self.session.is_fullscreen:
            self.toggle_fullscreen()
            return
        self.request_close()

    def toggle_fullscreen(self):
        window = self.window()
        target = not window.isFullScreen()
        logging.info("Fullscreen requested: %s", target)
        self._fullscreen_target = target
        if target:
            window.showFullScreen()
        else:
            window.showNormal()
        self._sync_fullscreen_state()
        self._fullscreen_timer.start()
        self.auto_hide.register_interaction()

    def _verify_fullscreen(self):
        target = self._fullscreen_target
        self._fullscreen_target = None
        if target is None:
            return
        if self.window().isFullScreen() != target:
            logging.warning("Fullscreen request not honoured (wanted %s)", target)
        self._sync_fullscreen_state()

    def _sync_fullscreen_state(self):
        fullscreen = self.window().isFullScreen()
        if fullscreen == self.session.is_fullscreen:
            return
        self.session.is_fullscreen = fullscreen
        self.update_fullscreen_icon()
        self._sync_overlay_geometry()

    def request_close(self):
        logging.info("Player close requested")
        self.closeRequested.emit()

    # Visual state

    def update_ui(self):
        self.update_transport_icons()
        self.update_progress()
        self.update_volume_icon()
        self.update_quality_badge()
        self.update_fullscreen_icon()

    def update_transport_icons(self):
        self.play_btn.set_pixmap(icon_pause(44) if self.session.is_playing else icon_play(44))

    def update_progress(self):
        if not self.seek_bar.is_dragging():
            self.seek_bar.set_progress(self.session.progress_percent)
        self.time_label.setText(
            f"{format_time(self.session.current_time)} / {format_time(self.session.duration)}"
        )

    def update_volume_icon(self):
        level = self.session.effective_volume
        if level <= 0:
            self.volume_btn.set_pixmap(icon_volume_muted(22))
        else:
            self.volume_btn.set_pixmap(icon_volume(22, level=level))

    def update_quality_badge(self):
        self.quality_btn.set_badge(tr("HD") if is_hd_quality(self.session.quality) else "")

    def update_fullscreen_icon(self):
        if self.session.is_fullscreen:
            self.fullscreen_btn.set_pixmap(icon_exit_fullscreen(22))
            self.fullscreen_btn.set_caption(tr("Exit"))
        else:
            self.fullscreen_btn.set_pixmap(icon_fullscreen(22))
            self.fullscreen_btn.set_caption(tr("Full Screen"))

    def _status_timeout_for_text(self, text: str) -> int:
        msg = str(text or "").casefold()
        if any(hint in msg for hint in ("failed", "error", "not available")):
            return self._status_error_ms
        return self._status_default_ms

    def show_status_overlay(self, text: str, duration_ms: int | None = None):
        self.status_pill.label.setText(text)
        self._sync_status_geometry()
        if self.isVisible():
            self.status_pill.show()
            self.status_pill.raise_()
        timeout_ms = duration_ms if duration_ms is not None else self._status_timeout_for_text(text)
        self.status_timer.start(int(timeout_ms))

    def _apply_controls_visibility(self, visible: bool):
        self.video_container.setCursor(Qt.ArrowCursor if visible else Qt.BlankCursor)
        if not self.isVisible() or self._is_shut_down:
            return
        for win in (self.top_bar, self.center_controls, self.control_bar):
            if visible:
                win.show()
                win.raise_()
            else:
                win.hide()
        self._sync_panel_windows()

    def _sync_panel_windows(self):
        active = self.panels.active
        for name, win in self._panel_windows.items():
            if name == active and self.isVisible() and not self._is_shut_down:
                self._sync_overlay_geometry()
                win.show()
                win.raise_()
            else:
                win.hide()

    # Geometry

    def _sync_overlay_geometry(self):
        origin = self.mapToGlobal(QPoint(0, 0))
        x, y, w, h = origin.x(), origin.y(), self.width(), self.height()

        self.top_bar.setGeometry(x, y, w, TOP_BAR_HEIGHT)
        cw, ch = self.center_controls.width(), self.center_controls.height()
        self.center_controls.setGeometry(x + (w - cw) // 2, y + (h - ch) // 2, cw, ch)
        bar_top = y + h - CONTROL_BAR_HEIGHT
        self.control_bar.setGeometry(x, bar_top, w, CONTROL_BAR_HEIGHT)
        self.speed_panel.setGeometry(x, y, w, h)

        vol = self.volume_btn.mapToGlobal(QPoint(0, 0))
        vw, vh = self.volume_panel.width(), self.volume_panel.height()
        vx = vol.x() + (self.volume_btn.width() - vw) // 2
        self.volume_panel.move(max(x, vx), bar_top - vh - PANEL_GAP + 16)

        qual = self.quality_btn.mapToGlobal(QPoint(0, 0))
        qw, qh = self.quality_panel.width(), self.quality_panel.height()
        qx = min(qual.x() + self.quality_btn.width() - qw, x + w - qw - 16)
        self.quality_panel.move(max(x, qx), bar_top - qh - PANEL_GAP + 16)

        self._sync_status_geometry()

    def _sync_status_geometry(self):
        metrics = self.status_pill.label.fontMetrics()
        text = self.status_pill.label.text()
        width = max(112, (metrics.horizontalAdvance(text) if text else 0) + 40)
        height = 42
        origin = self.mapToGlobal(QPoint(0, 0))
        self.status_pill.setGeometry(
            origin.x() + (self.width() - width) // 2, origin.y() + TOP_BAR_HEIGHT + 8, width, height
        )

    def resizeEvent(self, event):
        self.video_container.setGeometry(0, 0, self.width(), self.height())
        self._sync_overlay_geometry()
        super().resizeEvent(event)

    def moveEvent(self, event):
        self._sync_overlay_geometry()
        super().moveEvent(event)

    # Input

    def check_mouse_pos(self):
        # The native mpv surface swallows mouse moves, so the cursor is polled.
        pos = QCursor.pos()
        if pos == self._last_cursor_pos:
            return
        self._last_cursor_pos = pos
        if self.rect().contains(self.mapFromGlobal(pos)):
            self.auto_hide.register_interaction()

    def mouseMoveEvent(self, event):
        self.auto_hide.register_interaction()
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event):
        if event.button() == Qt.LeftButton:
            self.handle_tap()
            event.accept()
            return
        super().mouseReleaseEvent(event)

    def keyPressEvent(self, event):
        key = event.key()
        if key == Qt.Key_Space:
            self.toggle_play()
        elif key == Qt.Key_Left:
            self.skip(-1)
        elif key == Qt.Key_Right:
            self.skip(1)
        elif key == Qt.Key_Up:
            self.adjust_volume(VOLUME_KEY_STEP)
        elif key == Qt.Key_Down:
            self.adjust_volume(-VOLUME_KEY_STEP)
        elif key == Qt.Key_M:
            self.toggle_mute()
        elif key == Qt.Key_F:
            self.toggle_fullscreen()
        elif key == Qt.Key_Escape:
            self.handle_escape()
        else:
            super().keyPressEvent(event)
            return
        if not self._is_shut_down:
            self.auto_hide.register_interaction()
        event.accept()

    def eventFilter(self, obj, event):
        etype = event.type()
        if obj is self._host_window:
            if etype == QEvent.WindowStateChange:
                self._sync_fullscreen_state()
            elif etype in (QEvent.Move, QEvent.Resize):
                self._sync_overlay_geometry()
        elif obj is self.video_container:
            if etype == QEvent.MouseButtonRelease and event.button() == Qt.LeftButton:
                self.handle_tap()
                return True
            if etype == QEvent.MouseMove:
                self.auto_hide.register_interaction()
        return super().eventFilter(obj, event)

    def changeEvent(self, event):
        # Covers the standalone case, where the widget is its own window.
        if event.type() == QEvent.WindowStateChange:
            self._sync_fullscreen_state()
        super().changeEvent(event)

    def _attach_host_window(self):
        window = self.window()
        if window is self._host_window:
            return
        if self._host_window is not None:
            self._host_window.removeEventFilter(self)
        self._host_window = window
        if window is not self:
            window.installEventFilter(self)

    # Lifecycle

    def showEvent(self, event):
        super().showEvent(event)
        if self._is_shut_down:
            return
        self._attach_host_window()
        self._sync_fullscreen_state()
        self._sync_overlay_geometry()
        self.mouse_timer.start()
        self.auto_hide.start()
        self._apply_controls_visibility(self.auto_hide.is_visible)
        self.setFocus()

    def hideEvent(self, event):
        super().hideEvent(event)
        self.mouse_timer.stop()
        for win in self._overlay_windows():
            win.hide()

    def shutdown(self):
        if self._is_shut_down:
            return
        self._is_shut_down = True
        logging.info("Player shutdown: url=%s", self.session.source_url)

        self.mouse_timer.stop()
        self.status_timer.stop()
        self._fullscreen_timer.stop()
        self.auto_hide.stop()
        self.panels.close()
        self.engine.dispose()
        if self._host_window is not None:
            self._host_window.removeEventFilter(self)
            self._host_window = None
        for win in self._overlay_windows():
            win.close()

    def closeEvent(self, event):
        self.shutdown()
        super().closeEvent(event)


class PlayerDialog(QDialog):
    """Modal host for a PlayerWidget. Closes when the player asks to."""

    def __init__(
        self,
        source_url: str,
        title: str = "",
        certification: str = "",
        config: dict | None = None,
        engine: PlaybackEngine | None = None,
        parent=None,
    ):
        super().__init__(parent)
        self.setWindowTitle(title or tr("Video Player"))
        self.setWindowIcon(get_app_icon())
        self.setModal(True)
        self.setMinimumSize(720, 405)
        self.resize(1280, 720)
        palette = self.palette()
        palette.setColor(self.backgroundRole(), QColor(0, 0, 0))
        self.setPalette(palette)

        self.player = PlayerWidget(
            source_url,
            title=title,
            certification=certification,
            on_close_requested=self.close,
            config=config,
            engine=engine,
            parent=self,
        )
        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.player)

    def keyPressEvent(self, event):
        # QDialog would reject() on Escape; the player decides what Escape does.
        self.player.keyPressEvent(event)

    def reject(self):
        self.player.shutdown()
        super().reject()

    def closeEvent(self, event):
        self.player.shutdown()
        super().closeEvent(event)
