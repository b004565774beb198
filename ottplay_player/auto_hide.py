from PySide6.QtCore import QObject, QTimer, Signal

from .logic import PANEL_NONE

DEFAULT_HIDE_DELAY_MS = 3500


class AutoHideController(QObject):
    """Hides the player chrome after a quiet period.

    Any interaction shows the chrome and restarts the countdown. While a
    panel is open the chrome stays visible and the countdown is suspended.
    """

    visibilityChanged = Signal(bool)

    def __init__(self, delay_ms: int = DEFAULT_HIDE_DELAY_MS, parent=None):
        super().__init__(parent)
        self._visible = True
        self._panel = PANEL_NONE
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(int(delay_ms))
        self._timer.timeout.connect(self._on_timeout)

    @property
    def is_visible(self) -> bool:
        return self._visible

    @property
    def delay_ms(self) -> int:
        return self._timer.interval()

    @property
    def countdown_active(self) -> bool:
        return self._timer.isActive()

    def start(self):
        self.register_interaction()

    def stop(self):
        self._timer.stop()

    def register_interaction(self):
        self._set_visible(True)
        if self._panel != PANEL_NONE:
            return
        self._timer.start()

    def on_panel_change(self, panel: str):
        self._panel = panel or PANEL_NONE
        if self._panel != PANEL_NONE:
            self._timer.stop()
            self._set_visible(True)
        else:
            self.register_interaction()

    def _on_timeout(self):
        if self._panel != PANEL_NONE:
            return
        self._set_visible(False)

    def _set_visible(self, visible: bool):
        if visible == self._visible:
            return
        self._visible = visible
        self.visibilityChanged.emit(visible)
