from PySide6.QtCore import Qt, Signal
from PySide6.QtGui import QColor
from PySide6.QtWidgets import (
    QFrame,
    QHBoxLayout,
    QLabel,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from ..i18n import tr
from ..logic import QUALITY_AUTO, SpeedSelection, quality_options, quality_height, HD_MIN_HEIGHT
from ..utils import NORMAL_RATE, RATE_STEPS, format_rate
from .icons import icon_check, icon_close, icon_gauge
from .styles import PANEL_STYLE
from .widgets import ClickableSlider, IconButton, OverlayWindow


def rate_label(rate: float) -> str:
    if rate == NORMAL_RATE:
        return tr("{}x (Normal)", 1)
    return format_rate(rate)


def _divider(parent: QWidget) -> QFrame:
    line = QFrame(parent)
    line.setFixedHeight(1)
    line.setStyleSheet("background: rgba(255,255,255,25);")
    return line


class OptionRow(QPushButton):
    """One selectable line in a panel: label, optional badge, check mark."""

    def __init__(self, value, label: str, badge: str = "", parent=None):
        super().__init__(parent)
        self.value = value
        self.setObjectName("OptionRow")
        self.setFocusPolicy(Qt.NoFocus)
        self.setCursor(Qt.PointingHandCursor)
        self.setMinimumHeight(40)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 0, 16, 0)
        layout.setSpacing(8)
        self.text_label = QLabel(label, self)
        self.text_label.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        layout.addWidget(self.text_label)
        if badge:
            self.badge = QLabel(badge, self)
            self.badge.setObjectName("HdBadge")
            self.badge.setAttribute(Qt.WA_TransparentForMouseEvents, True)
            layout.addWidget(self.badge)
        layout.addStretch()
        self.check = QLabel(self)
        self.check.setPixmap(icon_check(16))
        self.check.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        layout.addWidget(self.check)
        self.set_selected(False)

    def set_selected(self, selected: bool):
        self.setProperty("selected", "true" if selected else "false")
        self.check.setVisible(selected)
        color = "#22c55e" if selected else "rgba(255,255,255,205)"
        self.text_label.setStyleSheet(f"color: {color}; font-size: 13px;")

    def is_selected(self) -> bool:
        return self.property("selected") == "true"


class PanelHeader(QWidget):
    closeRequested = Signal()

    def __init__(self, title: str, icon=None, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(16, 8, 8, 8)
        layout.setSpacing(10)
        if icon is not None:
            glyph = QLabel(self)
            glyph.setPixmap(icon)
            layout.addWidget(glyph)
        self.title = QLabel(title, self)
        self.title.setObjectName("PanelTitle")
        layout.addWidget(self.title, 1)
        self.close_btn = IconButton(tooltip=tr("Close"), icon=icon_close(18), parent=self)
        self.close_btn.clicked.connect(self.closeRequested)
        layout.addWidget(self.close_btn)


class VolumePanel(OverlayWindow):
    """Vertical volume slider. Dragging never closes the panel."""

    volumeRequested = Signal(float)

    TRACK_HEIGHT = 120

    def __init__(self, owner: QWidget):
        super().__init__(owner, radius=12, bg=QColor(22, 18, 38, 247))
        self.panel.setStyleSheet(PANEL_STYLE)

        self.slider = ClickableSlider(Qt.Vertical, self.panel)
        self.slider.setRange(0, 100)
        self.slider.setValue(100)
        self.slider.setFixedHeight(self.TRACK_HEIGHT)
        self.slider.setFocusPolicy(Qt.NoFocus)
        self.slider.valueChanged.connect(self._on_value_changed)

        self.value_label = QLabel("100", self.panel)
        self.value_label.setAlignment(Qt.AlignCenter)
        self.value_label.setStyleSheet("color: rgba(255,255,255,200); font-size: 11px;")

        layout = QVBoxLayout(self.panel)
        layout.setContentsMargins(12, 16, 12, 12)
        layout.setSpacing(6)
        layout.addWidget(self.slider, 0, Qt.AlignHCenter)
        layout.addWidget(self.value_label)
        self.setFixedSize(52, self.TRACK_HEIGHT + 56)

    def set_volume(self, volume: float):
        pct = int(round(max(0.0, min(1.0, float(volume))) * 100))
        self.slider.blockSignals(True)
        self.slider.setValue(pct)
        self.slider.blockSignals(False)
        self.value_label.setText(str(pct))

    def _on_value_changed(self, value: int):
        self.value_label.setText(str(value))
        self.volumeRequested.emit(value / 100.0)


class QualityPanel(OverlayWindow):
    """Rendition picker. Choosing an option applies it and closes the panel."""

    qualitySelected = Signal(str)
    closeRequested = Signal()

    def __init__(self, owner: QWidget):
        super().__init__(owner, radius=12, bg=QColor(28, 22, 48, 250))
        self.panel.setStyleSheet(PANEL_STYLE)
        self.rows: dict[str, OptionRow] = {}
        self.current = QUALITY_AUTO

        self.header = PanelHeader(tr("Quality"), parent=self.panel)
        self.header.closeRequested.connect(self.closeRequested)

        self._list = QWidget(self.panel)
        self._list_layout = QVBoxLayout(self._list)
        self._list_layout.setContentsMargins(0, 0, 0, 6)
        self._list_layout.setSpacing(0)

        layout = QVBoxLayout(self.panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.header)
        layout.addWidget(_divider(self.panel))
        layout.addWidget(self._list)
        self.set_levels([], QUALITY_AUTO)

    def set_levels(self, levels, current: str):
        self.current = current
        while self._list_layout.count():
            item = self._list_layout.takeAt(0)
            widget = item.widget()
            if widget is not None:
                widget.deleteLater()
        self.rows = {}
        for value, label in quality_options(levels):
            if value == QUALITY_AUTO:
                label = tr("Auto")
            badge = tr("HD") if quality_height(value) >= HD_MIN_HEIGHT else ""
            row = OptionRow(value, label, badge, self._list)
            row.set_selected(value == current)
            row.clicked.connect(lambda _checked=False, v=value: self.choose(v))
            self._list_layout.addWidget(row)
            self.rows[value] = row
        self.setFixedSize(220, 56 + 40 * len(self.rows) + 8)

    def option_values(self) -> list[str]:
        return list(self.rows)

    def mark_current(self, value: str):
        self.current = value
        for row_value, row in self.rows.items():
            row.set_selected(row_value == value)

    def choose(self, value: str):
        # The owner marks the row once the engine has accepted the value.
        self.qualitySelected.emit(value)
        self.closeRequested.emit()


class SpeedPanel(OverlayWindow):
    """Rate picker with an explicit Apply. Choosing a rate only changes the
    pending value."""

    rateApplied = Signal(float)
    closeRequested = Signal()

    def __init__(self, owner: QWidget, selection: SpeedSelection | None = None):
        super().__init__(owner, radius=0, bg=QColor(0, 0, 0, 224))
        self.panel.setStyleSheet(PANEL_STYLE)
        self.selection = selection if selection is not None else SpeedSelection()
        self.rows: dict[float, OptionRow] = {}

        self.header = PanelHeader(tr("Playback Speed"), icon=icon_gauge(22), parent=self.panel)
        self.header.closeRequested.connect(self.cancel)

        rates = QWidget(self.panel)
        rates_layout = QVBoxLayout(rates)
        rates_layout.setContentsMargins(8, 4, 8, 4)
        rates_layout.setSpacing(0)
        for rate in RATE_STEPS:
            row = OptionRow(rate, rate_label(rate), parent=rates)
            row.clicked.connect(lambda _checked=False, r=rate: self.choose(r))
            rates_layout.addWidget(row)
            self.rows[rate] = row
        rates_layout.addStretch()

        footer = QWidget(self.panel)
        footer_layout = QHBoxLayout(footer)
        footer_layout.setContentsMargins(20, 12, 20, 16)
        footer_layout.setSpacing(12)
        self.cancel_btn = QPushButton(tr("Cancel"), footer)
        self.cancel_btn.setObjectName("CancelButton")
        self.cancel_btn.setFocusPolicy(Qt.NoFocus)
        self.cancel_btn.clicked.connect(self.cancel)
        self.apply_btn = QPushButton(tr("Apply"), footer)
        self.apply_btn.setObjectName("ApplyButton")
        self.apply_btn.setFocusPolicy(Qt.NoFocus)
        self.apply_btn.clicked.connect(self.apply)
        footer_layout.addWidget(self.cancel_btn, 1)
        footer_layout.addWidget(self.apply_btn, 1)

        layout = QVBoxLayout(self.panel)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.header)
        layout.addWidget(_divider(self.panel))
        layout.addWidget(rates, 1)
        layout.addWidget(_divider(self.panel))
        layout.addWidget(footer)
        self._refresh()

    @property
    def pending_rate(self) -> float:
        return self.selection.pending

    def open_with(self, applied_rate: float):
        self.selection.applied = applied_rate
        self.selection.open()
        self._refresh()

    def choose(self, rate: float):
        if self.selection.choose(rate):
            self._refresh()

    def apply(self):
        rate = self.selection.apply()
        self.rateApplied.emit(rate)
        self.closeRequested.emit()

    def cancel(self):
        self.discard()
        self.closeRequested.emit()

    def discard(self):
        self.selection.cancel()
        self._refresh()

    def _refresh(self):
        for rate, row in self.rows.items():
            row.set_selected(rate == self.selection.pending)
