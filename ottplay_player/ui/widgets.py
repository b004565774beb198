from PySide6.QtCore import QRectF, QSize, Qt, Signal
from PySide6.QtGui import QColor, QIcon, QPainter, QPainterPath
from PySide6.QtWidgets import (
    QLabel,
    QPushButton,
    QSlider,
    QVBoxLayout,
    QWidget,
)

from ..logic import SeekDrag
from .styles import PILL_LABEL_STYLE


class IconButton(QPushButton):
    def __init__(self, tooltip=None, icon=None, parent=None):
        super().__init__(parent)
        self.setFocusPolicy(Qt.NoFocus)
        self.setCursor(Qt.PointingHandCursor)
        if tooltip:
            self.setToolTip(tooltip)
        if icon is not None:
            self.set_pixmap(icon)

    def set_pixmap(self, pixmap):
        self.setIcon(pixmap if isinstance(pixmap, QIcon) else QIcon(pixmap))


class CaptionedButton(QWidget):
    """Icon button with a small caption underneath, as used on the control bar."""

    clicked = Signal()

    def __init__(self, caption: str, icon=None, parent=None):
        super().__init__(parent)
        self.button = IconButton(tooltip=caption, icon=icon, parent=self)
        self.button.clicked.connect(self.clicked)
        self.caption = QLabel(caption, self)
        self.caption.setObjectName("ButtonCaption")
        self.caption.setAlignment(Qt.AlignCenter)
        self.badge = QLabel("", self)
        self.badge.setObjectName("HdBadge")
        self.badge.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.badge.hide()

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)
        layout.addWidget(self.button, 0, Qt.AlignHCenter)
        layout.addWidget(self.caption)

    def set_pixmap(self, pixmap):
        self.button.set_pixmap(pixmap)

    def set_caption(self, text: str):
        self.caption.setText(text)
        self.button.setToolTip(text)

    def set_badge(self, text: str):
        self.badge.setText(text)
        self.badge.setVisible(bool(text))
        if text:
            self.badge.adjustSize()
            self.badge.move(self.width() - self.badge.width(), 0)
            self.badge.raise_()

    def resizeEvent(self, event):
        super().resizeEvent(event)
        if self.badge.isVisible():
            self.badge.move(self.width() - self.badge.width(), 0)


class ClickableSlider(QSlider):
    def mousePressEvent(self, event):
        if event.button() == Qt.LeftButton:
            if self.orientation() == Qt.Vertical:
                # Bottom=Min, Top=Max
                y = event.position().y()
                h = max(1, self.height())
                pos_ratio = y / h if self.invertedAppearance() else 1.0 - (y / h)
            else:
                x = event.position().x()
                w = max(1, self.width())
                pos_ratio = 1.0 - (x / w) if self.invertedAppearance() else x / w

            pos_ratio = max(0.0, min(1.0, pos_ratio))
            val_range = self.maximum() - self.minimum()
            new_val = self.minimum() + (val_range * pos_ratio)
            self.setValue(int(round(new_val)))
            self.sliderMoved.emit(self.value())

        super().mousePressEvent(event)


class SeekBar(QWidget):
    """Horizontal progress track. A press starts a drag-seek that follows the
    pointer until release."""

    seekRequested = Signal(float)
    dragStarted = Signal()
    dragFinished = Signal(float)

    TRACK_HEIGHT = 4
    THUMB_SIZE = 16

    def __init__(self, parent=None):
        super().__init__(parent)
        self.drag = SeekDrag()
        self._percent = 0.0
        self.setMinimumHeight(self.THUMB_SIZE + 4)
        self.setCursor(Qt.PointingHandCursor)
        self.setMouseTracking(True)

    @property
    def percent(self) -> float:
        return self._percent

    def is_dragging(self) -> bool:
        return self.drag.active

    def set_progress(self, percent: float):
        value = max(0.0, min(100.0, float(percent)))
        if value == self._percent:
            return
        self._percent = value
        self.update()

    def _track_x(self, x: float) -> float:
        return x - self.THUMB_SIZE / 2.0

    def _track_width(self) -> float:
        return max(1.0, self.width() - self.THUMB_SIZE)

    def mousePressEvent(self, event):
        if event.button() != Qt.LeftButton:
            super().mousePressEvent(event)
            return
        ratio = self.drag.begin(self._track_x(event.position().x()), self._track_width())
        self.dragStarted.emit()
        self.set_progress(ratio * 100.0)
        self.seekRequested.emit(ratio)
        event.accept()

    def mouseMoveEvent(self, event):
        ratio = self.drag.move(self._track_x(event.position().x()), self._track_width())
        if ratio is None:
            super().mouseMoveEvent(event)
            return
        self.set_progress(ratio * 100.0)
        self.seekRequested.emit(ratio)
        event.accept()

    def mouseReleaseEvent(self, event):
        ratio = self.drag.end()
        if ratio is None:
            super().mouseReleaseEvent(event)
            return
        self.dragFinished.emit(ratio)
        event.accept()

    def sizeHint(self):
        return QSize(320, self.THUMB_SIZE + 4)

    def paintEvent(self, _event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)
        painter.setPen(Qt.NoPen)

        left = self.THUMB_SIZE / 2.0
        width = self._track_width()
        cy = self.height() / 2.0
        track = QRectF(left, cy - self.TRACK_HEIGHT / 2.0, width, self.TRACK_HEIGHT)

        painter.setBrush(QColor(255, 255, 255, 64))
        painter.drawRoundedRect(track, 2, 2)

        fill_w = width * self._percent / 100.0
        painter.setBrush(QColor(255, 255, 255))
        painter.drawRoundedRect(QRectF(track.left(), track.top(), fill_w, track.height()), 2, 2)

        r = self.THUMB_SIZE / 2.0
        painter.drawEllipse(QRectF(left + fill_w - r, cy - r, self.THUMB_SIZE, self.THUMB_SIZE))
        painter.end()


class RoundedPanel(QWidget):
    def __init__(self, parent=None, radius: int = 16, bg: QColor | None = None):
        super().__init__(parent)
        self.radius = radius
        self.bg = bg if bg is not None else QColor(18, 18, 18, 150)
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WA_NoSystemBackground, True)

    def paintEvent(self, _event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.Antialiasing, True)

        path = QPainterPath()
        if self.radius <= 0:
            path.addRect(QRectF(self.rect()))
        else:
            path.addRoundedRect(QRectF(self.rect()).adjusted(0.5, 0.5, -0.5, -0.5), self.radius, self.radius)

        painter.setClipPath(path)
        painter.setPen(Qt.NoPen)
        painter.setBrush(self.bg)
        painter.drawPath(path)


class OverlayWindow(QWidget):
    """Frameless tool window floated above the native video surface.

    mpv renders into its own native window, so chrome drawn as ordinary child
    widgets would be painted over.
    """

    def __init__(self, owner: QWidget, radius: int = 0, bg: QColor | None = None):
        super().__init__(owner)
        self.owner = owner
        self.setWindowFlags(Qt.FramelessWindowHint | Qt.Tool)
        self.setAttribute(Qt.WA_TranslucentBackground, True)
        self.setAttribute(Qt.WA_ShowWithoutActivating, True)
        self.setAutoFillBackground(False)
        self.setMouseTracking(True)

        self.panel = RoundedPanel(self, radius=radius, bg=bg if bg is not None else QColor(0, 0, 0, 0))
        self.panel.setObjectName("Panel")

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.panel.setGeometry(self.rect())

    def keyPressEvent(self, event):
        # Shortcuts belong to the player even while an overlay has focus.
        self.owner.keyPressEvent(event)


class PillOverlayWindow(OverlayWindow):
    def __init__(self, owner: QWidget):
        super().__init__(owner, radius=21, bg=QColor(18, 18, 18, 175))
        self.setAttribute(Qt.WA_TransparentForMouseEvents, True)
        self.label = QLabel("", self.panel)
        self.label.setAlignment(Qt.AlignCenter)
        self.label.setStyleSheet(PILL_LABEL_STYLE)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.label.setGeometry(self.panel.rect())
