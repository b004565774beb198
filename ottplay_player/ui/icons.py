import math
from PySide6.QtCore import Qt, QPointF, QRectF
from PySide6.QtGui import QColor, QBrush, QPainter, QPainterPath, QPixmap, QPen, QIcon, QFont

DEFAULT_COLOR = QColor(235, 235, 235)
ACCENT_COLOR = QColor(34, 197, 94)


def _canvas(size: int):
    pm = QPixmap(size, size)
    pm.fill(Qt.transparent)
    painter = QPainter(pm)
    painter.setRenderHint(QPainter.Antialiasing, True)
    return pm, painter


def _stroke(color: QColor, size: int, ratio: float = 0.08, minimum: float = 1.5) -> QPen:
    pen = QPen(color)
    pen.setWidthF(max(minimum, size * ratio))
    pen.setCapStyle(Qt.RoundCap)
    pen.setJoinStyle(Qt.RoundJoin)
    return pen


def icon_play(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(Qt.NoPen)
    painter.setBrush(QBrush(color))

    path = QPainterPath()
    pad = size * 0.25
    path.moveTo(pad, pad)
    path.lineTo(size - pad, size / 2.0)
    path.lineTo(pad, size - pad)
    path.closeSubpath()
    painter.drawPath(path)
    painter.end()
    return pm


def icon_pause(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(Qt.NoPen)
    painter.setBrush(QBrush(color))

    w = size * 0.20
    g = size * 0.15
    h = size * 0.60
    x_start = (size - (2 * w + g)) / 2.0
    y_start = (size - h) / 2.0
    painter.drawRoundedRect(QRectF(x_start, y_start, w, h), 1.5, 1.5)
    painter.drawRoundedRect(QRectF(x_start + w + g, y_start, w, h), 1.5, 1.5)
    painter.end()
    return pm


def _icon_skip(size: int, color: QColor, seconds: int, forward: bool) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(_stroke(color, size, 0.07))
    painter.setBrush(Qt.NoBrush)

    rect = QRectF(size * 0.14, size * 0.14, size * 0.72, size * 0.72)
    # Open circle with the gap at the top, arrow head on the gap side.
    start, span = (120, 300) if not forward else (60, -300)
    painter.drawArc(rect, start * 16, span * 16)

    angle = math.radians(start)
    cx, cy = rect.center().x(), rect.center().y()
    r = rect.width() / 2.0
    tip = QPointF(cx + r * math.cos(angle), cy - r * math.sin(angle))
    head = size * 0.12
    direction = 1 if forward else -1
    painter.drawLine(tip, QPointF(tip.x() - direction * head, tip.y() - head))
    painter.drawLine(tip, QPointF(tip.x() - direction * head, tip.y() + head * 0.6))

    font = QFont("Segoe UI")
    font.setPixelSize(max(6, int(size * 0.28)))
    font.setBold(True)
    painter.setFont(font)
    painter.setPen(color)
    painter.drawText(rect, Qt.AlignCenter, str(seconds))
    painter.end()
    return pm


def icon_skip_back(size: int = 18, color: QColor = DEFAULT_COLOR, seconds: int = 10) -> QPixmap:
    return _icon_skip(size, color, seconds, forward=False)


def icon_skip_forward(size: int = 18, color: QColor = DEFAULT_COLOR, seconds: int = 10) -> QPixmap:
    return _icon_skip(size, color, seconds, forward=True)


def icon_volume(size: int = 18, color: QColor = DEFAULT_COLOR, level: float = 1.0) -> QPixmap:
    pm, painter = _canvas(size)

    # Body
    path = QPainterPath()
    path.addRoundedRect(QRectF(size * 0.1, size * 0.35, size * 0.2, size * 0.3), 1, 1)
    path.moveTo(size * 0.3, size * 0.35)
    path.lineTo(size * 0.55, size * 0.15)
    path.lineTo(size * 0.55, size * 0.85)
    path.lineTo(size * 0.3, size * 0.65)
    painter.fillPath(path, color)

    pen = QPen(color, max(1.2, size * 0.07))
    pen.setCapStyle(Qt.RoundCap)
    painter.setPen(pen)
    painter.drawArc(QRectF(size * 0.4, size * 0.3, size * 0.3, size * 0.4), -45 * 16, 90 * 16)
    if level >= 0.5:
        painter.drawArc(QRectF(size * 0.35, size * 0.2, size * 0.5, size * 0.6), -45 * 16, 90 * 16)
    painter.end()
    return pm


def icon_volume_muted(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    path = QPainterPath()
    path.addRoundedRect(QRectF(size * 0.1, size * 0.35, size * 0.2, size * 0.3), 1, 1)
    path.moveTo(size * 0.3, size * 0.35)
    path.lineTo(size * 0.55, size * 0.15)
    path.lineTo(size * 0.55, size * 0.85)
    path.lineTo(size * 0.3, size * 0.65)
    painter.fillPath(path, color)

    painter.setPen(_stroke(color, size, 0.1, 1.6))
    painter.drawLine(QPointF(size * 0.64, size * 0.34), QPointF(size * 0.88, size * 0.66))
    painter.drawLine(QPointF(size * 0.88, size * 0.34), QPointF(size * 0.64, size * 0.66))
    painter.end()
    return pm


def icon_close(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(_stroke(color, size, 0.1, 1.8))
    pad = size * 0.25
    painter.drawLine(QPointF(pad, pad), QPointF(size - pad, size - pad))
    painter.drawLine(QPointF(size - pad, pad), QPointF(pad, size - pad))
    painter.end()
    return pm


def icon_back(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(_stroke(color, size, 0.1, 1.8))
    painter.drawPolyline([
        QPointF(size * 0.62, size * 0.2),
        QPointF(size * 0.32, size * 0.5),
        QPointF(size * 0.62, size * 0.8),
    ])
    painter.end()
    return pm


def icon_check(size: int = 18, color: QColor = ACCENT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(_stroke(color, size, 0.1, 1.8))
    painter.drawPolyline([
        QPointF(size * 0.2, size * 0.52),
        QPointF(size * 0.42, size * 0.74),
        QPointF(size * 0.8, size * 0.28),
    ])
    painter.end()
    return pm


def icon_gauge(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(_stroke(color, size, 0.08))
    rect = QRectF(size * 0.12, size * 0.18, size * 0.76, size * 0.76)
    painter.drawArc(rect, -20 * 16, 220 * 16)

    cx, cy = rect.center().x(), rect.center().y()
    needle = math.radians(45)
    length = rect.width() * 0.36
    painter.drawLine(
        QPointF(cx, cy),
        QPointF(cx + length * math.cos(needle), cy - length * math.sin(needle)),
    )
    painter.setBrush(QBrush(color))
    painter.drawEllipse(QPointF(cx, cy), size * 0.05, size * 0.05)
    painter.end()
    return pm


def icon_fullscreen(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(_stroke(color, size))

    pad = size * 0.25
    arm = size * 0.15
    far = size - pad
    for x, y, dx, dy in ((pad, pad, 1, 1), (far, pad, -1, 1), (pad, far, 1, -1), (far, far, -1, -1)):
        painter.drawLine(QPointF(x, y), QPointF(x + dx * arm, y))
        painter.drawLine(QPointF(x, y), QPointF(x, y + dy * arm))
    painter.end()
    return pm


def icon_exit_fullscreen(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    pen = _stroke(color, size)
    pen.setCapStyle(Qt.SquareCap)
    pen.setJoinStyle(Qt.MiterJoin)
    painter.setPen(pen)

    c = size / 2.0
    gap = size * 0.12
    arm = size * 0.25
    for sx, sy in ((-1, -1), (1, -1), (-1, 1), (1, 1)):
        painter.drawPolyline([
            QPointF(c + sx * (gap + arm), c + sy * gap),
            QPointF(c + sx * gap, c + sy * gap),
            QPointF(c + sx * gap, c + sy * (gap + arm)),
        ])
    painter.end()
    return pm


def icon_settings(size: int = 18, color: QColor = DEFAULT_COLOR) -> QPixmap:
    pm, painter = _canvas(size)
    painter.setPen(Qt.NoPen)
    painter.setBrush(QBrush(color))

    cx, cy = size / 2, size / 2
    outer_r = size * 0.45
    inner_r = size * 0.32
    hole_r = size * 0.18

    path = QPainterPath()
    num_teeth = 8
    for i in range(num_teeth):
        angle_deg = i * (360 / num_teeth)
        corners = [
            (inner_r, math.radians(angle_deg - 12)),
            (outer_r, math.radians(angle_deg - 8)),
            (outer_r, math.radians(angle_deg + 8)),
            (inner_r, math.radians(angle_deg + 12)),
        ]
        for idx, (radius, angle) in enumerate(corners):
            point = QPointF(cx + radius * math.cos(angle), cy + radius * math.sin(angle))
            if i == 0 and idx == 0:
                path.moveTo(point)
            else:
                path.lineTo(point)
    path.closeSubpath()

    hole_path = QPainterPath()
    hole_path.addEllipse(cx - hole_r, cy - hole_r, hole_r * 2, hole_r * 2)
    painter.drawPath(path.subtracted(hole_path))
    painter.end()
    return pm


def get_app_icon() -> QIcon:
    icon = QIcon()
    for size in (16, 32, 64, 128):
        pm, painter = _canvas(size)
        painter.setPen(Qt.NoPen)
        painter.setBrush(QBrush(QColor(168, 85, 247)))
        painter.drawRoundedRect(QRectF(0, 0, size, size), size * 0.22, size * 0.22)
        painter.end()
        glyph = icon_play(size, QColor(255, 255, 255))
        painter = QPainter(pm)
        painter.drawPixmap(0, 0, glyph)
        painter.end()
        icon.addPixmap(pm)
    return icon
