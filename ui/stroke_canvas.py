import numpy as np
from PyQt6.QtWidgets import QWidget
from PyQt6.QtGui import QPainter, QPen, QColor, QPainterPath
from PyQt6.QtCore import Qt, QPointF, pyqtSignal

class StrokeCanvas(QWidget):
    """
    鼠标拖动画一笔：按下开始，移动时追加点，松开时发出 stroke_finished(np.ndarray (k,2))。
    可选叠加显示预处理后的形状（set_overlay）。
    """
    stroke_finished = pyqtSignal(object)

    def __init__(self, pen_width=4, parent=None):
        super().__init__(parent)
        self.setMinimumSize(320, 240)
        self.setMouseTracking(False)
        self.setStyleSheet("background:#111;")
        self.setAttribute(Qt.WidgetAttribute.WA_StyledBackground, True)

        self.pen_width = int(pen_width)
        self.points = []
        self.drawing = False
        self._overlay = None

    def clear(self):
        self.points = []
        self._overlay = None
        self.update()

    def set_overlay(self, shape):
        # shape：已居中的 ProcessedShape，画在画布中心
        self._overlay = None if shape is None else np.asarray(shape, dtype=np.float64)
        self.update()

    def mousePressEvent(self, e):
        if e.button() != Qt.MouseButton.LeftButton:
            return
        self.drawing = True
        self.points = []
        self._overlay = None
        p = e.position()
        self.points.append((float(p.x()), float(p.y())))
        self.update()

    def mouseMoveEvent(self, e):
        if not self.drawing:
            return
        p = e.position()
        self.points.append((float(p.x()), float(p.y())))
        self.update()

    def mouseReleaseEvent(self, e):
        if e.button() != Qt.MouseButton.LeftButton or not self.drawing:
            return
        self.drawing = False
        self.stroke_finished.emit(np.array(self.points, dtype=np.float64).reshape(-1, 2))

    def paintEvent(self, e):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing, True)

        if self._overlay is not None and len(self._overlay):
            cx, cy = self.width() / 2, self.height() / 2
            # 叠加形状按画布较短边缩放
            longest = float(np.abs(self._overlay).max()) or 1.0
            k = 0.4 * min(self.width(), self.height()) / longest
            painter.setPen(QPen(QColor("#3a7"), 2))
            for x, y in self._overlay:
                painter.drawEllipse(QPointF(cx + x * k, cy + y * k), 2.5, 2.5)

        if len(self.points) >= 2:
            path = QPainterPath(QPointF(*self.points[0]))
            for x, y in self.points[1:]:
                path.lineTo(QPointF(x, y))
            pen = QPen(QColor("#f5c542"), self.pen_width)
            pen.setCapStyle(Qt.PenCapStyle.RoundCap)
            pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
            painter.setPen(pen)
            painter.drawPath(path)
        painter.end()
