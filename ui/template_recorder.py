import numpy as np
from PyQt6.QtWidgets import QDialog, QVBoxLayout, QHBoxLayout, QLabel, QLineEdit, QPushButton, QMessageBox

from ui.stroke_canvas import StrokeCanvas

class TemplateRecorder(QDialog):
    """
    画一笔 + 填名字 -> 保存为模板。点数不足 min_points 不允许保存。
    """
    def __init__(self, min_points=5, pen_width=4, parent=None):
        super().__init__(parent)
        self.setWindowTitle("录制模板")
        self.resize(560, 480)
        self.min_points = int(min_points)

        self.name_in = QLineEdit()
        self.name_in.setPlaceholderText("模板名（例如 circle、line_right）")

        self.lbl = QLabel("在下方画一笔完整的形状，再点保存。")
        self.canvas = StrokeCanvas(pen_width=pen_width)
        self.btn_clear = QPushButton("清空")
        self.btn_save = QPushButton("保存")
        self.btn_save.setEnabled(False)

        lay = QVBoxLayout()
        lay.addWidget(self.lbl)

        row = QHBoxLayout()
        row.addWidget(QLabel("名称:"))
        row.addWidget(self.name_in, 2)
        lay.addLayout(row)
        lay.addWidget(self.canvas, 1)

        btns = QHBoxLayout()
        btns.addStretch(1)
        btns.addWidget(self.btn_clear)
        btns.addWidget(self.btn_save)
        lay.addLayout(btns)
        self.setLayout(lay)

        self.points = np.zeros((0, 2), dtype=np.float64)

        self.canvas.stroke_finished.connect(self._on_stroke)
        self.btn_clear.clicked.connect(self.clear)
        self.btn_save.clicked.connect(self.save)

    def _on_stroke(self, pts):
        self.points = pts
        self.btn_save.setEnabled(True)
        self.lbl.setText(f"已记录 {len(pts)} 个点。")

    def clear(self):
        self.points = np.zeros((0, 2), dtype=np.float64)
        self.canvas.clear()
        self.btn_save.setEnabled(False)
        self.lbl.setText("在下方画一笔完整的形状，再点保存。")

    def save(self):
        name = self.name_in.text().strip()
        if not name:
            QMessageBox.warning(self, "提示", "请先填写模板名")
            return
        if len(self.points) < self.min_points:
            QMessageBox.warning(self, "失败", "轨迹太短，请重画")
            return
        self.accept()

    def get_result(self):
        return self.name_in.text().strip(), self.points
