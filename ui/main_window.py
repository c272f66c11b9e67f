import logging
from dataclasses import replace

from PyQt6.QtWidgets import (
    QWidget, QLabel, QPushButton, QVBoxLayout, QHBoxLayout,
    QCheckBox, QMessageBox, QFileDialog, QDoubleSpinBox, QListWidget
)
from PyQt6.QtCore import Qt

from config_io import load_config, save_config, params_from_config, templates_config, DEFAULT_CONFIG_PATH
from recognizer.builtin_templates import BUILTIN_TEMPLATES
from recognizer.scoring import ShapeRecognizer
from recognizer.template_store import TemplateStore
from storage.template_files import load_template_dir

from ui.stroke_canvas import StrokeCanvas
from ui.template_manager import TemplateManager

logger = logging.getLogger(__name__)

class MainWindow(QWidget):
    def __init__(self, config_path: str = DEFAULT_CONFIG_PATH):
        super().__init__()
        self.setWindowTitle("笔画形状识别")

        self.config_path = config_path
        self.cfg = load_config(config_path)
        g = self.cfg["general"]
        self.resize(int(g.get("window_width", 900)), int(g.get("window_height", 680)))

        # UI
        self.canvas = StrokeCanvas(pen_width=int(g.get("pen_width", 4)))

        self.result_lbl = QLabel("画一笔试试")
        self.result_lbl.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.result_lbl.setStyleSheet("font-size:18px; padding:6px;")

        self.ranking = QListWidget()
        self.ranking.setMaximumWidth(240)

        self.overlay_toggle = QCheckBox("显示预处理形状")
        self.overlay_toggle.setChecked(bool(g.get("show_processed_overlay", True)))
        self.ranking_toggle = QCheckBox("显示排名")
        self.ranking_toggle.setChecked(bool(g.get("show_ranking", True)))

        self.spin_thr = QDoubleSpinBox()
        self.spin_thr.setRange(-1.0, 1.0)
        self.spin_thr.setSingleStep(0.05)
        self.spin_thr.setDecimals(2)

        self.btn_templates = QPushButton("模板管理…")
        self.btn_reload = QPushButton("重新加载模板")
        self.btn_clear = QPushButton("清空画布")
        self.btn_load = QPushButton("加载配置…")
        self.btn_save = QPushButton("保存配置")

        top = QHBoxLayout()
        top.addWidget(self.overlay_toggle)
        top.addWidget(self.ranking_toggle)
        top.addSpacing(14)
        top.addWidget(QLabel("阈值"))
        top.addWidget(self.spin_thr)
        top.addStretch(1)
        top.addWidget(self.btn_templates)
        top.addWidget(self.btn_reload)
        top.addWidget(self.btn_clear)
        top.addWidget(self.btn_load)
        top.addWidget(self.btn_save)

        body = QHBoxLayout()
        body.addWidget(self.canvas, 1)
        body.addWidget(self.ranking)

        layout = QVBoxLayout()
        layout.addLayout(top)
        layout.addLayout(body, 1)
        layout.addWidget(self.result_lbl)
        self.setLayout(layout)

        # components：显式构造 + 显式加载模板
        self._build_components()

        # events
        self.canvas.stroke_finished.connect(self._on_stroke)
        self.spin_thr.valueChanged.connect(self._on_threshold)
        self.ranking_toggle.toggled.connect(self._on_ranking_toggle)
        self.overlay_toggle.toggled.connect(self._on_overlay_toggle)

        self.btn_templates.clicked.connect(self._open_templates)
        self.btn_reload.clicked.connect(self.reload_templates)
        self.btn_clear.clicked.connect(self._clear)
        self.btn_load.clicked.connect(self._load_config_dialog)
        self.btn_save.clicked.connect(self._save_config)

    def _build_components(self):
        self.params = params_from_config(self.cfg)
        self.tpl_cfg = templates_config(self.cfg)
        self.store = TemplateStore(self.params)
        self.recognizer = ShapeRecognizer(self.store)

        self.spin_thr.blockSignals(True)
        self.spin_thr.setValue(self.params.score_threshold)
        self.spin_thr.blockSignals(False)

        self.reload_templates()

    def reload_templates(self):
        self.store.clear()
        loaded = []
        if self.tpl_cfg.get("load_builtin", True):
            loaded += self.store.load_all(BUILTIN_TEMPLATES)
        # 文件模板后加载，同名覆盖内置
        sources = load_template_dir(self.tpl_cfg["directory"], self.tpl_cfg["extension"])
        loaded += self.store.load_all(sources)
        logger.info("Templates loaded: %s", ", ".join(sorted(self.store.names())))
        self.result_lbl.setText(f"已加载 {len(self.store)} 个模板")
        return loaded

    def _on_stroke(self, pts):
        if not self.cfg["general"].get("recognize_on_release", True):
            return
        shape, res, ranking = self.recognizer.analyze(pts)
        if self.overlay_toggle.isChecked():
            self.canvas.set_overlay(shape)

        if res.recognized:
            self.result_lbl.setText(f"{res.name}  ({res.score:.2f})")
        elif len(self.store) == 0:
            self.result_lbl.setText("unknown（没有模板）")
        else:
            self.result_lbl.setText(f"unknown  ({res.score:.2f})")

        self.ranking.clear()
        if self.ranking_toggle.isChecked():
            for name, score in ranking:
                self.ranking.addItem(f"{score:6.3f}  {name}")

    def _on_threshold(self, v):
        self.params = replace(self.params, score_threshold=float(v))
        # 阈值不影响预处理，模板无需重建
        self.recognizer = ShapeRecognizer(self.store, self.params)
        self.cfg["recognizer"]["score_threshold"] = float(v)

    def _on_ranking_toggle(self, v):
        self.cfg["general"]["show_ranking"] = bool(v)
        if not v:
            self.ranking.clear()

    def _on_overlay_toggle(self, v):
        self.cfg["general"]["show_processed_overlay"] = bool(v)
        if not v:
            self.canvas.set_overlay(None)

    def _clear(self):
        self.canvas.clear()
        self.ranking.clear()

    def _open_templates(self):
        dlg = TemplateManager(
            self.store, self.tpl_cfg, self.reload_templates,
            builtin_names=BUILTIN_TEMPLATES.keys(),
            pen_width=int(self.cfg["general"].get("pen_width", 4)),
            parent=self
        )
        dlg.exec()

    def _load_config_dialog(self):
        path, _ = QFileDialog.getOpenFileName(self, "加载配置", "", "JSON (*.json)")
        if not path:
            return
        try:
            self.cfg = load_config(path)
            self.config_path = path
            # 参数变了模板要重新预处理
            self._build_components()
            QMessageBox.information(self, "加载成功", path)
        except (OSError, ValueError) as ex:
            QMessageBox.critical(self, "加载失败", str(ex))

    def _save_config(self):
        try:
            save_config(self.cfg, self.config_path)
            QMessageBox.information(self, "保存成功", self.config_path)
        except OSError as ex:
            QMessageBox.critical(self, "保存失败", str(ex))
