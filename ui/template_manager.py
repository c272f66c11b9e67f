import os

from PyQt6.QtWidgets import (
    QDialog, QVBoxLayout, QHBoxLayout, QTableWidget, QTableWidgetItem,
    QPushButton, QMessageBox
)

from storage.template_files import delete_template_file, save_and_add_template, template_path
from ui.template_recorder import TemplateRecorder


class TemplateManager(QDialog):
    """
    模板列表：名称 / 来源（内置 / 文件）。
    支持录制新模板（写文件 + 加入 store）、删除选中、从磁盘重新加载。
    """
    def __init__(self, store, tpl_cfg: dict, reload_fn, builtin_names=(), pen_width=4, parent=None):
        super().__init__(parent)
        self.store = store
        self.tpl_cfg = tpl_cfg
        self.reload_fn = reload_fn
        self.builtin_names = set(builtin_names)
        self.pen_width = pen_width
        self.setWindowTitle("模板管理")
        self.resize(520, 480)

        self.table = QTableWidget(0, 2)
        self.table.setHorizontalHeaderLabels(["name", "source"])
        self.table.horizontalHeader().setStretchLastSection(True)

        self.btn_record = QPushButton("录制新模板…")
        self.btn_del = QPushButton("删除选中")
        self.btn_reload = QPushButton("重新加载")
        self.btn_close = QPushButton("关闭")

        top = QHBoxLayout()
        top.addWidget(self.btn_record)
        top.addWidget(self.btn_reload)
        top.addWidget(self.btn_del)
        top.addStretch(1)
        top.addWidget(self.btn_close)

        lay = QVBoxLayout()
        lay.addLayout(top)
        lay.addWidget(self.table)
        self.setLayout(lay)

        self.btn_record.clicked.connect(self.record)
        self.btn_reload.clicked.connect(self.reload_from_disk)
        self.btn_del.clicked.connect(self.delete_selected)
        self.btn_close.clicked.connect(self.accept)

        self.refresh()

    def _dir(self):
        return self.tpl_cfg.get("directory", "templates")

    def _ext(self):
        return self.tpl_cfg.get("extension", ".txt")

    def _source(self, name: str) -> str:
        try:
            if os.path.isfile(template_path(self._dir(), name, self._ext())):
                return "file"
        except ValueError:
            pass
        return "builtin" if name in self.builtin_names else "memory"

    def refresh(self):
        self.table.setRowCount(0)
        for name in sorted(self.store.names()):
            r = self.table.rowCount()
            self.table.insertRow(r)
            self.table.setItem(r, 0, QTableWidgetItem(name))
            self.table.setItem(r, 1, QTableWidgetItem(self._source(name)))

    def record(self):
        store = self.store
        dlg = TemplateRecorder(min_points=store.params.min_points, pen_width=self.pen_width, parent=self)
        if not dlg.exec():
            return
        name, pts = dlg.get_result()
        try:
            ok = save_and_add_template(store, self._dir(), name, pts, self._ext())
        except (OSError, ValueError) as ex:
            QMessageBox.critical(self, "保存失败", str(ex))
            return
        if not ok:
            QMessageBox.warning(self, "失败", "有效点数不足（去掉重复点后），请重画")
            return
        self.refresh()

    def delete_selected(self):
        row = self.table.currentRow()
        if row < 0:
            return
        item = self.table.item(row, 0)
        if item is None:
            return
        name = item.text()
        self.store.remove(name)
        try:
            delete_template_file(self._dir(), name, self._ext())
        except (OSError, ValueError) as ex:
            QMessageBox.critical(self, "删除失败", str(ex))
        self.refresh()

    def reload_from_disk(self):
        self.reload_fn()
        self.refresh()
