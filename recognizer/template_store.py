import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from recognizer.params import DEFAULT_PARAMS, RecognizerParams
from recognizer.geometry import as_points
from recognizer.rw_lock import ReadWriteLock
from recognizer.trajectory import normalize_trajectory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Template:
    name: str
    points: np.ndarray  # ProcessedShape，只读


class TemplateStore:
    """
    name -> Template。模板在 add/load 时预处理一次并缓存，评分时不再处理。
    读（snapshot/get/names）可并发；add/remove/clear/load_all 与一切读写互斥。
    """
    def __init__(self, params: RecognizerParams = DEFAULT_PARAMS):
        self.params = params
        self._templates: Dict[str, Template] = {}
        self._lock = ReadWriteLock()

    def _process(self, name: str, raw_points) -> Optional[Template]:
        # 点列格式不对时抛 ValueError；点数不足返回 None
        if not isinstance(name, str) or not name.strip():
            return None
        if raw_points is None:
            return None
        pts = as_points(raw_points)
        if len(pts) < self.params.min_points:
            return None
        norm = normalize_trajectory(pts, self.params)
        if norm is None:
            return None
        return Template(name, norm)

    def add(self, name: str, raw_points) -> bool:
        # 预处理放在锁外，失败不动 store
        try:
            tpl = self._process(name, raw_points)
        except ValueError as ex:
            logger.warning("Rejected template %r: %s", name, ex)
            return False
        if tpl is None:
            return False
        with self._lock.write_locked():
            # 覆盖同名
            self._templates[name] = tpl
        return True

    def remove(self, name: str) -> bool:
        with self._lock.write_locked():
            return self._templates.pop(name, None) is not None

    def clear(self):
        with self._lock.write_locked():
            self._templates.clear()

    def load_all(self, sources: Dict[str, object]) -> List[str]:
        """
        批量加载 {name: 原始点列}。单条失败只记日志并跳过，不影响其它条目。
        返回成功加载的名字。
        """
        processed = {}
        for name, raw in sources.items():
            try:
                tpl = self._process(name, raw)
            except ValueError as ex:
                logger.warning("Skipping template %r: %s", name, ex)
                continue
            if tpl is None:
                logger.warning("Skipping template %r: fewer than %d usable points",
                               name, self.params.min_points)
                continue
            processed[name] = tpl

        with self._lock.write_locked():
            self._templates.update(processed)
        logger.info("Loaded %d of %d templates", len(processed), len(sources))
        return list(processed)

    def get(self, name: str) -> Optional[Template]:
        with self._lock.read_locked():
            return self._templates.get(name)

    def names(self) -> List[str]:
        with self._lock.read_locked():
            return list(self._templates)

    def snapshot(self) -> List[Template]:
        with self._lock.read_locked():
            return list(self._templates.values())

    def __len__(self):
        with self._lock.read_locked():
            return len(self._templates)

    def __contains__(self, name):
        with self._lock.read_locked():
            return name in self._templates
