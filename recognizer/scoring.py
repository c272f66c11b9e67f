import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

import numpy as np

from recognizer.params import DEFAULT_PARAMS, RecognizerParams
from recognizer.rotation_search import distance_at_best_angle
from recognizer.template_store import TemplateStore
from recognizer.trajectory import normalize_trajectory

logger = logging.getLogger(__name__)

UNKNOWN = "unknown"


@dataclass(frozen=True)
class RecognitionResult:
    name: str
    score: float

    @property
    def recognized(self) -> bool:
        return self.name != UNKNOWN


def distance_to_score(dist: float, params: RecognizerParams = DEFAULT_PARAMS) -> float:
    # 1.0 = 完全一致；距离越大越低，很差时可为负
    return 1.0 - dist / params.half_diagonal


class ShapeRecognizer:
    """
    单笔画形状识别。store 由调用方构造并显式加载模板后传入。

    每个模板比较两次有界旋转搜索：
      - 正常窗口 [-r, r]
      - 翻转窗口 [180-r, 180+r]，比较的是倒序（终点 -> 起点）的候选笔画
    取两者得分的较大值。直线倒序再转 180° 就是它自己，所以左/右直线不会混淆；
    反向描的闭合图形则能对上模板。
    """
    def __init__(self, store: TemplateStore, params: RecognizerParams = None):
        self.store = store
        self.params = params if params is not None else store.params

    def process(self, raw_points) -> np.ndarray:
        return normalize_trajectory(raw_points, self.params)

    def score(self, shape: np.ndarray, template: np.ndarray) -> float:
        p = self.params
        lo, hi = p.normal_window
        d_normal = distance_at_best_angle(shape, template, lo, hi, p.angle_precision_deg)
        lo, hi = p.flipped_window
        d_flipped = distance_at_best_angle(shape[::-1], template, lo, hi, p.angle_precision_deg)
        return max(distance_to_score(d_normal, p), distance_to_score(d_flipped, p))

    def _candidate(self, stroke):
        if stroke is None or len(stroke) < self.params.min_points:
            return None
        return self.process(stroke)

    def _rank_shape(self, shape: np.ndarray) -> List[Tuple[str, float]]:
        scored = [(t.name, self.score(shape, t.points)) for t in self.store.snapshot()]
        # 稳定排序：同分保持 store 的遍历顺序
        scored.sort(key=lambda x: x[1], reverse=True)
        return scored

    def analyze(self, stroke) -> Tuple[Optional[np.ndarray], RecognitionResult, List[Tuple[str, float]]]:
        """
        预处理一次、每个模板评分一次，返回 (shape, result, ranking)。
        笔画被拒时 shape 为 None，ranking 为空。
        """
        shape = self._candidate(stroke)
        if shape is None:
            logger.debug("Stroke rejected: fewer than %d usable points", self.params.min_points)
            return None, RecognitionResult(UNKNOWN, 0.0), []

        ranking = self._rank_shape(shape)
        if not ranking:
            return shape, RecognitionResult(UNKNOWN, float("-inf")), ranking

        best_name, best_score = ranking[0]
        if best_score >= self.params.score_threshold:
            logger.debug("Recognized %s (%.3f)", best_name, best_score)
            return shape, RecognitionResult(best_name, best_score), ranking
        return shape, RecognitionResult(UNKNOWN, best_score), ranking

    def rank(self, stroke) -> List[Tuple[str, float]]:
        """所有模板的 (name, score)，高分在前；笔画被拒时为空列表。"""
        return self.analyze(stroke)[2]

    def recognize(self, stroke) -> RecognitionResult:
        return self.analyze(stroke)[1]
