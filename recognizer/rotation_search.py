"""
有界旋转搜索：在 [angle_low, angle_high]（角度）内用黄金分割法找使
平均逐点距离最小的旋转角。

只适用于窄窗口（±15~25°）：目标函数在窄窗口内才是单峰的。
不要拿它做 0~360° 全角度搜索，否则方向不同的手势会被当成彼此的旋转。
"""
import math

import numpy as np

from recognizer.geometry import path_distance, rotate

PHI = 0.5 * (math.sqrt(5.0) - 1.0)


def distance_at_angle(shape: np.ndarray, template: np.ndarray, angle_deg: float) -> float:
    return path_distance(rotate(shape, math.radians(angle_deg)), template)


def distance_at_best_angle(shape: np.ndarray, template: np.ndarray,
                           angle_low: float, angle_high: float,
                           precision: float = 2.0) -> float:
    a, b = float(angle_low), float(angle_high)
    precision = max(float(precision), 1e-6)

    x1 = PHI * a + (1 - PHI) * b
    f1 = distance_at_angle(shape, template, x1)
    x2 = (1 - PHI) * a + PHI * b
    f2 = distance_at_angle(shape, template, x2)

    while abs(b - a) > precision:
        if f1 < f2:
            b = x2
            x2, f2 = x1, f1
            x1 = PHI * a + (1 - PHI) * b
            f1 = distance_at_angle(shape, template, x1)
        else:
            a = x1
            x1, f1 = x2, f2
            x2 = (1 - PHI) * a + PHI * b
            f2 = distance_at_angle(shape, template, x2)

    return min(f1, f2)
