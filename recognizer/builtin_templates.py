"""
内置模板的原始点列（屏幕坐标，y 向下）。
加载时和用户模板一样走预处理，这里只给出形状。
"""
import numpy as np


def _polyline(vertices, n=64):
    # 沿折线按弧长均匀插值 n 个点
    v = np.array(vertices, dtype=np.float64)
    seg = np.linalg.norm(np.diff(v, axis=0), axis=1)
    s = np.concatenate([[0.0], np.cumsum(seg)])
    t = np.linspace(0.0, s[-1], n)
    xs = np.interp(t, s, v[:, 0])
    ys = np.interp(t, s, v[:, 1])
    return np.stack([xs, ys], axis=1)


def _circle(radius=75.0, n=64):
    # 从最右点开始，屏幕上逆时针（y 向下，所以 y 取负）
    t = np.linspace(0.0, 2 * np.pi, n)
    return np.stack([radius * np.cos(t), -radius * np.sin(t)], axis=1)


BUILTIN_TEMPLATES = {
    "line_right": _polyline([(0, 0), (150, 0)]),
    "line_left": _polyline([(0, 0), (-150, 0)]),
    "line_up": _polyline([(0, 0), (0, -150)]),
    "line_down": _polyline([(0, 0), (0, 150)]),
    "circle": _circle(),
    "triangle": _polyline([(0, -100), (-87, 50), (87, 50), (0, -100)]),
    "v": _polyline([(-60, -100), (0, 0), (60, -100)]),
    "zigzag": _polyline([(0, 0), (50, 60), (100, 0), (150, 60), (200, 0)]),
}
