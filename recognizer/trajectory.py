import numpy as np

from recognizer.geometry import as_points, bounding_box_size, centroid, path_length
from recognizer.params import DEFAULT_PARAMS, RecognizerParams

EPS = 1e-6


def filter_close_points(points, min_dist: float = 2.0) -> np.ndarray:
    """
    去掉离“上一个保留点”太近的点（抖动/停留产生的重复点）。
    第一个点总是保留。
    """
    pts = as_points(points)
    if len(pts) == 0:
        return pts
    kept = [pts[0]]
    for p in pts[1:]:
        if np.linalg.norm(p - kept[-1]) >= min_dist:
            kept.append(p)
    return np.stack(kept, axis=0)


def resample_polyline(points: np.ndarray, n=64) -> np.ndarray:
    """按弧长等距重采样为 n 个点；只读输入，返回新数组。"""
    if points is None or len(points) < 1:
        return None
    pts = as_points(points)
    if len(pts) < 2:
        return np.repeat(pts[:1], n, axis=0)

    seg = np.linalg.norm(np.diff(pts, axis=0), axis=1)
    s = np.concatenate([[0.0], np.cumsum(seg)])
    total = float(s[-1])
    if total < EPS:
        # 所有点重合：n 个第一点
        return np.repeat(pts[:1], n, axis=0)

    target = np.linspace(0.0, total, n)
    out = []
    j = 0
    for t in target:
        while j < len(s) - 2 and s[j + 1] < t:
            j += 1
        s0, s1 = s[j], s[j + 1]
        p0, p1 = pts[j], pts[j + 1]
        if s1 - s0 < EPS:
            out.append(p0)
        else:
            a = (t - s0) / (s1 - s0)
            out.append(p0 * (1 - a) + p1 * a)
    rs = np.stack(out, axis=0)

    # 数值误差兜底：不足补最后一点，多余截断
    if len(rs) < n:
        rs = np.concatenate([rs, np.repeat(rs[-1:], n - len(rs), axis=0)], axis=0)
    return rs[:n]


def scale_to_square(points: np.ndarray, size: float = 250.0) -> np.ndarray:
    # 等比缩放，较大的一边 = size
    w, h = bounding_box_size(points)
    longest = max(w, h)
    if longest < EPS:
        return points.copy()
    return points * (size / longest)


def translate_to_origin(points: np.ndarray) -> np.ndarray:
    return points - centroid(points)


def normalize_trajectory(points, params: RecognizerParams = DEFAULT_PARAMS) -> np.ndarray:
    """
    原始笔画 -> ProcessedShape：
      去重 -> 重采样到 N 点 -> 等比缩放到 S -> 质心移到原点
    不做 rotate-to-zero：方向必须保留（左划/右划要能区分）。
    有效点数不足 params.min_points 时返回 None。
    结果只读。
    """
    if points is None:
        return None
    pts = filter_close_points(points, params.min_point_distance)
    if len(pts) < params.min_points:
        return None

    rs = resample_polyline(pts, n=params.num_points)
    rs = scale_to_square(rs, params.square_size)
    rs = translate_to_origin(rs)
    rs.flags.writeable = False
    return rs
