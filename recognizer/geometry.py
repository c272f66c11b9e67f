import numpy as np


def as_points(points) -> np.ndarray:
    """任意 (x, y) 序列 -> float64 的 (k, 2) 数组（总是新副本）"""
    try:
        pts = np.array(points, dtype=np.float64)
    except TypeError as ex:
        raise ValueError(f"expected a sequence of (x, y) points: {ex}") from ex
    if pts.size == 0:
        return pts.reshape(0, 2)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise ValueError(f"expected a sequence of (x, y) points, got shape {pts.shape}")
    if not np.isfinite(pts).all():
        raise ValueError("points contain non-finite coordinates")
    return pts


def distance(a, b) -> float:
    return float(np.linalg.norm(np.asarray(a, dtype=np.float64) - np.asarray(b, dtype=np.float64)))


def path_length(points: np.ndarray) -> float:
    if points is None or len(points) < 2:
        return 0.0
    seg = np.linalg.norm(np.diff(points, axis=0), axis=1)
    return float(seg.sum())


def centroid(points: np.ndarray) -> np.ndarray:
    # 空输入无定义，调用方保证非空
    return points.mean(axis=0)


def bounding_box_size(points: np.ndarray):
    mn = points.min(axis=0)
    mx = points.max(axis=0)
    return float(mx[0] - mn[0]), float(mx[1] - mn[1])


def rotate(points: np.ndarray, angle: float) -> np.ndarray:
    """绕原点旋转（不是绕质心），只用于已居中的形状。angle 为弧度。"""
    c, s = np.cos(angle), np.sin(angle)
    rot = np.array([[c, -s], [s, c]], dtype=np.float64)
    return points @ rot.T


def path_distance(a: np.ndarray, b: np.ndarray) -> float:
    """逐点对齐（第 i 点对第 i 点）的平均距离"""
    if a is None or b is None or a.shape != b.shape:
        return float("inf")
    return float(np.linalg.norm(a - b, axis=1).mean())
