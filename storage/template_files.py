"""
模板文本存储：每个模板一个文件，内容是一个 (x, y) 列表字面量，
文件名（去掉扩展名）就是模板名。例如 templates/circle.txt：

    [(0.0, 0.0), (12.5, 3.0), ...]
"""
import ast
import logging
import os
from typing import Dict, List, Tuple

import numpy as np

from recognizer.trajectory import normalize_trajectory

logger = logging.getLogger(__name__)

DEFAULT_EXTENSION = ".txt"


def format_points(points) -> str:
    pts = np.asarray(points, dtype=np.float64).reshape(-1, 2)
    body = ", ".join(f"({x!r}, {y!r})" for x, y in pts.tolist())
    return f"[{body}]"


def parse_points(text: str) -> np.ndarray:
    try:
        value = ast.literal_eval(text.strip())
    except (SyntaxError, TypeError, ValueError) as ex:
        raise ValueError(f"not a point list literal: {ex}") from ex

    if not isinstance(value, (list, tuple)):
        raise ValueError("point list must be a list or tuple")
    out = []
    for i, p in enumerate(value):
        if not isinstance(p, (list, tuple)) or len(p) != 2:
            raise ValueError(f"item {i} is not an (x, y) pair")
        x, y = p
        for v in (x, y):
            if isinstance(v, bool) or not isinstance(v, (int, float)):
                raise ValueError(f"item {i} has a non-numeric coordinate")
        out.append((float(x), float(y)))
    return np.array(out, dtype=np.float64).reshape(-1, 2)


def template_name_from_path(path: str) -> str:
    return os.path.splitext(os.path.basename(path))[0]


def _check_name(name: str):
    if not name or not name.strip():
        raise ValueError("template name must not be empty")
    if os.sep in name or (os.altsep and os.altsep in name) or name in (".", ".."):
        raise ValueError(f"invalid template name: {name!r}")


def template_path(directory: str, name: str, extension: str = DEFAULT_EXTENSION) -> str:
    _check_name(name)
    return os.path.join(directory, f"{name}{extension}")


def list_template_files(directory: str, extension: str = DEFAULT_EXTENSION) -> List[str]:
    if not os.path.isdir(directory):
        return []
    out = []
    for fn in sorted(os.listdir(directory)):
        path = os.path.join(directory, fn)
        if fn.endswith(extension) and os.path.isfile(path):
            out.append(path)
    return out


def read_template_file(path: str) -> Tuple[str, np.ndarray]:
    with open(path, "r", encoding="utf-8") as f:
        text = f.read()
    return template_name_from_path(path), parse_points(text)


def save_template_file(directory: str, name: str, points,
                       extension: str = DEFAULT_EXTENSION) -> str:
    path = template_path(directory, name, extension)
    os.makedirs(directory, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(format_points(points))
        f.write("\n")
    logger.info("Saved template %s -> %s", name, path)
    return path


def delete_template_file(directory: str, name: str, extension: str = DEFAULT_EXTENSION) -> bool:
    path = template_path(directory, name, extension)
    if not os.path.isfile(path):
        return False
    os.remove(path)
    return True


def save_and_add_template(store, directory: str, name: str, points,
                          extension: str = DEFAULT_EXTENSION) -> bool:
    """
    录制结果落盘并加入 store。
    点数不足返回 False，不写文件；写文件失败（OSError / 名字非法 ValueError）
    直接抛出，store 不变。
    """
    if normalize_trajectory(points, store.params) is None:
        return False
    save_template_file(directory, name, points, extension)
    return store.add(name, points)


def load_template_dir(directory: str, extension: str = DEFAULT_EXTENSION) -> Dict[str, np.ndarray]:
    """
    读取目录下所有模板文件 -> {name: 原始点列}。
    读不了/解析失败的文件记 warning 后跳过，不中断整体加载。
    """
    out = {}
    for path in list_template_files(directory, extension):
        try:
            name, pts = read_template_file(path)
        except (OSError, UnicodeDecodeError, ValueError) as ex:
            logger.warning("Skipping unreadable template file %s: %s", path, ex)
            continue
        out[name] = pts
    return out
