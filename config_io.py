import json
import logging
import os
from copy import deepcopy
from dataclasses import fields

from config.schema_runtime import invalid_keys, schema_for_section, validate_object
from recognizer.params import RecognizerParams

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.join("config", "default_config.json")


# DEFAULT_CONFIG 是“出厂模板”，load_config 只做缺键补默认
DEFAULT_CONFIG = {
  "general": {
    "window_width": 900,
    "window_height": 680,
    "pen_width": 4,
    "show_processed_overlay": True,
    "recognize_on_release": True,
    "show_ranking": True
  },

  "recognizer": {
    "num_points": 64,
    "square_size": 250.0,
    "min_point_distance": 2.0,
    "min_points": 5,
    "angle_range_deg": 25.0,
    "flip_center_deg": 180.0,
    "angle_precision_deg": 2.0,
    "score_threshold": 0.6
  },

  "templates": {
    "directory": "templates",
    "extension": ".txt",
    "load_builtin": True
  }
}

SECTIONS = ["general", "recognizer", "templates"]

def _merge_section(default_section: dict, user_section: dict) -> dict:
    """
    缺键补默认，不删除用户已有键。
    """
    out = deepcopy(default_section)
    if isinstance(user_section, dict):
        out.update(user_section)
    return out

def load_config(path: str = DEFAULT_CONFIG_PATH) -> dict:
    """
    - 首次不存在配置文件：写入并返回 DEFAULT_CONFIG
    - 若存在：每个段缺键补默认，未知段原样保留
    """
    if not os.path.exists(path):
        save_config(DEFAULT_CONFIG, path)
        return deepcopy(DEFAULT_CONFIG)

    with open(path, "r", encoding="utf-8") as f:
        user = json.load(f)
    if not isinstance(user, dict):
        raise ValueError(f"{path}: top level must be a JSON object")

    cfg = dict(user)
    for key in SECTIONS:
        cfg[key] = _merge_section(DEFAULT_CONFIG.get(key, {}), user.get(key, {}))
    return cfg

def save_config(cfg: dict, path: str = DEFAULT_CONFIG_PATH):
    d = os.path.dirname(path)
    if d:
        os.makedirs(d, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(cfg, f, ensure_ascii=False, indent=2)

def params_from_config(cfg: dict) -> RecognizerParams:
    """
    recognizer 段 -> RecognizerParams。
    类型/范围不对的字段记 warning 并回落默认值，不抛异常。
    """
    section = cfg.get("recognizer", {}) or {}
    errs = validate_object(section, schema_for_section("recognizer"), path="$.recognizer")
    for e in errs:
        logger.warning("Config %s: %s, using default", e.path, e.message)
    bad = invalid_keys(errs)
    if not isinstance(section, dict):
        section = {}

    kwargs = {}
    for f in fields(RecognizerParams):
        if f.name in section and f.name not in bad:
            v = section[f.name]
            kwargs[f.name] = float(v) if f.type in (float, "float") else v
    return RecognizerParams(**kwargs)

def templates_config(cfg: dict) -> dict:
    section = _merge_section(DEFAULT_CONFIG["templates"], cfg.get("templates", {}))
    errs = validate_object(section, schema_for_section("templates"), path="$.templates")
    for e in errs:
        logger.warning("Config %s: %s, using default", e.path, e.message)
    for k in invalid_keys(errs):
        section[k] = DEFAULT_CONFIG["templates"][k]
    return section
