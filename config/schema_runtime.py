from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

@dataclass
class ValidationError:
    path: str
    message: str

def _is_type(v: Any, t: str) -> bool:
    if t == "int":
        return isinstance(v, int) and not isinstance(v, bool)
    if t == "float":
        return isinstance(v, (int, float)) and not isinstance(v, bool)
    if t == "bool":
        return isinstance(v, bool)
    if t == "str":
        return isinstance(v, str)
    return True  # unknown types: don't block

def _in_range(v: Any, spec: dict) -> bool:
    lo = spec.get("min")
    hi = spec.get("max")
    if lo is not None and v < lo:
        return False
    if hi is not None and v > hi:
        return False
    return True

def validate_object(obj: dict, schema: dict, path="$") -> List[ValidationError]:
    """
    schema 约定：
      {
        "required": ["a","b"],
        "properties": {
           "a": {"type":"int", "min": 2},
           "b": {"type":"float", "min": 0.0, "max": 1.0}
        },
        "additionalProperties": True/False
      }
    """
    errs: List[ValidationError] = []
    if not isinstance(obj, dict):
        return [ValidationError(path, "不是对象(dict)")]

    required = schema.get("required", [])
    props = schema.get("properties", {})
    additional = schema.get("additionalProperties", True)

    for k in required:
        if k not in obj:
            errs.append(ValidationError(f"{path}.{k}", "缺少必填字段"))

    for k, v in obj.items():
        if k in props:
            spec = props[k]
            typ = spec.get("type")
            if typ and not _is_type(v, typ):
                errs.append(ValidationError(f"{path}.{k}", f"类型错误，应为 {typ}"))
            elif typ in ("int", "float") and not _in_range(v, spec):
                errs.append(ValidationError(f"{path}.{k}", f"超出范围 [{spec.get('min')}, {spec.get('max')}]"))
        else:
            if additional is False:
                errs.append(ValidationError(f"{path}.{k}", "不允许的字段"))

    return errs

def invalid_keys(errs: List[ValidationError]) -> set:
    return {e.path.rsplit(".", 1)[-1] for e in errs}

# recognizer 段：所有可调常数
RECOGNIZER_SCHEMA = {
    "required": [],
    "properties": {
        "num_points": {"type": "int", "min": 8},
        "square_size": {"type": "float", "min": 1.0},
        "min_point_distance": {"type": "float", "min": 0.0},
        "min_points": {"type": "int", "min": 2},
        "angle_range_deg": {"type": "float", "min": 0.0, "max": 45.0},
        "flip_center_deg": {"type": "float"},
        "angle_precision_deg": {"type": "float", "min": 0.01},
        "score_threshold": {"type": "float", "max": 1.0}
    },
    "additionalProperties": False
}

TEMPLATES_SCHEMA = {
    "required": [],
    "properties": {
        "directory": {"type": "str"},
        "extension": {"type": "str"},
        "load_builtin": {"type": "bool"}
    },
    "additionalProperties": True
}

def schema_for_section(section: str) -> Optional[Dict[str, Any]]:
    return {
        "recognizer": RECOGNIZER_SCHEMA,
        "templates": TEMPLATES_SCHEMA,
    }.get(section)
