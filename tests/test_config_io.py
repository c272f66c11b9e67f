"""Tests for config loading, merging and parameter validation."""

import json
import logging

import pytest

from config.schema_runtime import RECOGNIZER_SCHEMA, validate_object
from config_io import DEFAULT_CONFIG, load_config, params_from_config, save_config, templates_config
from recognizer.params import RecognizerParams


def test_first_load_writes_defaults(tmp_path):
    path = tmp_path / "config" / "default_config.json"
    cfg = load_config(str(path))
    assert cfg == DEFAULT_CONFIG
    assert json.loads(path.read_text(encoding="utf-8")) == DEFAULT_CONFIG


def test_missing_keys_get_defaults_user_keys_kept(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text(json.dumps({
        "recognizer": {"score_threshold": 0.8},
        "general": {"pen_width": 9, "custom": 1},
        "extra": {"keep": True},
    }), encoding="utf-8")
    cfg = load_config(str(path))
    assert cfg["recognizer"]["score_threshold"] == 0.8
    assert cfg["recognizer"]["num_points"] == 64
    assert cfg["general"]["pen_width"] == 9
    assert cfg["general"]["custom"] == 1
    assert cfg["templates"] == DEFAULT_CONFIG["templates"]
    assert cfg["extra"] == {"keep": True}


def test_non_object_config_is_rejected(tmp_path):
    path = tmp_path / "cfg.json"
    path.write_text("[1, 2]", encoding="utf-8")
    with pytest.raises(ValueError):
        load_config(str(path))


def test_save_then_load(tmp_path):
    path = str(tmp_path / "cfg.json")
    cfg = load_config(path)
    cfg["recognizer"]["angle_range_deg"] = 15.0
    save_config(cfg, path)
    assert load_config(path)["recognizer"]["angle_range_deg"] == 15.0


def test_default_params_from_default_config():
    assert params_from_config(DEFAULT_CONFIG) == RecognizerParams()


def test_params_from_config_converts_ints_to_floats():
    p = params_from_config({"recognizer": {"square_size": 100, "num_points": 32}})
    assert p.square_size == 100.0
    assert isinstance(p.square_size, float)
    assert p.num_points == 32


def test_invalid_fields_fall_back_to_defaults(caplog):
    cfg = {"recognizer": {
        "num_points": "many",
        "score_threshold": 3.0,
        "angle_range_deg": 90.0,
        "min_points": True,
        "bogus": 1,
        "angle_precision_deg": 1.0,
    }}
    with caplog.at_level(logging.WARNING):
        p = params_from_config(cfg)
    defaults = RecognizerParams()
    assert p.num_points == defaults.num_points
    assert p.score_threshold == defaults.score_threshold
    assert p.angle_range_deg == defaults.angle_range_deg
    assert p.min_points == defaults.min_points
    assert p.angle_precision_deg == 1.0
    assert "bogus" in caplog.text
    assert "num_points" in caplog.text


def test_non_dict_recognizer_section_uses_defaults():
    assert params_from_config({"recognizer": 5}) == RecognizerParams()


def test_templates_config_defaults_and_validation():
    t = templates_config({"templates": {"directory": 7, "extension": ".pts"}})
    assert t["directory"] == DEFAULT_CONFIG["templates"]["directory"]
    assert t["extension"] == ".pts"
    assert t["load_builtin"] is True


def test_validate_object_reports_missing_required():
    schema = dict(RECOGNIZER_SCHEMA, required=["num_points"])
    errs = validate_object({}, schema)
    assert [e.path for e in errs] == ["$.num_points"]
