import pytest

from synchronised_distance.config import MeasureConfig, get_nested, load_config, measure_config_from_dict


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "cfg.yaml"
    path.write_text("measure:\n  n_jobs: 2\n  on_unreachable: inf\n", encoding="utf-8")
    cfg = load_config(path)
    assert cfg["measure"]["n_jobs"] == 2


def test_load_config_empty_file(tmp_path):
    path = tmp_path / "empty.yaml"
    path.write_text("", encoding="utf-8")
    assert load_config(path) == {}


def test_get_nested_defaults():
    cfg = {"input": {"columns": {"x": "lon"}}, "pruning": None}
    assert get_nested(cfg, "input.columns.x", "x") == "lon"
    assert get_nested(cfg, "input.columns.y", "y") == "y"
    assert get_nested(cfg, "output.dir", "output") == "output"
    assert get_nested(cfg, "pruning.enabled", True) is True


def test_load_config_rejects_non_mapping(tmp_path):
    path = tmp_path / "list.yaml"
    path.write_text("- a\n- b\n", encoding="utf-8")
    with pytest.raises(ValueError, match="mapping"):
        load_config(path)


def test_measure_config_from_dict():
    config = measure_config_from_dict({"measure": {"n_jobs": -1, "on_unreachable": "INF", "log_every": 10}})
    assert config == MeasureConfig(n_jobs=-1, on_unreachable="inf", log_every=10)


def test_measure_config_defaults():
    assert measure_config_from_dict({}) == MeasureConfig()
    assert measure_config_from_dict({"measure": None}).on_unreachable == "raise"


def test_measure_config_rejects_invalid_values():
    with pytest.raises(ValueError):
        MeasureConfig(on_unreachable="ignore")
    with pytest.raises(ValueError):
        MeasureConfig(n_jobs=0)
    with pytest.raises(ValueError):
        MeasureConfig(log_every=0)
