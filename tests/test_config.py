import pytest
import yaml

from senkg.inference.engine.config import Config, config


def test_singleton():
    assert Config.get_instance() is config
    with pytest.raises(RuntimeError):
        Config()


def test_defaults():
    assert config.get_context_filter() == "*/*"
    assert config.get_max_depth() == 2
    assert config.get_max_iterations() == 2
    assert config.get("inference.missing", "fallback") == "fallback"


def test_load_from_file_merges_with_defaults(tmp_path):
    path = tmp_path / "sen.yaml"
    path.write_text(yaml.dump({"inference": {"max_iterations": 5}}))
    config.load_from_file(str(path))
    assert config.get_max_iterations() == 5
    assert config.get_max_depth() == 2


def test_missing_file_keeps_defaults(tmp_path):
    config.load_from_file(str(tmp_path / "absent.yaml"))
    assert config.get_max_iterations() == 2


def test_invalid_values_are_rejected(tmp_path):
    with pytest.raises(ValueError):
        config.set("inference.max_iterations", 0)
    assert config.get_max_iterations() == 2
    with pytest.raises(ValueError):
        config.set("inference.max_depth", "deep")
    assert config.get_max_depth() == 2

    path = tmp_path / "bad.yaml"
    path.write_text(yaml.dump(["not", "a", "mapping"]))
    with pytest.raises(ValueError):
        config.load_from_file(str(path))


def test_rejected_file_leaves_config_untouched(tmp_path):
    path = tmp_path / "bad.yaml"
    path.write_text(yaml.dump({"inference": {"max_depth": 5, "max_iterations": 0}}))
    with pytest.raises(ValueError):
        config.load_from_file(str(path))
    assert config.get_max_iterations() == 2
    assert config.get_max_depth() == 2


def test_booleans_are_not_integers():
    with pytest.raises(ValueError):
        config.set("inference.max_iterations", True)
    assert config.get_max_iterations() == 2
    with pytest.raises(ValueError):
        config.set("inference.max_depth", False)
    assert config.get_max_depth() == 2


def test_save_round_trip(tmp_path):
    config.set("inference.max_depth", 4)
    path = tmp_path / "out.yaml"
    config.save(str(path))
    assert yaml.safe_load(path.read_text())["inference"]["max_depth"] == 4


def test_reset_restores_defaults():
    config.set("inference.max_depth", 7)
    config.reset()
    assert config.get_max_depth() == 2
