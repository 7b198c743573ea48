import pytest
from kewpa_search.core.config_validator import ConfigValidator


def _valid(tmp_path):
    return {
        "features": {"quick_search_enabled": True},
        "search": {
            "result_limit": 20,
            "debounce_ms": 150,
            "scoring": {"substring_score": 100, "subsequence_weight": 2, "word_prefix_bonus": 50},
        },
        "paths": {
            "db_path": "kewpa.db",
            "logs_dir": str(tmp_path / "logs"),
        },
        "logging": {"level": "debug"},
    }


def test_config_strict_valid(tmp_path):
    errors = ConfigValidator.validate(_valid(tmp_path))
    assert not errors

    # Should create the logs directory
    assert (tmp_path / "logs").exists()


def test_relative_logs_dir_created_under_base_dir(tmp_path):
    config = _valid(tmp_path)
    config["paths"]["logs_dir"] = "var/logs"
    assert not ConfigValidator.validate(config, base_dir=tmp_path)
    assert (tmp_path / "var" / "logs").is_dir()


def test_config_strict_missing_sections():
    errors = ConfigValidator.validate({})
    assert "Missing required section: 'features'" in errors
    assert "Missing required section: 'paths'" in errors


def test_config_strict_missing_paths():
    config = {
        "features": {"quick_search_enabled": True},
        "paths": {"db_path": "foo.db"}  # Missing logs_dir
    }
    errors = ConfigValidator.validate(config)
    assert any("Missing path config: 'paths.logs_dir'" in e for e in errors)


def test_config_strict_bad_types(tmp_path):
    config = _valid(tmp_path)
    config["features"]["quick_search_enabled"] = "yes"
    config["paths"]["db_path"] = 42
    errors = ConfigValidator.validate(config)
    assert any("must be boolean" in e for e in errors)
    assert any("'paths.db_path' must be a string" in e for e in errors)


@pytest.mark.parametrize("section, key, value", [
    ("search", "result_limit", 0),
    ("search", "result_limit", "20"),
    ("search", "result_limit", True),
    ("search", "debounce_ms", -1),
])
def test_search_numbers_checked(tmp_path, section, key, value):
    config = _valid(tmp_path)
    config[section][key] = value
    errors = ConfigValidator.validate(config)
    assert any(f"'{key}'" in e for e in errors)


def test_scoring_weights_checked(tmp_path):
    config = _valid(tmp_path)
    config["search"]["scoring"]["word_prefix_bonus"] = 1.5
    errors = ConfigValidator.validate(config)
    assert any("word_prefix_bonus" in e for e in errors)


def test_substring_score_must_be_positive(tmp_path):
    config = _valid(tmp_path)
    config["search"]["scoring"]["substring_score"] = 0
    errors = ConfigValidator.validate(config)
    assert "Field 'substring_score' must be >= 1, got 0" in errors

    config["search"]["scoring"]["substring_score"] = 1
    config["search"]["scoring"]["word_prefix_bonus"] = 0
    assert not ConfigValidator.validate(config)


def test_logging_level_checked(tmp_path):
    config = _valid(tmp_path)
    config["logging"]["level"] = "LOUD"
    errors = ConfigValidator.validate(config)
    assert any("logging.level" in e for e in errors)
