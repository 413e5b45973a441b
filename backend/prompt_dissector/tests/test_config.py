"""
Configuration System Tests
==========================
Verifies that the configuration management system works correctly.
"""

import os
import sys
import tempfile

# Add parent to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.dirname(__file__))))

from prompt_dissector.config import (
    AppConfig,
    get_config,
    set_config,
    reset_config,
    apply_environment_overrides,
    get_development_config,
    get_production_config,
)
from prompt_dissector.dissection.strategies import DissectionParams


def test_default_config():
    """Test that default configuration is created correctly."""
    reset_config()
    config = get_config()

    assert config is not None
    assert config.dissection.max_bubble_length == 280
    assert config.dissection.min_bubble_length == 50
    assert config.pacing.first_bubble_delay_ms == 300
    assert config.pacing.max_bubble_delay_ms == 3000
    assert config.formatting.intelligent_analysis_min_length == 200
    assert config.flask.port == 5000

    print("[PASS] Default configuration test passed")


def test_config_singleton():
    """Test that get_config returns the same instance."""
    reset_config()
    config1 = get_config()
    config2 = get_config()

    assert config1 is config2
    print("[PASS] Singleton test passed")


def test_set_config():
    """Test replacing the global configuration."""
    custom = AppConfig()
    custom.dissection.max_bubble_length = 120

    try:
        set_config(custom)
        assert get_config() is custom
        assert get_config().dissection.max_bubble_length == 120
        print("[PASS] set_config test passed")
    finally:
        reset_config()


def test_config_serialization():
    """Test configuration save and load."""
    config = AppConfig()
    config.logging.run_name = "test_run"
    config.pacing.first_bubble_delay_ms = 150

    with tempfile.NamedTemporaryFile(mode='w', suffix='.json', delete=False) as f:
        temp_path = f.name

    try:
        config.save(temp_path)
        loaded_config = AppConfig.load(temp_path)

        assert loaded_config.logging.run_name == "test_run"
        assert loaded_config.pacing.first_bubble_delay_ms == 150
        assert loaded_config.dissection.max_bubble_length == config.dissection.max_bubble_length
        assert loaded_config.paths.base_dir == config.paths.base_dir

        print("[PASS] Serialization test passed")
    finally:
        os.unlink(temp_path)


def test_presets():
    """Test development and production presets."""
    dev = get_development_config()
    assert dev.flask.debug is True
    assert dev.logging.log_level == "DEBUG"

    prod = get_production_config()
    assert prod.flask.debug is False
    assert prod.logging.run_name == "production"

    print("[PASS] Preset configurations test passed")


def test_environment_overrides():
    """Test environment variable overrides."""
    os.environ["PROMPT_DISSECTOR_DISSECTION_MAX_BUBBLE_LENGTH"] = "320"
    os.environ["PROMPT_DISSECTOR_FLASK_PORT"] = "8080"
    os.environ["PROMPT_DISSECTOR_FLASK_DEBUG"] = "false"
    os.environ["PROMPT_DISSECTOR_FLASK_CORS_ORIGINS"] = "http://a.test, http://b.test"

    try:
        config = apply_environment_overrides(AppConfig())

        assert config.dissection.max_bubble_length == 320
        assert config.flask.port == 8080
        assert config.flask.debug is False
        assert config.flask.cors_origins == ["http://a.test", "http://b.test"]

        print("[PASS] Environment override test passed")
    finally:
        del os.environ["PROMPT_DISSECTOR_DISSECTION_MAX_BUBBLE_LENGTH"]
        del os.environ["PROMPT_DISSECTOR_FLASK_PORT"]
        del os.environ["PROMPT_DISSECTOR_FLASK_DEBUG"]
        del os.environ["PROMPT_DISSECTOR_FLASK_CORS_ORIGINS"]


def test_invalid_environment_override_ignored():
    """Test that a malformed override leaves the default in place."""
    os.environ["PROMPT_DISSECTOR_PACING_FIRST_BUBBLE_DELAY_MS"] = "soon"

    try:
        config = apply_environment_overrides(AppConfig())
        assert config.pacing.first_bubble_delay_ms == 300
        print("[PASS] Invalid environment override test passed")
    finally:
        del os.environ["PROMPT_DISSECTOR_PACING_FIRST_BUBBLE_DELAY_MS"]


def test_paths_created():
    """Test that the log directory is created."""
    reset_config()
    config = get_config()

    assert config.paths.logs.exists()

    print("[PASS] Path creation test passed")


def test_config_to_dict():
    """Test configuration dictionary export."""
    config = AppConfig()
    config_dict = config.to_dict()

    assert isinstance(config_dict, dict)
    assert 'dissection' in config_dict
    assert 'pacing' in config_dict
    assert config_dict['dissection']['max_bubble_length'] == 280
    assert isinstance(config_dict['paths']['base_dir'], str)

    print("[PASS] Config to_dict test passed")


def test_dissection_params_from_config():
    """Test that strategy parameters mirror the dissection section."""
    config = AppConfig()
    config.dissection.max_bubble_length = 200
    config.dissection.preserve_delay_ms = 250

    params = DissectionParams.from_config(config.dissection)

    assert params.max_bubble_length == 200
    assert params.preserve_delay_ms == 250
    assert params.min_bubble_length == 50

    print("[PASS] DissectionParams.from_config test passed")


def run_all_tests():
    """Run all configuration tests."""
    print("\n" + "="*60)
    print("CONFIGURATION SYSTEM TESTS")
    print("="*60 + "\n")

    test_default_config()
    test_config_singleton()
    test_set_config()
    test_config_serialization()
    test_presets()
    test_environment_overrides()
    test_invalid_environment_override_ignored()
    test_paths_created()
    test_config_to_dict()
    test_dissection_params_from_config()

    print("\n" + "="*60)
    print("ALL CONFIGURATION TESTS PASSED")
    print("="*60 + "\n")


if __name__ == "__main__":
    run_all_tests()
