"""
Configuration Management Module
===============================
Centralized configuration system for the prompt dissection service.

This module provides:
- Type-safe configuration via dataclasses
- Environment variable overrides
- JSON configuration file support
- Default values with documentation

Usage:
    from prompt_dissector.config import get_config
    config = get_config()

    # Access configuration
    max_length = config.dissection.max_bubble_length
    first_delay = config.pacing.first_bubble_delay_ms

To run with a saved configuration:
    config = load_config_file("configs/slow_pacing.json")
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional
import os
import json
import logging

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION DATACLASSES
# =============================================================================

@dataclass
class PathConfig:
    """Configuration for file system paths."""

    # Base directory (defaults to package directory)
    base_dir: Path = field(default_factory=lambda: Path(__file__).parent)

    # Runtime directories
    logs_dir: str = "logs"

    @property
    def logs(self) -> Path:
        return self.base_dir / self.logs_dir

    def ensure_directories(self) -> None:
        """Create all required directories if they don't exist."""
        self.logs.mkdir(parents=True, exist_ok=True)


@dataclass
class DissectionConfig:
    """
    Configuration for splitting text into segments.

    Bubble lengths follow what reads comfortably in a chat column:
    280 characters is the upper bound for one bubble, and fragments
    under 50 characters are too thin to stand alone when a strategy
    groups by length.
    """

    max_bubble_length: int = 280
    min_bubble_length: int = 50

    # Per-segment base delay, stored in each segment's bubble configuration
    delay_ms_per_char: int = 15
    min_base_delay_ms: int = 300
    max_base_delay_ms: int = 1000

    # Fixed base delays for strategies that do not derive them from length
    preserve_delay_ms: int = 500
    logical_break_delay_ms: int = 400


@dataclass
class PacingConfig:
    """Configuration for chat bubble reveal timing."""

    # First bubble appears quickly regardless of its length
    first_bubble_delay_ms: int = 300

    content_delay_ms_per_char: int = 20
    min_content_delay_ms: int = 300
    max_bubble_delay_ms: int = 3000


@dataclass
class FormattingConfig:
    """Configuration for chat text formatting helpers."""

    # Shorter responses use legacy paragraph splitting
    intelligent_analysis_min_length: int = 200

    # Legacy bubble pacing (used when analysis is bypassed or fails)
    legacy_first_delay_ms: int = 300
    legacy_delay_step_ms: int = 400


@dataclass
class FlaskConfig:
    """Configuration for Flask web server."""

    # Server settings
    host: str = "0.0.0.0"
    port: int = 5000
    debug: bool = True

    # Security
    secret_key: str = field(default_factory=lambda: os.getenv("FLASK_SECRET_KEY", "dev-secret-key"))

    # CORS
    cors_origins: list = field(default_factory=lambda: ["*"])


@dataclass
class LoggingConfig:
    """Configuration for logging and decision tracking."""

    # Identifies log files of one deployment or batch run
    run_name: str = "default"

    log_level: str = "INFO"
    log_decisions: bool = True
    log_to_file: bool = True


@dataclass
class AppConfig:
    """
    Master configuration class that aggregates all configuration sections.

    This is the main configuration object used throughout the application.
    """

    paths: PathConfig = field(default_factory=PathConfig)
    dissection: DissectionConfig = field(default_factory=DissectionConfig)
    pacing: PacingConfig = field(default_factory=PacingConfig)
    formatting: FormattingConfig = field(default_factory=FormattingConfig)
    flask: FlaskConfig = field(default_factory=FlaskConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)

    def __post_init__(self):
        """Ensure all directories exist after initialization."""
        if self.logging.log_to_file:
            self.paths.ensure_directories()

    def to_dict(self) -> dict:
        """Convert configuration to dictionary for serialization."""
        def convert(obj):
            if hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in obj.__dict__.items()}
            elif isinstance(obj, Path):
                return str(obj)
            return obj
        return convert(self)

    def save(self, filepath: str) -> None:
        """Save configuration to JSON file."""
        with open(filepath, 'w') as f:
            json.dump(self.to_dict(), f, indent=2)
        logger.info(f"Configuration saved to {filepath}")

    @classmethod
    def from_dict(cls, data: dict) -> "AppConfig":
        """Create configuration from dictionary."""
        # base_dir is serialized as a string
        paths_data = dict(data.get('paths', {}))
        if 'base_dir' in paths_data and isinstance(paths_data['base_dir'], str):
            paths_data['base_dir'] = Path(paths_data['base_dir'])

        return cls(
            paths=PathConfig(**paths_data),
            dissection=DissectionConfig(**data.get('dissection', {})),
            pacing=PacingConfig(**data.get('pacing', {})),
            formatting=FormattingConfig(**data.get('formatting', {})),
            flask=FlaskConfig(**data.get('flask', {})),
            logging=LoggingConfig(**data.get('logging', {}))
        )

    @classmethod
    def load(cls, filepath: str) -> "AppConfig":
        """Load configuration from JSON file."""
        with open(filepath, 'r') as f:
            data = json.load(f)
        logger.info(f"Configuration loaded from {filepath}")
        return cls.from_dict(data)


# =============================================================================
# GLOBAL CONFIGURATION SINGLETON
# =============================================================================

_config: Optional[AppConfig] = None


def get_config() -> AppConfig:
    """
    Get the global application configuration.

    Creates a default configuration on first access.

    Returns:
        The global AppConfig instance
    """
    global _config
    if _config is None:
        _config = AppConfig()
        logger.info("Initialized default application configuration")
    return _config


def set_config(config: AppConfig) -> None:
    """
    Set the global application configuration.

    Args:
        config: The AppConfig instance to use globally
    """
    global _config
    _config = config
    logger.info(f"Set global configuration (run: {config.logging.run_name})")


def reset_config() -> None:
    """Reset the global configuration to None (forces reload on next get_config)."""
    global _config
    _config = None
    logger.info("Reset global configuration")


def load_config_file(filepath: str) -> AppConfig:
    """
    Load a configuration file and set it as global.

    Args:
        filepath: Path to the configuration JSON file

    Returns:
        The loaded AppConfig instance
    """
    config = AppConfig.load(filepath)
    set_config(config)
    return config


# =============================================================================
# ENVIRONMENT VARIABLE OVERRIDES
# =============================================================================

ENV_PREFIX = "PROMPT_DISSECTOR_"

SECTION_NAMES = ('dissection', 'pacing', 'formatting', 'flask', 'logging')


def apply_environment_overrides(config: AppConfig) -> AppConfig:
    """
    Apply environment variable overrides to configuration.

    Environment variables follow the pattern:
    PROMPT_DISSECTOR_{SECTION}_{KEY}

    Examples:
        PROMPT_DISSECTOR_DISSECTION_MAX_BUBBLE_LENGTH=320
        PROMPT_DISSECTOR_FLASK_PORT=8080
        PROMPT_DISSECTOR_LOGGING_LOG_LEVEL=DEBUG

    Also supports common simplified environment variables:
        PORT=8080 (maps to flask.port)
        LOG_LEVEL=DEBUG (maps to logging.log_level)

    Args:
        config: Base configuration to override

    Returns:
        Configuration with environment overrides applied
    """
    if os.getenv("PORT"):
        try:
            config.flask.port = int(os.getenv("PORT"))
            logger.info(f"Environment override: flask.port = {config.flask.port}")
        except ValueError:
            logger.warning(f"Ignoring non-integer PORT value: {os.getenv('PORT')}")

    if os.getenv("LOG_LEVEL"):
        config.logging.log_level = os.getenv("LOG_LEVEL").upper()
        logger.info(f"Environment override: logging.log_level = {config.logging.log_level}")

    for key, value in os.environ.items():
        if not key.startswith(ENV_PREFIX):
            continue

        parts = key[len(ENV_PREFIX):].lower().split('_', 1)
        if len(parts) != 2:
            continue

        section, attr = parts
        if section not in SECTION_NAMES:
            continue

        section_config = getattr(config, section, None)
        if section_config is None or not hasattr(section_config, attr):
            continue

        # Convert value to appropriate type
        current_value = getattr(section_config, attr)
        try:
            if isinstance(current_value, bool):
                typed_value = value.lower() in ('true', '1', 'yes')
            elif isinstance(current_value, int):
                typed_value = int(value)
            elif isinstance(current_value, float):
                typed_value = float(value)
            elif isinstance(current_value, list):
                typed_value = [item.strip() for item in value.split(',') if item.strip()]
            else:
                typed_value = value

            setattr(section_config, attr, typed_value)
            logger.info(f"Environment override: {section}.{attr} = {typed_value}")

        except (ValueError, TypeError) as e:
            logger.warning(f"Failed to apply environment override {key}: {e}")

    return config


# =============================================================================
# PRESET CONFIGURATIONS FOR COMMON SCENARIOS
# =============================================================================

def get_development_config() -> AppConfig:
    """Get configuration optimized for development."""
    config = AppConfig()
    config.flask.debug = True
    config.logging.log_level = "DEBUG"
    return config


def get_production_config() -> AppConfig:
    """Get configuration optimized for production."""
    config = AppConfig()
    config.flask.debug = False
    config.logging.log_level = "INFO"
    config.logging.run_name = "production"
    return config
