"""
Dissection Logging System
=========================
Structured logging for the prompt dissection service.

This module provides:
- Structured JSON logging for machine-parseable outputs
- Named loggers for analysis, routes and decisions
- Log file organization by run name
- Readers for inspecting JSONL decision logs

Usage:
    from prompt_dissector.logging_config import get_dissection_logger, log_dissection_decision

    logger = get_dissection_logger("analysis")
    logger.info("Analyzed prompt", extra={"run_id": "...", "segment_count": 4})

    log_dissection_decision("strategy_selected", {"strategy": "sentence_split"})
"""

import sys
import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Dict, Any, Union

from .config import get_config


# Attributes every LogRecord carries; anything else came in through extra={}
_RESERVED_ATTRS = frozenset((
    'name', 'msg', 'args', 'created', 'filename', 'funcName', 'levelname',
    'levelno', 'lineno', 'module', 'msecs', 'pathname', 'process',
    'processName', 'relativeCreated', 'stack_info', 'exc_info', 'exc_text',
    'thread', 'threadName', 'taskName', 'message', 'context',
))


# =============================================================================
# CUSTOM FORMATTERS
# =============================================================================

class StructuredFormatter(logging.Formatter):
    """
    JSON formatter for structured logging.

    Outputs log records as JSON objects with consistent structure:
    {
        "timestamp": "2024-01-15T10:30:00.123456",
        "level": "INFO",
        "logger": "dissector.decisions",
        "message": "Decision: strategy_selected",
        "context": {...}
    }
    """

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, 'context') and record.context:
            log_data['context'] = record.context

        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            try:
                # Fall back to str() for values json can't handle
                json.dumps(value)
                log_data[key] = value
            except (TypeError, ValueError):
                log_data[key] = str(value)

        if record.exc_info:
            log_data['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_data, ensure_ascii=False)


class ConsoleFormatter(logging.Formatter):
    """
    Human-readable formatter for console output.

    Format: [LEVEL] logger: message (key=value, ...)
    """

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__()
        self.use_colors = use_colors and sys.stdout.isatty()

    def format(self, record: logging.LogRecord) -> str:
        level = record.levelname
        if self.use_colors and level in self.COLORS:
            level = f"{self.COLORS[level]}{level}{self.RESET}"

        msg = f"[{level}] {record.name}: {record.getMessage()}"

        extras = []
        for key, value in record.__dict__.items():
            if key in _RESERVED_ATTRS:
                continue
            if isinstance(value, (str, int, float, bool)):
                extras.append(f"{key}={value}")
            elif isinstance(value, dict) and len(value) < 3:
                extras.append(f"{key}={value}")

        if extras:
            msg += f" ({', '.join(extras)})"

        if record.exc_info:
            msg += "\n" + self.formatException(record.exc_info)

        return msg


# =============================================================================
# LOGGER FACTORY
# =============================================================================

_loggers: Dict[str, logging.Logger] = {}
_initialized: bool = False


def _setup_root_logger():
    """Configure the root logger with console handler."""
    global _initialized
    if _initialized:
        return

    config = get_config()
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, config.logging.log_level, logging.INFO))

    root_logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ConsoleFormatter())
    root_logger.addHandler(console_handler)

    _initialized = True


def get_dissection_logger(
    name: str,
    log_to_file: Optional[bool] = None,
    run_name: Optional[str] = None
) -> logging.Logger:
    """
    Get or create a dissection logger.

    Args:
        name: Logger name (e.g., "analysis", "decisions", "routes.dissection")
        log_to_file: Whether to write logs to file (default: from config)
        run_name: Optional run name for file organization

    Returns:
        Configured logger instance
    """
    _setup_root_logger()

    full_name = f"dissector.{name}"

    if full_name in _loggers:
        return _loggers[full_name]

    config = get_config()
    logger = logging.getLogger(full_name)
    logger.setLevel(getattr(logging, config.logging.log_level, logging.INFO))
    logger.propagate = False

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(ConsoleFormatter())
    logger.addHandler(console_handler)

    if log_to_file is None:
        log_to_file = config.logging.log_to_file

    if log_to_file:
        log_file = get_run_log_path(run_name or config.logging.run_name, name)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_file, mode='a', encoding='utf-8', errors='backslashreplace')
        file_handler.setFormatter(StructuredFormatter())
        logger.addHandler(file_handler)

    _loggers[full_name] = logger
    return logger


def get_decision_logger() -> logging.Logger:
    """Get a logger for dissection decisions."""
    return get_dissection_logger("decisions")


# =============================================================================
# CONVENIENCE LOGGING FUNCTIONS
# =============================================================================

def log_dissection_decision(
    decision_type: str,
    details: Dict[str, Any],
    run_id: Optional[str] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """
    Log a dissection decision.

    Args:
        decision_type: Type of decision (e.g., "strategy_selected", "bubbles_generated")
        details: Decision details
        run_id: Analysis run ID
        logger: Optional logger override
    """
    config = get_config()
    if not config.logging.log_decisions:
        return

    log = logger or get_decision_logger()
    extra = {
        'decision_type': decision_type,
        'details': details
    }
    if run_id:
        extra['run_id'] = run_id

    log.info(f"Decision: {decision_type}", extra=extra)


def log_stage_complete(
    stage_name: str,
    run_id: str,
    duration_seconds: float,
    output_summary: Dict[str, Any] = None,
    logger: Optional[logging.Logger] = None
) -> None:
    """Log the completion of a dissection stage."""
    log = logger or get_dissection_logger("analysis")
    log.debug(
        f"Completed stage: {stage_name} ({duration_seconds * 1000:.2f}ms)",
        extra={
            'stage_name': stage_name,
            'run_id': run_id,
            'event': 'stage_complete',
            'duration_seconds': duration_seconds,
            'output_summary': output_summary or {}
        }
    )


# =============================================================================
# LOG FILE UTILITIES
# =============================================================================

def get_run_log_path(run_name: str, log_type: str = "decisions") -> Path:
    """Get the log file path for a run."""
    config = get_config()
    log_dir = config.paths.logs / log_type
    timestamp = datetime.now().strftime("%Y%m%d")
    return log_dir / f"{run_name}_{timestamp}.jsonl"


def read_log_file(log_path: Union[str, Path]) -> list:
    """
    Read a JSONL log file and return list of log entries.

    Args:
        log_path: Path to the log file

    Returns:
        List of parsed log entry dictionaries
    """
    entries = []
    with open(log_path, 'r', encoding='utf-8') as f:
        for line in f:
            line = line.strip()
            if line:
                try:
                    entries.append(json.loads(line))
                except json.JSONDecodeError:
                    continue
    return entries


def get_decision_logs_for_run(run_id: str) -> list:
    """Get all decision log entries for a specific analysis run."""
    config = get_config()
    log_dir = config.paths.logs / "decisions"
    if not log_dir.exists():
        return []

    entries = []
    for log_file in log_dir.glob("*.jsonl"):
        for entry in read_log_file(log_file):
            if entry.get('run_id') == run_id:
                entries.append(entry)

    return entries
