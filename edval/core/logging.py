"""
Channel-Aware Structured Logging for EDVAL.

Provides semantic logging channels with level-based filtering:
- ENGINE: rule orchestration, timing
- EXTRACT: pattern extraction
- RULE: findings emitted by rules
- FIX: fix application
- SYSTEM: errors, warnings, status

Log Levels:
- SILENT (0): No logging
- INFO (1): Key milestones only
- VERBOSE (2): Detailed operations
- DEBUG (3): Everything

Configuration via environment:
- EDVAL_LOG_LEVEL: Global level (silent/info/verbose/debug)
- EDVAL_LOG_FORMAT: Output format (console/json)
- EDVAL_LOG_CHANNELS: Comma-separated channel filter (all if not set)
"""

import logging
import os
import sys
from contextvars import ContextVar
from datetime import datetime
from enum import Enum, IntEnum
from typing import Any, Optional, Union

import structlog


# =============================================================================
# Enums
# =============================================================================

class LogLevel(IntEnum):
    """Log verbosity levels."""
    SILENT = 0
    INFO = 1
    VERBOSE = 2
    DEBUG = 3

    @classmethod
    def from_string(cls, s: str) -> "LogLevel":
        """Parse log level from string."""
        mapping = {
            "silent": cls.SILENT,
            "info": cls.INFO,
            "verbose": cls.VERBOSE,
            "debug": cls.DEBUG,
            # stdlib compatibility
            "warning": cls.INFO,
            "error": cls.INFO,
        }
        return mapping.get(s.lower(), cls.INFO)


class LogChannel(str, Enum):
    """Semantic log channels."""
    ENGINE = "ENGINE"       # Rule orchestration
    EXTRACT = "EXTRACT"     # Pattern extraction
    RULE = "RULE"           # Findings
    FIX = "FIX"             # Fix application
    SYSTEM = "SYSTEM"       # Errors, warnings, status

    @classmethod
    def all(cls) -> list["LogChannel"]:
        """Return all channels."""
        return list(cls)

    @classmethod
    def from_string(cls, s: str) -> Optional["LogChannel"]:
        """Parse channel from string."""
        try:
            return cls(s.upper())
        except ValueError:
            return None


# =============================================================================
# Configuration
# =============================================================================

# Document-scoped context, merged into every event
_document_context: ContextVar[dict] = ContextVar("edval_log_context", default={})

_config = {
    "level": LogLevel.INFO,
    "format": "console",
    "channels": set(LogChannel.all()),
    "configured": False,
}


def _parse_channels(channels: list[Union[LogChannel, str]]) -> list[LogChannel]:
    parsed_channels = []
    for ch in channels:
        if isinstance(ch, str):
            parsed = LogChannel.from_string(ch.strip())
            if parsed:
                parsed_channels.append(parsed)
        else:
            parsed_channels.append(ch)
    return parsed_channels


def configure_logging(
    level: Union[LogLevel, str, None] = None,
    format: str = None,
    channels: list[Union[LogChannel, str]] = None,
    force: bool = False,
) -> None:
    """
    Configure the logging system.

    Args:
        level: Log level (LogLevel enum or string)
        format: Output format ("console" or "json")
        channels: List of channels to enable (all if None)
        force: Force reconfiguration if already configured
    """
    if _config["configured"] and not force:
        return

    if level is None:
        level = LogLevel.from_string(os.environ.get("EDVAL_LOG_LEVEL", "info"))
    elif isinstance(level, str):
        level = LogLevel.from_string(level)

    if format is None:
        format = os.environ.get("EDVAL_LOG_FORMAT", "console")

    if channels is None:
        channels_str = os.environ.get("EDVAL_LOG_CHANNELS", "")
        parsed_channels = _parse_channels(channels_str.split(",")) if channels_str else []
        channels = parsed_channels or LogChannel.all()
    else:
        channels = _parse_channels(channels)

    _config["level"] = level
    _config["format"] = format
    _config["channels"] = set(channels)

    stdlib_level = {
        LogLevel.SILENT: logging.CRITICAL + 10,  # Above critical = nothing
        LogLevel.INFO: logging.INFO,
        LogLevel.VERBOSE: logging.DEBUG,
        LogLevel.DEBUG: logging.DEBUG,
    }.get(level, logging.INFO)

    # Diagnostics go to stdout; logs stay on stderr
    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=stdlib_level,
        force=True,
    )

    shared_processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if format == "json":
        processors = shared_processors + [
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors = shared_processors + [
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    _config["configured"] = True


# =============================================================================
# Channel Logger
# =============================================================================

class ChannelLogger:
    """
    A logger bound to a specific channel.

    Provides level-aware logging methods:
    - info(): Key milestones (level >= INFO)
    - verbose(): Detailed operations (level >= VERBOSE)
    - debug(): Everything (level >= DEBUG)
    - error(): Always logged (unless SILENT)
    - warning(): Always logged (unless SILENT)
    """

    def __init__(
        self,
        channel: LogChannel,
        name: str = None,
        rule_name: str = None,
    ):
        self.channel = channel
        self.name = name or f"edval.{channel.value.lower()}"
        self.rule_name = rule_name
        self._logger = structlog.get_logger(self.name)

    def _should_log(self, msg_level: LogLevel) -> bool:
        if self.channel not in _config["channels"]:
            return False
        return _config["level"] >= msg_level

    def _make_event(self, **kwargs) -> dict:
        data = {
            "channel": self.channel.value,
            **kwargs,
        }
        if self.rule_name:
            data["rule"] = self.rule_name

        ctx = _document_context.get()
        if ctx:
            data.update(ctx)

        return data

    def info(self, event: str, **kwargs) -> None:
        """Log at INFO level (key milestones)."""
        if not self._should_log(LogLevel.INFO):
            return
        self._logger.info(event, **self._make_event(**kwargs))

    def verbose(self, event: str, **kwargs) -> None:
        """Log at VERBOSE level (detailed operations)."""
        if not self._should_log(LogLevel.VERBOSE):
            return
        self._logger.debug(event, **self._make_event(level="verbose", **kwargs))

    def debug(self, event: str, **kwargs) -> None:
        """Log at DEBUG level (everything)."""
        if not self._should_log(LogLevel.DEBUG):
            return
        self._logger.debug(event, **self._make_event(level="debug", **kwargs))

    def error(self, event: str, **kwargs) -> None:
        """Log an error (always logged unless SILENT)."""
        if _config["level"] == LogLevel.SILENT:
            return
        self._logger.error(event, **self._make_event(**kwargs))

    def warning(self, event: str, **kwargs) -> None:
        """Log a warning (always logged unless SILENT)."""
        if _config["level"] == LogLevel.SILENT:
            return
        self._logger.warning(event, **self._make_event(**kwargs))


# =============================================================================
# Logger Factory Functions
# =============================================================================

def get_logger(channel: Union[LogChannel, str] = LogChannel.SYSTEM) -> ChannelLogger:
    """
    Get a channel-specific logger.

    Args:
        channel: The log channel (default: SYSTEM)

    Returns:
        A ChannelLogger instance
    """
    configure_logging()

    if isinstance(channel, str):
        channel = LogChannel.from_string(channel) or LogChannel.SYSTEM

    return ChannelLogger(channel=channel)


def get_rule_logger(rule_name: str, channel: LogChannel = None) -> ChannelLogger:
    """
    Get a logger for a specific validation rule.

    Args:
        rule_name: The rule name (e.g., "r20_images")
        channel: The log channel (RULE unless given)

    Returns:
        A ChannelLogger bound to the rule
    """
    configure_logging()

    if channel is None:
        channel = LogChannel.RULE if rule_name.startswith("r") else LogChannel.ENGINE

    return ChannelLogger(
        channel=channel,
        name=f"edval.{rule_name}",
        rule_name=rule_name,
    )


# =============================================================================
# Document Context Management
# =============================================================================

def bind_document_context(**kwargs) -> None:
    """Bind context that will be included in all log messages."""
    ctx = _document_context.get().copy()
    ctx.update(kwargs)
    _document_context.set(ctx)


def clear_document_context() -> None:
    """Clear the document context."""
    _document_context.set({})


# =============================================================================
# ValidationLogger
# =============================================================================

class ValidationLogger:
    """
    Context-aware logger for one validation pass.

    Binds the document name for all log messages and times each rule.
    """

    def __init__(self, document_name: str):
        self.document_name = document_name
        self._engine_log = get_logger(LogChannel.ENGINE)
        self._system_log = get_logger(LogChannel.SYSTEM)
        self._start_time = datetime.now()
        self._rule_times: dict[str, float] = {}

        bind_document_context(document=document_name)

    def rule_start(self, rule_name: str) -> None:
        """Log the start of a rule."""
        self._rule_times[rule_name] = datetime.now().timestamp()
        self._engine_log.verbose("rule_started", rule_name=rule_name)

    def rule_end(self, rule_name: str, **metrics: Any) -> None:
        """Log the end of a rule with timing."""
        start = self._rule_times.get(rule_name, datetime.now().timestamp())
        duration_ms = (datetime.now().timestamp() - start) * 1000

        self._engine_log.verbose(
            "rule_completed",
            rule_name=rule_name,
            duration_ms=round(duration_ms, 2),
            **metrics,
        )

    def rule_error(self, rule_name: str, error: Exception) -> None:
        """Log a rule that raised."""
        self._system_log.error(
            "rule_failed",
            rule_name=rule_name,
            error=str(error),
            error_type=type(error).__name__,
        )

    def validation_complete(self, status: str, **metrics: Any) -> None:
        """Log validation completion with summary."""
        total_ms = (datetime.now() - self._start_time).total_seconds() * 1000

        self._engine_log.info(
            "validation_complete",
            status=status,
            total_duration_ms=round(total_ms, 2),
            **metrics,
        )

        clear_document_context()


def get_current_config() -> dict:
    """Get the current logging configuration (for testing/debugging)."""
    return {
        "level": _config["level"].name,
        "format": _config["format"],
        "channels": [ch.value for ch in _config["channels"]],
    }
