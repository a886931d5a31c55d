"""Diagnostics logging for bluenet-shared.

The package reports its own failures (unwritable log files, failed deletions,
broken telemetry) through loguru. This channel is separate from the logs a
LogService produces for its host application.

As a library the package leaves loguru's handlers alone: its records are
disabled on import. Hosts either call logger.enable("bluenet_shared") to
route them into their own handlers, or configure_diagnostics() to get a
filtered stderr handler.

Environment variables for level control (configure_diagnostics only):
- BLUENET_SHARED_LOG_LEVEL: Global diagnostics level (default: WARNING)
- BLUENET_SHARED_LOG_SINKS: Storage backend level
- BLUENET_SHARED_LOG_SERVICE: LogService level
"""

import os
import sys

from loguru import logger

PACKAGE = "bluenet_shared"

# Get global log level from environment
_global_log_level = os.getenv("BLUENET_SHARED_LOG_LEVEL", "WARNING").upper()

# Component-specific log level overrides
_component_log_levels: dict[str, str] = {
    "sinks": os.getenv("BLUENET_SHARED_LOG_SINKS", "").upper(),
    "log_service": os.getenv("BLUENET_SHARED_LOG_SERVICE", "").upper(),
}

_handler_id: int | None = None

logger.disable(PACKAGE)


def _log_filter(record) -> bool:
    """Filter package records on global and component-specific levels.

    Records not bound through get_logger() belong to the host and are left
    to the host's own handlers.
    """
    name = record["extra"].get("bluenet_component")
    if name is None:
        return False

    for component, level in _component_log_levels.items():
        if level and component in name:
            try:
                return record["level"].no >= logger.level(level).no
            except ValueError:
                pass  # Invalid level, fall through to global

    try:
        return record["level"].no >= logger.level(_global_log_level).no
    except ValueError:
        return True


def configure_diagnostics(sink=sys.stderr) -> int:
    """Enable package diagnostics and write them to sink.

    Calling again replaces the handler added by the previous call.

    Args:
        sink: Any loguru sink (default: stderr)

    Returns:
        The loguru handler id
    """
    global _handler_id
    if _handler_id is not None:
        try:
            logger.remove(_handler_id)
        except ValueError:
            pass  # Already removed by the host
    _handler_id = logger.add(
        sink,
        level=0,  # Accept all, let filter decide
        filter=_log_filter,
        format="<green>{time:HH:mm:ss}</green> | <level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>",
    )
    logger.enable(PACKAGE)
    return _handler_id


def get_logger(name: str):
    """Get a logger with the given component name bound to context.

    Args:
        name: Module or component name

    Returns:
        Logger instance with name bound
    """
    return logger.bind(bluenet_component=name)


__all__ = ["logger", "get_logger", "configure_diagnostics"]
