"""Structured logging setup."""

import logging

import structlog

from cpamm.config import EngineConfig


def configure_logging(level: str = "INFO", json_output: bool = False) -> None:
    """Configure structlog for the engine.

    Args:
        level: Standard logging level name (DEBUG, INFO, WARNING, ...)
        json_output: Render events as JSON lines instead of console output
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    renderer: structlog.types.Processor
    if json_output:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
    )


def configure_from(config: EngineConfig) -> None:
    """Configure logging from an EngineConfig."""
    configure_logging(config.log_level, config.log_json)
