"""Logging configuration for the 0x45 client."""

import logging
import logging.handlers
import sys
from pathlib import Path

import colorlog

# Base format string for log messages (without colors)
BASE_LOG_FORMAT = (
    "%(asctime)s %(levelname)8s %(message)s (%(name)s@%(filename)s:%(lineno)d)"
)


def setup_logging(
    level: int = logging.WARNING,
    format_string: str | None = None,
    use_colors: bool = True,
    log_file: Path | None = None,
) -> None:
    """Configure logging for the 0x45 client.

    Console output goes to stderr so that command output on stdout can be
    piped into other tools.

    Args:
        level: Logging level to use
        format_string: Custom format string for log messages
        use_colors: Whether to use colored output for console
        log_file: Optional file that receives a plain copy of every record
    """
    console_format = format_string or _get_console_format(use_colors)

    handlers = [_create_console_handler(console_format, use_colors)]

    if log_file is not None:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(_create_file_handler(log_file, BASE_LOG_FORMAT))

    logging.basicConfig(
        level=level,
        handlers=handlers,
        force=True,
    )


def set_log_level(level: int | str) -> None:
    """Change the root logger level after logging has been configured."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.getLogger().setLevel(level)


def _get_console_format(use_colors: bool) -> str:
    """Get console format string based on color preference."""
    if use_colors:
        return (
            "%(asctime)s %(log_color)s%(levelname)8s%(reset)s %(message)s "
            "\033[90m(%(name)s@%(filename)s:%(lineno)d)\033[0m"
        )
    return BASE_LOG_FORMAT


def _create_console_handler(format_string: str, use_colors: bool) -> logging.Handler:
    """Create console handler with appropriate formatter."""
    console_handler = logging.StreamHandler(sys.stderr)

    if use_colors:
        console_formatter: logging.Formatter = colorlog.ColoredFormatter(
            format_string,
            datefmt="%m-%d %H:%M:%S",
            log_colors={
                "DEBUG": "cyan",
                "INFO": "green",
                "WARNING": "yellow",
                "ERROR": "red",
                "CRITICAL": "red,bg_white",
            },
            secondary_log_colors={},
            style="%",
        )
    else:
        console_formatter = logging.Formatter(
            format_string,
            datefmt="%m-%d %H:%M:%S",
        )

    console_handler.setFormatter(console_formatter)
    return console_handler


def _create_file_handler(log_file: Path, format_string: str) -> logging.Handler:
    """Create a size-rotated file handler."""
    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=1024 * 1024,  # 1MB
        backupCount=2,
        encoding="utf-8",
    )
    file_handler.setFormatter(
        logging.Formatter(
            format_string,
            datefmt="%m-%d %H:%M:%S",
        )
    )
    return file_handler


def get_logger(name: str) -> logging.Logger:
    """Get a configured logger instance.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)


def setup_test_logging(level: int = logging.DEBUG) -> None:
    """Setup logging for test runs, writing to ``logs/test/test.log``.

    Args:
        level: Logging level to use
    """
    log_file = Path("logs", "test", "test.log")
    log_file.parent.mkdir(parents=True, exist_ok=True)
    log_file.unlink(missing_ok=True)
    setup_logging(level=level, use_colors=False, log_file=log_file)
