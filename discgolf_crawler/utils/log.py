"""
Logging utilities for the content crawler.

Provides colorful CLI logging using the rich library.
"""

import logging
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler


# Global console instance
console = Console()

# Logger instances cache
_loggers: dict = {}

# Root of the package logger hierarchy
ROOT_LOGGER_NAME = "discgolf_crawler"


def setup_logger(
    name: str = ROOT_LOGGER_NAME,
    level: int = logging.INFO,
    log_file: Optional[str] = None
) -> logging.Logger:
    """
    Set up and configure a logger with rich formatting.

    Args:
        name: Logger name
        level: Logging level (default: INFO)
        log_file: Optional file path to write logs

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)

    # Clear existing handlers
    logger.handlers.clear()

    console_handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=True,
        rich_tracebacks=True
    )
    console_handler.setFormatter(logging.Formatter("%(message)s"))
    console_handler.setLevel(level)
    logger.addHandler(console_handler)

    # File handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        )
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    _loggers[name] = logger
    return logger


def get_logger(name: str) -> logging.Logger:
    """
    Get a component logger under the package root logger.

    Component loggers carry no handlers of their own; records propagate
    to whatever ``setup_logger`` installed on the root logger.

    Args:
        name: Component name (e.g. ``"extractor"``)

    Returns:
        Logger instance
    """
    full_name = f"{ROOT_LOGGER_NAME}.{name}"
    if full_name not in _loggers:
        _loggers[full_name] = logging.getLogger(full_name)
    return _loggers[full_name]


def print_status(message: str, style: str = "bold blue") -> None:
    """
    Print a styled status message.

    Args:
        message: Message to print
        style: Rich style string
    """
    console.print(f"[{style}]{message}[/{style}]")


def print_error(message: str) -> None:
    """Print an error message."""
    print_status(f"✗ {message}", "bold red")


def print_success(message: str) -> None:
    """Print a success message."""
    print_status(f"✓ {message}", "bold green")


def print_warning(message: str) -> None:
    """Print a warning message."""
    print_status(f"! {message}", "bold yellow")


def print_info(message: str) -> None:
    """Print an info message."""
    print_status(message, "bold cyan")
