"""
Storage context logger.

Provides logging interface for storage context with automatic [store] prefix.
All storage modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[store]"


def setup_storage_logger(log_dir: Path, api_url: str = None) -> Path:
    """
    Setup logger for storage context.

    Args:
        log_dir: Directory for this session's logs
        api_url: Persistence API base URL, recorded in the provenance header

    Returns:
        Path to log file
    """
    extra = {"API": api_url} if api_url else None
    return _setup_logger(context_name="store", log_dir=log_dir, extra_provenance=extra)


# Wrapper functions with automatic [store] prefix


def _log_info(message: str) -> None:
    """Log info message with [store] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [store] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [store] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [store] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [store] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level storage-specific logging helpers


def log_request(method: str, path: str, status_code: int, elapsed_time: float) -> None:
    """Log one API round trip; non-2xx responses are logged as warnings."""
    message = f"{method} {path} -> {status_code} ({elapsed_time * 1000:.0f} ms)"
    if 200 <= status_code < 300:
        _log_debug(message)
    else:
        _log_warning(message)
