"""
Editing context logger.

Provides logging interface for editing context with automatic [edit] prefix.
All editing modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[edit]"


def setup_editing_logger(log_dir: Path, document_id=None) -> Path:
    """
    Setup logger for editing context.

    Args:
        log_dir: Directory for this editing session
        document_id: Document being edited, recorded in the provenance header

    Returns:
        Path to log file
    """
    return _setup_logger(
        context_name="edit",
        log_dir=log_dir,
        extra_provenance={"Document": document_id if document_id is not None else "(new)"},
    )


# Wrapper functions with automatic [edit] prefix


def _log_info(message: str) -> None:
    """Log info message with [edit] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [edit] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [edit] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [edit] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [edit] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level editing-specific logging helpers


def log_edit(operation: str, document_id, detail: str = "") -> None:
    """Log a single applied edit at debug level."""
    suffix = f" ({detail})" if detail else ""
    _log_debug(f"{operation} on document {document_id}{suffix}")


def log_save_start(document_id, title: str) -> None:
    """Log start of a save."""
    _log_info(f"Saving '{title}' (document {document_id})")


def log_save_result(document_id, result, elapsed_time: float) -> None:
    """
    Log save result.

    Args:
        document_id: Storage id the save targeted (None for a first save)
        result: SaveResult from EditorSession.save()
        elapsed_time: Time taken
    """
    if result.success:
        _log_success(f"Document {result.document_id}: saved ({elapsed_time:.2f}s)")
    else:
        _log_error(f"Failed to save document {document_id} ({elapsed_time:.2f}s)")
        _log_error(f"  Error: {result.error}")
        _log_info("  Local edits kept; retry the save manually.")
