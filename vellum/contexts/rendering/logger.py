"""
Rendering context logger.

Provides logging interface for rendering context with automatic [render] prefix.
All rendering modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path

from loguru import logger

from vellum.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[render]"


def setup_rendering_logger(log_dir: Path, scale: float = None) -> Path:
    """
    Setup logger for rendering context.

    Args:
        log_dir: Directory for this rendering session
        scale: Raster upscaling factor, recorded in the provenance header

    Returns:
        Path to log file

    Example:
        from vellum.contexts.rendering.logger import setup_rendering_logger, _log_info

        log_file = setup_rendering_logger(log_dir, scale=2)
        _log_info("Starting export...")
    """
    extra = {"Export scale": scale} if scale is not None else None
    return _setup_logger(context_name="render", log_dir=log_dir, extra_provenance=extra)


# Wrapper functions with automatic [render] prefix


def _log_info(message: str) -> None:
    """Log info message with [render] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_success(message: str) -> None:
    """Log success message with [render] prefix."""
    logger.success(f"{CONTEXT_PREFIX} {message}")


def _log_error(message: str) -> None:
    """Log error message with [render] prefix."""
    logger.error(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [render] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [render] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level rendering-specific logging helpers


def log_export_start(title: str, template_id: str, scale: float, output_dir: Path) -> None:
    """Log start of export with context."""
    _log_info(f"Starting export: {title or '(untitled)'}")
    _log_info(f"Writing to {output_dir}")
    _log_debug(f"  Template: {template_id}")
    _log_debug(f"  Scale: {scale}")


def log_export_result(result, elapsed_time: float) -> None:
    """
    Log export result.

    Args:
        result: ExportResult from export_resume()
        elapsed_time: Time taken to export
    """
    if result.success:
        _log_success(f"{result.filename}: exported ({elapsed_time:.2f}s)")
        _log_debug(f"  PDF: {result.pdf_path}")
        _log_debug(f"  Raster: {result.raster_size[0]}x{result.raster_size[1]} px")
    else:
        _log_error(f"Export failed ({elapsed_time:.2f}s)")
        for line in str(result.error).splitlines():
            _log_error(f"  {line}")
