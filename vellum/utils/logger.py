"""
Loguru setup for Tier 1 (detailed, per-run) logging.

Each CLI run gets its own directory under LOGS_PATH holding one
{context}.log file (DEBUG and up), while INFO and up is echoed to the
console. Context-specific prefixed wrappers live in
contexts/{context}/logger.py; modules log through those.

Tier 2 (cross-run document events) is vellum.utils.event_logging.
"""

import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv
from loguru import logger

import vellum

load_dotenv()
CONSOLE_LOG_LEVEL = os.getenv("VELLUM_CONSOLE_LOG_LEVEL", "INFO")

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "{time:HH:mm:ss} | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: Optional[Dict[str, Any]] = None,
    console: bool = True,
) -> Path:
    """
    Point loguru at a fresh per-run log file and write a provenance header.

    Replaces every existing sink, so the most recent setup call wins.

    Args:
        context_name: Context identifier ("edit", "render", "store"); names the file
        log_dir: Directory for this run (created if missing)
        extra_provenance: Additional key-value pairs for the header
        console: Also echo to stdout at VELLUM_CONSOLE_LOG_LEVEL

    Returns:
        Path to the log file

    Example:
        log_file = setup_logger(
            context_name="render",
            log_dir=Path("outs/logs/export_20251114_123456"),
            extra_provenance={"Export scale": 2},
        )
    """
    log_dir = Path(log_dir)
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG", encoding="utf-8")
    if console:
        logger.add(sys.stdout, format=CONSOLE_FORMAT, level=CONSOLE_LOG_LEVEL, colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: Optional[Dict[str, Any]] = None) -> None:
    """Write the run header: context, package version, command line, cwd, Python."""
    rows = {
        "Context": context_name,
        "vellum": vellum.__version__,
        "Command": " ".join(sys.argv),
        "Working directory": Path.cwd(),
        "Python": sys.version.split()[0],
        **(extra_context or {}),
    }
    logger.debug("=" * 80)
    for key, value in rows.items():
        logger.debug(f"{key}: {value}")
    logger.debug("=" * 80)
