"""
Shared utilities for VELLUM.

Common functionality used across contexts:
- Logging setup and document event log
- Timestamps
- PDF inspection
"""

from vellum.utils.timestamp import epoch_millis, now, now_exact, today

__all__ = ["epoch_millis", "now", "now_exact", "today"]
