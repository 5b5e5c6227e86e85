"""
Document event logging utilities for VELLUM (Tier 2 logging).

Appends one JSON object per line to the document event log so saves and
exports can be audited across sessions without parsing the detailed
per-context logs.

For detailed within-context logging (Tier 1), use vellum.utils.logger instead.

Usage:
    from vellum.utils.event_logging import log_document_event

    log_document_event(
        event_type="export_completed",
        document_id=42,
        source="rendering",
        filename="QA Engineer.pdf",
    )
"""

import json
import os
from pathlib import Path
from typing import Any, Optional

from dotenv import load_dotenv

from vellum.utils.timestamp import now_exact

load_dotenv()
DOCUMENT_EVENTS_FILE = Path(
    os.getenv("DOCUMENT_EVENTS_FILE", "outs/logs/document_events.log")
)


def log_document_event(
    event_type: str, document_id: Optional[Any], source: str, **extra_fields
) -> None:
    """
    Log an event to the document event log.

    Args:
        event_type: Type of event (e.g., "save_completed", "export_failed")
        document_id: Storage id of the document (None for unsaved documents)
        source: Event source (e.g., "editing", "rendering", "cli")
        **extra_fields: Additional event-specific fields
    """
    DOCUMENT_EVENTS_FILE.parent.mkdir(parents=True, exist_ok=True)

    event = {
        "timestamp": now_exact(),
        "event_type": event_type,
        "document_id": document_id,
        "source": source,
        **extra_fields,
    }

    with open(DOCUMENT_EVENTS_FILE, "a", encoding="utf-8") as f:
        f.write(json.dumps(event, default=str) + "\n")


def get_recent_events(
    n: int = 10, document_id: Optional[Any] = None, event_type: Optional[str] = None
) -> list[dict]:
    """
    Get the last n events from the document event log, optionally filtered.

    Args:
        n: Number of recent events to return (default: 10)
        document_id: Filter to only events for this document (optional)
        event_type: Filter to only events of this type (optional)

    Returns:
        List of event dicts (most recent last)

    Example:
        # Last 5 failed exports
        events = get_recent_events(5, event_type="export_failed")
    """
    if not DOCUMENT_EVENTS_FILE.exists():
        return []

    events = []
    with open(DOCUMENT_EVENTS_FILE, "r", encoding="utf-8") as f:
        for line in f:
            try:
                events.append(json.loads(line.strip()))
            except json.JSONDecodeError:
                # Skip malformed lines
                continue

    if document_id is not None:
        events = [e for e in events if e.get("document_id") == document_id]

    if event_type:
        events = [e for e in events if e.get("event_type") == event_type]

    return events[-n:] if len(events) > n else events
