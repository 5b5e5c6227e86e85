"""Bounded contexts: editing, rendering, storage."""
