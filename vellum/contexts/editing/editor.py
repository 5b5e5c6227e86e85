"""
Editing Session

EditorSession holds the single open document and applies Section Editor
operations to it one at a time. Because documents are immutable values,
"the current document" is just a reference that each edit replaces.

Saving sends a snapshot: the document value at the moment save is invoked.
Edits made while a background save is in flight are kept; when the save
returns, only the storage metadata (id and timestamps) is merged back into
the current document. A failed save keeps every local edit and is not
retried.

Usage:
    session = EditorSession.open(api, document_id=42)
    session.set_personal_field("fullName", "Ada Lovelace")
    session.add_work_entry()
    session.update_work_entry(0, "company", "Analytical Engines Ltd")
    future = session.save_in_background()
    ...
    result = future.result()
"""

import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Callable, Optional

from vellum.contexts.editing import section_editors
from vellum.contexts.editing.document import ResumeDocument
from vellum.contexts.editing.exceptions import MalformedDocumentError
from vellum.contexts.editing.logger import log_edit, log_save_result, log_save_start
from vellum.contexts.rendering.exporter import ExportResult, export_resume
from vellum.contexts.rendering.preview import PreviewTree, render_preview
from vellum.contexts.rendering.preview_html import render_preview_html
from vellum.contexts.rendering.registries import TemplateRegistry
from vellum.contexts.storage.exceptions import StorageError, UnauthorizedError
from vellum.utils.event_logging import log_document_event


@dataclass
class SaveResult:
    """
    Result of saving a document.

    Attributes:
        success: Whether storage accepted the document
        document_id: Storage id (None if a first save failed)
        document: The document as returned by storage (None if failed)
        error: The storage error that failed the save
        time_s: Round-trip time
    """

    success: bool
    document_id: Optional[Any] = None
    document: Optional[ResumeDocument] = None
    error: Optional[Exception] = None
    time_s: float = 0.0


class EditorSession:
    """Single-document editing session."""

    def __init__(
        self,
        document: Optional[ResumeDocument] = None,
        api=None,
        registry: Optional[TemplateRegistry] = None,
    ):
        """
        Args:
            document: Normalized document to edit (default: empty document)
            api: ResumeAPI used by save(); may be None for offline editing
            registry: Template registry for preview and export
        """
        self._document = document if document is not None else ResumeDocument.empty()
        self.api = api
        self.registry = registry or TemplateRegistry()
        self._lock = threading.Lock()
        self._executor: Optional[ThreadPoolExecutor] = None

    @classmethod
    def open(cls, api, document_id: Any, registry: Optional[TemplateRegistry] = None) -> "EditorSession":
        """
        Load a stored document into a new session.

        Raises:
            DocumentNotFoundError, UnauthorizedError, NetworkOrServerError,
            MalformedDocumentError: Loading failed; there is nothing to edit
        """
        return cls(api.get_document(document_id), api=api, registry=registry)

    @property
    def document(self) -> ResumeDocument:
        with self._lock:
            return self._document

    def apply(self, operation: Callable[..., ResumeDocument], *args) -> ResumeDocument:
        """Apply one section editor operation to the current document."""
        with self._lock:
            self._document = operation(self._document, *args)
            document = self._document
        log_edit(operation.__name__, document.id, ", ".join(repr(a) for a in args[:2]))
        return document

    # ------------------------------------------------------------------
    # Section editor operations
    # ------------------------------------------------------------------

    def set_title(self, text: str) -> ResumeDocument:
        return self.apply(section_editors.set_title, text)

    def set_template(self, template_id: str) -> ResumeDocument:
        return self.apply(section_editors.set_template, template_id)

    def set_personal_field(self, field_name: str, value: str) -> ResumeDocument:
        return self.apply(section_editors.set_personal_field, field_name, value)

    def add_work_entry(self) -> ResumeDocument:
        return self.apply(section_editors.add_work_entry)

    def update_work_entry(self, index: int, field_name: str, value: Any) -> ResumeDocument:
        return self.apply(section_editors.update_work_entry, index, field_name, value)

    def remove_work_entry(self, index: int) -> ResumeDocument:
        return self.apply(section_editors.remove_work_entry, index)

    def add_education_entry(self) -> ResumeDocument:
        return self.apply(section_editors.add_education_entry)

    def update_education_entry(self, index: int, field_name: str, value: Any) -> ResumeDocument:
        return self.apply(section_editors.update_education_entry, index, field_name, value)

    def remove_education_entry(self, index: int) -> ResumeDocument:
        return self.apply(section_editors.remove_education_entry, index)

    def add_skill(self, text: str) -> ResumeDocument:
        return self.apply(section_editors.add_skill, text)

    def remove_skill(self, index: int) -> ResumeDocument:
        return self.apply(section_editors.remove_skill, index)

    def prompt_skill(self, ask: Callable[[], Optional[str]]) -> bool:
        """
        Ask for a skill and append it.

        Args:
            ask: Returns the entered text, or None/"" when cancelled

        Returns:
            True if a skill was added
        """
        text = ask()
        if not text:
            return False
        self.add_skill(text)
        return True

    # ------------------------------------------------------------------
    # Preview and export
    # ------------------------------------------------------------------

    def preview(self) -> PreviewTree:
        return render_preview(self.document)

    def preview_html(self) -> str:
        return render_preview_html(self.document, self.registry)

    def export(self, output_dir: Optional[Path] = None, **kwargs) -> ExportResult:
        """Export the current document; see export_resume() for options."""
        return export_resume(self.document, output_dir, registry=self.registry, **kwargs)

    # ------------------------------------------------------------------
    # Saving
    # ------------------------------------------------------------------

    def save(self) -> SaveResult:
        """
        Save a snapshot of the current document.

        Creates the document on first save, updates it afterwards.

        Returns:
            SaveResult; storage failures are reported here, not raised

        Raises:
            UnauthorizedError: The session is missing or was rejected
        """
        return self._save(self.document)

    def save_in_background(self) -> "Future[SaveResult]":
        """
        Save a snapshot on a worker thread; editing may continue meanwhile.

        Saves run one at a time in submission order; a save queued behind
        the first create of a new document updates it. An UnauthorizedError
        is raised from the future's result().
        """
        snapshot = self.document
        if self._executor is None:
            self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix="vellum-save")
        return self._executor.submit(self._save, snapshot)

    def _save(self, snapshot: ResumeDocument) -> SaveResult:
        if self.api is None:
            raise RuntimeError("EditorSession has no API client; cannot save")

        # A save queued before an earlier create returned still has no id
        if snapshot.id is None:
            with self._lock:
                stored_id = self._document.id
            if stored_id is not None:
                snapshot = replace(snapshot, id=stored_id)

        log_save_start(snapshot.id, snapshot.title)
        start_time = time.time()

        try:
            if snapshot.id is None:
                saved = self.api.create_document(snapshot)
            else:
                saved = self.api.update_document(snapshot.id, snapshot)
        except UnauthorizedError:
            raise
        except (StorageError, MalformedDocumentError) as e:
            result = SaveResult(
                success=False, document_id=snapshot.id, error=e, time_s=time.time() - start_time
            )
            log_save_result(snapshot.id, result, result.time_s)
            log_document_event(
                "save_failed", snapshot.id, source="editing", error=e.message
            )
            return result

        self._merge_metadata(saved)
        result = SaveResult(
            success=True, document_id=saved.id, document=saved, time_s=time.time() - start_time
        )
        log_save_result(snapshot.id, result, result.time_s)
        log_document_event(
            "save_completed",
            saved.id,
            source="editing",
            title=saved.title,
            save_time_s=round(result.time_s, 2),
        )
        return result

    def _merge_metadata(self, saved: ResumeDocument) -> None:
        """Adopt storage id and timestamps without touching content."""
        with self._lock:
            self._document = replace(
                self._document,
                id=saved.id,
                created_at=saved.created_at,
                updated_at=saved.updated_at,
            )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Wait for pending background saves and release the worker."""
        if self._executor is not None:
            self._executor.shutdown(wait=True)
            self._executor = None

    def __enter__(self) -> "EditorSession":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
