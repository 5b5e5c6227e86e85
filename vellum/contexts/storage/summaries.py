"""
Document list view.

SummaryCache is the list-view copy of the user's documents. It changes
locally in exactly two ways: a new or duplicated document is inserted at the
front, and a deleted document is removed by id. reload() is the separate,
authoritative path that replaces the cache from the API.

DocumentList wires the cache to a ResumeAPI for the create, duplicate and
delete actions.
"""

from dataclasses import dataclass
from typing import Any, Iterator, List, Mapping, Optional

from vellum.contexts.editing.defaults import (
    DEFAULT_TEMPLATE_ID,
    DUPLICATE_TITLE_SUFFIX,
    NEW_RESUME_TITLE,
)
from vellum.contexts.editing.document import ResumeDocument
from vellum.contexts.storage.logger import _log_debug, _log_info
from vellum.utils.event_logging import log_document_event
from vellum.utils.timestamp import parse_timestamp

SORT_UPDATED = "updated"
SORT_NAME = "name"
SORT_OPTIONS = (SORT_UPDATED, SORT_NAME)


@dataclass(frozen=True)
class DocumentSummary:
    """
    One row of the document list.

    Attributes:
        id: Storage id
        title: Document title
        updated_at: Last update timestamp as returned by storage ("" if unknown)
        template_id: Layout variant
    """

    id: Any
    title: str = ""
    updated_at: str = ""
    template_id: str = DEFAULT_TEMPLATE_ID

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "DocumentSummary":
        """Build from a stored row; resume_data is ignored."""
        return cls(
            id=row.get("id"),
            title=str(row.get("title") or ""),
            updated_at=str(row.get("updated_at") or ""),
            template_id=str(row.get("template_id") or DEFAULT_TEMPLATE_ID),
        )

    @classmethod
    def from_document(cls, doc: ResumeDocument) -> "DocumentSummary":
        return cls(
            id=doc.id,
            title=doc.title,
            updated_at=doc.updated_at or "",
            template_id=doc.template_id,
        )


class SummaryCache:
    """Ordered list-view cache of document summaries."""

    def __init__(self, summaries=()):
        self._items: List[DocumentSummary] = list(summaries)

    def __iter__(self) -> Iterator[DocumentSummary]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    @property
    def items(self) -> tuple:
        return tuple(self._items)

    def ids(self) -> List[Any]:
        return [summary.id for summary in self._items]

    def get(self, document_id: Any) -> Optional[DocumentSummary]:
        for summary in self._items:
            if summary.id == document_id:
                return summary
        return None

    def insert_front(self, summary: DocumentSummary) -> None:
        self._items.insert(0, summary)

    def remove(self, document_id: Any) -> bool:
        """
        Remove the summary with this id. Every other entry keeps its position.

        Returns:
            True if an entry was removed
        """
        before = len(self._items)
        self._items = [summary for summary in self._items if summary.id != document_id]
        return len(self._items) != before

    def reload(self, api) -> List[DocumentSummary]:
        """Replace the cache with the API's current list."""
        self._items = list(api.list_documents())
        _log_debug(f"Reloaded {len(self._items)} document summaries")
        return list(self._items)

    def view(self, search: str = "", sort: str = SORT_UPDATED) -> List[DocumentSummary]:
        """
        Filtered, sorted copy of the cache. The cache itself is not reordered.

        Args:
            search: Case-insensitive substring to match against titles
            sort: "updated" (newest first) or "name" (case-insensitive title)

        Raises:
            ValueError: If sort is not a known option
        """
        if sort not in SORT_OPTIONS:
            raise ValueError(f"Unknown sort '{sort}'. Expected one of: {', '.join(SORT_OPTIONS)}")

        needle = (search or "").strip().lower()
        rows = [s for s in self._items if needle in s.title.lower()] if needle else list(self._items)

        if sort == SORT_NAME:
            return sorted(rows, key=lambda s: s.title.lower())
        return sorted(rows, key=lambda s: parse_timestamp(s.updated_at), reverse=True)


class DocumentList:
    """List-view actions: create, duplicate, delete, backed by a SummaryCache."""

    def __init__(self, api, cache: SummaryCache = None):
        self.api = api
        self.cache = cache if cache is not None else SummaryCache()

    def refresh(self) -> List[DocumentSummary]:
        return self.cache.reload(self.api)

    def view(self, search: str = "", sort: str = SORT_UPDATED) -> List[DocumentSummary]:
        return self.cache.view(search, sort)

    def create(
        self, title: str = NEW_RESUME_TITLE, template_id: str = DEFAULT_TEMPLATE_ID
    ) -> ResumeDocument:
        """Create an empty document and put it at the front of the list."""
        doc = self.api.create_document(
            {"title": title, "template_id": template_id, "resume_data": {}}
        )
        self.cache.insert_front(DocumentSummary.from_document(doc))
        _log_info(f"Created document {doc.id}: {doc.title}")
        log_document_event("document_created", doc.id, source="storage", title=doc.title)
        return doc

    def duplicate(self, document_id: Any) -> ResumeDocument:
        """
        Copy a document's content into a new document titled "<title> Copy".

        The full document is fetched first; the summary alone carries no content.
        """
        original = self.api.get_document(document_id)
        copy = self.api.create_document(
            {
                "title": original.title + DUPLICATE_TITLE_SUFFIX,
                "template_id": original.template_id,
                "resume_data": original.resume_data(),
            }
        )
        self.cache.insert_front(DocumentSummary.from_document(copy))
        _log_info(f"Duplicated document {document_id} as {copy.id}")
        log_document_event(
            "document_duplicated", copy.id, source="storage", duplicated_from=document_id
        )
        return copy

    def delete(self, document_id: Any) -> None:
        """
        Delete one document and drop only its summary from the list.

        No other API call is made; the rest of the cache is left as is.
        """
        self.api.delete_document(document_id)
        self.cache.remove(document_id)
        _log_info(f"Deleted document {document_id}")
        log_document_event("document_deleted", document_id, source="storage")
