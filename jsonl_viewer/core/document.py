"""
Document container and the multi-document workspace.

A Document owns one ingestion result together with its own filter, sort
direction and selection. Several documents can be open at once; the
DocumentStore keeps them in tab order and tracks which one is active.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field
from typing import Iterator, Sequence

from jsonl_viewer.core.line_index import (
    LineIndex,
    SortDirection,
    find_record,
    is_selection_stale,
)
from jsonl_viewer.core.line_ingestor import LineRecord, ingest

logger = logging.getLogger(__name__)


def generate_document_id() -> str:
    """Return an opaque, unique document identifier."""
    return f"file-{uuid.uuid4().hex[:12]}"


@dataclass
class Document:
    """One opened source and its presentation state.

    ``lines`` always stays in ingestion order. Filtering, sorting and
    selecting only change the presentation attributes.

    Attributes:
        id: Opaque unique identifier.
        display_name: Name of the source the text came from.
        lines: Ingested records, in input order.
        filter_text: Current filter text.
        sort_direction: Current display order.
        selected_id: Id of the selected record, if any.
    """

    id: str
    display_name: str
    lines: tuple[LineRecord, ...]
    filter_text: str = ""
    sort_direction: SortDirection = SortDirection.ASCENDING
    selected_id: int | None = None
    _index: LineIndex = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        self.lines = tuple(self.lines)
        self._index = LineIndex(self.lines)

    @classmethod
    def from_text(cls, display_name: str, text: str, doc_id: str | None = None) -> Document:
        """Ingest text into a fresh document."""
        return cls.from_records(display_name, ingest(text), doc_id)

    @classmethod
    def from_records(
        cls,
        display_name: str,
        records: Sequence[LineRecord],
        doc_id: str | None = None,
    ) -> Document:
        return cls(
            id=doc_id or generate_document_id(),
            display_name=display_name,
            lines=tuple(records),
        )

    @property
    def displayed_lines(self) -> tuple[LineRecord, ...]:
        """The filtered and ordered records currently on display."""
        return self._index.view(self.filter_text, self.sort_direction)

    @property
    def total_count(self) -> int:
        return self._index.total

    @property
    def displayed_count(self) -> int:
        return len(self.displayed_lines)

    @property
    def invalid_count(self) -> int:
        return sum(1 for line in self.lines if not line.is_valid)

    def set_filter(self, filter_text: str) -> None:
        self.filter_text = filter_text

    def set_sort(self, direction: SortDirection) -> None:
        self.sort_direction = direction

    def toggle_sort(self) -> SortDirection:
        self.sort_direction = self.sort_direction.toggled()
        return self.sort_direction

    def select(self, record_id: int | None) -> LineRecord | None:
        """Select a record by id. Unknown ids clear the selection."""
        record = find_record(self.lines, record_id)
        self.selected_id = record.id if record is not None else None
        return record

    def clear_selection(self) -> None:
        self.selected_id = None

    @property
    def selected_record(self) -> LineRecord | None:
        return find_record(self.lines, self.selected_id)

    @property
    def selection_is_stale(self) -> bool:
        """True when the selected record is hidden by the current filter."""
        return is_selection_stale(self.displayed_lines, self.selected_id)

    @property
    def visible_selection(self) -> LineRecord | None:
        """The selected record, or None when it is not currently displayed."""
        if self.selection_is_stale:
            return None
        return self.selected_record


class DocumentStore:
    """Ordered collection of open documents with one active document."""

    def __init__(self) -> None:
        self._documents: list[Document] = []
        self._active_id: str | None = None

    def __len__(self) -> int:
        return len(self._documents)

    def __iter__(self) -> Iterator[Document]:
        return iter(self._documents)

    def __contains__(self, doc_id: object) -> bool:
        return any(doc.id == doc_id for doc in self._documents)

    @property
    def documents(self) -> list[Document]:
        return list(self._documents)

    @property
    def active_id(self) -> str | None:
        return self._active_id

    @property
    def active(self) -> Document | None:
        if self._active_id is None:
            return None
        return self.get(self._active_id)

    def get(self, doc_id: str) -> Document | None:
        for doc in self._documents:
            if doc.id == doc_id:
                return doc
        return None

    def add(self, display_name: str, text: str) -> Document:
        """Ingest text as a new document and make it active."""
        return self.add_document(Document.from_text(display_name, text))

    def add_document(self, document: Document) -> Document:
        """Append an already ingested document and make it active."""
        self._documents.append(document)
        self._active_id = document.id
        logger.info(
            "Opened %s (%d lines, %d invalid)",
            document.display_name,
            document.total_count,
            document.invalid_count,
        )
        return document

    def activate(self, doc_id: str) -> Document:
        """Make a document active.

        Raises:
            KeyError: If no open document has the id.
        """
        document = self.get(doc_id)
        if document is None:
            raise KeyError(doc_id)
        self._active_id = doc_id
        return document

    def close(self, doc_id: str) -> Document | None:
        """Close a document and return the document that is active afterwards.

        Closing the active document activates the one now at its position
        (or the new last one); closing the last document leaves none active.
        Closing an unknown id changes nothing.
        """
        position = next(
            (i for i, doc in enumerate(self._documents) if doc.id == doc_id), None
        )
        if position is None:
            return self.active

        closed = self._documents.pop(position)
        logger.info("Closed %s", closed.display_name)

        if self._active_id == doc_id:
            if self._documents:
                neighbour = min(position, len(self._documents) - 1)
                self._active_id = self._documents[neighbour].id
            else:
                self._active_id = None
        return self.active
