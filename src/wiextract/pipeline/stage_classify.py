"""Table Classification Stage - Select work instruction tables.

A table qualifies when any paragraph in any of its cells contains the
marker phrase, compared case-insensitively as a plain substring. The match
is not restricted to heading rows, so a footer mentioning the phrase also
selects its table.
"""

from typing import Optional

from wiextract.config import settings
from wiextract.models import Document, Table

DEFAULT_MARKER = "WORK INSTRUCTION"


def contains_marker(text: str, marker: str = DEFAULT_MARKER) -> bool:
    """Case-insensitive substring check for the marker phrase."""
    return marker.upper() in text.upper()


def is_work_instruction_table(table: Table, marker: str = DEFAULT_MARKER) -> bool:
    """Check whether any paragraph of the table carries the marker phrase."""
    return any(contains_marker(p.text, marker) for p in table.paragraphs())


def classify_tables(document: Document, marker: Optional[str] = None) -> list[Table]:
    """Select the work instruction tables of a document.

    Args:
        document: Loaded document.
        marker: Marker phrase (default from settings).

    Returns:
        Qualifying tables in document order, each at most once. An empty
        list means the document has no recognizable instruction table.
    """
    marker = marker or settings.marker_phrase
    return [t for t in document.tables if is_work_instruction_table(t, marker)]
