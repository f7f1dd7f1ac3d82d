"""Row Extraction Stage - Group table rows into work instruction items.

Instruction tables are authored as a heading row followed by a run of
list-formatted rows. Each row is classified by the first paragraph of its
first cell only:

1. Rows with empty text, or text still containing the marker phrase
   (the heading that selected the table), are skipped.
2. Rows identical in (text, list flag) within one table count once.
3. A non-list row becomes the current group name.
4. A list row becomes an item tagged with the current group name.

Grouping state is an explicit accumulator folded over the rows. It carries
across tables, so a table that opens with list rows continues the group
started in the previous table.
"""

from dataclasses import dataclass, replace
from functools import reduce
from typing import Iterable, Optional
from uuid import uuid4

from wiextract.models import Row, Table, WorkInstructionTextItem
from wiextract.pipeline.stage_classify import DEFAULT_MARKER, contains_marker


@dataclass(frozen=True)
class ExtractionState:
    """Fold accumulator for one document."""

    group_name: str = ""
    items: tuple[WorkInstructionTextItem, ...] = ()

    @property
    def item_count(self) -> int:
        return len(self.items)


@dataclass(frozen=True)
class CandidateRow:
    """Classification view of a row."""

    text: str
    is_list_item: bool


def candidate_rows(table: Table, marker: str = DEFAULT_MARKER) -> list[CandidateRow]:
    """Filter and deduplicate the rows of a table.

    Args:
        table: Classified table.
        marker: Marker phrase identifying heading rows to drop.

    Returns:
        Distinct candidate rows in document order.

    Raises:
        IndexError: If a row has no cells or its first cell no paragraphs.
    """
    candidates = []
    seen = set()

    for row in table.rows:
        candidate = classify_row(row)
        if not candidate.text or contains_marker(candidate.text, marker):
            continue
        if candidate in seen:
            continue
        seen.add(candidate)
        candidates.append(candidate)

    return candidates


def classify_row(row: Row) -> CandidateRow:
    """Build the classification view from the row's leading paragraph."""
    paragraph = row.first_paragraph
    return CandidateRow(text=paragraph.text, is_list_item=paragraph.is_list_item)


def apply_row(state: ExtractionState, row: CandidateRow) -> ExtractionState:
    """Fold one candidate row into the state."""
    if not row.is_list_item:
        return replace(state, group_name=row.text)

    item = WorkInstructionTextItem(
        id=uuid4(),
        text=row.text,
        group_name=state.group_name,
    )
    return replace(state, items=state.items + (item,))


def extract_table(
    table: Table,
    state: Optional[ExtractionState] = None,
    marker: str = DEFAULT_MARKER,
) -> ExtractionState:
    """Extract the instruction items of one table.

    Args:
        table: Classified table.
        state: State carried from earlier tables (fresh when omitted).
        marker: Marker phrase.

    Returns:
        New state with this table's items appended.
    """
    return reduce(apply_row, candidate_rows(table, marker), state or ExtractionState())


def extract_tables(
    tables: Iterable[Table],
    state: Optional[ExtractionState] = None,
    marker: str = DEFAULT_MARKER,
) -> ExtractionState:
    """Extract items from several tables in order, threading the state."""
    state = state or ExtractionState()
    for table in tables:
        state = extract_table(table, state, marker)
    return state
