"""Document-level IR models.

A read-only tree mirroring the word-processing object model:
Document → Tables → Rows → Cells → Paragraphs. Ordering at every level is
the document's visual order, and the extractor relies on it.
"""

from pathlib import Path
from typing import Iterator, Optional, Union

from pydantic import Field

from .base import FrozenIRModel


class Paragraph(FrozenIRModel):
    """Single paragraph inside a table cell."""

    text: str = ""
    is_list_item: bool = Field(
        default=False, description="Rendered with list (bullet/numbering) formatting"
    )


class Cell(FrozenIRModel):
    """Table cell holding one or more paragraphs."""

    paragraphs: list[Paragraph] = Field(default_factory=list)

    @property
    def text(self) -> str:
        """All paragraph text joined by newlines."""
        return "\n".join(p.text for p in self.paragraphs)


class Row(FrozenIRModel):
    """Table row."""

    cells: list[Cell] = Field(default_factory=list)

    @property
    def first_paragraph(self) -> Paragraph:
        """First paragraph of the first cell.

        Rows are classified by their leading cell only. Raises IndexError for
        a row without cells or a leading cell without paragraphs.
        """
        return self.cells[0].paragraphs[0]


class Table(FrozenIRModel):
    """Table made of ordered rows."""

    rows: list[Row] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        return len(self.rows)

    def paragraphs(self) -> Iterator[Paragraph]:
        """Iterate every paragraph in every cell, in document order."""
        for row in self.rows:
            for cell in row.cells:
                yield from cell.paragraphs


class Document(FrozenIRModel):
    """
    Top-level document container.

    Produced by the loader from an attachment; the engine only reads it.
    """

    source_filename: str = Field(default="", description="Original filename")
    tables: list[Table] = Field(default_factory=list)

    @property
    def total_row_count(self) -> int:
        """Row count across every table in the document."""
        return sum(table.row_count for table in self.tables)


class Attachment(FrozenIRModel):
    """Raw file handed to the loader: bytes plus filename."""

    file_name: str
    file_bytes: bytes = Field(repr=False)
    mime_type: Optional[str] = None
    path: Optional[str] = None

    @property
    def size(self) -> int:
        return len(self.file_bytes)

    @classmethod
    def from_path(cls, path: Union[str, Path]) -> "Attachment":
        """Read a file from disk into an attachment."""
        path = Path(path)
        return cls(file_name=path.name, file_bytes=path.read_bytes(), path=str(path))
