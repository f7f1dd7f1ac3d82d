"""Pytest configuration and fixtures."""

import docx
import pytest

from wiextract.models import Cell, Document, Paragraph, Row, Table


def _table(rows):
    return Table(
        rows=[
            Row(cells=[Cell(paragraphs=[Paragraph(text=text, is_list_item=is_list)])])
            for text, is_list in rows
        ]
    )


@pytest.fixture
def make_table():
    """Build a single-column Table IR from (text, is_list_item) pairs."""
    return _table


@pytest.fixture
def make_document():
    """Build a Document IR from a list of tables given as (text, is_list_item) pairs."""

    def _make(*tables, filename="sample.docx"):
        return Document(source_filename=filename, tables=[_table(rows) for rows in tables])

    return _make


@pytest.fixture
def sample_rows():
    """Rows of a typical work instruction table."""
    return [
        ("Work Instruction", False),
        ("Section A", False),
        ("Step 1", True),
        ("Step 2", True),
    ]


@pytest.fixture
def write_docx():
    """Write a real .docx file whose tables hold (text, is_list_item) rows."""

    def _write(path, *tables):
        document = docx.Document()
        for rows in tables:
            table = document.add_table(rows=len(rows), cols=1)
            for row, (text, is_list) in zip(table.rows, rows):
                paragraph = row.cells[0].paragraphs[0]
                paragraph.text = text
                if is_list:
                    num_pr = paragraph._p.get_or_add_pPr().get_or_add_numPr()
                    num_pr.get_or_add_numId().val = 1
        document.save(str(path))
        return path

    return _write


@pytest.fixture
def input_dir(tmp_path):
    """Create a temporary input directory."""
    in_dir = tmp_path / "docs"
    in_dir.mkdir()
    return in_dir


@pytest.fixture
def output_dir(tmp_path):
    """Create a temporary output directory."""
    out_dir = tmp_path / "output"
    out_dir.mkdir()
    return out_dir
