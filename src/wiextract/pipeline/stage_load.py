"""Document Loading Stage - Convert .docx bytes to the Document IR.

Uses python-docx to read the word-processing object model and copies the
parts the extractor needs (tables, rows, cells, paragraph text and list
formatting) into immutable IR models.

Legacy binary .doc files cannot be read by python-docx; they are rejected
with UnsupportedFormatError, which the engine records as a critical
violation for that document.
"""

import io
import logging
import zipfile
from pathlib import Path
from typing import Optional

import docx
from docx.opc.exceptions import PackageNotFoundError

from wiextract.errors import UnsupportedFormatError
from wiextract.models import Attachment, Cell, Document, Paragraph, Row, Table

logger = logging.getLogger(__name__)


def _numbering_flag(p_pr) -> Optional[bool]:
    """Read list numbering from a pPr element.

    Returns None when the element does not mention numbering, so the caller
    can fall back to the paragraph style. numId 0 explicitly removes
    numbering inherited from a style.
    """
    if p_pr is None or p_pr.numPr is None:
        return None
    num_id = p_pr.numPr.numId
    if num_id is not None and num_id.val == 0:
        return False
    return True


def is_list_paragraph(paragraph) -> bool:
    """Check whether a python-docx paragraph renders as a list item.

    Direct paragraph numbering wins; otherwise the style chain is walked
    (e.g. "List Bullet" carries its numbering in the style definition).
    """
    flag = _numbering_flag(paragraph._p.pPr)
    if flag is not None:
        return flag

    style = paragraph.style
    seen = set()
    while style is not None and style.style_id not in seen:
        seen.add(style.style_id)
        flag = _numbering_flag(style.element.pPr)
        if flag is not None:
            return flag
        style = style.base_style

    return False


def build_document(docx_document, filename: str = "") -> Document:
    """Copy a python-docx document into the Document IR.

    Args:
        docx_document: Opened python-docx document.
        filename: Source filename recorded on the IR.

    Returns:
        Read-only Document.
    """
    tables = []
    for docx_table in docx_document.tables:
        rows = []
        for docx_row in docx_table.rows:
            cells = [
                Cell(
                    paragraphs=[
                        Paragraph(text=p.text, is_list_item=is_list_paragraph(p))
                        for p in docx_cell.paragraphs
                    ]
                )
                for docx_cell in docx_row.cells
            ]
            rows.append(Row(cells=cells))
        tables.append(Table(rows=rows))

    return Document(source_filename=filename, tables=tables)


def load_document(attachment: Attachment) -> Document:
    """Load an attachment into the Document IR.

    Args:
        attachment: File bytes plus filename.

    Returns:
        Read-only Document.

    Raises:
        UnsupportedFormatError: If the bytes are not a readable .docx package.
    """
    suffix = Path(attachment.file_name).suffix.lower()
    stream = io.BytesIO(attachment.file_bytes)

    if not zipfile.is_zipfile(stream):
        if suffix == ".doc":
            reason = "legacy binary .doc format is not supported, save as .docx"
        else:
            reason = "not a .docx (Office Open XML) package"
        raise UnsupportedFormatError(attachment.file_name, reason)

    stream.seek(0)
    try:
        docx_document = docx.Document(stream)
    except (PackageNotFoundError, KeyError, ValueError) as exc:
        raise UnsupportedFormatError(attachment.file_name, str(exc) or type(exc).__name__) from exc

    document = build_document(docx_document, attachment.file_name)
    logger.debug(
        "Loaded %s: %d tables, %d rows",
        attachment.file_name,
        len(document.tables),
        document.total_row_count,
    )
    return document
