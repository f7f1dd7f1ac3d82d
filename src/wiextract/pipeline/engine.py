"""Conversion Engine - Run the extraction stages for one document.

Flow:
1. Load the attachment (convert_attachment only)
2. Classify tables by marker phrase
3. Fold rows of the classified tables into instruction items
4. Score once over the whole document

Every failure inside a single document is caught here and recorded as one
critical RunTimeError violation, so each document yields exactly one
ConversionResult.
"""

import logging
from typing import Optional

from wiextract.config import Settings, settings as default_settings
from wiextract.models import (
    Attachment,
    ConversionResult,
    Document,
    RuleCode,
    WorkInstruction,
)
from wiextract.pipeline.stage_classify import classify_tables
from wiextract.pipeline.stage_extract import extract_tables
from wiextract.pipeline.stage_load import load_document
from wiextract.pipeline.stage_score import score_document

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = "No working instructions found in a table in the file"


def _extract_into(
    result: ConversionResult,
    document: Document,
    settings: Settings,
) -> None:
    """Populate result from a loaded document. Exceptions propagate."""
    tables = classify_tables(document, settings.marker_phrase)

    if not tables:
        logger.info("%s: no work instruction table", result.filename)
        result.add_violation(RuleCode.NOT_FOUND, False, NOT_FOUND_MESSAGE)
        return

    state = extract_tables(tables, marker=settings.marker_phrase)

    result.work_instructions = WorkInstruction(
        source_filename=result.filename,
        instructions=state.items,
    )
    result.conversion_score = score_document(document, state.item_count)


def _record_failure(result: ConversionResult, exc: Exception) -> None:
    logger.warning("%s: conversion aborted: %s", result.filename, exc)
    logger.debug("Traceback for %s", result.filename, exc_info=exc)

    # Partial output from a failed document is discarded
    result.work_instructions = WorkInstruction(source_filename=result.filename)
    result.conversion_score = 0
    result.add_violation(RuleCode.RUNTIME_ERROR, True, str(exc) or type(exc).__name__)


def _finish(result: ConversionResult) -> ConversionResult:
    logger.info(
        "%s: %s, %d items, score %d, %d violations",
        result.filename,
        result.status.value,
        len(result.instructions),
        result.conversion_score,
        len(result.rule_violations),
    )
    return result.seal()


def convert_document(
    document: Document,
    filename: Optional[str] = None,
    settings: Optional[Settings] = None,
) -> ConversionResult:
    """Extract work instructions from an already loaded document.

    Args:
        document: Read-only document tree.
        filename: Result filename (defaults to the document's source filename).
        settings: Settings override.

    Returns:
        Sealed ConversionResult.
    """
    settings = settings or default_settings
    filename = filename if filename is not None else document.source_filename
    result = ConversionResult(
        filename=filename,
        work_instructions=WorkInstruction(source_filename=filename),
    )

    try:
        _extract_into(result, document, settings)
    except Exception as exc:
        _record_failure(result, exc)

    return _finish(result)


def convert_attachment(
    attachment: Attachment,
    settings: Optional[Settings] = None,
) -> ConversionResult:
    """Load an attachment and extract its work instructions.

    Loading happens inside the failure boundary, so unreadable files produce
    an aborted result instead of an exception.

    Args:
        attachment: File bytes plus filename.
        settings: Settings override.

    Returns:
        Sealed ConversionResult.
    """
    settings = settings or default_settings
    result = ConversionResult(
        filename=attachment.file_name,
        work_instructions=WorkInstruction(source_filename=attachment.file_name),
    )

    try:
        document = load_document(attachment)
        _extract_into(result, document, settings)
    except Exception as exc:
        _record_failure(result, exc)

    return _finish(result)
