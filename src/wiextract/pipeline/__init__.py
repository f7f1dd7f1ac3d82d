"""Pipeline stages for work instruction extraction.

Stages (run in order per document):
1. stage_load - .docx bytes to the Document IR
2. stage_classify - Select tables carrying the marker phrase
3. stage_extract - Fold table rows into grouped instruction items
4. stage_score - Conversion confidence score

engine runs the stages for one document inside a failure boundary;
batch converts a directory and routes the results.
"""

from .batch import BatchSummary, find_documents, process_directory, route_result
from .engine import convert_attachment, convert_document
from .stage_classify import classify_tables, contains_marker, is_work_instruction_table
from .stage_extract import (
    CandidateRow,
    ExtractionState,
    candidate_rows,
    extract_table,
    extract_tables,
)
from .stage_load import build_document, is_list_paragraph, load_document
from .stage_score import compute_score, score_document

__all__ = [
    # Load
    "build_document",
    "is_list_paragraph",
    "load_document",
    # Classify
    "classify_tables",
    "contains_marker",
    "is_work_instruction_table",
    # Extract
    "CandidateRow",
    "ExtractionState",
    "candidate_rows",
    "extract_table",
    "extract_tables",
    # Score
    "compute_score",
    "score_document",
    # Engine
    "convert_attachment",
    "convert_document",
    # Batch
    "BatchSummary",
    "find_documents",
    "process_directory",
    "route_result",
]
