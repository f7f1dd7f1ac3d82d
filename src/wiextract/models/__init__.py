"""IR (Intermediate Representation) models for the work instruction extractor.

This module defines the Pydantic models that represent data flowing through
the pipeline stages.

Model Hierarchy:
- Attachment → Document → Tables → Rows → Cells → Paragraphs (input, read-only)
- ConversionResult → WorkInstruction → WorkInstructionTextItem (output)
- ConversionResult → RuleViolation (diagnostics)
"""

from .base import (
    BaseIRModel,
    ConversionStatus,
    FrozenIRModel,
    RuleCode,
)
from .document import (
    Attachment,
    Cell,
    Document,
    Paragraph,
    Row,
    Table,
)
from .result import (
    ConversionResult,
    RuleViolation,
    WorkInstruction,
    WorkInstructionTextItem,
)

__all__ = [
    # Base types
    "BaseIRModel",
    "ConversionStatus",
    "FrozenIRModel",
    "RuleCode",
    # Document
    "Attachment",
    "Cell",
    "Document",
    "Paragraph",
    "Row",
    "Table",
    # Result
    "ConversionResult",
    "RuleViolation",
    "WorkInstruction",
    "WorkInstructionTextItem",
]
