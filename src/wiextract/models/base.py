"""Base models and common types for the work instruction extractor."""

from enum import Enum

from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class RuleCode(str, Enum):
    """Diagnostic codes recorded as rule violations."""

    NOT_FOUND = "NotFound"
    RUNTIME_ERROR = "RunTimeError"


class ConversionStatus(str, Enum):
    """Outcome of converting one document.

    Values double as the batch routing folder names.
    """

    SUCCESS = "Success"
    SUCCESS_WITH_WARNINGS = "SuccessWithWarnings"
    ABORTED = "Aborted"


class BaseIRModel(BaseModel):
    """Base class for all IR models.

    Fields serialize with camelCase aliases, which is the shape downstream
    consumers of ``*.result.json`` files read.
    """

    class Config:
        alias_generator = to_camel
        populate_by_name = True


class FrozenIRModel(BaseIRModel):
    """Base class for read-only IR models."""

    class Config:
        frozen = True
