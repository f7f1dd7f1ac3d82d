"""Conversion result IR models.

These are the engine's output: the extracted work instructions for one
document, its confidence score and the rule violations found on the way.
The camelCase JSON form of ``ConversionResult`` is the persistence contract.
"""

from typing import Any, Optional
from uuid import UUID, uuid4

from pydantic import Field, PrivateAttr, computed_field

from wiextract.errors import ResultSealedError

from .base import BaseIRModel, ConversionStatus, FrozenIRModel, RuleCode


class RuleViolation(FrozenIRModel):
    """Structural problem found while converting a document."""

    rule: str = Field(..., description="Short diagnostic code, e.g. NotFound")
    message: str = ""
    is_critical: bool = Field(
        default=False, description="Critical violations abort the document"
    )


class WorkInstructionTextItem(FrozenIRModel):
    """Single instruction step."""

    id: UUID = Field(default_factory=uuid4)

    # Items are grouped by group_name when displayed as a survey
    group_name: str = ""
    text: str
    sub_text: Optional[str] = None


class WorkInstruction(FrozenIRModel):
    """All instruction items of one document, across every classified table."""

    source_filename: str = ""
    instructions: tuple[WorkInstructionTextItem, ...] = ()


class ConversionResult(BaseIRModel):
    """
    Outcome of converting one document.

    Violations are append-only and exposed as a tuple. Once the engine seals
    the result, it can no longer be modified.
    """

    filename: str = Field(..., frozen=True)
    conversion_score: int = Field(default=0, ge=0)
    work_instructions: WorkInstruction = Field(default_factory=WorkInstruction)

    _violations: list[RuleViolation] = PrivateAttr(default_factory=list)
    _sealed: bool = PrivateAttr(default=False)

    def __setattr__(self, name: str, value: Any) -> None:
        if not name.startswith("_") and self.sealed:
            raise ResultSealedError(self.filename)
        super().__setattr__(name, value)

    @computed_field(alias="ruleViolations")
    @property
    def rule_violations(self) -> tuple[RuleViolation, ...]:
        return tuple(self._violations)

    @computed_field
    @property
    def aborted(self) -> bool:
        """True when any violation is critical."""
        return any(v.is_critical for v in self._violations)

    @computed_field(alias="hasWarnings")
    @property
    def has_warnings(self) -> bool:
        """True when any violation was recorded."""
        return len(self._violations) > 0

    @property
    def sealed(self) -> bool:
        return getattr(self, "_sealed", False)

    @property
    def status(self) -> ConversionStatus:
        if self.aborted:
            return ConversionStatus.ABORTED
        if self.has_warnings:
            return ConversionStatus.SUCCESS_WITH_WARNINGS
        return ConversionStatus.SUCCESS

    @property
    def instructions(self) -> tuple[WorkInstructionTextItem, ...]:
        return self.work_instructions.instructions

    def add_violation(self, rule: str, is_critical: bool, message: str) -> RuleViolation:
        """Append a rule violation. Duplicate calls record duplicate entries."""
        if self.sealed:
            raise ResultSealedError(self.filename)
        if isinstance(rule, RuleCode):
            rule = rule.value
        violation = RuleViolation(rule=rule, is_critical=is_critical, message=message)
        self._violations.append(violation)
        return violation

    def seal(self) -> "ConversionResult":
        """Freeze the result against further changes."""
        self._sealed = True
        return self

    def to_json(self, indent: Optional[int] = 2) -> str:
        """Serialize with camelCase keys."""
        return self.model_dump_json(by_alias=True, indent=indent)
