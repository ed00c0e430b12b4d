"""
Result values returned by the stores instead of raising.
"""

from dataclasses import dataclass, field
from typing import Any

VALIDATION = "validation"
CONSTRAINT = "constraint"


@dataclass
class Result:
    """Outcome of a validated write: a record on success, field errors otherwise."""

    record: Any = None
    errors: dict[str, list[str]] = field(default_factory=dict)
    kind: str | None = None  # None, VALIDATION or CONSTRAINT

    @property
    def ok(self) -> bool:
        return self.kind is None

    @classmethod
    def success(cls, record) -> "Result":
        return cls(record=record)

    @classmethod
    def validation_failure(cls, errors: dict[str, list[str]]) -> "Result":
        return cls(errors=errors, kind=VALIDATION)

    @classmethod
    def constraint_failure(cls, errors: dict[str, list[str]]) -> "Result":
        return cls(errors=errors, kind=CONSTRAINT)
