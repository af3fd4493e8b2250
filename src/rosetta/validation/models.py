# validation/models.py

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum
from typing import Any

from rosetta.content.models import Element, Group


class Severity(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    SUGGESTION = "suggestion"


@dataclass(frozen=True)
class Diagnostic:
    """A single validation finding.

    ``location`` points at the offending element or group, when there is one.
    """

    severity: Severity
    kind: str  # e.g. "skipped_heading_level"
    message: str
    location: Element | Group | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "severity": self.severity.value,
            "kind": self.kind,
            "message": self.message,
            "location": None if self.location is None else self.location.to_dict(),
        }


@dataclass(frozen=True)
class ValidationResult:
    errors: tuple[Diagnostic, ...] = ()
    warnings: tuple[Diagnostic, ...] = ()
    suggestions: tuple[Diagnostic, ...] = ()

    @classmethod
    def from_diagnostics(cls, diagnostics: Iterable[Diagnostic]) -> "ValidationResult":
        collected = list(diagnostics)
        return cls(
            errors=tuple(d for d in collected if d.severity is Severity.ERROR),
            warnings=tuple(d for d in collected if d.severity is Severity.WARNING),
            suggestions=tuple(
                d for d in collected if d.severity is Severity.SUGGESTION
            ),
        )

    @property
    def is_clean(self) -> bool:
        return not (self.errors or self.warnings or self.suggestions)

    def has_failures(self, *, strict: bool = False) -> bool:
        """Errors always fail; warnings fail too in strict mode."""
        return bool(self.errors) or (strict and bool(self.warnings))

    def kinds(self) -> list[str]:
        return [d.kind for d in (*self.errors, *self.warnings, *self.suggestions)]

    def to_dict(self) -> dict[str, Any]:
        return {
            "errors": [d.to_dict() for d in self.errors],
            "warnings": [d.to_dict() for d in self.warnings],
            "suggestions": [d.to_dict() for d in self.suggestions],
        }
