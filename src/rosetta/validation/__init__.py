from .formatting import NO_ISSUES, format_validation_messages
from .models import Diagnostic, Severity, ValidationResult
from .validator import validate_content

__all__ = [
    "NO_ISSUES",
    "Diagnostic",
    "Severity",
    "ValidationResult",
    "format_validation_messages",
    "validate_content",
]
