from .models import Diagnostic, ValidationResult

NO_ISSUES = "✅ No issues found"

_SECTIONS = (
    ("Errors", "❌ ", "errors"),
    ("Warnings", "⚠️  ", "warnings"),
    ("Suggestions", "💡 ", "suggestions"),
)


def format_validation_messages(result: ValidationResult) -> str:
    """Render diagnostics one per line, grouped by severity."""
    output = ""
    for heading, marker, attr in _SECTIONS:
        diagnostics: tuple[Diagnostic, ...] = getattr(result, attr)
        if not diagnostics:
            continue
        output += f"\n{heading}:\n"
        for diagnostic in diagnostics:
            output += f"{marker}{diagnostic.message}\n"

    return output or NO_ISSUES
