# Content structuring
from .content import (
    DEFAULT_CONFIG,
    Element,
    ElementType,
    Group,
    HeadingElement,
    ImageElement,
    ImageRole,
    IndexedElement,
    ParsedSection,
    Structure,
    StructuredContent,
    StructuringConfig,
    TypeIndex,
    parse_section,
    process_by_type,
    process_content,
    process_groups,
    process_sequence,
)

# Observability
from .observability import MetricsHook, NoOpMetricsHook, RecordingMetricsHook

# Parse tree
from .tree import MalformedTreeError, Node, load_tree

# Validation
from .validation import (
    Diagnostic,
    Severity,
    ValidationResult,
    format_validation_messages,
    validate_content,
)

__all__ = [
    # Content structuring
    "DEFAULT_CONFIG",
    "Element",
    "ElementType",
    "Group",
    "HeadingElement",
    "ImageElement",
    "ImageRole",
    "IndexedElement",
    "ParsedSection",
    "Structure",
    "StructuredContent",
    "StructuringConfig",
    "TypeIndex",
    "parse_section",
    "process_by_type",
    "process_content",
    "process_groups",
    "process_sequence",
    # Observability
    "MetricsHook",
    "NoOpMetricsHook",
    "RecordingMetricsHook",
    # Parse tree
    "MalformedTreeError",
    "Node",
    "load_tree",
    # Validation
    "Diagnostic",
    "Severity",
    "ValidationResult",
    "format_validation_messages",
    "validate_content",
]
