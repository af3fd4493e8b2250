from .by_type import (
    ElementContext,
    ImageBuckets,
    IndexedElement,
    IndexMetadata,
    TypeIndex,
    process_by_type,
)
from .config import DEFAULT_CONFIG, StructuringConfig
from .groups import process_groups
from .models import (
    CodeElement,
    DividerElement,
    Element,
    ElementType,
    Group,
    GroupHeadings,
    GroupMetadata,
    GroupState,
    HeadingElement,
    ImageElement,
    ImageRole,
    ListElement,
    ParagraphElement,
    Structure,
)
from .pipeline import ParsedSection, StructuredContent, parse_section, process_content
from .sequence import process_sequence

__all__ = [
    "DEFAULT_CONFIG",
    "CodeElement",
    "DividerElement",
    "Element",
    "ElementContext",
    "ElementType",
    "Group",
    "GroupHeadings",
    "GroupMetadata",
    "GroupState",
    "HeadingElement",
    "ImageBuckets",
    "ImageElement",
    "ImageRole",
    "IndexMetadata",
    "IndexedElement",
    "ListElement",
    "ParagraphElement",
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
]
