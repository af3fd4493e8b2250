import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from rosetta.observability.base import MetricsHook, NoOpMetricsHook
from rosetta.tree.models import Node

from .by_type import TypeIndex, process_by_type
from .config import DEFAULT_CONFIG, StructuringConfig
from .groups import process_groups
from .models import Element, Structure
from .sequence import process_sequence

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StructuredContent:
    """Everything renderers consume for one section.

    This is the only type callers ever see; ``to_dict`` is its wire form.
    """

    sequence: tuple[Element, ...]
    groups: Structure
    by_type: TypeIndex

    def to_dict(self) -> dict[str, Any]:
        return {
            "sequence": [el.to_dict() for el in self.sequence],
            "groups": self.groups.to_dict(),
            "byType": self.by_type.to_dict(),
        }


@dataclass(frozen=True)
class ParsedSection:
    content: StructuredContent | None
    component: str | None = None
    props: Any = None  # Mapping when valid; checked by the validator

    def to_dict(self) -> dict[str, Any]:
        return {
            "component": self.component,
            "props": self.props,
            "content": None if self.content is None else self.content.to_dict(),
        }


def process_content(
    tree: Node | Mapping[str, Any],
    *,
    config: StructuringConfig = DEFAULT_CONFIG,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> StructuredContent:
    """Run the sequencer, then the grouping engine and type indexer.

    Raises:
        MalformedTreeError: If the parse tree has the wrong shape.
    """
    sequence = tuple(
        process_sequence(tree, config=config, metrics_hook=metrics_hook)
    )
    return StructuredContent(
        sequence=sequence,
        groups=process_groups(sequence, metrics_hook=metrics_hook),
        by_type=process_by_type(sequence, metrics_hook=metrics_hook),
    )


def parse_section(
    tree: Node | Mapping[str, Any],
    *,
    component: str | None = None,
    props: Mapping[str, Any] | None = None,
    config: StructuringConfig = DEFAULT_CONFIG,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ParsedSection:
    """Structure one section's parse tree alongside its frontmatter fields.

    Raises:
        ValueError: If ``props`` is given but is not a mapping.
        MalformedTreeError: If the parse tree has the wrong shape.
    """
    if props is not None and not isinstance(props, Mapping):
        logger.error("Props must be a mapping, got %s", type(props).__name__)
        raise ValueError(f"props must be a mapping, got {type(props).__name__}")

    return ParsedSection(
        content=process_content(tree, config=config, metrics_hook=metrics_hook),
        component=component,
        props=None if props is None else dict(props),
    )
