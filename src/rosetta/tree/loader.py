import logging
from collections.abc import Mapping
from typing import Any

from pydantic import ValidationError

from .errors import MalformedTreeError
from .models import Node

logger = logging.getLogger(__name__)

# Kinds that are meaningless without a child list.
CONTAINER_KINDS = frozenset(
    {"root", "heading", "paragraph", "list", "listItem", "blockquote"}
)


def load_tree(source: Node | Mapping[str, Any]) -> Node:
    """Validate a parse tree and return it as a ``Node``.

    Accepts an already-built ``Node`` or the plain mapping form a
    markdown parser serialises to (mdast JSON).

    Raises:
        MalformedTreeError: If the tree does not have the expected shape.
    """
    if isinstance(source, Node):
        tree = source
    elif isinstance(source, Mapping):
        try:
            tree = Node.model_validate(dict(source))
        except ValidationError as exc:
            logger.error("Parse tree failed validation: %s", exc)
            raise MalformedTreeError(f"Invalid parse tree: {exc}") from exc
    else:
        logger.error("Unsupported parse tree type: %s", type(source).__name__)
        raise MalformedTreeError(
            f"Parse tree must be a Node or a mapping, got {type(source).__name__}"
        )

    check_shape(tree)
    return tree


def check_shape(node: Node, path: str = "root") -> None:
    """Fail fast on nodes missing the fields their kind requires."""
    if node.type in CONTAINER_KINDS and node.children is None:
        logger.error("Node %s (%s) has no children list", path, node.type)
        raise MalformedTreeError(
            f"Node at {path} of kind '{node.type}' is missing its children list"
        )
    if node.type == "heading" and node.depth is None:
        logger.error("Heading at %s has no depth", path)
        raise MalformedTreeError(f"Heading at {path} is missing its depth")

    for i, child in enumerate(node.children or []):
        check_shape(child, f"{path}.children[{i}]")
