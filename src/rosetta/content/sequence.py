import logging
import re
from collections.abc import Mapping
from typing import Any

from rosetta.observability import names
from rosetta.observability.base import MetricsHook, NoOpMetricsHook, timed
from rosetta.tree.loader import load_tree
from rosetta.tree.models import Node

from .config import DEFAULT_CONFIG, StructuringConfig
from .models import (
    CodeElement,
    DividerElement,
    Element,
    HeadingElement,
    ImageElement,
    ImageRole,
    ListElement,
    ParagraphElement,
)

logger = logging.getLogger(__name__)

# "icon: Pencil" -> (icon, Pencil)
_ROLE_PREFIX_RE = re.compile(r"^(background|icon|gallery):\s*(.*)", re.DOTALL)

# Trailing "{.label1 .label2}" on heading text
_LABELS_RE = re.compile(r"\s*\{((?:\s*\.[\w-]+)+)\s*\}\s*$")


def process_sequence(
    tree: Node | Mapping[str, Any],
    *,
    config: StructuringConfig = DEFAULT_CONFIG,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> list[Element]:
    """Flatten a parse tree into positioned content elements.

    Nodes are visited pre-order. Positions count emitted elements only,
    so skipped node kinds never leave gaps.

    Raises:
        MalformedTreeError: If the tree is missing required child lists.
    """
    with timed(metrics_hook, names.SEQUENCE_DURATION):
        root = load_tree(tree)
        sequencer = _Sequencer(config)
        sequencer.visit(root)

    metrics_hook.increment(names.SEQUENCE_ELEMENTS_CREATED, len(sequencer.elements))
    logger.debug("Sequenced %d elements", len(sequencer.elements))
    return sequencer.elements


class _Sequencer:
    def __init__(self, config: StructuringConfig) -> None:
        self.config = config
        self.elements: list[Element] = []
        self._seen_image = False

    @property
    def _next_position(self) -> int:
        return len(self.elements)

    def visit(self, node: Node) -> None:
        if self._emit(node):
            return
        for child in node.children or []:
            self.visit(child)

    def _emit(self, node: Node) -> bool:
        """Append the element for ``node``, if any.

        Returns True when the element already covers the node's whole
        subtree and the walk must not descend into it.
        """
        match node.type:
            case "heading":
                content, labels = split_labels(text_content(node))
                self.elements.append(
                    HeadingElement(
                        position=self._next_position,
                        level=node.depth or 1,
                        content=content,
                        labels=labels,
                    )
                )
                return False

            case "paragraph":
                children = node.children or []
                if len(children) == 1 and children[0].type == "image":
                    self.elements.append(self._image(children[0]))
                    return True
                self.elements.append(
                    ParagraphElement(
                        position=self._next_position, content=text_content(node)
                    )
                )
                return False

            case "image":
                self.elements.append(self._image(node))
                return False

            case "thematicBreak":
                self.elements.append(DividerElement(position=self._next_position))
                return True

            case "list":
                self.elements.append(
                    ListElement(
                        position=self._next_position,
                        ordered=bool(node.ordered),
                        items=tuple(text_content(item) for item in node.children or []),
                    )
                )
                return True

            case "code":
                self.elements.append(
                    CodeElement(
                        position=self._next_position,
                        language=node.lang or "",
                        content=node.value or "",
                    )
                )
                return True

            case _:
                return False

    def _image(self, node: Node) -> ImageElement:
        alt = node.alt or ""
        prefix = _ROLE_PREFIX_RE.match(alt)
        if prefix:
            role = ImageRole(prefix.group(1))
            alt = prefix.group(2)
        elif not self._seen_image and self.config.first_image_background:
            role = ImageRole.BACKGROUND
        else:
            role = ImageRole.CONTENT

        self._seen_image = True
        return ImageElement(
            position=self._next_position,
            role=role,
            src=node.url or "",
            alt=alt,
            title=node.title or None,
        )


def text_content(node: Node) -> str:
    """Concatenated text of a node and all of its descendants."""
    if node.value:
        return node.value
    return "".join(text_content(child) for child in node.children or [])


def split_labels(text: str) -> tuple[str, tuple[str, ...]]:
    """
    Split a trailing ``{.a .b}`` block off heading text.

    Returns the stripped text and the labels in order of first occurrence.
    """
    found = _LABELS_RE.search(text)
    if not found:
        return text, ()
    labels = dict.fromkeys(token[1:] for token in found.group(1).split())
    return text[: found.start()].rstrip(), tuple(labels)
