from dataclasses import FrozenInstanceError
from typing import Any
from unittest.mock import Mock

import pytest

from rosetta.content.config import StructuringConfig
from rosetta.content.models import (
    CodeElement,
    DividerElement,
    HeadingElement,
    ImageElement,
    ImageRole,
    ListElement,
    ParagraphElement,
)
from rosetta.content.sequence import process_sequence, split_labels
from rosetta.observability import names
from rosetta.tree import MalformedTreeError, Node


def root(*children: dict[str, Any]) -> dict[str, Any]:
    return {"type": "root", "children": list(children)}


def text(value: str) -> dict[str, Any]:
    return {"type": "text", "value": value}


def paragraph(*children: dict[str, Any]) -> dict[str, Any]:
    return {"type": "paragraph", "children": list(children)}


def image(url: str, alt: str = "", title: str | None = None) -> dict[str, Any]:
    return {"type": "image", "url": url, "alt": alt, "title": title}


def list_item(value: str) -> dict[str, Any]:
    return {"type": "listItem", "children": [paragraph(text(value))]}


class TestSequenceOrder:
    def test_hero_section_sequence(self, hero_tree: dict[str, Any]) -> None:
        """Elements come out in document order with dense positions."""
        sequence = process_sequence(hero_tree)

        assert [el.type.value for el in sequence] == [
            "image",
            "heading",
            "heading",
            "heading",
            "paragraph",
        ]
        assert [el.position for el in sequence] == [0, 1, 2, 3, 4]

    def test_heading_levels_follow_depth(self, hero_tree: dict[str, Any]) -> None:
        sequence = process_sequence(hero_tree)

        headings = [el for el in sequence if isinstance(el, HeadingElement)]
        assert [(h.level, h.content) for h in headings] == [
            (3, "WELCOME TO"),
            (1, "Build Amazing Sites"),
            (2, "With Natural Writing"),
        ]

    def test_skipped_nodes_leave_no_position_gaps(self) -> None:
        """Unrecognised kinds are skipped without consuming a position."""
        sequence = process_sequence(
            root(
                {"type": "html", "value": "<div></div>"},
                paragraph(text("first")),
                {"type": "definition", "url": "https://example.com"},
                paragraph(text("second")),
            )
        )

        assert [(el.position, el.content) for el in sequence] == [  # type: ignore[union-attr]
            (0, "first"),
            (1, "second"),
        ]

    def test_empty_root_yields_empty_sequence(self) -> None:
        assert process_sequence(root()) == []


class TestHeadings:
    def test_trailing_labels_are_split_off(
        self, features_tree: dict[str, Any]
    ) -> None:
        sequence = process_sequence(features_tree)

        heading = sequence[1]
        assert isinstance(heading, HeadingElement)
        assert heading.content == "Natural Writing"
        assert heading.labels == ("highlight",)

    def test_heading_text_includes_inline_code(self) -> None:
        sequence = process_sequence(
            root(
                {
                    "type": "heading",
                    "depth": 2,
                    "children": [text("Install "), {"type": "inlineCode", "value": "rosetta"}],
                }
            )
        )

        assert sequence[0].content == "Install rosetta"  # type: ignore[union-attr]

    def test_split_labels_keeps_order_and_drops_duplicates(self) -> None:
        assert split_labels("Pricing {.wide .dark .wide}") == ("Pricing", ("wide", "dark"))

    def test_split_labels_ignores_non_label_braces(self) -> None:
        assert split_labels("Sets like {a, b}") == ("Sets like {a, b}", ())

    def test_split_labels_preserves_case(self) -> None:
        assert split_labels("Hello {.Hero-Title}") == ("Hello", ("Hero-Title",))


class TestImages:
    def test_image_paragraph_collapses_to_single_image(self) -> None:
        sequence = process_sequence(root(paragraph(image("./a.png", "A"))))

        assert len(sequence) == 1
        assert isinstance(sequence[0], ImageElement)

    def test_first_image_defaults_to_background(
        self, hero_tree: dict[str, Any]
    ) -> None:
        background = process_sequence(hero_tree)[0]

        assert isinstance(background, ImageElement)
        assert background.role is ImageRole.BACKGROUND
        assert background.src == "./hero-bg.jpg"
        assert background.alt == "WELCOME TO"
        assert background.title is None

    def test_later_images_default_to_content(self) -> None:
        sequence = process_sequence(
            root(paragraph(image("./a.png")), paragraph(image("./b.png", "B", "Bee")))
        )

        second = sequence[1]
        assert isinstance(second, ImageElement)
        assert second.role is ImageRole.CONTENT
        assert second.title == "Bee"

    def test_role_prefix_is_split_from_alt(self) -> None:
        sequence = process_sequence(
            root(
                paragraph(image("./bg.jpg", "background: Mountains")),
                paragraph(image("./i.svg", "icon: Pencil")),
                paragraph(image("./g.jpg", "gallery:Beach")),
            )
        )

        assert [(el.role, el.alt) for el in sequence] == [  # type: ignore[union-attr]
            (ImageRole.BACKGROUND, "Mountains"),
            (ImageRole.ICON, "Pencil"),
            (ImageRole.GALLERY, "Beach"),
        ]

    def test_explicit_role_on_first_image_uses_up_background_default(self) -> None:
        sequence = process_sequence(
            root(paragraph(image("./i.svg", "icon: Pencil")), paragraph(image("./b.png")))
        )

        assert sequence[1].role is ImageRole.CONTENT  # type: ignore[union-attr]

    def test_background_default_can_be_disabled(self) -> None:
        sequence = process_sequence(
            root(paragraph(image("./a.png"))),
            config=StructuringConfig(first_image_background=False),
        )

        assert sequence[0].role is ImageRole.CONTENT  # type: ignore[union-attr]

    def test_inline_image_follows_its_paragraph(self) -> None:
        sequence = process_sequence(
            root(paragraph(text("See "), image("./x.png", "X"), text(" here")))
        )

        assert isinstance(sequence[0], ParagraphElement)
        assert sequence[0].content == "See  here"
        assert isinstance(sequence[1], ImageElement)
        assert sequence[1].position == 1


class TestBlocks:
    def test_list_items_are_flattened_to_text(self) -> None:
        sequence = process_sequence(
            root(
                {
                    "type": "list",
                    "ordered": True,
                    "children": [list_item("One"), list_item("Two")],
                }
            )
        )

        assert sequence == [ListElement(position=0, ordered=True, items=("One", "Two"))]

    def test_unordered_list_without_flag(self) -> None:
        sequence = process_sequence(
            root({"type": "list", "children": [list_item("Only")]})
        )

        assert sequence[0].ordered is False  # type: ignore[union-attr]

    def test_code_is_kept_verbatim(self) -> None:
        raw = "  def f():\n      return 1\n"
        sequence = process_sequence(
            root(
                {"type": "code", "lang": "python", "value": raw},
                {"type": "code", "value": "plain"},
            )
        )

        assert sequence == [
            CodeElement(position=0, language="python", content=raw),
            CodeElement(position=1, language="", content="plain"),
        ]

    def test_thematic_break_becomes_divider(self) -> None:
        sequence = process_sequence(
            root(paragraph(text("a")), {"type": "thematicBreak"}, paragraph(text("b")))
        )

        assert sequence[1] == DividerElement(position=1)

    def test_blockquote_paragraphs_surface(self) -> None:
        sequence = process_sequence(
            root({"type": "blockquote", "children": [paragraph(text("Quoted"))]})
        )

        assert sequence == [ParagraphElement(position=0, content="Quoted")]

    def test_elements_are_frozen(self) -> None:
        element = process_sequence(root(paragraph(text("x"))))[0]

        with pytest.raises(FrozenInstanceError):
            element.content = "changed"  # type: ignore[misc]


class TestMalformedTrees:
    def test_paragraph_without_children_raises(self) -> None:
        with pytest.raises(MalformedTreeError, match="paragraph"):
            process_sequence(root({"type": "paragraph"}))

    def test_root_without_children_raises(self) -> None:
        with pytest.raises(MalformedTreeError, match="children"):
            process_sequence({"type": "root"})

    def test_heading_without_depth_raises(self) -> None:
        with pytest.raises(MalformedTreeError, match="depth"):
            process_sequence(root({"type": "heading", "children": [text("x")]}))

    def test_heading_depth_out_of_range_raises(self) -> None:
        with pytest.raises(MalformedTreeError):
            process_sequence(root({"type": "heading", "depth": 7, "children": []}))

    def test_node_without_kind_raises(self) -> None:
        with pytest.raises(MalformedTreeError):
            process_sequence(root({"value": "orphan"}))

    def test_non_mapping_tree_raises(self) -> None:
        with pytest.raises(MalformedTreeError, match="Node or a mapping"):
            process_sequence(["not", "a", "tree"])  # type: ignore[arg-type]

    def test_accepts_node_instances(self) -> None:
        tree = Node(type="root", children=[Node(type="thematicBreak")])

        assert process_sequence(tree) == [DividerElement(position=0)]


class TestSequenceMetrics:
    def test_reports_duration_and_element_count(
        self, hero_tree: dict[str, Any]
    ) -> None:
        hook = Mock()

        process_sequence(hero_tree, metrics_hook=hook)

        hook.increment.assert_called_once_with(names.SEQUENCE_ELEMENTS_CREATED, 5)
        assert hook.record_latency.call_args.args[0] == names.SEQUENCE_DURATION
