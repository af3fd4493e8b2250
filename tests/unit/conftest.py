from typing import Any

import pytest


def _text(value: str) -> dict[str, Any]:
    return {"type": "text", "value": value}


def _heading(depth: int, value: str) -> dict[str, Any]:
    return {"type": "heading", "depth": depth, "children": [_text(value)]}


def _paragraph(value: str) -> dict[str, Any]:
    return {"type": "paragraph", "children": [_text(value)]}


def _image_paragraph(url: str, alt: str) -> dict[str, Any]:
    return {
        "type": "paragraph",
        "children": [{"type": "image", "url": url, "alt": alt, "title": None}],
    }


@pytest.fixture
def hero_tree() -> dict[str, Any]:
    """Background image, eyebrow, title, subtitle and a lead paragraph."""
    return {
        "type": "root",
        "children": [
            _image_paragraph("./hero-bg.jpg", "WELCOME TO"),
            _heading(3, "WELCOME TO"),
            _heading(1, "Build Amazing Sites"),
            _heading(2, "With Natural Writing"),
            _paragraph("Create beautiful websites using plain markdown."),
        ],
    }


@pytest.fixture
def features_tree() -> dict[str, Any]:
    """A level-1 title followed by three icon + description features."""
    return {
        "type": "root",
        "children": [
            _heading(1, "Why Choose Rosetta"),
            _heading(2, "Natural Writing {.highlight}"),
            _image_paragraph("./icons/write.svg", "icon: Pencil"),
            _paragraph("Write content the way you think."),
            _heading(2, "Component Ready"),
            _image_paragraph("./icons/blocks.svg", "icon: Blocks"),
            _paragraph("Every section maps onto a component."),
            _heading(2, "Fully Structured"),
            _image_paragraph("./icons/tree.svg", "icon: Tree"),
            _paragraph("Groups, types and context come for free."),
        ],
    }
