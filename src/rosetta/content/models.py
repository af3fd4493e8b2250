# content/models.py

from dataclasses import dataclass
from enum import Enum
from typing import Any, ClassVar


class ElementType(str, Enum):
    """Kind tag of a sequence element."""

    HEADING = "heading"
    PARAGRAPH = "paragraph"
    IMAGE = "image"
    LIST = "list"
    CODE = "code"
    DIVIDER = "divider"


class ImageRole(str, Enum):
    """Intended usage of an image, taken from its alt text prefix."""

    BACKGROUND = "background"
    ICON = "icon"
    GALLERY = "gallery"
    CONTENT = "content"


@dataclass(frozen=True)
class HeadingElement:
    position: int
    level: int  # 1-6
    content: str
    labels: tuple[str, ...] = ()  # From a trailing {.label} block

    type: ClassVar[ElementType] = ElementType.HEADING

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "level": self.level,
            "content": self.content,
            "position": self.position,
            "labels": list(self.labels),
        }


@dataclass(frozen=True)
class ParagraphElement:
    position: int
    content: str

    type: ClassVar[ElementType] = ElementType.PARAGRAPH

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "content": self.content,
            "position": self.position,
        }


@dataclass(frozen=True)
class ImageElement:
    position: int
    role: ImageRole
    src: str
    alt: str  # Description only, role prefix removed
    title: str | None = None

    type: ClassVar[ElementType] = ElementType.IMAGE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "role": self.role.value,
            "src": self.src,
            "alt": self.alt,
            "title": self.title,
            "position": self.position,
        }


@dataclass(frozen=True)
class ListElement:
    position: int
    ordered: bool
    items: tuple[str, ...]

    type: ClassVar[ElementType] = ElementType.LIST

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "ordered": self.ordered,
            "items": list(self.items),
            "position": self.position,
        }


@dataclass(frozen=True)
class CodeElement:
    position: int
    language: str  # "" when the fence declares none
    content: str  # Verbatim

    type: ClassVar[ElementType] = ElementType.CODE

    def to_dict(self) -> dict[str, Any]:
        return {
            "type": self.type.value,
            "language": self.language,
            "content": self.content,
            "position": self.position,
        }


@dataclass(frozen=True)
class DividerElement:
    position: int

    type: ClassVar[ElementType] = ElementType.DIVIDER

    def to_dict(self) -> dict[str, Any]:
        return {"type": self.type.value, "position": self.position}


Element = (
    HeadingElement
    | ParagraphElement
    | ImageElement
    | ListElement
    | CodeElement
    | DividerElement
)


class GroupState(str, Enum):
    """Which heading slots of a group are filled."""

    EMPTY = "empty"
    HAS_EYEBROW = "has_eyebrow"
    HAS_TITLE = "has_title"
    HAS_TITLE_SUBTITLE = "has_title_subtitle"


@dataclass(frozen=True)
class GroupHeadings:
    eyebrow: HeadingElement | None = None
    title: HeadingElement | None = None
    subtitle: HeadingElement | None = None

    @property
    def state(self) -> GroupState:
        if self.title is None:
            return GroupState.EMPTY if self.eyebrow is None else GroupState.HAS_EYEBROW
        if self.subtitle is None:
            return GroupState.HAS_TITLE
        return GroupState.HAS_TITLE_SUBTITLE

    def filled(self) -> tuple[HeadingElement, ...]:
        """Headings occupying a slot, in document order."""
        slots = (self.eyebrow, self.title, self.subtitle)
        return tuple(sorted((h for h in slots if h is not None), key=_position))

    def to_dict(self) -> dict[str, Any]:
        return {
            "eyebrow": _dump(self.eyebrow),
            "title": _dump(self.title),
            "subtitle": _dump(self.subtitle),
        }


@dataclass(frozen=True)
class GroupMetadata:
    level: int | None  # Title level, None without a title
    content_types: tuple[ElementType, ...]  # Distinct, first appearance first

    def to_dict(self) -> dict[str, Any]:
        return {
            "level": self.level,
            "contentTypes": [t.value for t in self.content_types],
        }


@dataclass(frozen=True)
class Group:
    headings: GroupHeadings
    content: tuple[Element, ...]
    metadata: GroupMetadata

    def is_empty(self) -> bool:
        return not self.content and not self.headings.filled()

    def elements(self) -> tuple[Element, ...]:
        """Every element of the group, slots included, by position."""
        return tuple(sorted((*self.headings.filled(), *self.content), key=_position))

    def positions(self) -> frozenset[int]:
        return frozenset(el.position for el in self.elements())

    def to_dict(self) -> dict[str, Any]:
        return {
            "headings": self.headings.to_dict(),
            "content": [el.to_dict() for el in self.content],
            "metadata": self.metadata.to_dict(),
        }


@dataclass(frozen=True)
class Structure:
    main: Group | None
    items: tuple[Group, ...]

    def groups(self) -> tuple[Group, ...]:
        """Main first (when present), then items in document order."""
        if self.main is None:
            return self.items
        return (self.main, *self.items)

    def to_dict(self) -> dict[str, Any]:
        return {
            "main": _dump(self.main),
            "items": [group.to_dict() for group in self.items],
        }


def _position(element: Element) -> int:
    return element.position


def _dump(value: Any) -> dict[str, Any] | None:
    return None if value is None else value.to_dict()
