import logging
from collections import Counter
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Any, assert_never

from rosetta.observability import names
from rosetta.observability.base import MetricsHook, NoOpMetricsHook, timed

from .models import (
    CodeElement,
    DividerElement,
    Element,
    ElementType,
    HeadingElement,
    ImageElement,
    ImageRole,
    ListElement,
    ParagraphElement,
)

logger = logging.getLogger(__name__)

# Image role -> bucket name in the wire format
_ROLE_BUCKETS: dict[ImageRole, str] = {
    ImageRole.BACKGROUND: "background",
    ImageRole.CONTENT: "content",
    ImageRole.GALLERY: "gallery",
    ImageRole.ICON: "icons",
}


@dataclass(frozen=True)
class ElementContext:
    position: int
    previous_element: Element | None
    next_element: Element | None
    nearest_heading: HeadingElement | None  # Closest heading strictly before

    def to_dict(self) -> dict[str, Any]:
        return {
            "position": self.position,
            "previousElement": _dump(self.previous_element),
            "nextElement": _dump(self.next_element),
            "nearestHeading": _dump(self.nearest_heading),
        }


@dataclass(frozen=True)
class IndexedElement:
    """A sequence element paired with its positional context."""

    element: Element
    context: ElementContext

    @property
    def position(self) -> int:
        return self.element.position

    @property
    def type(self) -> ElementType:
        return self.element.type

    def to_dict(self) -> dict[str, Any]:
        return {**self.element.to_dict(), "context": self.context.to_dict()}


@dataclass(frozen=True)
class ImageBuckets:
    background: tuple[IndexedElement, ...] = ()
    content: tuple[IndexedElement, ...] = ()
    gallery: tuple[IndexedElement, ...] = ()
    icons: tuple[IndexedElement, ...] = ()

    def all(self) -> tuple[IndexedElement, ...]:
        return (*self.background, *self.content, *self.gallery, *self.icons)

    def to_dict(self) -> dict[str, Any]:
        return {
            "background": [e.to_dict() for e in self.background],
            "content": [e.to_dict() for e in self.content],
            "gallery": [e.to_dict() for e in self.gallery],
            "icons": [e.to_dict() for e in self.icons],
        }


@dataclass(frozen=True)
class IndexMetadata:
    total_elements: int
    dominant_type: ElementType | None  # Most frequent; ties go to first seen
    has_media: bool

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalElements": self.total_elements,
            "dominantType": None if self.dominant_type is None else self.dominant_type.value,
            "hasMedia": self.has_media,
        }


@dataclass(frozen=True)
class TypeIndex:
    """Per-type view of a sequence. Read-only; queries return new tuples."""

    headings: tuple[IndexedElement, ...]
    paragraphs: tuple[IndexedElement, ...]
    images: ImageBuckets
    lists: tuple[IndexedElement, ...]
    code: tuple[IndexedElement, ...]
    dividers: tuple[IndexedElement, ...]
    metadata: IndexMetadata

    def entries(self) -> tuple[IndexedElement, ...]:
        """Every indexed element, in sequence order."""
        return tuple(
            sorted(
                (
                    *self.headings,
                    *self.paragraphs,
                    *self.images.all(),
                    *self.lists,
                    *self.code,
                    *self.dividers,
                ),
                key=lambda e: e.position,
            )
        )

    def all_images(self) -> tuple[IndexedElement, ...]:
        return self.images.all()

    def headings_by_level(self, level: int) -> tuple[IndexedElement, ...]:
        return tuple(h for h in self.headings if h.element.level == level)

    def elements_before_heading_level(self, level: int) -> tuple[IndexedElement, ...]:
        """Everything positioned before the first heading of ``level``."""
        first = next(iter(self.headings_by_level(level)), None)
        if first is None:
            return ()
        return tuple(e for e in self.entries() if e.position < first.position)

    def elements_by_heading_context(
        self, predicate: Callable[[HeadingElement], bool]
    ) -> tuple[IndexedElement, ...]:
        """Elements whose nearest preceding heading satisfies ``predicate``."""
        return tuple(
            e
            for e in self.entries()
            if e.context.nearest_heading is not None
            and predicate(e.context.nearest_heading)
        )

    def content_between_headings(
        self,
        start: HeadingElement | IndexedElement,
        end: HeadingElement | IndexedElement | None = None,
    ) -> tuple[IndexedElement, ...]:
        """Elements strictly between two headings; open ended without ``end``."""
        end_position = float("inf") if end is None else end.position
        return tuple(
            e for e in self.entries() if start.position < e.position < end_position
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "headings": [e.to_dict() for e in self.headings],
            "paragraphs": [e.to_dict() for e in self.paragraphs],
            "images": self.images.to_dict(),
            "lists": [e.to_dict() for e in self.lists],
            "code": [e.to_dict() for e in self.code],
            "dividers": [e.to_dict() for e in self.dividers],
            "metadata": self.metadata.to_dict(),
        }


def process_by_type(
    sequence: Sequence[Element],
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> TypeIndex:
    """Index a sequence by element type, attaching positional context."""
    with timed(metrics_hook, names.INDEXING_DURATION):
        buckets: dict[str, list[IndexedElement]] = {
            "headings": [],
            "paragraphs": [],
            "lists": [],
            "code": [],
            "dividers": [],
            **{bucket: [] for bucket in _ROLE_BUCKETS.values()},
        }
        frequency: Counter[ElementType] = Counter()
        nearest_heading: HeadingElement | None = None

        for index, element in enumerate(sequence):
            frequency[element.type] += 1
            entry = IndexedElement(
                element=element,
                context=ElementContext(
                    position=element.position,
                    previous_element=sequence[index - 1] if index > 0 else None,
                    next_element=(
                        sequence[index + 1] if index < len(sequence) - 1 else None
                    ),
                    nearest_heading=nearest_heading,
                ),
            )

            match element:
                case HeadingElement():
                    buckets["headings"].append(entry)
                    nearest_heading = element
                case ParagraphElement():
                    buckets["paragraphs"].append(entry)
                case ImageElement():
                    buckets[_ROLE_BUCKETS[element.role]].append(entry)
                case ListElement():
                    buckets["lists"].append(entry)
                case CodeElement():
                    buckets["code"].append(entry)
                case DividerElement():
                    buckets["dividers"].append(entry)
                case _:
                    assert_never(element)

    type_index = TypeIndex(
        headings=tuple(buckets["headings"]),
        paragraphs=tuple(buckets["paragraphs"]),
        images=ImageBuckets(
            **{bucket: tuple(buckets[bucket]) for bucket in _ROLE_BUCKETS.values()}
        ),
        lists=tuple(buckets["lists"]),
        code=tuple(buckets["code"]),
        dividers=tuple(buckets["dividers"]),
        metadata=IndexMetadata(
            total_elements=len(sequence),
            dominant_type=_dominant(frequency),
            has_media=frequency[ElementType.IMAGE] > 0,
        ),
    )
    logger.debug("Indexed %d elements by type", len(sequence))
    return type_index


def _dominant(frequency: Counter[ElementType]) -> ElementType | None:
    if not frequency:
        return None
    # max() keeps the first of equal counts, and Counter keeps first-seen order
    return max(frequency, key=lambda t: frequency[t])


def _dump(element: Element | None) -> dict[str, Any] | None:
    return None if element is None else element.to_dict()
