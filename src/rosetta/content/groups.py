"""Partition a content sequence into a main group and item groups.

Headings are the only elements that can open a group (apart from
explicit dividers). Whether an incoming heading opens a new group or
takes a slot in the current one depends on the current group's state:

    EMPTY               no eyebrow, no title
    HAS_EYEBROW         eyebrow only
    HAS_TITLE           title (and maybe eyebrow), no subtitle
    HAS_TITLE_SUBTITLE  title and subtitle set

combined with whether the group already holds body content, plus two
lookaheads over the rest of the sequence:

    eyebrow  the heading introduces a visually larger heading that
             follows it, with only images in between; it never opens
             a group of its own
    sibling  a heading of the same level follows before any larger one,
             i.e. the heading opens one of a run of items

An h3 arriving in an empty group always takes the eyebrow slot.
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import assert_never

from rosetta.observability import names
from rosetta.observability.base import MetricsHook, NoOpMetricsHook, timed

from .models import (
    CodeElement,
    DividerElement,
    Element,
    Group,
    GroupHeadings,
    GroupMetadata,
    GroupState,
    HeadingElement,
    ImageElement,
    ListElement,
    ParagraphElement,
    Structure,
)

logger = logging.getLogger(__name__)

# An h3 with no title above it yet reads as an eyebrow
EYEBROW_LEVEL = 3


def process_groups(
    sequence: Sequence[Element],
    *,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> Structure:
    """Group a sequence in a single left-to-right pass.

    Every element except dividers lands in exactly one group, either in a
    heading slot or in the group's content.
    """
    with timed(metrics_hook, names.GROUPING_DURATION):
        assembler = _StructureAssembler()
        current: _GroupBuilder | None = None

        for index, element in enumerate(sequence):
            match element:
                case DividerElement():
                    if current is not None:
                        assembler.add(current.build())
                    current = _GroupBuilder()

                case HeadingElement():
                    following = sequence[index + 1 :]
                    if current is None:
                        current = _GroupBuilder()
                    elif starts_new_group(current, element, following):
                        assembler.add(current.build())
                        current = _GroupBuilder()
                    current.add_heading(
                        element, is_eyebrow=is_eyebrow(element, following)
                    )

                case ParagraphElement() | ImageElement() | ListElement() | CodeElement():
                    if current is None:
                        current = _GroupBuilder()
                    current.content.append(element)

                case _:
                    assert_never(element)

        if current is not None:
            assembler.add(current.build())

    structure = assembler.structure()
    metrics_hook.increment(names.GROUPING_GROUPS_CREATED, len(structure.groups()))
    logger.debug(
        "Grouped %d elements: main=%s, %d items",
        len(sequence),
        structure.main is not None,
        len(structure.items),
    )
    return structure


@dataclass
class _GroupBuilder:
    """Mutable group under construction; frozen by ``build``."""

    eyebrow: HeadingElement | None = None
    title: HeadingElement | None = None
    subtitle: HeadingElement | None = None
    content: list[Element] = field(default_factory=list)

    @property
    def state(self) -> GroupState:
        return self.headings().state

    @property
    def level(self) -> int | None:
        return None if self.title is None else self.title.level

    def headings(self) -> GroupHeadings:
        return GroupHeadings(
            eyebrow=self.eyebrow, title=self.title, subtitle=self.subtitle
        )

    def add_heading(self, heading: HeadingElement, *, is_eyebrow: bool) -> str:
        """Give ``heading`` a slot, or append it to the content.

        Returns the role it ended up with.
        """
        match self.state, self.title:
            case GroupState.EMPTY, _:
                if heading.level == EYEBROW_LEVEL or is_eyebrow:
                    self.eyebrow = heading
                    return "eyebrow"
                self.title = heading
                return "title"

            case GroupState.HAS_EYEBROW, _:
                self.title = heading
                return "title"

            case GroupState.HAS_TITLE, HeadingElement() as title if not self.content:
                if heading.level < title.level:
                    # A bigger heading after the title: the old title was
                    # really an eyebrow, or a subtitle if that slot is taken.
                    if self.eyebrow is None:
                        self.eyebrow = title
                    else:
                        self.subtitle = title
                    self.title = heading
                    return "title"
                if heading.level > title.level:
                    self.subtitle = heading
                    return "subtitle"

            case _:
                pass

        self.content.append(heading)
        return "content"

    def build(self) -> Group:
        content = tuple(self.content)
        return Group(
            headings=self.headings(),
            content=content,
            metadata=GroupMetadata(
                level=self.level,
                content_types=tuple(dict.fromkeys(el.type for el in content)),
            ),
        )


@dataclass
class _StructureAssembler:
    main: Group | None = None
    items: list[Group] = field(default_factory=list)

    def add(self, group: Group) -> None:
        if self.main is None and qualifies_as_main(group):
            self.main = group
        else:
            self.items.append(group)

    def structure(self) -> Structure:
        return Structure(main=self.main, items=tuple(self.items))


def starts_new_group(
    group: _GroupBuilder, heading: HeadingElement, following: Sequence[Element]
) -> bool:
    """Decide whether ``heading`` closes ``group``.

    ``following`` is the rest of the sequence after the heading.
    """
    if group.title is None:
        # Untitled leading content stands on its own; an eyebrow waits
        # for its title.
        return bool(group.content) and group.eyebrow is None

    if is_eyebrow(heading, following):
        return False

    level = group.title.level
    if not group.content:
        # The first of a run of same-level headings under a bare title
        # opens the items.
        if heading.level > level and has_sibling_ahead(heading, following):
            return True
        return heading.level <= level and group.subtitle is not None

    return heading.level <= level


def is_eyebrow(heading: HeadingElement, following: Sequence[Element]) -> bool:
    """True when ``heading`` sits above a larger heading.

    Only headings and images may appear between the two; the first
    heading met decides.
    """
    for element in following:
        if isinstance(element, HeadingElement):
            return element.level < heading.level
        if not isinstance(element, ImageElement):
            return False
    return False


def has_sibling_ahead(heading: HeadingElement, following: Sequence[Element]) -> bool:
    """True when a same-level heading follows before any larger one.

    A divider ends the search.
    """
    for element in following:
        if isinstance(element, DividerElement):
            return False
        if isinstance(element, HeadingElement) and element.level <= heading.level:
            return element.level == heading.level
    return False


def qualifies_as_main(group: Group) -> bool:
    title = group.headings.title
    if title is None:
        return False
    return title.level == 1 or bool(group.content)


