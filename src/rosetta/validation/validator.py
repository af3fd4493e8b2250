import logging
from collections.abc import Mapping

from rosetta.content.config import DEFAULT_CONFIG, StructuringConfig
from rosetta.content.models import (
    DividerElement,
    Element,
    HeadingElement,
    Structure,
)
from rosetta.content.pipeline import ParsedSection, StructuredContent
from rosetta.observability import names
from rosetta.observability.base import MetricsHook, NoOpMetricsHook, timed

from .models import Diagnostic, Severity, ValidationResult

logger = logging.getLogger(__name__)


def validate_content(
    section: ParsedSection,
    *,
    config: StructuringConfig = DEFAULT_CONFIG,
    metrics_hook: MetricsHook = NoOpMetricsHook(),
) -> ValidationResult:
    """Inspect a parsed section for structural problems.

    Every check runs and contributes to the same result; only an invalid
    sequence skips the checks that depend on it. Nothing here raises on
    anomalies or touches the structures it inspects.
    """
    with timed(metrics_hook, names.VALIDATION_DURATION):
        diagnostics = [*_check_component(section), *_check_props(section)]

        content = section.content
        if content is None or not _has_valid_sequence(content):
            diagnostics.append(
                Diagnostic(
                    Severity.ERROR,
                    "invalid_sequence",
                    "Content sequence is invalid or missing",
                )
            )
        else:
            diagnostics += _check_heading_hierarchy(content.sequence)
            diagnostics += _check_empty_groups(content.groups)
            diagnostics += _check_main_group(content.groups)
            diagnostics += _check_background_images(
                content, config.background_heading_radius
            )
            diagnostics += _check_orphaned_content(content)

        result = ValidationResult.from_diagnostics(diagnostics)

    for severity, found in (
        (Severity.ERROR, result.errors),
        (Severity.WARNING, result.warnings),
        (Severity.SUGGESTION, result.suggestions),
    ):
        if found:
            metrics_hook.increment(
                names.VALIDATION_DIAGNOSTICS_TOTAL,
                len(found),
                labels={"severity": severity.value},
            )
    logger.debug(
        "Validated section %s: %d errors, %d warnings, %d suggestions",
        section.component,
        len(result.errors),
        len(result.warnings),
        len(result.suggestions),
    )
    return result


def _check_component(section: ParsedSection) -> list[Diagnostic]:
    if section.component:
        return []
    return [
        Diagnostic(
            Severity.ERROR,
            "missing_component",
            "Component name is required in frontmatter",
        )
    ]


def _check_props(section: ParsedSection) -> list[Diagnostic]:
    if section.props is None or isinstance(section.props, Mapping):
        return []
    return [Diagnostic(Severity.ERROR, "invalid_props", "Props must be an object")]


def _has_valid_sequence(content: StructuredContent) -> bool:
    sequence = getattr(content, "sequence", None)
    if not isinstance(sequence, (list, tuple)):
        return False
    return all(
        isinstance(el, Element) and el.position == i for i, el in enumerate(sequence)
    )


def _check_heading_hierarchy(sequence: tuple[Element, ...]) -> list[Diagnostic]:
    headings = [el for el in sequence if isinstance(el, HeadingElement)]
    if not headings:
        return [Diagnostic(Severity.WARNING, "no_headings", "Content has no headings")]

    return [
        Diagnostic(
            Severity.WARNING,
            "skipped_heading_level",
            f"Heading level skipped from h{previous.level} to h{heading.level}",
            heading,
        )
        for previous, heading in zip(headings, headings[1:])
        if heading.level > previous.level + 1
    ]


def _check_empty_groups(structure: Structure) -> list[Diagnostic]:
    return [
        Diagnostic(
            Severity.WARNING, "empty_group", f"Group {index + 1} is empty", group
        )
        for index, group in enumerate(structure.items)
        if group.is_empty()
    ]


def _check_main_group(structure: Structure) -> list[Diagnostic]:
    if structure.main is None:
        return [
            Diagnostic(
                Severity.SUGGESTION,
                "no_main_group",
                "Content has no clear main group",
            )
        ]
    if structure.main.headings.title is None:
        return [
            Diagnostic(
                Severity.WARNING,
                "no_main_title",
                "Main content group has no title",
                structure.main,
            )
        ]
    return []


def _check_background_images(
    content: StructuredContent, radius: int
) -> list[Diagnostic]:
    sequence = content.sequence
    diagnostics = []
    for entry in content.by_type.images.background:
        position = entry.position
        window = sequence[max(0, position - radius) : position + radius + 1]
        if not any(isinstance(el, HeadingElement) for el in window):
            diagnostics.append(
                Diagnostic(
                    Severity.SUGGESTION,
                    "orphaned_background",
                    "Background image has no associated heading",
                    entry.element,
                )
            )
    return diagnostics


def _check_orphaned_content(content: StructuredContent) -> list[Diagnostic]:
    grouped: set[int] = set()
    for group in content.groups.groups():
        grouped |= group.positions()

    return [
        Diagnostic(
            Severity.WARNING,
            "orphaned_content",
            f"{element.type.value} element not part of any group",
            element,
        )
        for element in content.sequence
        if not isinstance(element, DividerElement) and element.position not in grouped
    ]
