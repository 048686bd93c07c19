"""Template alternates for content part shapes.

A part shape is rendered by the most specific template available. The
candidates, least specific first:

==========================================================  ===============================================
``{PartType}_{DisplayType}``                                ``BodyPart_Summary``
``{PartType}__{ContentType}``                               ``BodyPart__BlogPost``
``{PartType}_{DisplayType}__{ContentType}``                 ``BodyPart_Summary__BlogPost``
``{PartType}__{ContentType}__{PartName}``                   ``BagPart__LandingPage__Features``
``{PartType}_{DisplayType}__{ContentType}__{PartName}``     ``BagPart_Detail__LandingPage__Features``
==========================================================  ===============================================

The last two only apply to named parts, whose instance name differs from
the part type name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from contentshape.core.models import ContentTypePartDefinition
    from contentshape.display.shapes import ShapeDisplayContext


def part_alternates(
    part_type: str,
    content_type: str | None,
    display_type: str,
    part_name: str | None = None,
) -> list[str]:
    """Alternate shape names for a part, least specific first.

    Without a content type only ``{PartType}_{DisplayType}`` applies.
    """
    alternates = [f"{part_type}_{display_type}"]
    if not content_type:
        return alternates

    alternates.append(f"{part_type}__{content_type}")
    alternates.append(f"{part_type}_{display_type}__{content_type}")

    if part_name and part_name != part_type:
        alternates.append(f"{part_type}__{content_type}__{part_name}")
        alternates.append(f"{part_type}_{display_type}__{content_type}__{part_name}")

    return alternates


def build_prefix(part_name: str, html_field_prefix: str | None = None) -> str:
    """Form field prefix for a part: ``Outer.PartName`` or ``PartName``."""
    if html_field_prefix:
        return f"{html_field_prefix}.{part_name}"
    return part_name


def add_part_alternates(
    type_part_definition: ContentTypePartDefinition,
    context: ShapeDisplayContext,
) -> None:
    """Displaying callback: append the part alternates to the shape."""
    context.metadata.alternates.extend(
        part_alternates(
            type_part_definition.part_type_name,
            type_part_definition.content_type_name,
            context.metadata.display_type or "",
            type_part_definition.name,
        )
    )
