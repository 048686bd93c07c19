"""Build contexts handed to drivers.

The display/editor/update contexts describe one request's build of a content
item. The part contexts add the type/part definition and the computed field
prefix for the part currently being built; they are created per call, so no
per-request value is ever stored on a driver.
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields
from typing import TYPE_CHECKING, Any

from contentshape.core.config import get_settings
from contentshape.display.shapes import Shape

if TYPE_CHECKING:
    from contentshape.core.models import ContentTypePartDefinition
    from contentshape.display.binding import UpdateModel
    from contentshape.display.factory import ShapeFactory


def _default_display_type() -> str:
    return get_settings().default_display_type


def _editor_display_type() -> str:
    return get_settings().editor_display_type


@dataclass
class BuildShapeContext:
    """Common state for one build of a content item's shape."""

    shape: Shape
    shape_factory: ShapeFactory
    group_id: str = ""
    html_field_prefix: str = ""
    updater: UpdateModel | None = None
    display_type: str = field(default_factory=_default_display_type)

    def _field_values(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(BuildShapeContext)}


@dataclass
class BuildDisplayContext(BuildShapeContext):
    pass


@dataclass
class BuildEditorContext(BuildShapeContext):
    display_type: str = field(default_factory=_editor_display_type)
    is_new: bool = False

    def _field_values(self) -> dict[str, Any]:
        values = super()._field_values()
        values["is_new"] = self.is_new
        return values


@dataclass
class UpdateEditorContext(BuildEditorContext):
    def __post_init__(self) -> None:
        if self.updater is None:
            raise ValueError("UpdateEditorContext requires an updater")


@dataclass
class BuildPartDisplayContext(BuildDisplayContext):
    type_part_definition: ContentTypePartDefinition | None = None
    prefix: str = ""

    @classmethod
    def for_part(
        cls,
        type_part_definition: ContentTypePartDefinition,
        context: BuildShapeContext,
        prefix: str,
    ) -> BuildPartDisplayContext:
        return cls(**context._field_values(), type_part_definition=type_part_definition, prefix=prefix)


@dataclass
class BuildPartEditorContext(BuildEditorContext):
    type_part_definition: ContentTypePartDefinition | None = None
    prefix: str = ""

    @classmethod
    def for_part(
        cls,
        type_part_definition: ContentTypePartDefinition,
        context: BuildShapeContext,
        prefix: str,
    ) -> BuildPartEditorContext:
        return cls(**context._field_values(), type_part_definition=type_part_definition, prefix=prefix)


@dataclass
class UpdatePartEditorContext(BuildPartEditorContext):
    def __post_init__(self) -> None:
        if self.updater is None:
            raise ValueError("UpdatePartEditorContext requires an updater")
