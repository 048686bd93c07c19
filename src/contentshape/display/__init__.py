"""
contentshape display - part drivers, shapes, and the shape factory.

This module provides:
- Content part display drivers and their build contexts
- Template alternates for part shapes
- Shapes, shape results and runtime shape proxies
- The shape factory and its lifecycle hooks
- Form binding, the driver registry and a reference coordinator

Usage:
    from contentshape.display import ContentPartDisplayDriver, DefaultShapeFactory

    class BodyPartDisplayDriver(ContentPartDisplayDriver[BodyPart]):
        def display(self, part, context):
            return self.shape("BodyPart", part)
"""

from contentshape.display.alternates import add_part_alternates, build_prefix, part_alternates
from contentshape.display.arguments import Arguments, copy_arguments, public_properties
from contentshape.display.binding import FormUpdater, ModelState, UpdateModel
from contentshape.display.contexts import (
    BuildDisplayContext,
    BuildEditorContext,
    BuildPartDisplayContext,
    BuildPartEditorContext,
    BuildShapeContext,
    UpdateEditorContext,
    UpdatePartEditorContext,
)
from contentshape.display.coordinator import PartDisplayCoordinator
from contentshape.display.drivers import ContentPartDisplayDriver, DisplayDriverBase
from contentshape.display.factory import (
    DefaultShapeFactory,
    ShapeCreatedContext,
    ShapeCreatingContext,
    ShapeFactory,
    ShapeFactoryEvents,
)
from contentshape.display.proxy import ProxyGenerator, create_shape_instance, is_shape_proxy
from contentshape.display.registry import (
    DisplayDriverRegistry,
    display_registry,
    register_driver,
    register_part,
)
from contentshape.display.results import CombinedResult, DisplayResult, ShapeResult
from contentshape.display.shapes import (
    AlternatesCollection,
    Shape,
    Shapeable,
    ShapeDisplayContext,
    ShapeMetadata,
    ShapeMixin,
)
from contentshape.display.templates import ShapeTemplateResolver, candidate_templates

__all__ = [
    # Alternates
    "part_alternates",
    "add_part_alternates",
    "build_prefix",
    # Arguments
    "Arguments",
    "copy_arguments",
    "public_properties",
    # Binding
    "UpdateModel",
    "FormUpdater",
    "ModelState",
    # Contexts
    "BuildShapeContext",
    "BuildDisplayContext",
    "BuildEditorContext",
    "UpdateEditorContext",
    "BuildPartDisplayContext",
    "BuildPartEditorContext",
    "UpdatePartEditorContext",
    # Drivers
    "DisplayDriverBase",
    "ContentPartDisplayDriver",
    "DisplayDriverRegistry",
    "display_registry",
    "register_driver",
    "register_part",
    "PartDisplayCoordinator",
    # Factory
    "ShapeFactory",
    "DefaultShapeFactory",
    "ShapeFactoryEvents",
    "ShapeCreatingContext",
    "ShapeCreatedContext",
    "ProxyGenerator",
    "create_shape_instance",
    "is_shape_proxy",
    # Shapes
    "Shapeable",
    "ShapeMixin",
    "Shape",
    "ShapeMetadata",
    "ShapeDisplayContext",
    "AlternatesCollection",
    "DisplayResult",
    "ShapeResult",
    "CombinedResult",
    # Templates
    "ShapeTemplateResolver",
    "candidate_templates",
]
