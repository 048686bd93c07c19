"""Run every display driver against every part of a content item.

A thin orchestrator for the driver entry points: for each part attached to
the content type it asks each driver in turn, skips ``None`` answers and
applies the rest to the build context. Drivers are instantiated once per
call.
"""

from __future__ import annotations

from collections.abc import Iterator

from contentshape.core.logging import LogContext, get_logger
from contentshape.core.models import (
    ContentItem,
    ContentPart,
    ContentTypeDefinition,
    ContentTypePartDefinition,
)
from contentshape.display.contexts import (
    BuildDisplayContext,
    BuildEditorContext,
    BuildShapeContext,
    UpdateEditorContext,
)
from contentshape.display.drivers import ContentPartDisplayDriver
from contentshape.display.registry import DisplayDriverRegistry, display_registry
from contentshape.display.results import DisplayResult

logger = get_logger(__name__)


class PartDisplayCoordinator:
    def __init__(self, registry: DisplayDriverRegistry | None = None) -> None:
        self.registry = registry or display_registry

    async def build_display(
        self,
        content_item: ContentItem,
        type_definition: ContentTypeDefinition,
        context: BuildDisplayContext,
    ) -> list[DisplayResult]:
        """Apply display results; parts missing from the item are skipped."""
        parts = self._parts(content_item, type_definition, create=False)
        async with LogContext(content_type=type_definition.name, display_type=context.display_type):
            return await self._run_drivers("build_display", parts, context)

    async def build_editor(
        self,
        content_item: ContentItem,
        type_definition: ContentTypeDefinition,
        context: BuildEditorContext,
    ) -> list[DisplayResult]:
        parts = self._parts(content_item, type_definition, create=True)
        async with LogContext(content_type=type_definition.name, display_type=context.display_type):
            return await self._run_drivers("build_editor", parts, context)

    async def update_editor(
        self,
        content_item: ContentItem,
        type_definition: ContentTypeDefinition,
        context: UpdateEditorContext,
    ) -> list[DisplayResult]:
        """Bind submitted values onto every part and apply the editor results."""
        parts = self._parts(content_item, type_definition, create=True)
        async with LogContext(content_type=type_definition.name, display_type=context.display_type):
            return await self._run_drivers("update_editor", parts, context)

    def _parts(
        self,
        content_item: ContentItem,
        type_definition: ContentTypeDefinition,
        *,
        create: bool,
    ) -> Iterator[tuple[ContentTypePartDefinition, ContentPart]]:
        for type_part_definition in type_definition.parts:
            part_type = self.registry.part_type(type_part_definition.part_type_name)
            if part_type is None:
                logger.debug("part_type_unregistered", part_type=type_part_definition.part_type_name)
                continue

            if create:
                part = content_item.get_or_create(part_type, type_part_definition.name)
            else:
                part = content_item.get(part_type, type_part_definition.name)
            if part is None:
                continue
            yield type_part_definition, part

    async def _run_drivers(
        self,
        operation: str,
        parts: Iterator[tuple[ContentTypePartDefinition, ContentPart]],
        context: BuildShapeContext,
    ) -> list[DisplayResult]:
        drivers: list[ContentPartDisplayDriver] = self.registry.create_drivers()
        applied: list[DisplayResult] = []

        for type_part_definition, part in parts:
            for driver in drivers:
                result = await getattr(driver, operation)(part, type_part_definition, context)
                if result is None:
                    continue
                await result.apply(context)
                applied.append(result)

        logger.debug("part_drivers_run", operation=operation, drivers=len(drivers), results=len(applied))
        return applied
