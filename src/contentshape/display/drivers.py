"""
Display drivers for content parts.

Manifesto:
    One driver per part type knows how to display and edit that part. The
    orchestrator tries every driver against every part of a content item;
    a driver that does not handle the part answers ``None`` instead of
    raising, so probing stays cheap and exception-free.

Architecture:
    ::

        build_display(part, type_part, ctx)
            │  not a TPart ──────────────────────────────► None
            ▼
        prefix = build_prefix(type_part.name, ctx.html_field_prefix)
            ▼
        display_async(part, part_ctx) ─► display(part, part_ctx) ─► display_part(part)
            ▼
        each ShapeResult: named(type_part.name), with_prefix(prefix),
                          displaying(add_part_alternates(type_part, ...))

        update_editor(part, type_part, ctx)
            ▼
        update_async ─► update_with_context_async ─► update_part_async
            ▼
        part.content_item.apply(type_part.name, part)   (always)

Features:
    - Typed dispatch from the generic argument (``ContentPartDisplayDriver[BodyPart]``)
    - Three hook levels per operation; override only the one you need
    - The type/part definition travels with each call, never on ``self``,
      so a single driver instance can serve concurrent requests
    - Shape helpers: ``shape``, ``initialize``, ``dynamic``, ``combine``

Examples:
    ::

        class BodyPartDisplayDriver(ContentPartDisplayDriver[BodyPart]):
            def display(self, part, context):
                return self.shape("BodyPart", part).at("Content:5")

            async def update_part_async(self, part, updater, prefix):
                await updater.try_update_model(part, prefix)
                return self.edit_part(part)

Tags:
    driver, display, editor, content-part, alternates, contentshape

Doc-Types:
    api-reference
"""

from __future__ import annotations

import functools
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar, get_args, get_origin

from contentshape.core.errors import PartNotAttachedError
from contentshape.core.logging import get_logger
from contentshape.core.models import ContentPart, ContentTypePartDefinition
from contentshape.display.alternates import add_part_alternates, build_prefix
from contentshape.display.contexts import (
    BuildDisplayContext,
    BuildEditorContext,
    BuildPartDisplayContext,
    BuildPartEditorContext,
    UpdateEditorContext,
    UpdatePartEditorContext,
)
from contentshape.display.results import CombinedResult, DisplayResult, ShapeResult

if TYPE_CHECKING:
    from contentshape.display.binding import UpdateModel
    from contentshape.display.contexts import BuildShapeContext

logger = get_logger(__name__)

TPart = TypeVar("TPart", bound=ContentPart)


class DisplayDriverBase:
    """Helpers for building :class:`ShapeResult` instances."""

    def shape(self, shape_type: str, model: Any = None) -> ShapeResult:
        """A :class:`Shape` with ``model``'s properties copied onto it."""

        async def build(context: BuildShapeContext) -> Any:
            return await context.shape_factory.create(shape_type, model)

        return ShapeResult(shape_type, build)

    def initialize(
        self,
        shape_type: str,
        model_type: type,
        initialize: Callable[[Any], Awaitable[None] | None],
    ) -> ShapeResult:
        """An instance of ``model_type`` (proxied into a shape when needed)."""

        async def build(context: BuildShapeContext) -> Any:
            return await context.shape_factory.create_typed(shape_type, model_type, initialize)

        return ShapeResult(shape_type, build)

    def dynamic(
        self,
        shape_type: str,
        builder: Callable[[BuildShapeContext], Awaitable[Any]],
    ) -> ShapeResult:
        """A shape produced by ``builder``."""
        return ShapeResult(shape_type, builder)

    def combine(self, *results: DisplayResult | None) -> CombinedResult:
        return CombinedResult(*results)


class ContentPartDisplayDriver(DisplayDriverBase, Generic[TPart]):
    """Builds display and editor shapes for one part type.

    The part type comes from the generic argument, or from a ``part_type``
    class attribute for drivers declared without one.
    """

    part_type: ClassVar[type[ContentPart] | None] = None

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if cls.__dict__.get("part_type") is not None:
            return
        for base in cls.__dict__.get("__orig_bases__", ()):
            if get_origin(base) is ContentPartDisplayDriver:
                args = get_args(base)
                if args and isinstance(args[0], type):
                    cls.part_type = args[0]
                    return

    def accepts(self, part: ContentPart) -> bool:
        return self.part_type is not None and isinstance(part, self.part_type)

    def _skip(self, operation: str, part: ContentPart) -> None:
        logger.debug(
            "part_driver_skipped",
            driver=type(self).__name__,
            operation=operation,
            part_class=type(part).__name__,
        )

    # ── entry points ─────────────────────────────────────────────

    async def build_display(
        self,
        part: ContentPart,
        type_part_definition: ContentTypePartDefinition,
        context: BuildDisplayContext,
    ) -> DisplayResult | None:
        if not self.accepts(part):
            self._skip("display", part)
            return None

        prefix = build_prefix(type_part_definition.name, context.html_field_prefix)
        part_context = BuildPartDisplayContext.for_part(type_part_definition, context, prefix)

        result = await self.display_async(part, part_context)  # type: ignore[arg-type]
        if result is not None:
            alternates = functools.partial(add_part_alternates, type_part_definition)
            for shape_result in result.shape_results():
                shape_result.named(type_part_definition.name).displaying(alternates)
                if shape_result.prefix is None:
                    shape_result.with_prefix(prefix)
        return result

    async def build_editor(
        self,
        part: ContentPart,
        type_part_definition: ContentTypePartDefinition,
        context: BuildEditorContext,
    ) -> DisplayResult | None:
        if not self.accepts(part):
            self._skip("editor", part)
            return None

        prefix = build_prefix(type_part_definition.name, context.html_field_prefix)
        part_context = BuildPartEditorContext.for_part(type_part_definition, context, prefix)

        result = await self.edit_async(part, part_context)  # type: ignore[arg-type]
        _stamp_prefix(result, prefix)
        return result

    async def update_editor(
        self,
        part: ContentPart,
        type_part_definition: ContentTypePartDefinition,
        context: UpdateEditorContext,
    ) -> DisplayResult | None:
        if not self.accepts(part):
            self._skip("update", part)
            return None

        prefix = build_prefix(type_part_definition.name, context.html_field_prefix)
        part_context = UpdatePartEditorContext.for_part(type_part_definition, context, prefix)

        result = await self.update_async(part, context.updater, part_context)  # type: ignore[arg-type]

        content_item = part.content_item
        if content_item is None:
            raise PartNotAttachedError(type_part_definition.name)
        content_item.apply(type_part_definition.name, part)

        _stamp_prefix(result, prefix)
        return result

    # ── display hooks ────────────────────────────────────────────

    async def display_async(self, part: TPart, context: BuildPartDisplayContext) -> DisplayResult | None:
        return self.display(part, context)

    def display(self, part: TPart, context: BuildPartDisplayContext) -> DisplayResult | None:
        return self.display_part(part)

    def display_part(self, part: TPart) -> DisplayResult | None:
        return None

    # ── editor hooks ─────────────────────────────────────────────

    async def edit_async(self, part: TPart, context: BuildPartEditorContext) -> DisplayResult | None:
        return self.edit(part, context)

    def edit(self, part: TPart, context: BuildPartEditorContext) -> DisplayResult | None:
        return self.edit_part(part)

    def edit_part(self, part: TPart) -> DisplayResult | None:
        return None

    # ── update hooks ─────────────────────────────────────────────

    async def update_async(
        self,
        part: TPart,
        updater: UpdateModel,
        context: UpdatePartEditorContext,
    ) -> DisplayResult | None:
        return await self.update_with_context_async(part, context)

    async def update_with_context_async(
        self,
        part: TPart,
        context: UpdatePartEditorContext,
    ) -> DisplayResult | None:
        return await self.update_part_async(part, context.updater, context.prefix)  # type: ignore[arg-type]

    async def update_part_async(self, part: TPart, updater: UpdateModel, prefix: str) -> DisplayResult | None:
        """Bind posted values onto ``part``. ``prefix`` names its fields in the form."""
        return None

    def __repr__(self) -> str:
        part_type = self.part_type.__name__ if self.part_type else None
        return f"{type(self).__name__}(part_type={part_type})"


def _stamp_prefix(result: DisplayResult | None, prefix: str) -> None:
    if result is None:
        return
    for shape_result in result.shape_results():
        if shape_result.prefix is None:
            shape_result.with_prefix(prefix)
