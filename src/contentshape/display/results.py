"""Display results returned by driver hooks.

A hook does not build shapes itself; it returns a :class:`ShapeResult`
describing how to build one. The caller applies the result against the
build context, which creates the shape through the context's shape factory,
stamps its metadata and places it into a zone of the parent shape.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterator
from typing import TYPE_CHECKING, Any

from contentshape.core.logging import get_logger
from contentshape.display.shapes import DisplayingCallback, ShapeDisplayContext, Shapeable

if TYPE_CHECKING:
    from contentshape.display.contexts import BuildShapeContext

logger = get_logger(__name__)

DEFAULT_ZONE = "Content"

ShapeResultBuilder = Callable[["BuildShapeContext"], Awaitable[Any]]


def parse_location(location: str | None) -> tuple[str, str | None]:
    """Split ``"Zone:position"`` into its parts.

    >>> parse_location("Content:5")
    ('Content', '5')
    >>> parse_location(None)
    ('Content', None)
    """
    if not location:
        return DEFAULT_ZONE, None
    zone, _, position = location.partition(":")
    return zone or DEFAULT_ZONE, position or None


class DisplayResult(ABC):
    """Something a driver hook returns to be applied to a build context."""

    @abstractmethod
    async def apply(self, context: BuildShapeContext) -> None: ...

    def shape_results(self) -> Iterator[ShapeResult]:
        """The :class:`ShapeResult` instances contained in this result."""
        return iter(())


class ShapeResult(DisplayResult):
    """Deferred construction of a single shape."""

    def __init__(self, shape_type: str, shape_builder: ShapeResultBuilder) -> None:
        self.shape_type = shape_type
        self._builder = shape_builder
        self.name: str | None = None
        self.prefix: str | None = None
        self.differentiator: str | None = None
        self.location: str | None = None
        self._displaying: list[DisplayingCallback] = []
        self.shape: Any | None = None

    # ── fluent configuration ─────────────────────────────────────

    def named(self, name: str) -> ShapeResult:
        self.name = name
        return self

    def with_prefix(self, prefix: str) -> ShapeResult:
        self.prefix = prefix
        return self

    def differentiated_by(self, differentiator: str) -> ShapeResult:
        self.differentiator = differentiator
        return self

    def at(self, location: str) -> ShapeResult:
        """Place the shape, e.g. ``"Content:5"`` or ``"Meta"``."""
        self.location = location
        return self

    def displaying(self, callback: DisplayingCallback) -> ShapeResult:
        """Run ``callback`` once the built shape's metadata is final."""
        self._displaying.append(callback)
        return self

    # ── building ─────────────────────────────────────────────────

    async def build(self, context: BuildShapeContext) -> Any | None:
        """Create the shape and stamp its metadata. Returns ``None`` when
        the builder produced nothing."""
        shape = await self._builder(context)
        if shape is None:
            return None
        if not isinstance(shape, Shapeable):
            raise TypeError(
                f"Shape builder for '{self.shape_type}' returned {type(shape).__name__}, not a shape"
            )

        metadata = shape.metadata
        metadata.type = metadata.type or self.shape_type
        metadata.display_type = context.display_type
        metadata.name = self.name or self.differentiator or self.shape_type
        metadata.differentiator = self.differentiator or metadata.name
        metadata.prefix = self.prefix

        _, position = parse_location(self.location)
        if position is not None:
            metadata.position = position

        for callback in self._displaying:
            metadata.on_displaying(callback)
        metadata.run_displaying(
            ShapeDisplayContext(shape=shape, metadata=metadata, display_context=context)
        )

        self.shape = shape
        return shape

    async def apply(self, context: BuildShapeContext) -> None:
        shape = await self.build(context)
        if shape is None:
            return
        zone, _ = parse_location(self.location)
        context.shape.zone(zone).add(shape)
        logger.debug(
            "shape_placed",
            shape_type=self.shape_type,
            name=shape.metadata.name,
            zone=zone,
            position=shape.metadata.position,
        )

    def shape_results(self) -> Iterator[ShapeResult]:
        yield self

    def __repr__(self) -> str:
        return f"ShapeResult({self.shape_type!r}, name={self.name!r}, location={self.location!r})"


class CombinedResult(DisplayResult):
    """Several results applied in order."""

    def __init__(self, *results: DisplayResult | None) -> None:
        self.results = [result for result in results if result is not None]

    async def apply(self, context: BuildShapeContext) -> None:
        for result in self.results:
            await result.apply(context)

    def shape_results(self) -> Iterator[ShapeResult]:
        for result in self.results:
            yield from result.shape_results()

    def __iter__(self) -> Iterator[DisplayResult]:
        return iter(self.results)

    def __len__(self) -> int:
        return len(self.results)
