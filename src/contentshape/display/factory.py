"""
Shape factory.

Manifesto:
    Drivers never construct shapes directly. They ask the factory, which
    lets observers see (and replace) every shape as it is created, and
    which knows how to turn plain models into shapes.

Architecture:
    ::

        create(type)             ─┐
        create(type, model)      ─┼──► create_shape(type, factory, creating, created)
        create_with(type, fn)    ─┤         │
        create_typed(type, T, f) ─┘         ├─ ShapeFactoryEvents.creating / creating()
                                            ├─ await factory(), metadata.type = type
                                            ├─ on_created callbacks, then created()
                                            └─ ShapeFactoryEvents.created

Features:
    - ``ShapeFactory``: abstract core primitive plus convenience operations
    - ``DefaultShapeFactory``: in-process implementation with observers
    - ``factory.new.BodyPart(title=...)``: attribute-style creation

Tags:
    shape, factory, lifecycle-hooks, proxy, contentshape

Doc-Types:
    api-reference
"""

from __future__ import annotations

import inspect
from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any, TypeVar

from contentshape.core.logging import get_logger
from contentshape.display.arguments import Arguments, copy_arguments
from contentshape.display.proxy import create_shape_instance
from contentshape.display.shapes import Shape, Shapeable

logger = get_logger(__name__)

T = TypeVar("T")

ShapeBuilder = Callable[[], Awaitable[Any]]


async def new_shape() -> Shape:
    """Default shape builder: an empty :class:`Shape`."""
    return Shape()


@dataclass
class ShapeCreatedContext:
    shape_type: str
    shape_factory: ShapeFactory
    shape: Any


@dataclass
class ShapeCreatingContext:
    """Handed to ``creating`` hooks before the shape exists.

    Hooks may replace ``create`` or append to ``on_created``.
    """

    shape_type: str
    shape_factory: ShapeFactory
    create: ShapeBuilder
    on_created: list[Callable[[ShapeCreatedContext], None]] = field(default_factory=list)


class ShapeFactoryEvents:
    """Observer of shape creation. Override either method."""

    def creating(self, context: ShapeCreatingContext) -> None:  # noqa: B027
        pass

    def created(self, context: ShapeCreatedContext) -> None:  # noqa: B027
        pass


class ShapeNamespace:
    """``factory.new.SomeShape(**properties)`` creates a ``SomeShape`` shape."""

    def __init__(self, factory: ShapeFactory) -> None:
        self._factory = factory

    def __getattr__(self, shape_type: str) -> Callable[..., Awaitable[Any]]:
        if shape_type.startswith("_"):
            raise AttributeError(shape_type)

        async def create(*positional: Any, **named: Any) -> Any:
            return await self._factory.create(shape_type, Arguments(positional, named))

        return create


class ShapeFactory(ABC):
    """Creates shapes and publishes creating/created hooks."""

    @abstractmethod
    async def create_shape(
        self,
        shape_type: str,
        shape_factory: ShapeBuilder,
        creating: Callable[[ShapeCreatingContext], None] | None = None,
        created: Callable[[ShapeCreatedContext], None] | None = None,
    ) -> Any:
        """Invoke ``shape_factory`` and run the hooks around it."""
        ...

    async def create_with(self, shape_type: str, shape_factory: ShapeBuilder) -> Any:
        return await self.create_shape(shape_type, shape_factory)

    async def create(self, shape_type: str, model: Any = None) -> Any:
        """Create a :class:`Shape`, copying ``model`` onto its properties.

        ``model`` may be an :class:`Arguments` bag, a mapping of named
        entries, any object (copied property by property) or ``None``.
        """
        arguments = Arguments.from_model(model)

        def copy(context: ShapeCreatedContext) -> None:
            copy_arguments(context.shape, arguments)

        return await self.create_shape(shape_type, new_shape, created=copy)

    async def create_typed(
        self,
        shape_type: str,
        model_type: type[T],
        initialize: Callable[[T], Awaitable[None] | None],
    ) -> T:
        """Create an instance of ``model_type`` (proxied when not a shape type)
        and run ``initialize`` on it before the created hooks fire."""

        async def build() -> T:
            shape = create_shape_instance(model_type)
            result = initialize(shape)
            if inspect.isawaitable(result):
                await result
            return shape

        return await self.create_shape(shape_type, build)

    @property
    def new(self) -> ShapeNamespace:
        return ShapeNamespace(self)


class DefaultShapeFactory(ShapeFactory):
    """In-process shape factory notifying registered :class:`ShapeFactoryEvents`."""

    def __init__(self, events: Iterable[ShapeFactoryEvents] = ()) -> None:
        self._events = list(events)

    def add_events(self, events: ShapeFactoryEvents) -> None:
        self._events.append(events)

    async def create_shape(
        self,
        shape_type: str,
        shape_factory: ShapeBuilder,
        creating: Callable[[ShapeCreatingContext], None] | None = None,
        created: Callable[[ShapeCreatedContext], None] | None = None,
    ) -> Any:
        creating_context = ShapeCreatingContext(
            shape_type=shape_type,
            shape_factory=self,
            create=shape_factory,
        )

        for events in self._events:
            events.creating(creating_context)
        if creating is not None:
            creating(creating_context)
        if created is not None:
            creating_context.on_created.append(created)

        shape = await creating_context.create()

        if isinstance(shape, Shapeable):
            shape.metadata.type = shape_type

        created_context = ShapeCreatedContext(
            shape_type=shape_type,
            shape_factory=self,
            shape=shape,
        )

        for callback in creating_context.on_created:
            callback(created_context)
        for events in self._events:
            events.created(created_context)

        logger.debug(
            "shape_created",
            shape_type=shape_type,
            shape_class=type(created_context.shape).__name__,
        )
        return created_context.shape
