"""
Shapes: render-time view-models with a metadata block and a property bag.

Manifesto:
    A shape is what a driver hands to the renderer. It knows its type, the
    display type it was built for, the alternates a template author may
    override it with, and where it sits among its siblings. Everything
    else is data.

Architecture:
    ::

        Shapeable (contract: metadata, position, id, classes, attributes)
            │
            ▼
        ShapeMixin ──────────────► ShapeProxy classes (see proxy.py)
            │                      copy its members the model lacks
            ▼
        Shape (dynamic property bag + ordered items + named zones)

Features:
    - ``ShapeMetadata`` with alternates, wrappers and displaying callbacks
    - ``AlternatesCollection``: ordered, duplicate-free, re-adding moves last
    - Shape state is created lazily, so proxy classes work for models
      that never call a shape ``__init__``
    - ``Shape`` exposes properties as attributes and items

Tags:
    shape, view-model, metadata, alternates, contentshape

Doc-Types:
    api-reference
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from contentshape.display.contexts import BuildShapeContext


class AlternatesCollection:
    """Ordered set of alternate shape names, least specific first."""

    def __init__(self, alternates: Iterable[str] = ()) -> None:
        self._items: list[str] = []
        self.extend(alternates)

    def add(self, alternate: str) -> None:
        """Append ``alternate``; an existing entry is moved to the end."""
        if alternate in self._items:
            self._items.remove(alternate)
        self._items.append(alternate)

    def extend(self, alternates: Iterable[str]) -> None:
        for alternate in alternates:
            self.add(alternate)

    def remove(self, alternate: str) -> None:
        self._items.remove(alternate)

    def clear(self) -> None:
        self._items.clear()

    @property
    def last(self) -> str | None:
        """Most specific alternate."""
        return self._items[-1] if self._items else None

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __reversed__(self) -> Iterator[str]:
        return reversed(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __contains__(self, alternate: object) -> bool:
        return alternate in self._items

    def __getitem__(self, index: int) -> str:
        return self._items[index]

    def __repr__(self) -> str:
        return f"AlternatesCollection({self._items!r})"


@dataclass
class ShapeDisplayContext:
    """Passed to displaying callbacks once a shape's metadata is final."""

    shape: Shapeable
    metadata: ShapeMetadata
    display_context: BuildShapeContext | None = None


DisplayingCallback = Callable[[ShapeDisplayContext], None]


@dataclass
class ShapeMetadata:
    """Metadata carried by every shape."""

    type: str | None = None
    display_type: str | None = None
    name: str | None = None
    differentiator: str | None = None
    prefix: str | None = None
    position: str | None = None
    alternates: AlternatesCollection = field(default_factory=AlternatesCollection)
    wrappers: list[str] = field(default_factory=list)
    displaying: list[DisplayingCallback] = field(default_factory=list, repr=False)
    displayed: bool = False

    def on_displaying(self, callback: DisplayingCallback) -> None:
        self.displaying.append(callback)

    def run_displaying(self, context: ShapeDisplayContext) -> None:
        """Run displaying callbacks. Later calls are no-ops."""
        if self.displayed:
            return
        self.displayed = True
        for callback in list(self.displaying):
            callback(context)


class Shapeable(ABC):
    """Contract every shape satisfies."""

    @property
    @abstractmethod
    def metadata(self) -> ShapeMetadata: ...

    @property
    @abstractmethod
    def position(self) -> str | None: ...

    @property
    @abstractmethod
    def id(self) -> str | None: ...

    @property
    @abstractmethod
    def classes(self) -> list[str]: ...

    @property
    @abstractmethod
    def attributes(self) -> dict[str, str]: ...


@dataclass
class _ShapeState:
    metadata: ShapeMetadata = field(default_factory=ShapeMetadata)
    id: str | None = None
    classes: list[str] = field(default_factory=list)
    attributes: dict[str, str] = field(default_factory=dict)


def shape_state(obj: Any) -> _ShapeState:
    """Shape state of ``obj``, created on first access in its instance ``__dict__``."""
    state = vars(obj).get("_shape_state_")
    if state is None:
        state = _ShapeState()
        object.__setattr__(obj, "_shape_state_", state)
    return state


class ShapeMixin(Shapeable):
    """Implements :class:`Shapeable` on top of any class with an instance ``__dict__``."""

    @property
    def metadata(self) -> ShapeMetadata:
        return shape_state(self).metadata

    @metadata.setter
    def metadata(self, value: ShapeMetadata) -> None:
        shape_state(self).metadata = value

    @property
    def position(self) -> str | None:
        return shape_state(self).metadata.position

    @position.setter
    def position(self, value: str | None) -> None:
        shape_state(self).metadata.position = value

    @property
    def id(self) -> str | None:
        return shape_state(self).id

    @id.setter
    def id(self, value: str | None) -> None:
        shape_state(self).id = value

    @property
    def classes(self) -> list[str]:
        return shape_state(self).classes

    @property
    def attributes(self) -> dict[str, str]:
        return shape_state(self).attributes


# Members a proxy class takes from ShapeMixin
SHAPE_MEMBERS = ("metadata", "position", "id", "classes", "attributes")


_POSITION_PART = re.compile(r"\d+")


def position_key(position: str | None) -> tuple:
    """Sort key for positions such as ``"5"``, ``"5.1"`` or ``"after"``.

    Numeric segments compare numerically; shapes without a position sort
    after positioned ones.
    """
    if not position:
        return (1,)
    segments = []
    for segment in position.split("."):
        if _POSITION_PART.fullmatch(segment):
            segments.append((0, int(segment), ""))
        else:
            segments.append((1, 0, segment))
    return (0, tuple(segments))


class Shape(ShapeMixin):
    """Dynamic shape: properties are readable and writable as attributes.

    Example:
        >>> shape = Shape(title="Hello")
        >>> shape.title
        'Hello'
        >>> shape["subtitle"] = "World"
        >>> shape.properties
        {'title': 'Hello', 'subtitle': 'World'}
    """

    def __init__(self, **properties: Any) -> None:
        self.properties.update(properties)

    @property
    def properties(self) -> dict[str, Any]:
        return vars(self).setdefault("_properties_", {})

    @property
    def items(self) -> list[Shapeable]:
        return vars(self).setdefault("_items_", [])

    @property
    def zones(self) -> dict[str, Shape]:
        return vars(self).setdefault("_zones_", {})

    def zone(self, name: str) -> Shape:
        """Get or create the named zone shape."""
        zones = self.zones
        if name not in zones:
            zone = Shape()
            zone.metadata.type = "Zone"
            zone.metadata.name = name
            zones[name] = zone
        return zones[name]

    def add(self, item: Any, position: str | None = None) -> Shape:
        """Add a child item, stamping ``position`` on shapes."""
        if position is not None and isinstance(item, Shapeable):
            item.metadata.position = position
        self.items.append(item)
        return self

    def ordered_items(self) -> list[Any]:
        """Children ordered by position; insertion order breaks ties."""
        return sorted(
            self.items,
            key=lambda item: position_key(item.position if isinstance(item, Shapeable) else None),
        )

    def get(self, name: str, default: Any = None) -> Any:
        return self.properties.get(name, default)

    def __getattr__(self, name: str) -> Any:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            return self.properties[name]
        except KeyError:
            raise AttributeError(
                f"'{type(self).__name__}' shape has no property '{name}'"
            ) from None

    def __setattr__(self, name: str, value: Any) -> None:
        if name.startswith("_") or hasattr(type(self), name):
            object.__setattr__(self, name, value)
        else:
            self.properties[name] = value

    def __getitem__(self, name: str) -> Any:
        return self.properties[name]

    def __setitem__(self, name: str, value: Any) -> None:
        self.properties[name] = value

    def __contains__(self, name: object) -> bool:
        return name in self.properties

    def __repr__(self) -> str:
        return f"{type(self).__name__}(type={self.metadata.type!r}, properties={self.properties!r})"
