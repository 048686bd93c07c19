"""Shape factory arguments and property copying.

``Arguments`` is the positional/named bag a shape is created from. When a
single positional object is present, its public properties are copied onto
the shape and named entries are ignored; otherwise the named entries are
copied verbatim.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from functools import lru_cache
from typing import Any

from pydantic import BaseModel

from contentshape.display.shapes import Shape


class Arguments:
    """Positional and named values passed to a shape factory."""

    __slots__ = ("positional", "named")

    def __init__(self, positional: tuple[Any, ...] | list[Any] = (), named: Mapping[str, Any] | None = None):
        self.positional = tuple(positional)
        self.named = dict(named or {})

    @classmethod
    def from_model(cls, model: Any) -> Arguments:
        """Wrap ``model``: ``Arguments`` pass through, mappings become named entries,
        ``None`` is empty, anything else is a single positional object."""
        if isinstance(model, Arguments):
            return model
        if model is None:
            return cls()
        if isinstance(model, Mapping):
            return cls(named=model)
        return cls(positional=(model,))

    @classmethod
    def from_named(cls, **named: Any) -> Arguments:
        return cls(named=named)

    @property
    def is_empty(self) -> bool:
        return not self.positional and not self.named

    def single_positional(self) -> Any | None:
        """The only positional value, or ``None`` when there is none."""
        if len(self.positional) > 1:
            raise ValueError(
                f"Expected at most one positional argument, got {len(self.positional)}"
            )
        return self.positional[0] if self.positional else None

    def __repr__(self) -> str:
        return f"Arguments(positional={self.positional!r}, named={self.named!r})"


@lru_cache(maxsize=None)
def declared_properties(source_type: type) -> tuple[str, ...]:
    """Public readable properties declared by ``source_type``.

    Pydantic models contribute their fields and computed fields; other
    classes contribute dataclass fields and public ``property`` members.
    """
    names: list[str] = []

    if issubclass(source_type, BaseModel):
        names.extend(source_type.model_fields)
        names.extend(source_type.model_computed_fields)
        return tuple(names)

    if dataclasses.is_dataclass(source_type):
        names.extend(f.name for f in dataclasses.fields(source_type) if not f.name.startswith("_"))

    for klass in reversed(source_type.__mro__):
        for name, member in vars(klass).items():
            if isinstance(member, property) and not name.startswith("_") and name not in names:
                names.append(name)

    return tuple(names)


def public_properties(source: Any) -> dict[str, Any]:
    """Read every public property of ``source`` by name."""
    if isinstance(source, Mapping):
        return dict(source)

    values = {name: getattr(source, name) for name in declared_properties(type(source))}

    if isinstance(source, BaseModel):
        values.update(source.model_extra or {})
        return values

    instance_vars = getattr(source, "__dict__", None) or {}
    for name, value in instance_vars.items():
        if not name.startswith("_") and name not in values:
            values[name] = value
    return values


def copy_arguments(shape: Any, arguments: Arguments) -> None:
    """Copy ``arguments`` onto ``shape``.

    A single positional object wins over named entries.
    """
    if arguments.is_empty:
        return

    initializer = arguments.single_positional()
    if initializer is not None:
        values = public_properties(initializer)
    else:
        values = arguments.named

    for name, value in values.items():
        if isinstance(shape, Shape):
            shape.properties[name] = value
        else:
            setattr(shape, name, value)
