"""Content type and part definitions.

Definitions are read-only for the duration of a request. A
:class:`ContentTypePartDefinition` describes one attachment of a part type to
a content type; its ``name`` is the *instance* name, which differs from the
part type name when the same part type is attached more than once (a
``BagPart`` named ``Features`` on ``LandingPage``).
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from typing import Any


@dataclass(frozen=True)
class ContentPartDefinition:
    """A part type (``BodyPart``, ``BagPart``)."""

    name: str
    settings: Mapping[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class ContentTypePartDefinition:
    """A part attached to a content type under an instance name."""

    name: str
    part_definition: ContentPartDefinition
    content_type_definition: ContentTypeDefinition | None = field(
        default=None, repr=False, compare=False
    )
    settings: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @property
    def part_type_name(self) -> str:
        return self.part_definition.name

    @property
    def content_type_name(self) -> str | None:
        if self.content_type_definition is None:
            return None
        return self.content_type_definition.name

    @property
    def is_named(self) -> bool:
        """True when the instance name differs from the part type name."""
        return self.name != self.part_definition.name


@dataclass(frozen=True)
class ContentTypeDefinition:
    """A content type and the parts attached to it, in display order."""

    name: str
    display_name: str = ""
    parts: tuple[ContentTypePartDefinition, ...] = ()
    settings: Mapping[str, Any] = field(default_factory=dict, compare=False)

    def with_part(
        self,
        part: str | ContentPartDefinition,
        name: str | None = None,
        **settings: Any,
    ) -> ContentTypeDefinition:
        """Return a copy with ``part`` attached as ``name`` (default: the part type name).

        Every type/part definition of the copy points back at the copy.
        """
        part_definition = ContentPartDefinition(part) if isinstance(part, str) else part
        instance_name = name or part_definition.name
        if self.get_part(instance_name) is not None:
            raise ValueError(f"Part '{instance_name}' is already attached to '{self.name}'")

        attached = ContentTypePartDefinition(
            name=instance_name,
            part_definition=part_definition,
            settings=dict(settings),
        )
        return self._rebind(self.parts + (attached,))

    def get_part(self, name: str) -> ContentTypePartDefinition | None:
        """Find an attached part by instance name."""
        for part in self.parts:
            if part.name == name:
                return part
        return None

    def _rebind(self, parts: tuple[ContentTypePartDefinition, ...]) -> ContentTypeDefinition:
        copy = replace(self, parts=())
        bound = tuple(replace(p, content_type_definition=copy) for p in parts)
        # frozen; the back-references need the final instance
        object.__setattr__(copy, "parts", bound)
        return copy
