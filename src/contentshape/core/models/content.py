"""Content items and the parts attached to them.

A :class:`ContentItem` stores each attached part as a plain mapping under the
part's instance name. Reading a part (:meth:`ContentItem.get`) validates that
mapping into a typed :class:`ContentPart`; writing it back
(:meth:`ContentItem.apply`) dumps the part again. Parts keep a back-reference
to the item they were read from so editor updates can write themselves back.
"""

from __future__ import annotations

import uuid
from typing import Any, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

TPart = TypeVar("TPart", bound="ContentPart")


def _new_content_item_id() -> str:
    return uuid.uuid4().hex[:26]


class ContentPart(BaseModel):
    """Base class for typed content parts (``BodyPart``, ``TitlePart``, ...)."""

    model_config = ConfigDict(extra="allow", validate_assignment=True)

    _content_item: Any = PrivateAttr(default=None)

    @property
    def content_item(self) -> ContentItem | None:
        """The content item this part was read from or applied to."""
        return self._content_item

    @classmethod
    def part_name(cls) -> str:
        """Part type name, which is the class name."""
        return cls.__name__


class ContentItem(BaseModel):
    """A persisted entity composed of named content parts."""

    model_config = ConfigDict(validate_assignment=True)

    content_item_id: str = Field(default_factory=_new_content_item_id)
    content_type: str
    display_text: str = ""
    data: dict[str, dict[str, Any]] = Field(default_factory=dict)

    def has(self, name: str) -> bool:
        """Whether a part is stored under ``name``."""
        return name in self.data

    def get(self, part_type: type[TPart], name: str | None = None) -> TPart | None:
        """Read the part stored under ``name`` (default: the part type name)."""
        key = name or part_type.part_name()
        raw = self.data.get(key)
        if raw is None:
            return None
        part = part_type.model_validate(raw)
        part._content_item = self
        return part

    def get_or_create(self, part_type: type[TPart], name: str | None = None) -> TPart:
        """Read a part, or return a new one attached to this item but not stored."""
        part = self.get(part_type, name)
        if part is None:
            part = part_type()
            part._content_item = self
        return part

    def apply(self, name: str, part: ContentPart) -> ContentItem:
        """Store ``part`` under ``name``, replacing any previous value."""
        self.data[name] = part.model_dump()
        part._content_item = self
        return self

    def weld(self, name: str, part: ContentPart) -> ContentItem:
        """Store ``part`` under ``name`` only if nothing is stored there yet."""
        if not self.has(name):
            self.apply(name, part)
        else:
            part._content_item = self
        return self

    def remove(self, name: str) -> None:
        self.data.pop(name, None)
