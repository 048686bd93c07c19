"""Content and definition models."""

from contentshape.core.models.content import ContentItem, ContentPart
from contentshape.core.models.metadata import (
    ContentPartDefinition,
    ContentTypeDefinition,
    ContentTypePartDefinition,
)

__all__ = [
    "ContentItem",
    "ContentPart",
    "ContentPartDefinition",
    "ContentTypeDefinition",
    "ContentTypePartDefinition",
]
