"""
Jinja2 template lookup for shapes.

Manifesto:
    Template authors override a shape by dropping in a file named after one
    of its alternates. The most specific file present wins; the shape type
    itself is the fallback.

Architecture:
    ::

        shape.metadata.alternates  (least specific first)
                │ reversed, then shape type
                ▼
        BodyPart_Summary__BlogPost ──► BodyPart.Summary-BlogPost.html
        BodyPart__BlogPost         ──► BodyPart-BlogPost.html
        BodyPart_Summary           ──► BodyPart.Summary.html
        BodyPart                   ──► BodyPart.html
                │
                ▼
        Environment.select_template(candidates)

Features:
    - ``__`` maps to ``-`` and ``_`` to ``.`` in file names
    - Configurable extension and autoescaping via ``DisplaySettings``
    - Shape properties are exposed to the template by name, plus ``shape``

Tags:
    template, jinja2, alternates, rendering, contentshape

Doc-Types:
    api-reference
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from jinja2 import Environment, FileSystemLoader, Template, TemplatesNotFound, select_autoescape

from contentshape.core.config import DisplaySettings, get_settings
from contentshape.core.errors import ConfigError, InvalidConfigError, ShapeTemplateNotFoundError
from contentshape.core.logging import get_logger
from contentshape.display.arguments import public_properties
from contentshape.display.shapes import Shape, Shapeable

logger = get_logger(__name__)


def template_file_name(shape_name: str, extension: str = ".html") -> str:
    """``BodyPart_Summary__BlogPost`` -> ``BodyPart.Summary-BlogPost.html``."""
    return shape_name.replace("__", "-").replace("_", ".") + extension


def candidate_shape_names(shape: Shapeable) -> list[str]:
    """Shape names to try, most specific first."""
    names: list[str] = []
    for name in [*reversed(shape.metadata.alternates), shape.metadata.type]:
        if name and name not in names:
            names.append(name)
    return names


def candidate_templates(shape: Shapeable, extension: str = ".html") -> list[str]:
    return [template_file_name(name, extension) for name in candidate_shape_names(shape)]


class ShapeTemplateResolver:
    """Finds and renders the most specific template for a shape."""

    def __init__(
        self,
        template_dir: Path | str | None = None,
        *,
        env: Environment | None = None,
        settings: DisplaySettings | None = None,
    ) -> None:
        settings = settings or get_settings()
        self.extension = settings.template_extension

        if env is None:
            directory = template_dir or settings.template_dir
            if directory is None:
                raise ConfigError("No template directory configured (CONTENTSHAPE_TEMPLATE_DIR)")
            if not Path(directory).is_dir():
                raise InvalidConfigError(
                    "template_dir", str(directory), f"Template directory does not exist: {directory}"
                )
            env = Environment(
                loader=FileSystemLoader(str(directory)),
                autoescape=select_autoescape(["html", "xml"]) if settings.autoescape else False,
                trim_blocks=True,
                lstrip_blocks=True,
            )
        self.env = env

    def candidates(self, shape: Shapeable) -> list[str]:
        return candidate_templates(shape, self.extension)

    def resolve(self, shape: Shapeable) -> Template:
        """The first existing candidate template."""
        candidates = self.candidates(shape)
        try:
            template = self.env.select_template(candidates)
        except TemplatesNotFound as exc:
            raise ShapeTemplateNotFoundError(shape.metadata.type or "", candidates) from exc
        logger.debug("shape_template_selected", shape_type=shape.metadata.type, template=template.name)
        return template

    def render(self, shape: Shapeable, **extra: Any) -> str:
        template = self.resolve(shape)
        return template.render({**self._template_context(shape), **extra})

    def _template_context(self, shape: Shapeable) -> dict[str, Any]:
        if isinstance(shape, Shape):
            values = dict(shape.properties)
        else:
            values = public_properties(shape)
        values["shape"] = shape
        return values
