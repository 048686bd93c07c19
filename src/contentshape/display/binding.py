"""Binding submitted form values back onto models.

``UpdateModel`` is the contract drivers call during editor updates.
``FormUpdater`` implements it over a flat mapping of submitted values keyed
by field prefix (``{"BodyPart.Body": "..."}``), validating through the
model's pydantic schema. Validation problems are recorded in
:class:`ModelState` under the same prefixed keys; the model is left
unchanged when any submitted value is invalid.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Protocol, runtime_checkable

from pydantic import BaseModel, ValidationError

from contentshape.core.errors import BindingError
from contentshape.core.logging import get_logger

logger = get_logger(__name__)


@dataclass
class ModelState:
    """Errors collected while binding, keyed by prefixed field name."""

    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add_model_error(self, key: str, message: str) -> None:
        self.errors.setdefault(key, []).append(message)

    def errors_for(self, key: str) -> list[str]:
        return list(self.errors.get(key, []))

    def clear(self) -> None:
        self.errors.clear()


@runtime_checkable
class UpdateModel(Protocol):
    """Binds submitted values onto a model."""

    model_state: ModelState

    async def try_update_model(self, model: Any, prefix: str = "", *include: str) -> bool: ...


def _field_key(prefix: str, name: str) -> str:
    return f"{prefix}.{name}" if prefix else name


class FormUpdater:
    """:class:`UpdateModel` over a flat mapping of submitted form values."""

    def __init__(self, form: Mapping[str, Any] | None = None) -> None:
        self.form = dict(form or {})
        self.model_state = ModelState()

    def submitted_values(self, prefix: str, names: tuple[str, ...] | list[str]) -> dict[str, Any]:
        """Submitted values for ``names`` under ``prefix``, keyed by bare name."""
        values = {}
        for name in names:
            key = _field_key(prefix, name)
            if key in self.form:
                values[name] = self.form[key]
        return values

    async def try_update_model(self, model: BaseModel, prefix: str = "", *include: str) -> bool:
        """Bind submitted values onto ``model``.

        Only fields named in ``include`` are bound when given; otherwise all
        declared fields are. Returns ``False`` and records errors when
        validation fails.
        """
        model_type = type(model)
        names = include or tuple(model_type.model_fields)
        submitted = self.submitted_values(prefix, names)
        if not submitted:
            return True

        try:
            validated = model_type.model_validate({**model.model_dump(), **submitted})
        except ValidationError as exc:
            for error in exc.errors():
                location = ".".join(str(part) for part in error["loc"])
                self.model_state.add_model_error(_field_key(prefix, location), error["msg"])
            logger.debug(
                "model_binding_failed",
                model=model_type.__name__,
                prefix=prefix,
                error_count=exc.error_count(),
            )
            return False

        for name in submitted:
            setattr(model, name, getattr(validated, name))

        logger.debug("model_bound", model=model_type.__name__, prefix=prefix, fields=sorted(submitted))
        return True

    async def update_model_or_raise(self, model: BaseModel, prefix: str = "", *include: str) -> None:
        """Like :meth:`try_update_model`, raising :class:`BindingError` on failure."""
        if not await self.try_update_model(model, prefix, *include):
            raise BindingError(
                f"Could not bind submitted values onto {type(model).__name__}",
                errors=dict(self.model_state.errors),
            ).with_context(prefix=prefix)
