"""
Structured error types for contentshape.

Most of the display pipeline signals "not applicable" with a ``None``
result rather than an exception, so this hierarchy is small. It covers the
failures that do surface to callers: bad configuration, invalid driver
registration, binding failures, updating a detached part, and missing
templates.

Manifesto:
    - **Typed Error Hierarchy:** One subclass per failure domain
    - **Rich Context:** Errors carry shape/part/content-type metadata
    - **Error Chaining:** Preserve original exceptions as ``cause``
    - **No Recovery Here:** Errors propagate; callers decide what to do

Architecture:
    ::

        ┌─────────────────────────────────────────────────────────────┐
        │                    ContentShapeError                         │
        │              (category, context, cause)                      │
        ├─────────────────────────────────────────────────────────────┤
        │                                                              │
        │  ConfigError          BindingError       DisplayError        │
        │  (CONFIG)             (BINDING)          (DISPLAY)           │
        │                                               │              │
        │                           DriverRegistrationError            │
        │                           PartNotAttachedError               │
        │                           ShapeTemplateNotFoundError         │
        └─────────────────────────────────────────────────────────────┘

Examples:
    >>> error = PartNotAttachedError("BodyPart")
    >>> error.category
    <ErrorCategory.DISPLAY: 'DISPLAY'>
    >>> error.with_context(content_type="BlogPost").context.content_type
    'BlogPost'

Tags:
    error-handling, exception-hierarchy, error-context, contentshape

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and reporting."""

    CONFIG = "CONFIG"             # Missing or invalid settings
    BINDING = "BINDING"           # Submitted form data could not be bound
    DISPLAY = "DISPLAY"           # Driver, shape or template failures
    INTERNAL = "INTERNAL"         # Bugs, unexpected state


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        shape_type: Shape type being built or rendered
        part_name: Part instance name (e.g. "Features")
        part_type: Part type name (e.g. "BagPart")
        content_type: Content type name (e.g. "LandingPage")
        display_type: Display type (e.g. "Summary")
        metadata: Additional key-value pairs
    """

    shape_type: str | None = None
    part_name: str | None = None
    part_type: str | None = None
    content_type: str | None = None
    display_type: str | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["shape_type", "part_name", "part_type", "content_type", "display_type"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class ContentShapeError(Exception):
    """
    Base exception for all contentshape errors.

    Subclasses set ``default_category``; every instance carries an
    :class:`ErrorContext` and an optional chained ``cause``.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> ContentShapeError:
        """
        Add context to this error (fluent API).

        Usage:
            raise DisplayError("Failed").with_context(part_name="BodyPart")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key) and key != "metadata":
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# CONFIGURATION ERRORS
# =============================================================================


class ConfigError(ContentShapeError):
    """Configuration error. The settings must be fixed."""

    default_category = ErrorCategory.CONFIG


class InvalidConfigError(ConfigError):
    """Configuration value is invalid."""

    def __init__(self, key: str, value: Any, message: str | None = None):
        self.key = key
        self.value = value
        super().__init__(message or f"Invalid configuration for {key}: {value!r}")


# =============================================================================
# BINDING ERRORS
# =============================================================================


class BindingError(ContentShapeError):
    """
    Submitted values could not be bound onto a model.

    Raised only when a caller asks for strict binding; the regular update
    path records problems in the updater's model state instead.
    """

    default_category = ErrorCategory.BINDING

    def __init__(self, message: str, *, errors: dict[str, list[str]] | None = None, **kwargs: Any):
        super().__init__(message, **kwargs)
        self.errors = errors or {}

    def to_dict(self) -> dict[str, Any]:
        result = super().to_dict()
        if self.errors:
            result["errors"] = self.errors
        return result


# =============================================================================
# DISPLAY ERRORS
# =============================================================================


class DisplayError(ContentShapeError):
    """Failure while building or rendering shapes."""

    default_category = ErrorCategory.DISPLAY


class DriverRegistrationError(DisplayError):
    """A part or driver was registered twice, or for an unknown part."""

    pass


class PartNotAttachedError(DisplayError):
    """An editor update ran against a part with no owning content item."""

    def __init__(self, part_name: str, message: str | None = None):
        self.part_name = part_name
        super().__init__(
            message or f"Part '{part_name}' is not attached to a content item",
            context=ErrorContext(part_name=part_name),
        )


class ShapeTemplateNotFoundError(DisplayError):
    """None of a shape's candidate templates exist."""

    def __init__(self, shape_type: str, candidates: Sequence[str]):
        self.shape_type = shape_type
        self.candidates = list(candidates)
        super().__init__(
            f"No template found for shape '{shape_type}'. Tried: {', '.join(self.candidates)}",
            context=ErrorContext(shape_type=shape_type),
        )


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "ContentShapeError",
    "ConfigError",
    "InvalidConfigError",
    "BindingError",
    "DisplayError",
    "DriverRegistrationError",
    "PartNotAttachedError",
    "ShapeTemplateNotFoundError",
]
