"""Tests for contentshape.core.errors."""

import pytest

from contentshape.core.errors import (
    BindingError,
    ConfigError,
    ContentShapeError,
    DisplayError,
    DriverRegistrationError,
    ErrorCategory,
    ErrorContext,
    InvalidConfigError,
    PartNotAttachedError,
    ShapeTemplateNotFoundError,
)


class TestErrorContext:
    def test_to_dict_excludes_none(self):
        ctx = ErrorContext(part_name="Features", part_type="BagPart")
        assert ctx.to_dict() == {"part_name": "Features", "part_type": "BagPart"}

    def test_to_dict_merges_metadata(self):
        ctx = ErrorContext(shape_type="BodyPart", metadata={"zone": "Content"})
        assert ctx.to_dict() == {"shape_type": "BodyPart", "zone": "Content"}


class TestCategories:
    @pytest.mark.parametrize(
        ("error", "category"),
        [
            (ContentShapeError("x"), ErrorCategory.INTERNAL),
            (ConfigError("x"), ErrorCategory.CONFIG),
            (InvalidConfigError("template_dir", None), ErrorCategory.CONFIG),
            (BindingError("x"), ErrorCategory.BINDING),
            (DisplayError("x"), ErrorCategory.DISPLAY),
            (DriverRegistrationError("x"), ErrorCategory.DISPLAY),
            (PartNotAttachedError("BodyPart"), ErrorCategory.DISPLAY),
        ],
    )
    def test_default_category(self, error, category):
        assert error.category == category

    def test_explicit_category_wins(self):
        error = DisplayError("x", category=ErrorCategory.INTERNAL)
        assert error.category == ErrorCategory.INTERNAL


class TestContentShapeError:
    def test_with_context_sets_known_fields(self):
        error = DisplayError("failed").with_context(part_name="BodyPart", content_type="BlogPost")
        assert error.context.part_name == "BodyPart"
        assert error.context.content_type == "BlogPost"

    def test_with_context_puts_unknown_keys_in_metadata(self):
        error = DisplayError("failed").with_context(zone="Meta")
        assert error.context.metadata == {"zone": "Meta"}

    def test_cause_is_chained(self):
        cause = KeyError("body")
        error = DisplayError("failed", cause=cause)
        assert error.__cause__ is cause
        assert error.to_dict()["cause"] == str(cause)

    def test_to_dict(self):
        error = PartNotAttachedError("Features")
        data = error.to_dict()
        assert data["error_type"] == "PartNotAttachedError"
        assert data["category"] == "DISPLAY"
        assert data["context"] == {"part_name": "Features"}


class TestSpecificErrors:
    def test_invalid_config_message(self):
        error = InvalidConfigError("log_level", "LOUD")
        assert error.key == "log_level"
        assert "'LOUD'" in str(error)

    def test_binding_error_carries_errors(self):
        error = BindingError("bad", errors={"BodyPart.body": ["required"]})
        assert error.to_dict()["errors"] == {"BodyPart.body": ["required"]}

    def test_template_not_found_lists_candidates(self):
        error = ShapeTemplateNotFoundError("BodyPart", ["BodyPart-BlogPost.html", "BodyPart.html"])
        assert error.candidates == ["BodyPart-BlogPost.html", "BodyPart.html"]
        assert "BodyPart-BlogPost.html, BodyPart.html" in str(error)
        assert error.context.shape_type == "BodyPart"

    def test_all_errors_are_content_shape_errors(self):
        assert issubclass(PartNotAttachedError, DisplayError)
        assert issubclass(ShapeTemplateNotFoundError, ContentShapeError)
