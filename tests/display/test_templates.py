"""Tests for jinja2 shape template lookup."""

from pathlib import Path

import pytest
from jinja2 import DictLoader, Environment

from contentshape.core.config import DisplaySettings
from contentshape.core.errors import ConfigError, InvalidConfigError, ShapeTemplateNotFoundError
from contentshape.display import Shape, ShapeTemplateResolver, candidate_templates, part_alternates
from contentshape.display.templates import candidate_shape_names, template_file_name


def _body_shape(**properties) -> Shape:
    shape = Shape(**properties)
    shape.metadata.type = "BodyPart"
    shape.metadata.alternates.extend(part_alternates("BodyPart", "BlogPost", "Summary", "BodyPart"))
    return shape


@pytest.fixture
def template_dir(tmp_path: Path) -> Path:
    (tmp_path / "BodyPart.html").write_text("default: {{ body }}")
    (tmp_path / "BodyPart-BlogPost.html").write_text("blog: {{ body }}")
    return tmp_path


class TestNaming:
    @pytest.mark.parametrize(
        ("shape_name", "file_name"),
        [
            ("BodyPart", "BodyPart.html"),
            ("BodyPart_Summary", "BodyPart.Summary.html"),
            ("BodyPart__BlogPost", "BodyPart-BlogPost.html"),
            ("BagPart_Detail__LandingPage__Features", "BagPart.Detail-LandingPage-Features.html"),
        ],
    )
    def test_template_file_name(self, shape_name, file_name):
        assert template_file_name(shape_name) == file_name

    def test_candidates_most_specific_first(self):
        assert candidate_templates(_body_shape(), ".liquid") == [
            "BodyPart.Summary-BlogPost.liquid",
            "BodyPart-BlogPost.liquid",
            "BodyPart.Summary.liquid",
            "BodyPart.liquid",
        ]

    def test_shape_type_not_repeated(self):
        shape = Shape()
        shape.metadata.type = "Card"
        shape.metadata.alternates.add("Card")
        assert candidate_shape_names(shape) == ["Card"]


class TestResolver:
    def test_requires_template_dir(self):
        with pytest.raises(ConfigError):
            ShapeTemplateResolver(settings=DisplaySettings(_env_file=None))

    def test_missing_template_dir(self, tmp_path):
        with pytest.raises(InvalidConfigError) as excinfo:
            ShapeTemplateResolver(tmp_path / "missing")
        assert excinfo.value.key == "template_dir"

    def test_missing_template_dir_from_settings(self, tmp_path):
        settings = DisplaySettings(_env_file=None, template_dir=tmp_path / "missing")
        with pytest.raises(ConfigError):
            ShapeTemplateResolver(settings=settings)

    def test_template_dir_from_settings(self, template_dir):
        resolver = ShapeTemplateResolver(settings=DisplaySettings(_env_file=None, template_dir=template_dir))
        assert resolver.render(_body_shape(body="x")) == "blog: x"

    def test_most_specific_existing_template(self, template_dir):
        resolver = ShapeTemplateResolver(template_dir)
        assert resolver.resolve(_body_shape()).name == "BodyPart-BlogPost.html"

    def test_falls_back_to_shape_type(self, template_dir):
        shape = Shape(body="x")
        shape.metadata.type = "BodyPart"
        assert ShapeTemplateResolver(template_dir).render(shape) == "default: x"

    def test_autoescape(self, template_dir):
        assert ShapeTemplateResolver(template_dir).render(_body_shape(body="<b>")) == "blog: &lt;b&gt;"

    def test_extra_context_and_shape(self):
        env = Environment(loader=DictLoader({"Card.html": "{{ shape.metadata.type }} {{ title }} {{ suffix }}"}))
        shape = Shape(title="Hi")
        shape.metadata.type = "Card"
        assert ShapeTemplateResolver(env=env).render(shape, suffix="!") == "Card Hi !"

    def test_not_found(self, template_dir):
        shape = Shape()
        shape.metadata.type = "Missing"
        with pytest.raises(ShapeTemplateNotFoundError) as excinfo:
            ShapeTemplateResolver(template_dir).resolve(shape)
        assert excinfo.value.candidates == ["Missing.html"]
