"""
Shared pytest fixtures and configuration for contentshape tests.

This module provides:
- Registry, proxy-cache, settings and logging cleanup for test isolation
- Sample content parts, content types and content items
- A shape factory and a root shape to build into

Usage:
    Fixtures are auto-discovered by pytest. Use them as function arguments:

    async def test_something(factory, root_shape, landing_page_type):
        ...
"""

import sys
from collections.abc import Generator
from pathlib import Path

import pytest
import structlog

# Ensure contentshape and tests._support are importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from contentshape.core.config import clear_settings_cache
from contentshape.core.models import ContentItem, ContentTypeDefinition
from contentshape.display import DefaultShapeFactory, Shape, display_registry
from contentshape.display.proxy import proxy_generator
from tests._support.parts import BagPart, BodyPart, TitlePart


# =============================================================================
# Test Markers Configuration
# =============================================================================


def pytest_collection_modifyitems(config: pytest.Config, items: list[pytest.Item]) -> None:
    """Auto-mark tests based on their location."""
    for item in items:
        test_path = Path(item.fspath).relative_to(Path(__file__).parent)

        if test_path.parts and test_path.parts[0] == "cli":
            item.add_marker(pytest.mark.cli)

        markers = {mark.name for mark in item.iter_markers()}
        if not markers.intersection({"unit", "cli"}):
            item.add_marker(pytest.mark.unit)


# =============================================================================
# Cleanup Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """
    Reset global state before and after each test.

    Settings are re-read from a clean environment, the global driver
    registry is emptied and generated proxy classes are dropped.
    """
    for name in (
        "CONTENTSHAPE_DEFAULT_DISPLAY_TYPE",
        "CONTENTSHAPE_EDITOR_DISPLAY_TYPE",
        "CONTENTSHAPE_TEMPLATE_DIR",
        "CONTENTSHAPE_TEMPLATE_EXTENSION",
        "CONTENTSHAPE_LOG_LEVEL",
        "CONTENTSHAPE_LOG_FORMAT",
    ):
        monkeypatch.delenv(name, raising=False)
    clear_settings_cache()
    display_registry.clear()
    proxy_generator.clear()
    yield
    clear_settings_cache()
    display_registry.clear()
    proxy_generator.clear()
    structlog.reset_defaults()


# =============================================================================
# Sample Parts
# =============================================================================


@pytest.fixture
def body_part_type() -> type[BodyPart]:
    return BodyPart


@pytest.fixture
def title_part_type() -> type[TitlePart]:
    return TitlePart


@pytest.fixture
def bag_part_type() -> type[BagPart]:
    return BagPart


# =============================================================================
# Sample Content Types
# =============================================================================


@pytest.fixture
def blog_post_type() -> ContentTypeDefinition:
    """BlogPost with TitlePart and BodyPart, both unnamed."""
    return (
        ContentTypeDefinition(name="BlogPost", display_name="Blog Post")
        .with_part("TitlePart")
        .with_part("BodyPart")
    )


@pytest.fixture
def landing_page_type() -> ContentTypeDefinition:
    """LandingPage with a BagPart attached under the instance name Features."""
    return ContentTypeDefinition(name="LandingPage").with_part("BagPart", "Features")


@pytest.fixture
def blog_post(blog_post_type: ContentTypeDefinition) -> ContentItem:
    item = ContentItem(content_type=blog_post_type.name, display_text="Hello")
    item.apply("TitlePart", TitlePart(title="Hello"))
    item.apply("BodyPart", BodyPart(body="<p>First post</p>"))
    return item


# =============================================================================
# Shape Building
# =============================================================================


@pytest.fixture
def factory() -> DefaultShapeFactory:
    return DefaultShapeFactory()


@pytest.fixture
def root_shape() -> Shape:
    shape = Shape()
    shape.metadata.type = "Content"
    return shape
