"""Tests for the display driver registry."""

import pytest

from contentshape.core.errors import DriverRegistrationError
from contentshape.core.models import ContentPart
from contentshape.display import (
    ContentPartDisplayDriver,
    DisplayDriverRegistry,
    display_registry,
    register_driver,
    register_part,
)
from tests._support.parts import BagPart, BodyPart, BodyPartDisplayDriver, TitlePart, TitlePartDisplayDriver


@pytest.fixture
def registry():
    return DisplayDriverRegistry()


class TestRegistration:
    def test_register_part_with_drivers(self, registry):
        registry.register_part(BodyPart, BodyPartDisplayDriver)
        assert "BodyPart" in registry
        assert registry.part_type("BodyPart") is BodyPart
        assert [type(d) for d in registry.drivers_for("BodyPart")] == [BodyPartDisplayDriver]

    def test_register_driver_registers_part(self, registry):
        registry.register_driver(TitlePartDisplayDriver)
        assert registry.part_type("TitlePart") is TitlePart

    def test_register_part_without_drivers(self, registry):
        registry.register_part(BagPart)
        assert registry.drivers_for("BagPart") == []
        assert registry.list_parts() == ["BagPart"]

    def test_register_part_twice_is_idempotent(self, registry):
        registry.register_part(BodyPart)
        registry.register_part(BodyPart)
        assert len(registry) == 1

    def test_conflicting_part_name(self, registry):
        registry.register_part(BodyPart)
        conflicting = type("BodyPart", (ContentPart,), {"__module__": __name__})
        with pytest.raises(DriverRegistrationError, match="already registered"):
            registry.register_part(conflicting)

    def test_duplicate_driver(self, registry):
        registry.register_driver(BodyPartDisplayDriver)
        with pytest.raises(DriverRegistrationError):
            registry.register_driver(BodyPartDisplayDriver)

    def test_driver_without_part_type(self, registry):
        class Untyped(ContentPartDisplayDriver):
            pass

        with pytest.raises(DriverRegistrationError, match="does not declare a part type"):
            registry.register_driver(Untyped)

    def test_unknown_part(self, registry):
        assert registry.part_type("Nope") is None
        assert registry.drivers_for("Nope") == []


class TestDriverInstances:
    def test_fresh_instances_per_call(self, registry):
        registry.register_driver(BodyPartDisplayDriver)
        assert registry.drivers_for("BodyPart")[0] is not registry.drivers_for("BodyPart")[0]

    def test_create_drivers_in_registration_order(self, registry):
        registry.register_driver(TitlePartDisplayDriver)
        registry.register_driver(BodyPartDisplayDriver)
        assert [type(d) for d in registry.create_drivers()] == [TitlePartDisplayDriver, BodyPartDisplayDriver]


class TestGlobalRegistry:
    def test_decorators(self):
        @register_part
        class QuotePart(ContentPart):
            text: str = ""

        @register_driver
        class QuotePartDisplayDriver(ContentPartDisplayDriver[QuotePart]):
            pass

        assert display_registry.part_type("QuotePart") is QuotePart
        assert [type(d) for d in display_registry.drivers_for("QuotePart")] == [QuotePartDisplayDriver]

    def test_cleared_between_tests(self):
        assert len(display_registry) == 0
