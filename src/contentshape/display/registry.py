"""Registry of content part types and their display drivers.

The registry stores driver *classes*. :meth:`DisplayDriverRegistry.create_drivers`
and :meth:`DisplayDriverRegistry.drivers_for` instantiate them on every call,
so each request works with its own driver instances.
"""

from __future__ import annotations

from typing import TypeVar

from contentshape.core.errors import DriverRegistrationError
from contentshape.core.logging import get_logger
from contentshape.core.models import ContentPart
from contentshape.display.drivers import ContentPartDisplayDriver

logger = get_logger(__name__)

TDriver = TypeVar("TDriver", bound=type[ContentPartDisplayDriver])
TPartType = TypeVar("TPartType", bound=type[ContentPart])


class DisplayDriverRegistry:
    """
    Part types and display drivers, keyed by part type name.

    Supports:
    - Registering a part type with any number of drivers
    - Decorator registration of drivers (part type auto-registered)
    - Fresh driver instances per resolution
    """

    def __init__(self) -> None:
        self._parts: dict[str, type[ContentPart]] = {}
        self._drivers: dict[str, list[type[ContentPartDisplayDriver]]] = {}

    def register_part(self, part_type: TPartType, *drivers: type[ContentPartDisplayDriver]) -> TPartType:
        """Register a part type and, optionally, drivers for it."""
        name = part_type.part_name()
        existing = self._parts.get(name)
        if existing is not None and existing is not part_type:
            raise DriverRegistrationError(
                f"Part '{name}' is already registered as {existing.__qualname__}"
            ).with_context(part_type=name)

        self._parts[name] = part_type
        self._drivers.setdefault(name, [])
        for driver in drivers:
            self.register_driver(driver)
        logger.debug("part_registered", part_type=name, drivers=len(self._drivers[name]))
        return part_type

    def register_driver(self, driver_type: TDriver) -> TDriver:
        """Register a driver class. Usable as a decorator."""
        part_type = driver_type.part_type
        if part_type is None:
            raise DriverRegistrationError(
                f"Driver {driver_type.__qualname__} does not declare a part type"
            )

        name = part_type.part_name()
        if name not in self._parts:
            self.register_part(part_type)

        drivers = self._drivers[name]
        if driver_type in drivers:
            raise DriverRegistrationError(
                f"Driver {driver_type.__qualname__} is already registered"
            ).with_context(part_type=name)
        drivers.append(driver_type)
        logger.debug("driver_registered", part_type=name, driver=driver_type.__qualname__)
        return driver_type

    def part_type(self, name: str) -> type[ContentPart] | None:
        return self._parts.get(name)

    def drivers_for(self, name: str) -> list[ContentPartDisplayDriver]:
        """New instances of the drivers registered for part type ``name``."""
        return [driver_type() for driver_type in self._drivers.get(name, [])]

    def create_drivers(self) -> list[ContentPartDisplayDriver]:
        """New instances of every registered driver, in registration order."""
        return [driver_type() for drivers in self._drivers.values() for driver_type in drivers]

    def list_parts(self) -> list[str]:
        return sorted(self._parts)

    def clear(self) -> None:
        """Clear registry (for testing)."""
        self._parts.clear()
        self._drivers.clear()

    def __contains__(self, name: object) -> bool:
        return name in self._parts

    def __len__(self) -> int:
        return len(self._parts)


# Global registry
display_registry = DisplayDriverRegistry()


def register_driver(driver_type: TDriver) -> TDriver:
    """Decorator registering a driver with the global registry."""
    return display_registry.register_driver(driver_type)


def register_part(part_type: TPartType) -> TPartType:
    """Decorator registering a part type with the global registry."""
    return display_registry.register_part(part_type)
