"""Runtime shape proxies.

``create_shape_instance(SomeModel)`` returns a ``SomeModel`` when it is
already a shape type. Otherwise it returns an instance of a generated
subclass of ``SomeModel`` that carries the shape members
(:data:`~contentshape.display.shapes.SHAPE_MEMBERS`) the model does not
declare itself, and is registered as a virtual
:class:`~contentshape.display.shapes.Shapeable`. The model's own members,
pydantic fields included, always win over the shape ones. Generated classes
are cached per model type.
"""

from __future__ import annotations

import threading
from typing import Any, TypeVar

from contentshape.core.logging import get_logger
from contentshape.display.arguments import declared_properties
from contentshape.display.shapes import SHAPE_MEMBERS, ShapeMixin, Shapeable

logger = get_logger(__name__)

T = TypeVar("T")

PROXY_TARGET_ATTR = "__shape_proxy_target__"


def model_members(model_type: type) -> frozenset[str]:
    """Names ``model_type`` declares as class attributes, fields or properties."""
    names = set(declared_properties(model_type))
    for klass in model_type.__mro__:
        if klass is not object:
            names.update(vars(klass))
    return frozenset(names)


class ProxyGenerator:
    """Creates and caches shape proxy classes. Safe for concurrent use."""

    def __init__(self) -> None:
        self._cache: dict[type, type] = {}
        self._lock = threading.Lock()

    def proxy_type(self, base_type: type[T]) -> type[T]:
        """Return the proxy class for ``base_type``, generating it once.

        Raises ``TypeError`` when ``base_type`` declares ``metadata``, which
        a shape cannot do without.
        """
        cached = self._cache.get(base_type)
        if cached is not None:
            return cached

        with self._lock:
            cached = self._cache.get(base_type)
            if cached is None:
                cached = self._generate(base_type)
                self._cache[base_type] = cached
        return cached

    def _generate(self, base_type: type) -> type:
        members = model_members(base_type)
        if "metadata" in members:
            raise TypeError(f"{base_type.__qualname__} declares 'metadata' and cannot be proxied as a shape")

        namespace: dict[str, Any] = {
            name: vars(ShapeMixin)[name] for name in SHAPE_MEMBERS if name not in members
        }
        namespace["__module__"] = base_type.__module__
        namespace["__qualname__"] = f"{base_type.__qualname__}ShapeProxy"
        namespace[PROXY_TARGET_ATTR] = base_type

        proxy = type(base_type)(f"{base_type.__name__}ShapeProxy", (base_type,), namespace)
        Shapeable.register(proxy)

        logger.debug(
            "shape_proxy_generated",
            base_type=base_type.__qualname__,
            model_members=sorted(name for name in SHAPE_MEMBERS if name in members),
        )
        return proxy

    def __len__(self) -> int:
        return len(self._cache)

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


# Process-wide generator
proxy_generator = ProxyGenerator()


def create_shape_instance(model_type: type[T]) -> T:
    """Instantiate ``model_type`` as a shape.

    Shape types are instantiated directly; any other type is instantiated
    through its proxy class. Constructor errors propagate.
    """
    if issubclass(model_type, Shapeable):
        return model_type()
    return proxy_generator.proxy_type(model_type)()


def is_shape_proxy(obj: Any) -> bool:
    return PROXY_TARGET_ATTR in vars(type(obj))


def proxy_target(obj: Any) -> type | None:
    """The model type a proxy instance was generated for."""
    return vars(type(obj)).get(PROXY_TARGET_ATTR)
