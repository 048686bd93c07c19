"""Tests for runtime shape proxies."""

import threading
import warnings
from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from contentshape.display import Shape, Shapeable, create_shape_instance, is_shape_proxy
from contentshape.display.proxy import ProxyGenerator, proxy_generator, proxy_target


class CardViewModel:
    def __init__(self):
        self.title = ""

    def heading(self):
        return self.title.upper()


@dataclass
class GalleryViewModel:
    images: list = None


class CardModel(BaseModel):
    title: str = ""
    id: str = "model-id"


class PositionedModel:
    @property
    def position(self):
        return "model"


class BlogShape(Shape):
    pass


class TestCreateShapeInstance:
    def test_plain_class_is_proxied(self):
        card = create_shape_instance(CardViewModel)
        assert isinstance(card, CardViewModel)
        assert isinstance(card, Shapeable)
        assert is_shape_proxy(card)
        assert proxy_target(card) is CardViewModel
        assert type(card).__name__ == "CardViewModelShapeProxy"

    def test_proxy_keeps_model_behaviour(self):
        card = create_shape_instance(CardViewModel)
        card.title = "hello"
        card.metadata.alternates.add("Card_Summary")
        assert card.heading() == "HELLO"
        assert list(card.metadata.alternates) == ["Card_Summary"]

    def test_proxy_state_is_per_instance(self):
        first = create_shape_instance(CardViewModel)
        second = create_shape_instance(CardViewModel)
        first.metadata.type = "Card"
        first.classes.append("wide")
        assert second.metadata.type is None
        assert second.classes == []

    def test_dataclass_is_proxied(self):
        gallery = create_shape_instance(GalleryViewModel)
        assert isinstance(gallery, GalleryViewModel)
        assert gallery.images is None
        gallery.position = "3"
        assert gallery.metadata.position == "3"

    def test_shape_type_is_not_proxied(self):
        shape = create_shape_instance(BlogShape)
        assert type(shape) is BlogShape
        assert not is_shape_proxy(shape)
        assert proxy_target(shape) is None


class TestProxyGenerator:
    def test_cached_per_type(self):
        assert proxy_generator.proxy_type(CardViewModel) is proxy_generator.proxy_type(CardViewModel)
        assert len(proxy_generator) == 1

    def test_clear(self):
        generator = ProxyGenerator()
        first = generator.proxy_type(CardViewModel)
        generator.clear()
        assert generator.proxy_type(CardViewModel) is not first

    def test_concurrent_generation_yields_one_type(self):
        generator = ProxyGenerator()
        results = []
        barrier = threading.Barrier(8)

        def generate():
            barrier.wait()
            results.append(generator.proxy_type(GalleryViewModel))

        threads = [threading.Thread(target=generate) for _ in range(8)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert len(set(results)) == 1
        assert len(generator) == 1


class TestModelMembers:
    @pytest.mark.asyncio
    async def test_pydantic_field_is_not_shadowed(self, factory):
        def initialize(card):
            card.title = "Hello"

        card = await factory.create_typed("Card", CardModel, initialize)

        assert isinstance(card, CardModel)
        assert isinstance(card, Shapeable)
        assert card.id == "model-id"
        assert card.metadata.type == "Card"
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            assert card.model_dump() == {"title": "Hello", "id": "model-id"}

    def test_pydantic_proxy_keeps_shape_members(self):
        card = create_shape_instance(CardModel)
        card.classes.append("wide")
        card.attributes["data-x"] = "1"
        assert card.classes == ["wide"]
        assert card.attributes == {"data-x": "1"}
        assert "id" in CardModel.model_fields

    def test_model_property_wins(self):
        model = create_shape_instance(PositionedModel)
        assert model.position == "model"
        assert model.metadata.position is None

    def test_declared_metadata_rejected(self):
        class WithMetadata:
            metadata = None

        with pytest.raises(TypeError, match="metadata"):
            create_shape_instance(WithMetadata)
