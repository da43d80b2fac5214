"""Unit tests for the in-memory product catalog"""

import json

import pytest

from shopsearch.db import ProductCatalog, ProductNotFoundError, get_catalog, reset_catalog
from shopsearch.models import Product


@pytest.fixture
def catalog():
    return ProductCatalog()


def _product(title: str, **fields) -> Product:
    return Product(title=title, price=fields.pop("price", 100), mrp=fields.pop("mrp", 100), **fields)


class TestProductCatalog:

    def test_add_assigns_sequential_ids(self, catalog):
        first = catalog.add(_product("One"))
        second = catalog.add(_product("Two"))

        assert (first.product_id, second.product_id) == (1, 2)
        assert len(catalog) == 2

    def test_explicit_id_advances_counter(self, catalog):
        catalog.add(_product("Seeded", product_id=10))
        assert catalog.add(_product("Next")).product_id == 11

    def test_get(self, catalog):
        stored = catalog.add(_product("One"))
        assert catalog.get(stored.product_id) == stored

    def test_get_unknown(self, catalog):
        with pytest.raises(ProductNotFoundError) as exc_info:
            catalog.get(42)

        assert exc_info.value.product_id == 42
        assert isinstance(exc_info.value, KeyError)

    def test_update_metadata_merges(self, catalog):
        stored = catalog.add(_product("One", metadata={"color": "red"}))
        updated = catalog.update_metadata(stored.product_id, {"size": "L"})

        assert updated.metadata == {"color": "red", "size": "L"}
        assert catalog.get(stored.product_id).metadata == {"color": "red", "size": "L"}

    def test_update_metadata_unknown(self, catalog):
        with pytest.raises(ProductNotFoundError):
            catalog.update_metadata(5, {"a": "b"})

    def test_snapshot_is_isolated_from_later_writes(self, catalog):
        catalog.add(_product("One"))
        snapshot = catalog.snapshot()
        catalog.add(_product("Two"))

        assert isinstance(snapshot, tuple)
        assert [p.title for p in snapshot] == ["One"]

    def test_indexes(self, catalog):
        catalog.add(_product("Phone", category="Mobile Phones", brand="Apple"))
        catalog.add(_product("Laptop", category="Laptops", brand="Apple"))

        assert [p.title for p in catalog.by_brand("Apple")] == ["Phone", "Laptop"]
        assert [p.title for p in catalog.by_category("Laptops")] == ["Laptop"]
        assert catalog.categories == ["Mobile Phones", "Laptops"]
        assert catalog.brands == ["Apple"]

    def test_replacing_product_reindexes(self, catalog):
        catalog.add(_product("Phone", product_id=1, brand="Apple"))
        catalog.add(_product("Phone", product_id=1, brand="Samsung"))

        assert catalog.by_brand("Apple") == []
        assert catalog.brands == ["Samsung"]

    def test_statistics(self, catalog):
        catalog.add(_product("One", price=100, rating=4.0, stock=2, category="A", brand="X"))
        catalog.add(_product("Two", price=50, rating=5.0, stock=0, category="B", brand="X"))

        stats = catalog.statistics()

        assert stats["total_products"] == 2
        assert stats["total_categories"] == 2
        assert stats["total_brands"] == 1
        assert stats["avg_rating"] == 4.5
        assert stats["in_stock_products"] == 1
        assert stats["total_value"] == 200

    def test_statistics_empty(self, catalog):
        stats = catalog.statistics()
        assert stats["total_products"] == 0
        assert stats["avg_rating"] == 0.0

    def test_clear(self, catalog):
        catalog.add(_product("One"))
        catalog.clear()

        assert len(catalog) == 0
        assert catalog.add(_product("Two")).product_id == 1

    def test_load_json(self, catalog, tmp_path):
        seed = tmp_path / "products.json"
        seed.write_text(
            json.dumps(
                [
                    {"title": "Phone", "price": 999, "mrp": 1299, "salesCount": 10},
                    {"title": "Case", "price": 99, "mrp": 199, "brand": "Spigen"},
                ]
            ),
            encoding="utf-8",
        )

        assert catalog.load_json(seed) == 2
        assert catalog.get(1).sales_count == 10
        assert catalog.get(2).brand == "Spigen"


def test_global_catalog():
    first = get_catalog()
    assert get_catalog() is first

    reset_catalog()
    assert get_catalog() is not first
