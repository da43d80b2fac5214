"""
Pytest configuration and shared fixtures
"""

from datetime import datetime, timedelta, timezone

import pytest

from shopsearch.api.dependencies import reset_services
from shopsearch.db import reset_catalog
from shopsearch.ml.config import reset_config
from shopsearch.models import Product

# Fixed reference time so age-based scores are reproducible
NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def reset_globals(monkeypatch):
    """Fresh config, catalog, and services for every test."""
    for var in ("DIVERSITY_MAX_PER_BRAND", "DIVERSITY_MAX_PER_CATEGORY", "RANKING_ALGORITHM"):
        monkeypatch.delenv(var, raising=False)

    reset_config()
    reset_catalog()
    reset_services()
    yield
    reset_config()
    reset_catalog()
    reset_services()


@pytest.fixture
def now():
    """Reference time shared by scoring tests."""
    return NOW


@pytest.fixture
def make_product():
    """
    Product factory.

    Accepts any Product field plus `age` (days before NOW the product was created).
    """

    def _make(age: int = 60, **overrides) -> Product:
        fields = {
            "title": "Test Product",
            "description": "",
            "price": 1000.0,
            "mrp": 1000.0,
            "rating": 4.0,
            "stock": 50,
            "category": "Electronics",
            "brand": "Unknown",
            "created_at": NOW - timedelta(days=age),
        }
        fields.update(overrides)
        return Product(**fields)

    return _make


@pytest.fixture
def phone_catalog(make_product):
    """Small mixed catalog of phones, accessories, and laptops."""
    return [
        make_product(
            product_id=1,
            title="Apple iPhone 16",
            description="Apple iPhone 16 with A18 chip",
            price=79999,
            mrp=89999,
            rating=4.7,
            stock=100,
            sales_count=5000,
            category="Mobile Phones",
            brand="Apple",
        ),
        make_product(
            product_id=2,
            title="Samsung Galaxy S24",
            description="Samsung flagship phone",
            price=74999,
            mrp=79999,
            rating=4.5,
            stock=80,
            sales_count=3000,
            category="Mobile Phones",
            brand="Samsung",
        ),
        make_product(
            product_id=3,
            title="iPhone 16 Silicone Case",
            description="Soft case for iPhone",
            price=999,
            mrp=1999,
            rating=4.2,
            stock=300,
            sales_count=8000,
            category="Phone Accessories",
            brand="Spigen",
        ),
        make_product(
            product_id=4,
            title="Redmi Note 13",
            description="Budget phone with big battery",
            price=14999,
            mrp=17999,
            rating=4.1,
            stock=250,
            sales_count=12000,
            category="Mobile Phones",
            brand="Xiaomi",
        ),
        make_product(
            product_id=5,
            title="Dell Inspiron 15",
            description="Everyday laptop for work",
            price=55999,
            mrp=64999,
            rating=4.3,
            stock=40,
            sales_count=900,
            category="Laptops",
            brand="Dell",
        ),
    ]
