"""Integration tests for the HTTP API using FastAPI's TestClient"""

import pytest
from fastapi.testclient import TestClient

from shopsearch.api.config import APISettings, get_settings
from shopsearch.api.main import app
from shopsearch.db import get_catalog


@pytest.fixture
def client(phone_catalog):
    """Test client over a catalog seeded with the shared phone catalog."""
    catalog = get_catalog()
    for product in phone_catalog:
        catalog.add(product)
    return TestClient(app)


class TestHealth:

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"

    def test_status(self, client):
        data = client.get("/status").json()

        assert data["components"]["catalog"]["products"] == 5
        assert "p95" in data["performance"]

    def test_request_id_propagated(self, client):
        response = client.get("/health", headers={"X-Request-ID": "abc123"})

        assert response.headers["X-Request-ID"] == "abc123"
        assert response.headers["X-Response-Time"].endswith("ms")

    def test_request_id_generated_when_missing(self, client):
        first = client.get("/health").headers["X-Request-ID"]
        second = client.get("/health").headers["X-Request-ID"]

        assert first and second
        assert first != second


class TestSearchEndpoint:

    def test_search(self, client):
        response = client.get("/api/v1/search/product", params={"query": "iPhone"})
        data = response.json()

        assert response.status_code == 200
        assert data["success"] is True
        assert data["detectedIntent"] == "general"
        assert data["totalResults"] == 5
        assert data["data"][0]["title"] == "Apple iPhone 16"
        assert data["data"][0]["rank"] == 0
        assert 0 <= data["data"][0]["relevanceScore"] <= 100

    def test_budget_query_reports_price_range(self, client):
        data = client.get("/api/v1/search/product", params={"query": "phone under 50k"}).json()

        assert data["detectedIntent"] == "budget"
        assert data["priceRange"] == {"min": 0, "max": 50000}
        assert data["totalResults"] == 5

    def test_budget_query_with_price_range_applied(self, client):
        params = {"query": "phone under 50k", "applyPriceRange": "true"}
        data = client.get("/api/v1/search/product", params=params).json()

        assert data["totalResults"] == 2
        assert all(item["price"] <= 50000 for item in data["data"])

    def test_model_number_query(self, client):
        data = client.get("/api/v1/search/product", params={"query": "iPhone 16"}).json()

        assert data["totalResults"] == 5
        assert "Apple iPhone 16" in [item["title"] for item in data["data"]]

    def test_default_limit_from_settings(self, client):
        app.dependency_overrides[get_settings] = lambda: APISettings(default_limit=2)
        try:
            data = client.get("/api/v1/search/product", params={"query": "phone"}).json()
        finally:
            app.dependency_overrides.clear()

        assert data["pagination"] == {"limit": 2, "offset": 0}
        assert data["returnedResults"] == 2

    def test_pagination_and_sorting(self, client):
        params = {"query": "phone", "limit": 2, "offset": 1, "sortBy": "price", "order": "asc"}
        data = client.get("/api/v1/search/product", params=params).json()

        assert data["pagination"] == {"limit": 2, "offset": 1}
        assert data["returnedResults"] == 2
        assert [item["price"] for item in data["data"]] == [14999, 55999]
        assert [item["rank"] for item in data["data"]] == [1, 2]

    def test_filters(self, client):
        params = {"query": "phone", "brand": "Dell"}
        data = client.get("/api/v1/search/product", params=params).json()

        assert [item["brand"] for item in data["data"]] == ["Dell"]

    def test_algorithm_param(self, client):
        params = {"query": "iphone", "algorithm": "bm25"}
        data = client.get("/api/v1/search/product", params=params).json()

        assert data["algorithm"] == "bm25"

    def test_blank_query(self, client):
        response = client.get("/api/v1/search/product", params={"query": "   "})

        assert response.status_code == 400
        assert response.json()["success"] is False
        assert response.json()["error"]["type"] == "InvalidQueryError"

    def test_query_too_long(self, client):
        response = client.get("/api/v1/search/product", params={"query": "a" * 501})

        assert response.status_code == 400
        assert response.json()["error"]["type"] == "InvalidRequestError"

    def test_missing_query(self, client):
        assert client.get("/api/v1/search/product").status_code == 422

    @pytest.mark.parametrize("limit", [0, 101])
    def test_limit_out_of_range(self, client, limit):
        response = client.get("/api/v1/search/product", params={"query": "phone", "limit": limit})
        assert response.status_code == 422

    def test_unknown_sort_field(self, client):
        response = client.get("/api/v1/search/product", params={"query": "phone", "sortBy": "hype"})
        assert response.status_code == 422

    def test_stats(self, client):
        data = client.get("/api/v1/search/stats").json()

        assert data["stats"]["totalProducts"] == 5
        assert data["stats"]["totalBrands"] == 5
        assert "Mobile Phones" in data["stats"]["categories"]


class TestProductEndpoints:

    def test_create_and_fetch(self, client):
        payload = {
            "title": "Sony WH-1000XM5",
            "description": "Noise cancelling headphones",
            "price": 29990,
            "mrp": 34990,
            "rating": 4.6,
            "stock": 60,
            "category": "Headphones",
            "brand": "Sony",
            "metadata": {"color": "Black"},
            "salesCount": 1500,
        }
        created = client.post("/api/v1/products", json=payload)

        assert created.status_code == 201
        product_id = created.json()["productId"]
        assert product_id == 6

        fetched = client.get(f"/api/v1/products/{product_id}").json()
        assert fetched["title"] == "Sony WH-1000XM5"
        assert fetched["salesCount"] == 1500
        assert fetched["discountPercentage"] == 14

    def test_create_rejects_negative_price(self, client):
        payload = {
            "title": "Bad",
            "description": "Bad product",
            "price": -1,
            "mrp": 10,
            "rating": 3,
            "stock": 1,
        }
        response = client.post("/api/v1/products", json=payload)

        assert response.status_code == 422
        assert response.json()["error"]["type"] == "ValidationError"

    def test_get_unknown_product(self, client):
        response = client.get("/api/v1/products/999")

        assert response.status_code == 404
        assert response.json()["error"]["type"] == "ResourceNotFoundError"

    def test_update_metadata(self, client):
        response = client.put("/api/v1/products/1/metadata", json={"metadata": {"storage": "256GB"}})

        assert response.status_code == 200
        assert response.json()["metadata"] == {"storage": "256GB"}
        assert get_catalog().get(1).metadata == {"storage": "256GB"}

    def test_update_metadata_unknown_product(self, client):
        response = client.put("/api/v1/products/999/metadata", json={"metadata": {"a": "b"}})
        assert response.status_code == 404

    def test_new_product_is_searchable(self, client):
        payload = {
            "title": "Boat Airdopes 141",
            "description": "Wireless earbuds",
            "price": 1299,
            "mrp": 4490,
            "rating": 4.0,
            "stock": 900,
            "brand": "Boat",
        }
        client.post("/api/v1/products", json=payload)

        data = client.get("/api/v1/search/product", params={"query": "airdopes"}).json()
        assert data["data"][0]["title"] == "Boat Airdopes 141"
