from shared.config.database import get_db
from main import app
from services.product_service.service import PRODUCTS_CACHE_KEY

TSHIRT = {"name": "T-Shirt", "price": 100000, "category": "ao-nam"}


def test_create_get_delete_product(client):
    created = client.post("/api/products", json=TSHIRT)
    assert created.status_code == 200
    product = created.json()
    assert isinstance(product["id"], int)

    fetched = client.get(f"/api/products/{product['id']}")
    assert fetched.status_code == 200
    body = fetched.json()
    assert body["name"] == "T-Shirt"
    assert body["price"] == 100000
    assert body["category"] == "ao-nam"
    assert body["image"] is None

    deleted = client.delete(f"/api/products/{product['id']}")
    assert deleted.status_code == 200

    missing = client.get(f"/api/products/{product['id']}")
    assert missing.status_code == 404
    assert missing.json() == {"message": "Product not found"}


def test_listing_is_ordered_and_cached(client, cache):
    for name in ("B", "A", "C"):
        client.post("/api/products", json={"name": name, "price": 1000})

    first = client.get("/api/products")
    assert first.status_code == 200
    assert first.headers["X-Cache"] == "MISS"
    ids = [p["id"] for p in first.json()]
    assert ids == sorted(ids)
    assert cache.ttls[PRODUCTS_CACHE_KEY] == 300

    second = client.get("/api/products")
    assert second.headers["X-Cache"] == "HIT"
    assert second.content == first.content


def test_create_invalidates_cached_listing(client, cache):
    client.get("/api/products")
    assert PRODUCTS_CACHE_KEY in cache.store

    client.post("/api/products", json=TSHIRT)
    assert PRODUCTS_CACHE_KEY not in cache.store

    listing = client.get("/api/products")
    assert listing.headers["X-Cache"] == "MISS"
    assert [p["name"] for p in listing.json()] == ["T-Shirt"]


def test_update_replaces_all_fields_and_invalidates(client, cache):
    product = client.post(
        "/api/products",
        json={**TSHIRT, "image": "http://img/1.png", "description": "cotton"},
    ).json()
    client.get("/api/products")

    updated = client.put(
        f"/api/products/{product['id']}",
        json={"name": "Polo", "price": 150000, "category": "ao-nam"},
    )
    assert updated.status_code == 200
    assert updated.json()["image"] is None
    assert updated.json()["description"] is None

    listing = client.get("/api/products")
    assert listing.headers["X-Cache"] == "MISS"
    assert listing.json()[0]["name"] == "Polo"
    assert listing.json()[0]["price"] == 150000


def test_delete_invalidates_cached_listing(client):
    product = client.post("/api/products", json=TSHIRT).json()
    assert len(client.get("/api/products").json()) == 1

    client.delete(f"/api/products/{product['id']}")

    listing = client.get("/api/products")
    assert listing.headers["X-Cache"] == "MISS"
    assert listing.json() == []


def test_update_and_delete_missing_product(client, cache):
    client.get("/api/products")

    assert client.put("/api/products/999", json=TSHIRT).status_code == 404
    assert client.delete("/api/products/999").status_code == 404
    assert PRODUCTS_CACHE_KEY in cache.store


def test_unavailable_cache_falls_back_to_database(client, cache):
    cache.is_connected = False
    client.post("/api/products", json=TSHIRT)

    for _ in range(2):
        listing = client.get("/api/products")
        assert listing.status_code == 200
        assert listing.headers["X-Cache"] == "MISS"
        assert [p["name"] for p in listing.json()] == ["T-Shirt"]


def test_missing_required_field_is_rejected(client):
    response = client.post("/api/products", json={"price": 1000})
    assert response.status_code == 400
    assert response.json()["message"] == "Invalid request data"


def test_categories_are_ordered_by_slug(client):
    response = client.get("/api/categories")
    assert response.status_code == 200
    assert [c["id"] for c in response.json()] == ["ao-nam", "ao-nu", "quan-nam", "quan-nu", "vay-dam"]


class BrokenSession:
    async def execute(self, *args, **kwargs):
        raise RuntimeError("database unreachable")


def test_database_failure_returns_server_error(client):
    async def broken_db():
        yield BrokenSession()

    app.dependency_overrides[get_db] = broken_db

    response = client.get("/api/products/1")
    assert response.status_code == 500
    assert response.json() == {"message": "Failed to load product", "error": "database unreachable"}

    listing = client.get("/api/products")
    assert listing.status_code == 500
    assert listing.json()["error"] == "database unreachable"
