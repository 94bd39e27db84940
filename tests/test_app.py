"""Tests for application wiring: root, health, routing fallbacks, seeding."""

import json

import pytest
from fastapi.testclient import TestClient

from restaurant_api.core.config import Settings
from restaurant_api.main import create_app
from restaurant_api.seed import SeedDataError, load_seed_data, load_seed_file


SEED = {
    "dishes": [
        {
            "id": "d1",
            "name": "Soup",
            "description": "Hot soup",
            "price": 5,
            "image_url": "soup.jpg",
        }
    ],
    "orders": [
        {
            "id": "o1",
            "deliverTo": "1 Main St",
            "mobileNumber": "555-0100",
            "status": "out-for-delivery",
            "dishes": [{"dishId": "d1", "quantity": 2}],
        },
        {
            "deliverTo": "2 Main St",
            "mobileNumber": "555-0101",
            "dishes": [{"dishId": "d1", "quantity": 1}],
        },
    ],
}


class TestRootAndHealth:

    def test_root(self, client):
        data = client.get("/").json()
        assert data["version"] == "1.0.0"
        assert data["environment"] == "development"
        assert data["dishes"] == "/dishes"

    def test_health_counts(self, client, dish_payload):
        client.post("/dishes", json={"data": dish_payload})
        data = client.get("/health").json()
        assert data["status"] == "operational"
        assert data["dishes"] == 1
        assert data["orders"] == 0
        assert data["id_strategy"] == "sequential"


class TestRoutingFallbacks:

    def test_unknown_path(self, client):
        response = client.get("/menu")
        assert response.status_code == 404
        assert response.json() == {"message": "Path not found: /menu"}

    def test_method_not_allowed(self, client):
        response = client.patch("/orders")
        assert response.status_code == 405
        assert response.json() == {"message": "PATCH not allowed for /orders"}


class TestUnexpectedErrors:

    @staticmethod
    def _failing_client(settings):
        app = create_app(settings)

        async def explode():
            raise RuntimeError("kitchen on fire")

        app.add_api_route("/explode", explode)
        return TestClient(app, raise_server_exceptions=False)

    def test_debug_shows_detail_in_development(self):
        settings = Settings(_env_file=None, debug=True, env_mode="development")
        with self._failing_client(settings) as client:
            response = client.get("/explode")
        assert response.status_code == 500
        assert response.json() == {"message": "kitchen on fire"}

    @pytest.mark.parametrize(
        "overrides",
        [{"debug": True, "env_mode": "production"}, {"debug": False, "env_mode": "development"}],
    )
    def test_detail_hidden(self, overrides):
        with self._failing_client(Settings(_env_file=None, **overrides)) as client:
            response = client.get("/explode")
        assert response.status_code == 500
        assert response.json() == {"message": "An unexpected error occurred"}


class TestAppLifecycle:

    def test_each_app_has_its_own_store(self, settings, dish_payload):
        with TestClient(create_app(settings)) as first:
            first.post("/dishes", json={"data": dish_payload})
            assert len(first.get("/dishes").json()["data"]) == 1

        with TestClient(create_app(settings)) as second:
            assert second.get("/dishes").json()["data"] == []

    def test_sequential_ids_start_at_one(self, client, dish_payload, order_payload):
        assert client.post("/dishes", json={"data": dish_payload}).json()["data"]["id"] == "1"
        assert client.post("/orders", json={"data": order_payload}).json()["data"]["id"] == "2"

    def test_uuid_strategy(self, dish_payload):
        settings = Settings(_env_file=None, id_strategy="uuid")
        with TestClient(create_app(settings)) as client:
            new_id = client.post("/dishes", json={"data": dish_payload}).json()["data"]["id"]
            assert len(new_id) == 32
            assert client.get("/health").json()["id_strategy"] == "uuid"


class TestSeedData:

    def test_load_seed_data(self, bare_store):
        loaded = load_seed_data(bare_store, SEED)
        assert loaded == {"dishes": 1, "orders": 2}
        assert bare_store.dishes.get("d1").name == "Soup"
        assert bare_store.orders.get("o1").status.value == "out-for-delivery"

    def test_seed_without_id_gets_generated_one(self, bare_store):
        load_seed_data(bare_store, SEED)
        generated = [o for o in bare_store.orders.all() if o.id != "o1"]
        assert len(generated) == 1
        assert generated[0].status.value == "pending"

    def test_invalid_record_rejected(self, bare_store):
        bad = {"dishes": [{**SEED["dishes"][0], "price": 0}]}
        with pytest.raises(SeedDataError, match=r"dishes\[0\]: Dish must have a price"):
            load_seed_data(bare_store, bad)

    def test_duplicate_id_rejected(self, bare_store):
        bad = {"dishes": [SEED["dishes"][0], SEED["dishes"][0]]}
        with pytest.raises(SeedDataError, match="Duplicate dish id: d1"):
            load_seed_data(bare_store, bad)

    @pytest.mark.parametrize("bad_id", [0, ""])
    def test_falsy_seed_id_rejected(self, bare_store, bad_id):
        bad = {"orders": [{**SEED["orders"][1], "id": bad_id}]}
        with pytest.raises(SeedDataError, match=r"orders\[0\]: Order id must be a non-empty string"):
            load_seed_data(bare_store, bad)
        assert len(bare_store.orders) == 0

    def test_collection_must_be_list(self, bare_store):
        with pytest.raises(SeedDataError, match="'orders' must be a list"):
            load_seed_data(bare_store, {"orders": {"id": "x"}})

    def test_unreadable_file(self, bare_store, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text("{broken", encoding="utf-8")
        with pytest.raises(SeedDataError, match="Could not read seed file"):
            load_seed_file(bare_store, path)

    def test_app_loads_seed_file(self, tmp_path):
        path = tmp_path / "seed.json"
        path.write_text(json.dumps(SEED), encoding="utf-8")
        settings = Settings(_env_file=None, seed_file=str(path))

        with TestClient(create_app(settings)) as client:
            assert client.get("/dishes/d1").json()["data"]["name"] == "Soup"
            assert client.delete("/orders/o1").status_code == 400
            assert len(client.get("/orders").json()["data"]) == 2
