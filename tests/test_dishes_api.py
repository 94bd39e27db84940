"""End-to-end tests for the /dishes endpoints."""

import pytest


def _create(client, payload):
    return client.post("/dishes", json={"data": payload})


class TestListDishes:

    def test_empty_list(self, client):
        response = client.get("/dishes")
        assert response.status_code == 200
        assert response.json() == {"data": []}

    def test_repeated_reads_are_identical(self, client, dish_payload, store):
        _create(client, dish_payload)
        first = client.get("/dishes").json()
        second = client.get("/dishes").json()
        assert first == second
        assert len(store.dishes) == 1


class TestCreateDish:

    def test_creates_dish(self, client, dish_payload):
        response = _create(client, dish_payload)
        assert response.status_code == 201

        data = response.json()["data"]
        assert data["id"]
        assert {k: data[k] for k in dish_payload} == dish_payload

        listed = client.get("/dishes").json()["data"]
        assert [d["id"] for d in listed] == [data["id"]]

    def test_ids_are_unique(self, client, dish_payload):
        ids = {_create(client, dish_payload).json()["data"]["id"] for _ in range(5)}
        assert len(ids) == 5

    def test_client_id_ignored(self, client, dish_payload):
        response = _create(client, {**dish_payload, "id": "chosen-by-client"})
        assert response.json()["data"]["id"] != "chosen-by-client"

    @pytest.mark.parametrize("field", ["name", "description", "price", "image_url"])
    def test_missing_field(self, client, dish_payload, field):
        del dish_payload[field]
        response = _create(client, dish_payload)
        assert response.status_code == 400
        assert response.json() == {"message": f"Dish must include a {field}"}

    @pytest.mark.parametrize("field", ["name", "description", "image_url"])
    def test_empty_string_field(self, client, dish_payload, field):
        dish_payload[field] = ""
        response = _create(client, dish_payload)
        assert response.status_code == 400
        assert field in response.json()["message"]

    def test_presence_checked_before_validity(self, client, dish_payload):
        dish_payload["name"] = 42
        del dish_payload["image_url"]
        response = _create(client, dish_payload)
        assert response.json()["message"] == "Dish must include a image_url"

    def test_non_string_name(self, client, dish_payload):
        dish_payload["name"] = 42
        response = _create(client, dish_payload)
        assert response.status_code == 400
        assert response.json()["message"] == "Dish must include a name"

    @pytest.mark.parametrize("price", [0, -1, 2.5, "17", True])
    def test_invalid_price(self, client, dish_payload, price, store):
        dish_payload["price"] = price
        response = _create(client, dish_payload)
        assert response.status_code == 400
        assert response.json()["message"] == (
            "Dish must have a price that is an integer greater than 0"
        )
        assert len(store.dishes) == 0

    def test_integral_float_price_stored_as_int(self, client, dish_payload):
        dish_payload["price"] = 12.0
        response = _create(client, dish_payload)
        assert response.status_code == 201
        assert response.json()["data"]["price"] == 12
        assert isinstance(response.json()["data"]["price"], int)

    def test_missing_body(self, client):
        response = client.post("/dishes")
        assert response.status_code == 400
        assert response.json() == {"message": "Dish must include a name"}

    def test_malformed_json(self, client):
        response = client.post(
            "/dishes", content=b"{not json", headers={"content-type": "application/json"}
        )
        assert response.status_code == 400
        assert response.json() == {"message": "Dish must include a name"}

    def test_body_without_data_member(self, client, dish_payload):
        response = client.post("/dishes", json=dish_payload)
        assert response.status_code == 400


class TestReadDish:

    def test_reads_dish(self, client, dish_payload):
        created = _create(client, dish_payload).json()["data"]
        response = client.get(f"/dishes/{created['id']}")
        assert response.status_code == 200
        assert response.json() == {"data": created}

    def test_unknown_dish(self, client):
        response = client.get("/dishes/missing-42")
        assert response.status_code == 404
        assert response.json() == {"message": "Dish id not found: missing-42"}


class TestUpdateDish:

    @pytest.fixture
    def created(self, client, dish_payload):
        return _create(client, dish_payload).json()["data"]

    def test_updates_in_place(self, client, created, store):
        changes = {
            "name": "Spicy spaghetti",
            "description": "Now with chilli",
            "price": 21,
            "image_url": "https://images.example.com/spicy.jpg",
        }
        response = client.put(f"/dishes/{created['id']}", json={"data": changes})
        assert response.status_code == 200
        assert response.json()["data"] == {"id": created["id"], **changes}
        assert store.dishes.get(created["id"]).price == 21

    def test_matching_payload_id_allowed(self, client, created):
        body = {"data": {**created, "name": "Renamed"}}
        response = client.put(f"/dishes/{created['id']}", json=body)
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Renamed"

    def test_mismatched_id(self, client, created):
        body = {"data": {**created, "id": "other", "name": "Renamed"}}
        response = client.put(f"/dishes/{created['id']}", json=body)
        assert response.status_code == 400
        assert response.json()["message"] == (
            f"Dish id does not match route id. Dish: other, Route: {created['id']}"
        )
        assert client.get(f"/dishes/{created['id']}").json()["data"] == created

    def test_unknown_dish_checked_first(self, client):
        response = client.put("/dishes/nope", json={"data": {}})
        assert response.status_code == 404
        assert response.json()["message"] == "Dish id not found: nope"

    @pytest.mark.parametrize("field", ["name", "description", "price", "image_url"])
    def test_missing_field(self, client, created, field):
        body = dict(created)
        del body[field]
        response = client.put(f"/dishes/{created['id']}", json={"data": body})
        assert response.status_code == 400
        assert response.json()["message"] == f"Dish must include a {field}"

    @pytest.mark.parametrize("price", [0, -5, "12", 1.25])
    def test_invalid_price(self, client, created, price):
        body = {**created, "price": price}
        response = client.put(f"/dishes/{created['id']}", json={"data": body})
        assert response.status_code == 400
        assert client.get(f"/dishes/{created['id']}").json()["data"]["price"] == created["price"]


class TestDishRouting:

    def test_delete_not_allowed(self, client, dish_payload):
        created = _create(client, dish_payload).json()["data"]
        response = client.delete(f"/dishes/{created['id']}")
        assert response.status_code == 405
        assert response.json() == {"message": f"DELETE not allowed for /dishes/{created['id']}"}
