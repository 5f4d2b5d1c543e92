"""Furnishing item endpoints: validation, filtering, sorting and partial updates."""
from sqlalchemy.exc import OperationalError

from backend.core.database import get_db


def test_create_item_applies_defaults(client, make_room, make_item):
  kitchen = make_room("Kitchen")

  item = make_item(kitchen["id"], "Fridge", cost=1200.5)
  assert item["room"] == "Kitchen"
  assert item["status"] == "Needed"
  assert item["priority"] == "must-have"
  assert item["cost"] == 1200.5
  assert item["budget_allocated"] == 0


def test_create_item_requires_name_and_room(client, make_room):
  kitchen = make_room("Kitchen")

  for body in ({"room_id": kitchen["id"]}, {"name": "Fridge"}, {"name": "", "room_id": kitchen["id"]}):
    resp = client.post("/api/items", json=body)
    assert resp.status_code == 400
    assert resp.json() == {"error": "Missing required fields: name and room_id are required"}


def test_create_item_rejects_unknown_room(client):
  resp = client.post("/api/items", json={"name": "Fridge", "room_id": 42})
  assert resp.status_code == 400
  assert "room_id" in resp.json()["error"]


def test_create_item_rejects_bad_status(client, make_room):
  kitchen = make_room("Kitchen")
  resp = client.post("/api/items", json={"name": "Fridge", "room_id": kitchen["id"], "status": "Lost"})
  assert resp.status_code == 400
  assert resp.json()["error"].startswith("Invalid status")


def test_create_item_rejects_unknown_priority(client, make_room, priorities):
  kitchen = make_room("Kitchen")
  resp = client.post("/api/items", json={"name": "Fridge", "room_id": kitchen["id"], "priority": "ASAP"})
  assert resp.status_code == 400
  assert resp.json() == {"error": "Invalid priority: ASAP. Must be one of the defined priorities."}


def test_create_item_rejects_negative_cost(client, make_room):
  kitchen = make_room("Kitchen")
  resp = client.post("/api/items", json={"name": "Fridge", "room_id": kitchen["id"], "cost": -10})
  assert resp.status_code == 400


def test_search_ignores_case(client, make_room, make_item):
  living = make_room("Living Room")
  make_item(living["id"], "Sofa", category="Furniture", vendor="IKEA")
  make_item(living["id"], "Floor Lamp", category="Lighting", vendor="Kmart")

  resp = client.get("/api/items", params={"search": "sofa"})
  assert resp.status_code == 200
  assert [item["name"] for item in resp.json()] == ["Sofa"]

  resp = client.get("/api/items", params={"search": "kmart"})
  assert [item["name"] for item in resp.json()] == ["Floor Lamp"]


def test_filters_combine(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  garage = make_room("Garage")
  make_item(kitchen["id"], "Fridge", status="Ordered")
  make_item(kitchen["id"], "Kettle")
  make_item(garage["id"], "Shelf", status="Ordered")

  resp = client.get("/api/items", params={"room_id": kitchen["id"], "status": "Ordered"})
  assert [item["name"] for item in resp.json()] == ["Fridge"]


def test_default_order_is_newest_first(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  for name in ("First", "Second", "Third"):
    make_item(kitchen["id"], name)

  names = [item["name"] for item in client.get("/api/items").json()]
  assert names == ["Third", "Second", "First"]


def test_sort_by_priority_puts_unknown_priorities_last(client, make_room, make_item, priorities):
  kitchen = make_room("Kitchen")
  make_item(kitchen["id"], "Rug", priority="Later")
  make_item(kitchen["id"], "Default")
  make_item(kitchen["id"], "Fridge", priority="Day 1")
  make_item(kitchen["id"], "Kettle", priority="Week 1")

  names = [item["name"] for item in client.get("/api/items", params={"sort": "priority"}).json()]
  assert names == ["Fridge", "Kettle", "Rug", "Default"]


def test_sort_by_cost_and_delivery_date(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  make_item(kitchen["id"], "Cheap", cost=10, delivery_date="2026-03-01")
  make_item(kitchen["id"], "Dear", cost=900)
  make_item(kitchen["id"], "Middle", cost=100, delivery_date="2026-02-01")

  by_cost = [item["name"] for item in client.get("/api/items", params={"sort": "cost"}).json()]
  assert by_cost == ["Dear", "Middle", "Cheap"]

  by_date = [item["name"] for item in client.get("/api/items", params={"sort": "delivery_date"}).json()]
  assert by_date == ["Middle", "Cheap", "Dear"]


def test_unknown_sort_key(client):
  resp = client.get("/api/items", params={"sort": "colour"})
  assert resp.status_code == 400


def test_get_missing_item(client):
  resp = client.get("/api/items/999")
  assert resp.status_code == 404
  assert resp.json() == {"error": "Item not found"}


def test_update_is_partial(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  item = make_item(kitchen["id"], "Fridge", cost=1200, vendor="Harvey Norman")

  resp = client.put(f"/api/items/{item['id']}", json={"status": "Completed"})
  assert resp.status_code == 200
  updated = resp.json()
  assert updated["status"] == "Completed"
  assert updated["cost"] == 1200
  assert updated["vendor"] == "Harvey Norman"


def test_update_cannot_blank_required_fields(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  item = make_item(kitchen["id"], "Fridge")

  resp = client.put(f"/api/items/{item['id']}", json={"name": None})
  assert resp.status_code == 400
  assert client.get(f"/api/items/{item['id']}").json()["name"] == "Fridge"


def test_move_item_to_another_room(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  garage = make_room("Garage")
  item = make_item(kitchen["id"], "Freezer")

  resp = client.put(f"/api/items/{item['id']}", json={"room_id": garage["id"]})
  assert resp.json()["room"] == "Garage"


def test_update_missing_item(client):
  assert client.put("/api/items/999", json={"status": "Completed"}).status_code == 404


def test_delete_item(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  item = make_item(kitchen["id"], "Fridge")

  resp = client.delete(f"/api/items/{item['id']}")
  assert resp.json() == {"message": "Item deleted successfully"}
  assert client.get(f"/api/items/{item['id']}").status_code == 404
  assert client.delete(f"/api/items/{item['id']}").status_code == 404


def test_update_rejects_unknown_room_ids(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  item = make_item(kitchen["id"], "Fridge")

  for room_id in (0, 999):
    resp = client.put(f"/api/items/{item['id']}", json={"room_id": room_id})
    assert resp.status_code == 400
    assert resp.json() == {"error": f"Invalid room_id: {room_id}. Room does not exist."}
  assert client.get(f"/api/items/{item['id']}").json()["room_id"] == kitchen["id"]


def test_update_rejects_unknown_priority(client, make_room, make_item, priorities):
  kitchen = make_room("Kitchen")
  item = make_item(kitchen["id"], "Fridge", priority="Day 1")

  resp = client.put(f"/api/items/{item['id']}", json={"priority": "ASAP"})
  assert resp.status_code == 400
  assert resp.json() == {"error": "Invalid priority: ASAP. Must be one of the defined priorities."}
  assert client.get(f"/api/items/{item['id']}").json()["priority"] == "Day 1"


def test_search_treats_wildcards_literally(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  make_item(kitchen["id"], "Sofa")
  make_item(kitchen["id"], "Lamp")
  make_item(kitchen["id"], "Shelf_unit")
  make_item(kitchen["id"], "100% wool rug")

  assert [item["name"] for item in client.get("/api/items", params={"search": "_"}).json()] == ["Shelf_unit"]
  assert [item["name"] for item in client.get("/api/items", params={"search": "%"}).json()] == ["100% wool rug"]


def test_store_failure_is_a_generic_500(app, client):
  class BrokenSession:
    def query(self, *args, **kwargs):
      raise OperationalError("SELECT * FROM furnishing_items", {}, Exception("database is locked"))

    def rollback(self):
      pass

    def close(self):
      pass

  app.dependency_overrides[get_db] = lambda: BrokenSession()
  try:
    resp = client.get("/api/items")
  finally:
    app.dependency_overrides.clear()

  assert resp.status_code == 500
  assert resp.json() == {"error": "Failed to fetch items"}
  assert "locked" not in resp.text
