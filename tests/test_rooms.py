"""Room endpoints: CRUD, unique names and cascading deletes."""


def test_create_and_list_rooms_alphabetically(client, make_room):
  make_room("Kitchen", 2000)
  make_room("Garage", 1000)

  resp = client.get("/api/rooms")
  assert resp.status_code == 200
  rooms = resp.json()
  assert [room["name"] for room in rooms] == ["Garage", "Kitchen"]
  assert rooms[1]["budget"] == 2000


def test_duplicate_room_name_is_a_conflict(client, make_room):
  make_room("Kitchen")

  resp = client.post("/api/rooms", json={"name": "Kitchen"})
  assert resp.status_code == 409
  assert resp.json() == {"error": "Room name already exists"}
  assert len(client.get("/api/rooms").json()) == 1


def test_room_requires_a_name(client):
  resp = client.post("/api/rooms", json={"budget": 100})
  assert resp.status_code == 400
  assert "error" in resp.json()


def test_negative_budget_is_rejected(client):
  resp = client.post("/api/rooms", json={"name": "Kitchen", "budget": -1})
  assert resp.status_code == 400
  assert resp.json()["error"].startswith("Invalid request")


def test_update_room_changes_only_given_fields(client, make_room):
  room = make_room("Kitchen", 2000, description="Open plan")

  resp = client.put(f"/api/rooms/{room['id']}", json={"budget": 2500})
  assert resp.status_code == 200
  updated = resp.json()
  assert updated["budget"] == 2500
  assert updated["name"] == "Kitchen"
  assert updated["description"] == "Open plan"


def test_rename_to_existing_name_is_a_conflict(client, make_room):
  make_room("Kitchen")
  garage = make_room("Garage")

  resp = client.put(f"/api/rooms/{garage['id']}", json={"name": "Kitchen"})
  assert resp.status_code == 409


def test_update_missing_room(client):
  resp = client.put("/api/rooms/999", json={"budget": 1})
  assert resp.status_code == 404
  assert resp.json() == {"error": "Room not found"}


def test_delete_room_removes_its_items(client, make_room, make_item):
  kitchen = make_room("Kitchen")
  garage = make_room("Garage")
  fridge = make_item(kitchen["id"], "Fridge")
  toolbox = make_item(garage["id"], "Toolbox")

  resp = client.delete(f"/api/rooms/{kitchen['id']}")
  assert resp.status_code == 200
  assert resp.json() == {"message": "Room deleted successfully"}

  assert client.get(f"/api/items/{fridge['id']}").status_code == 404
  assert client.get(f"/api/items/{toolbox['id']}").status_code == 200
  assert [room["name"] for room in client.get("/api/rooms").json()] == ["Garage"]


def test_delete_missing_room(client):
  assert client.delete("/api/rooms/999").status_code == 404
