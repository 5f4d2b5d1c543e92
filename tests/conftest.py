"""Test configuration and fixtures."""

import pytest
from fastapi.testclient import TestClient

from backend.main import create_app
from backend.core.seed import DEFAULT_PRIORITIES
from backend.models.models import PriorityLevel


@pytest.fixture
def app():
  """API backed by a private in-memory SQLite store, without default data."""
  return create_app(database_url="sqlite://", seed=False, api_prefix="/api")


@pytest.fixture
def client(app):
  """Test client; entering it runs the lifespan, which opens the store."""
  with TestClient(app) as client:
    yield client


@pytest.fixture
def store(app, client):
  return app.state.store


@pytest.fixture
def priorities(store):
  """The five standard priority levels, Day 1 first."""
  db = store.session()
  db.add_all([PriorityLevel(name=name, sort_order=order) for name, order in DEFAULT_PRIORITIES])
  db.commit()
  db.close()
  return DEFAULT_PRIORITIES


@pytest.fixture
def make_room(client):
  def make_room(name="Kitchen", budget=0, **extra):
    resp = client.post("/api/rooms", json={"name": name, "budget": budget, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()
  return make_room


@pytest.fixture
def make_item(client):
  def make_item(room_id, name="Fridge", **extra):
    resp = client.post("/api/items", json={"name": name, "room_id": room_id, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()
  return make_item


@pytest.fixture
def make_entry(client):
  def make_entry(service_type="Electricity", **extra):
    resp = client.post("/api/logistics", json={"service_type": service_type, **extra})
    assert resp.status_code == 201, resp.text
    return resp.json()
  return make_entry
