"""Logistics entries: CRUD, free-text priority and completion statistics."""
from datetime import date, timedelta


def test_create_entry_defaults(make_entry):
  entry = make_entry("Electricity", provider_name="AGL")
  assert entry["completion_status"] == "Pending"
  assert entry["priority"] == "Normal"
  assert entry["cost"] == 0


def test_service_type_is_required(client):
  resp = client.post("/api/logistics", json={"provider_name": "AGL"})
  assert resp.status_code == 400
  assert resp.json() == {"error": "Missing required field: service_type is required"}


def test_completion_status_is_checked(client, make_entry):
  resp = client.post("/api/logistics", json={"service_type": "Gas", "completion_status": "Done"})
  assert resp.status_code == 400

  entry = make_entry("Gas")
  resp = client.put(f"/api/logistics/{entry['id']}", json={"completion_status": "Done"})
  assert resp.status_code == 400


def test_priority_is_free_text(client, make_entry, priorities):
  entry = make_entry("Internet", priority="Whenever")
  assert entry["priority"] == "Whenever"


def test_filter_and_update(client, make_entry):
  electricity = make_entry("Electricity")
  make_entry("Gas")

  resp = client.put(f"/api/logistics/{electricity['id']}", json={"completion_status": "In Progress", "cost": 120})
  assert resp.status_code == 200
  assert resp.json()["service_type"] == "Electricity"
  assert resp.json()["cost"] == 120

  in_progress = client.get("/api/logistics", params={"completion_status": "In Progress"}).json()
  assert [entry["service_type"] for entry in in_progress] == ["Electricity"]
  gas = client.get("/api/logistics", params={"service_type": "Gas"}).json()
  assert len(gas) == 1


def test_sort_by_scheduled_date(client, make_entry):
  make_entry("Mail")
  make_entry("Water", scheduled_date="2026-05-02")
  make_entry("Gas", scheduled_date="2026-05-01")

  entries = client.get("/api/logistics", params={"sort": "scheduled_date"}).json()
  assert [entry["service_type"] for entry in entries] == ["Gas", "Water", "Mail"]


def test_missing_entry(client):
  resp = client.get("/api/logistics/999")
  assert resp.status_code == 404
  assert resp.json() == {"error": "Logistics entry not found"}
  assert client.delete("/api/logistics/999").status_code == 404


def test_delete_entry(client, make_entry):
  entry = make_entry("Bins")
  resp = client.delete(f"/api/logistics/{entry['id']}")
  assert resp.json() == {"message": "Logistics entry deleted successfully"}
  assert client.get("/api/logistics").json() == []


def test_stats_group_by_service_and_status(client, make_entry):
  make_entry("Electricity", completion_status="Pending", cost=100)
  make_entry("Electricity", completion_status="Completed", cost=50)
  make_entry("Electricity", completion_status="Completed")
  make_entry("Gas", completion_status="In Progress")

  stats = client.get("/api/logistics/stats").json()
  assert stats["overall"] == {
    "total_services": 4,
    "completed_services": 2,
    "in_progress_services": 1,
    "pending_services": 1,
    "total_cost": 150,
  }
  assert stats["byServiceType"] == [
    {"service_type": "Electricity", "completion_status": "Completed", "total": 2, "completed": 2},
    {"service_type": "Electricity", "completion_status": "Pending", "total": 1, "completed": 0},
    {"service_type": "Gas", "completion_status": "In Progress", "total": 1, "completed": 0},
  ]


def test_upcoming_appointments_window(client, make_entry):
  today = date.today()
  make_entry("Internet", scheduled_date=(today + timedelta(days=3)).isoformat())
  make_entry("Gas", scheduled_date=today.isoformat())
  make_entry("Water", scheduled_date=(today + timedelta(days=8)).isoformat())
  make_entry("Mail")

  upcoming = client.get("/api/logistics/stats").json()["upcomingAppointments"]
  assert [entry["service_type"] for entry in upcoming] == ["Gas", "Internet"]
