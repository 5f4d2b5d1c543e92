"""Filter, sort and group helpers shared by the API and the Streamlit views."""
from datetime import date

import pytest

from backend.services.listing import (
  calendar_events, filter_items, filter_logistics, group_items, is_upcoming, parse_date, sort_records,
)

ROOMS = [{"id": 1, "name": "Kitchen"}, {"id": 2, "name": "Bedroom"}, {"id": 3, "name": "Attic"}]
PRIORITIES = [{"name": "Day 1", "sort_order": 10}, {"name": "Week 1", "sort_order": 20}]


@pytest.fixture
def items():
  return [
    {"id": 1, "name": "fridge", "room_id": 1, "room": "Kitchen", "status": "Ordered", "priority": "Day 1",
     "vendor": "Harvey Norman", "cost": 1200, "delivery_date": "2026-02-10", "created_at": "2026-01-01T10:00:00"},
    {"id": 2, "name": "Bed", "room_id": 2, "room": "Bedroom", "status": "Needed", "priority": "Week 1",
     "vendor": "IKEA", "cost": 800, "delivery_date": None, "created_at": "2026-01-03T10:00:00"},
    {"id": 3, "name": "Kettle", "room_id": 1, "room": "Kitchen", "status": "Needed", "priority": "must-have",
     "vendor": None, "cost": 60, "delivery_date": "2026-01-20", "created_at": "2026-01-02T10:00:00",
     "description": "Stainless steel"},
  ]


def _names(records):
  return [record["name"] for record in records]


def test_filter_items(items):
  assert _names(filter_items(items, room_id="1")) == ["fridge", "Kettle"]
  assert _names(filter_items(items, status="Needed", room_id=1)) == ["Kettle"]
  assert _names(filter_items(items, priority="Week 1")) == ["Bed"]
  assert _names(filter_items(items, search="STAINLESS")) == ["Kettle"]
  assert _names(filter_items(items, search="ikea")) == ["Bed"]
  assert filter_items(items, room_id="", status="") == items


def test_filter_logistics():
  entries = [
    {"service_type": "Gas", "completion_status": "Pending"},
    {"service_type": "Gas", "completion_status": "Completed"},
    {"service_type": "Water", "completion_status": "Pending"},
  ]
  assert len(filter_logistics(entries, service_type="Gas")) == 2
  assert filter_logistics(entries, service_type="Gas", completion_status="Pending") == [entries[0]]


def test_sort_records(items):
  assert _names(sort_records(items)) == ["Bed", "Kettle", "fridge"]
  assert _names(sort_records(items, "name")) == ["Bed", "fridge", "Kettle"]
  assert _names(sort_records(items, "cost")) == ["fridge", "Bed", "Kettle"]
  assert _names(sort_records(items, "delivery_date")) == ["Kettle", "fridge", "Bed"]
  assert _names(sort_records(items, "priority", PRIORITIES)) == ["fridge", "Bed", "Kettle"]


def test_sort_does_not_mutate(items):
  before = list(items)
  sort_records(items, "cost")
  assert items == before


def test_group_by_room_keeps_empty_rooms(items):
  orphan = {"id": 9, "name": "Box", "room_id": 99, "vendor": "IKEA"}
  groups = group_items(items + [orphan], "room", ROOMS)
  assert [label for label, _ in groups] == ["Attic", "Bedroom", "Kitchen", "Unassigned"]
  assert dict(groups)["Attic"] == []
  assert _names(dict(groups)["Kitchen"]) == ["fridge", "Kettle"]


def test_group_by_vendor(items):
  groups = dict(group_items(items, "vendor"))
  assert set(groups) == {"Harvey Norman", "IKEA", "No Vendor"}
  assert _names(groups["No Vendor"]) == ["Kettle"]


def test_group_unknown_mode(items):
  with pytest.raises(ValueError):
    group_items(items, "colour")


def test_is_upcoming_is_inclusive():
  today = date(2026, 1, 1)
  assert is_upcoming("2026-01-01", today)
  assert is_upcoming("2026-01-08", today)
  assert not is_upcoming("2026-01-09", today)
  assert not is_upcoming("2025-12-31", today)
  assert not is_upcoming(None, today)
  assert not is_upcoming("next week", today)


def test_parse_date():
  assert parse_date("2026-01-08T09:30:00") == date(2026, 1, 8)
  assert parse_date("") is None


def test_calendar_events_merge_and_order(items):
  logistics = [
    {"id": 1, "service_type": "Internet", "provider_name": "Telstra", "scheduled_date": "2026-01-15",
     "completion_status": "Pending"},
    {"id": 2, "service_type": "Mail", "scheduled_date": None},
  ]
  events = calendar_events(items, logistics)
  assert [event["id"] for event in events] == ["logistics-1", "item-3", "item-1"]
  assert events[0]["title"] == "INTERNET"
  assert events[0]["type"] == "appointment"
  assert events[1]["type"] == "delivery"
  assert events[1]["room"] == "Kitchen"
