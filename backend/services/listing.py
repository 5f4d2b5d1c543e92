"""
List, filter, sort and group helpers for furnishing items and logistics entries.

These are plain functions over records so the same rules serve the API
(`GET /items?sort=...`) and the Streamlit views, which work on the JSON
dicts returned by the API. A record may be a dict or any object with the
matching attributes (ORM rows, pydantic models).
"""
from datetime import date, datetime, timedelta
from decimal import Decimal
from typing import Optional, List, Dict, Tuple

UNASSIGNED = "Unassigned"
NO_VENDOR = "No Vendor"
UPCOMING_DAYS = 7

ITEM_SORT_KEYS = ["created_at", "name", "cost", "delivery_date", "priority"]
LOGISTICS_SORT_KEYS = ["created_at", "service_type", "cost", "scheduled_date", "priority"]
GROUP_MODES = ["list", "room", "vendor"]


def field(record, name, default=None):
  if isinstance(record, dict):
    return record.get(name, default)
  return getattr(record, name, default)


def parse_date(value) -> Optional[date]:
  """Parse a YYYY-MM-DD date (anything after the date part is ignored). None if unparseable."""
  if value is None:
    return None
  if isinstance(value, datetime):
    return value.date()
  if isinstance(value, date):
    return value
  try:
    return date.fromisoformat(str(value).strip()[:10])
  except ValueError:
    return None


def is_upcoming(value, today: Optional[date] = None, days: int = UPCOMING_DAYS) -> bool:
  """True when value falls in [today, today + days], both ends included."""
  when = parse_date(value)
  if when is None:
    return False
  today = today or date.today()
  return today <= when <= today + timedelta(days=days)


def priority_orders(priorities) -> Dict[str, int]:
  """name -> sort_order for a list of priority records (or a ready-made mapping)."""
  if isinstance(priorities, dict):
    return priorities
  return {field(p, "name"): field(p, "sort_order") for p in priorities or []}


# --- Filtering ---

def _matches_search(record, term: str) -> bool:
  term = term.lower()
  for name in ("name", "description", "vendor"):
    value = field(record, name)
    if value and term in str(value).lower():
      return True
  return False


def filter_items(items, room_id=None, category=None, status=None, priority=None, search=None) -> List:
  """
  Keep the items matching every criterion given. Empty criteria match everything.
  search is a case-insensitive substring of name, description or vendor.
  """
  result = []
  for item in items:
    if room_id not in (None, "") and field(item, "room_id") != int(room_id):
      continue
    if category and field(item, "category") != category:
      continue
    if status and field(item, "status") != status:
      continue
    if priority and field(item, "priority") != priority:
      continue
    if search and not _matches_search(item, search):
      continue
    result.append(item)
  return result


def filter_logistics(entries, service_type=None, completion_status=None) -> List:
  return [
    entry for entry in entries
    if (not service_type or field(entry, "service_type") == service_type)
    and (not completion_status or field(entry, "completion_status") == completion_status)
  ]


# --- Sorting ---

def _amount(value) -> Decimal:
  if value in (None, ""):
    return Decimal(0)
  return Decimal(str(value))


def _recency_key(record):
  created_at = field(record, "created_at")
  return (created_at is not None, created_at, field(record, "id") or 0)


def _date_key(name):
  def key(record):
    when = parse_date(field(record, name))
    return (when is None, when or date.min)
  return key


def sort_records(records, sort_by: str = "created_at", priorities=None) -> List:
  """
  Return a new list ordered by sort_by:
    created_at     newest first (default)
    name           A-Z, case-insensitive
    service_type   A-Z, case-insensitive
    cost           most expensive first
    delivery_date  earliest first, missing dates last
    scheduled_date earliest first, missing dates last
    priority       by PriorityLevel.sort_order, unknown priorities last
  """
  records = list(records)
  if sort_by in ("name", "service_type"):
    return sorted(records, key=lambda r: str(field(r, sort_by) or "").casefold())
  if sort_by == "cost":
    return sorted(records, key=lambda r: _amount(field(r, "cost")), reverse=True)
  if sort_by in ("delivery_date", "scheduled_date"):
    return sorted(records, key=_date_key(sort_by))
  if sort_by == "priority":
    orders = priority_orders(priorities)
    return sorted(records, key=lambda r: orders.get(field(r, "priority"), float("inf")))
  return sorted(records, key=_recency_key, reverse=True)


# --- Grouping ---

def _by_label(groups: Dict[str, List]) -> List[Tuple[str, List]]:
  return sorted(groups.items(), key=lambda pair: pair[0].casefold())


def group_by_room(items, rooms) -> List[Tuple[str, List]]:
  """One bucket per known room (empty ones included), plus Unassigned when needed."""
  groups = {}
  room_names = {}
  for room in rooms:
    room_names[field(room, "id")] = field(room, "name")
    groups[field(room, "name")] = []

  unassigned = []
  for item in items:
    name = room_names.get(field(item, "room_id"))
    if name is None:
      unassigned.append(item)
    else:
      groups[name].append(item)

  if unassigned:
    groups[UNASSIGNED] = unassigned
  return _by_label(groups)


def group_by_vendor(items) -> List[Tuple[str, List]]:
  groups = {}
  for item in items:
    vendor = field(item, "vendor") or NO_VENDOR
    groups.setdefault(vendor, []).append(item)
  return _by_label(groups)


def group_items(items, mode: str, rooms=None) -> List[Tuple[str, List]]:
  if mode == "room":
    return group_by_room(items, rooms or [])
  if mode == "vendor":
    return group_by_vendor(items)
  raise ValueError(f"Unknown group mode: {mode}")


# --- Calendar ---

def calendar_events(items, logistics) -> List[dict]:
  """Item deliveries and logistics appointments as one list, earliest first."""
  events = []
  for item in items:
    if field(item, "delivery_date"):
      events.append({
        "id": f"item-{field(item, 'id')}",
        "date": field(item, "delivery_date"),
        "title": field(item, "name"),
        "type": "delivery",
        "room": field(item, "room"),
        "cost": field(item, "cost"),
      })
  for entry in logistics:
    if field(entry, "scheduled_date"):
      events.append({
        "id": f"logistics-{field(entry, 'id')}",
        "date": field(entry, "scheduled_date"),
        "title": str(field(entry, "service_type")).upper(),
        "type": "appointment",
        "provider": field(entry, "provider_name"),
        "status": field(entry, "completion_status"),
      })
  return sorted(events, key=_date_key("date"))
