"""
Turn the values of the Streamlit add/edit forms into API request bodies.

Blank optional text becomes None, so clearing a field in an edit form clears
it on the server. Dates from st.date_input become YYYY-MM-DD strings.
"""
from datetime import date
from typing import List, Optional

ITEM_FIELDS = [
  "name", "room_id", "category", "description", "dimensions", "cost", "budget_allocated",
  "vendor", "status", "priority", "delivery_date", "notes",
]
LOGISTICS_FIELDS = [
  "service_type", "provider_name", "application_date", "scheduled_date", "completion_status",
  "priority", "account_number", "contact_info", "cost", "notes",
]


def _clean(value):
  if isinstance(value, date):
    return value.isoformat()
  if isinstance(value, str):
    return value.strip() or None
  return value


def item_payload(values: dict) -> dict:
  return {field: _clean(values.get(field)) for field in ITEM_FIELDS}


def logistics_payload(values: dict) -> dict:
  return {field: _clean(values.get(field)) for field in LOGISTICS_FIELDS}


def choices_with(options: List[str], current: Optional[str]) -> List[str]:
  """Options for a selectbox, keeping a current value that is no longer offered (e.g. a legacy priority)."""
  if current and current not in options:
    return list(options) + [current]
  return list(options)


def index_of(options: list, current, default: int = 0) -> int:
  return options.index(current) if current in options else default
