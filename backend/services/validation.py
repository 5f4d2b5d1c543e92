from sqlalchemy.orm import Session

from backend.core.errors import ValidationError
from backend.models.models import ITEM_STATUSES, COMPLETION_STATUSES, PriorityLevel, Room

# Columns that may be omitted on update but never set to null
ITEM_NOT_NULL = ("name", "room_id", "status")
LOGISTICS_NOT_NULL = ("service_type", "completion_status")


def validate_item(payload: dict, db: Session, creating: bool):
  """
  Check a furnishing item write before it reaches the store.
  payload is the request body with unset fields left out.
  """
  if creating and (not payload.get("name") or not payload.get("room_id")):
    raise ValidationError("Missing required fields: name and room_id are required")

  _reject_nulls(payload, ITEM_NOT_NULL)

  status = payload.get("status")
  if status and status not in ITEM_STATUSES:
    raise ValidationError(f"Invalid status. Must be one of: {', '.join(ITEM_STATUSES)}")

  priority = payload.get("priority")
  if priority and not db.query(PriorityLevel.id).filter(PriorityLevel.name == priority).first():
    raise ValidationError(f"Invalid priority: {priority}. Must be one of the defined priorities.")

  room_id = payload.get("room_id")
  if room_id is not None and db.get(Room, room_id) is None:
    raise ValidationError(f"Invalid room_id: {room_id}. Room does not exist.")

  return payload


def validate_logistics(payload: dict, creating: bool):
  """Check a logistics write. Priority is free text and is not looked up."""
  if creating and not payload.get("service_type"):
    raise ValidationError("Missing required field: service_type is required")

  _reject_nulls(payload, LOGISTICS_NOT_NULL)

  completion_status = payload.get("completion_status")
  if completion_status and completion_status not in COMPLETION_STATUSES:
    raise ValidationError(
      f"Invalid completion_status. Must be one of: {', '.join(COMPLETION_STATUSES)}"
    )

  return payload


def validate_room(payload: dict, creating: bool):
  if creating and not payload.get("name"):
    raise ValidationError("Room name is required")
  _reject_nulls(payload, ("name",))
  return payload


def _reject_nulls(payload: dict, fields):
  for field in fields:
    if field in payload and payload[field] in (None, ""):
      raise ValidationError(f"Field '{field}' cannot be empty")
