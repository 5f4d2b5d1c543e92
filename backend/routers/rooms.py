from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from backend.core.database import get_db
from backend.core.errors import ConflictError, NotFoundError, store_errors
from backend.models.models import Room
from backend.schemas.schemas import RoomCreate, RoomModel, MessageModel
from backend.services.validation import validate_room

# --- Rooms Router ---
router = APIRouter(prefix="/rooms", tags=["Rooms"])


def _get_room(db: Session, room_id: int) -> Room:
  room = db.query(Room).filter_by(id=room_id).first()
  if not room:
    raise NotFoundError("Room not found")
  return room


def _commit_room(db: Session, room: Room):
  # Room names are unique; the store is the judge of that
  try:
    db.commit()
  except IntegrityError:
    db.rollback()
    raise ConflictError("Room name already exists")
  db.refresh(room)
  return room


@router.get("", response_model=List[RoomModel])
def list_rooms(db: Session = Depends(get_db)):
  """All rooms, A-Z."""
  with store_errors(db, "Failed to fetch rooms"):
    return db.query(Room).order_by(Room.name.asc()).all()


@router.post("", response_model=RoomModel, status_code=201)
def create_room(room: RoomCreate, db: Session = Depends(get_db)):
  """
  Add a room. name must be unique, a duplicate answers 409.
  E.g. {"name": "Kitchen", "budget": 2000}
  """
  payload = {key: value for key, value in room.model_dump(exclude_unset=True).items() if value is not None}
  validate_room(payload, creating=True)

  with store_errors(db, "Failed to create room"):
    new_room = Room(**payload)
    db.add(new_room)
    return _commit_room(db, new_room)


@router.put("/{room_id}", response_model=RoomModel)
def update_room(room_id: int, updated: RoomCreate, db: Session = Depends(get_db)):
  """Update a room. Only the fields present in the body change."""
  payload = updated.model_dump(exclude_unset=True)
  if "budget" in payload and payload["budget"] is None:
    payload["budget"] = 0
  validate_room(payload, creating=False)

  with store_errors(db, "Failed to update room"):
    room = _get_room(db, room_id)
    for key, value in payload.items():
      setattr(room, key, value)
    return _commit_room(db, room)


@router.delete("/{room_id}", response_model=MessageModel)
def delete_room(room_id: int, db: Session = Depends(get_db)):
  """Delete a room together with all of its furnishing items."""
  with store_errors(db, "Failed to delete room"):
    room = _get_room(db, room_id)
    db.delete(room)
    db.commit()
  return {"message": "Room deleted successfully"}
