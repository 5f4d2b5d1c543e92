from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import date
from sqlalchemy.orm import Session
from backend.core.database import get_db
from backend.core.errors import NotFoundError, ValidationError, store_errors
from backend.models.models import LogisticsEntry, PriorityLevel
from backend.schemas.schemas import LogisticsCreate, LogisticsModel, LogisticsStats, MessageModel
from backend.services.listing import LOGISTICS_SORT_KEYS, sort_records
from backend.services.stats import logistics_stats
from backend.services.validation import validate_logistics

# --- Logistics Router ---
router = APIRouter(prefix="/logistics", tags=["Logistics"])


def _get_entry(db: Session, entry_id: int) -> LogisticsEntry:
  entry = db.query(LogisticsEntry).filter_by(id=entry_id).first()
  if not entry:
    raise NotFoundError("Logistics entry not found")
  return entry


@router.get("", response_model=List[LogisticsModel])
def list_logistics(
  service_type: Optional[str] = Query(None),
  completion_status: Optional[str] = Query(None),
  sort: str = Query("created_at"),
  db: Session = Depends(get_db),
):
  """
  List logistics entries.
  E.g. service_type=Electricity&completion_status=Pending
  """
  if sort not in LOGISTICS_SORT_KEYS:
    raise ValidationError(f"Invalid sort. Must be one of: {', '.join(LOGISTICS_SORT_KEYS)}")

  with store_errors(db, "Failed to fetch logistics"):
    query = db.query(LogisticsEntry)
    if service_type:
      query = query.filter(LogisticsEntry.service_type == service_type)
    if completion_status:
      query = query.filter(LogisticsEntry.completion_status == completion_status)
    entries = query.order_by(LogisticsEntry.created_at.desc(), LogisticsEntry.id.desc()).all()

    if sort == "created_at":
      return entries
    priorities = db.query(PriorityLevel).all() if sort == "priority" else None
    return sort_records(entries, sort, priorities)


@router.get("/stats", response_model=LogisticsStats)
def get_logistics_stats(db: Session = Depends(get_db)):
  """Completion statistics and appointments scheduled in the next 7 days."""
  with store_errors(db, "Failed to fetch statistics"):
    return logistics_stats(db, date.today())


@router.get("/{entry_id}", response_model=LogisticsModel)
def get_logistics_entry(entry_id: int, db: Session = Depends(get_db)):
  with store_errors(db, "Failed to fetch logistics entry"):
    return _get_entry(db, entry_id)


@router.post("", response_model=LogisticsModel, status_code=201)
def create_logistics_entry(entry: LogisticsCreate, db: Session = Depends(get_db)):
  """
  Add a utility or service setup task. service_type is required.
  priority is free text and defaults to Normal.
  """
  payload = {key: value for key, value in entry.model_dump(exclude_unset=True).items() if value not in (None, "")}
  validate_logistics(payload, creating=True)

  with store_errors(db, "Failed to create logistics entry"):
    new_entry = LogisticsEntry(**payload)
    db.add(new_entry)
    db.commit()
    db.refresh(new_entry)
    return new_entry


@router.put("/{entry_id}", response_model=LogisticsModel)
def update_logistics_entry(entry_id: int, updated: LogisticsCreate, db: Session = Depends(get_db)):
  payload = updated.model_dump(exclude_unset=True)
  if "cost" in payload and payload["cost"] is None:
    payload["cost"] = 0
  validate_logistics(payload, creating=False)

  with store_errors(db, "Failed to update logistics entry"):
    entry = _get_entry(db, entry_id)
    for key, value in payload.items():
      setattr(entry, key, value)
    db.commit()
    db.refresh(entry)
    return entry


@router.delete("/{entry_id}", response_model=MessageModel)
def delete_logistics_entry(entry_id: int, db: Session = Depends(get_db)):
  with store_errors(db, "Failed to delete logistics entry"):
    entry = _get_entry(db, entry_id)
    db.delete(entry)
    db.commit()
  return {"message": "Logistics entry deleted successfully"}
