from fastapi import APIRouter, Depends, Query
from typing import List, Optional
from datetime import date
from sqlalchemy import or_
from sqlalchemy.orm import Session, joinedload
from backend.core.database import get_db
from backend.core.errors import NotFoundError, ValidationError, store_errors
from backend.models.models import FurnishingItem, PriorityLevel
from backend.schemas.schemas import ItemCreate, ItemModel, ItemStats, MessageModel
from backend.services.listing import ITEM_SORT_KEYS, sort_records
from backend.services.stats import item_stats
from backend.services.validation import validate_item

# --- Furnishing Items Router ---
router = APIRouter(prefix="/items", tags=["Furnishing Items"])

AMOUNT_FIELDS = ("cost", "budget_allocated")


def _contains_pattern(search: str) -> str:
  # % and _ in the search text are literal characters, not wildcards
  escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
  return f"%{escaped}%"


def _get_item(db: Session, item_id: int) -> FurnishingItem:
  item = db.query(FurnishingItem).options(joinedload(FurnishingItem.room)).filter_by(id=item_id).first()
  if not item:
    raise NotFoundError("Item not found")
  return item


@router.get("", response_model=List[ItemModel])
def list_items(
  room_id: Optional[int] = Query(None),
  category: Optional[str] = Query(None),
  status: Optional[str] = Query(None),
  priority: Optional[str] = Query(None),
  search: Optional[str] = Query(None),
  sort: str = Query("created_at"),
  db: Session = Depends(get_db),
):
  """
  List furnishing items. Every filter is optional and they combine with AND.
  E.g. room_id=3&status=Needed&search=sofa
  search matches name, description or vendor, ignoring case.
  sort is one of created_at (newest first), name, cost, delivery_date or priority.
  """
  if sort not in ITEM_SORT_KEYS:
    raise ValidationError(f"Invalid sort. Must be one of: {', '.join(ITEM_SORT_KEYS)}")

  with store_errors(db, "Failed to fetch items"):
    query = db.query(FurnishingItem).options(joinedload(FurnishingItem.room))
    if room_id:
      query = query.filter(FurnishingItem.room_id == room_id)
    if category:
      query = query.filter(FurnishingItem.category == category)
    if status:
      query = query.filter(FurnishingItem.status == status)
    if priority:
      query = query.filter(FurnishingItem.priority == priority)
    if search:
      term = _contains_pattern(search)
      query = query.filter(or_(
        FurnishingItem.name.ilike(term, escape="\\"),
        FurnishingItem.description.ilike(term, escape="\\"),
        FurnishingItem.vendor.ilike(term, escape="\\"),
      ))
    items = query.order_by(FurnishingItem.created_at.desc(), FurnishingItem.id.desc()).all()

    if sort == "created_at":
      return items
    priorities = db.query(PriorityLevel).all() if sort == "priority" else None
    return sort_records(items, sort, priorities)


@router.get("/stats", response_model=ItemStats)
def get_item_stats(db: Session = Depends(get_db)):
  """
  Budget and progress statistics: overall, per room, per priority,
  and deliveries due in the next 7 days.
  """
  with store_errors(db, "Failed to fetch statistics"):
    return item_stats(db, date.today())


@router.get("/{item_id}", response_model=ItemModel)
def get_item(item_id: int, db: Session = Depends(get_db)):
  with store_errors(db, "Failed to fetch item"):
    return _get_item(db, item_id)


@router.post("", response_model=ItemModel, status_code=201)
def create_item(item: ItemCreate, db: Session = Depends(get_db)):
  """
  Add a new furnishing item.
  name and room_id are required; unset status and priority take the column defaults.
  """
  payload = {key: value for key, value in item.model_dump(exclude_unset=True).items() if value not in (None, "")}
  validate_item(payload, db, creating=True)

  with store_errors(db, "Failed to create item"):
    new_item = FurnishingItem(**payload)
    db.add(new_item)
    db.commit()
    return _get_item(db, new_item.id)


@router.put("/{item_id}", response_model=ItemModel)
def update_item(item_id: int, updated: ItemCreate, db: Session = Depends(get_db)):
  """
  Update a furnishing item. Only the fields present in the body change.
  """
  payload = updated.model_dump(exclude_unset=True)
  for key in AMOUNT_FIELDS:
    if key in payload and payload[key] is None:
      payload[key] = 0
  validate_item(payload, db, creating=False)

  with store_errors(db, "Failed to update item"):
    item = _get_item(db, item_id)
    for key, value in payload.items():
      setattr(item, key, value)
    db.commit()
    return _get_item(db, item_id)


@router.delete("/{item_id}", response_model=MessageModel)
def delete_item(item_id: int, db: Session = Depends(get_db)):
  with store_errors(db, "Failed to delete item"):
    item = db.query(FurnishingItem).filter_by(id=item_id).first()
    if not item:
      raise NotFoundError("Item not found")
    db.delete(item)
    db.commit()
  return {"message": "Item deleted successfully"}
