from fastapi import APIRouter, Depends
from typing import List
from sqlalchemy.orm import Session
from backend.core.database import get_db
from backend.core.errors import store_errors
from backend.models.models import PriorityLevel
from backend.schemas.schemas import PriorityModel

# --- Priorities Router ---
router = APIRouter(prefix="/priorities", tags=["Priorities"])


@router.get("", response_model=List[PriorityModel])
def list_priorities(db: Session = Depends(get_db)):
  """All priority levels, most urgent first."""
  with store_errors(db, "Failed to fetch priorities"):
    return db.query(PriorityLevel).order_by(PriorityLevel.sort_order.asc()).all()
