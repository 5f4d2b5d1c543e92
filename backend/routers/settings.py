from fastapi import APIRouter, Depends
from typing import Dict, Optional
from datetime import datetime, timezone
from sqlalchemy.orm import Session
from backend.core.database import get_db
from backend.core.errors import ValidationError, store_errors
from backend.models.models import Setting
from backend.schemas.schemas import SettingUpdate, SettingModel

# --- Settings Router ---
router = APIRouter(prefix="/settings", tags=["Settings"])


def setting_text(value) -> str:
  """Settings are stored as text. 50000 and 50000.0 both become "50000"."""
  if isinstance(value, bool):
    return "true" if value else "false"
  if isinstance(value, float) and value.is_integer():
    return str(int(value))
  return str(value)


@router.get("", response_model=Dict[str, Optional[str]])
def get_settings(db: Session = Depends(get_db)):
  """Every setting as one key -> value map."""
  with store_errors(db, "Failed to fetch settings"):
    return {setting.key: setting.value for setting in db.query(Setting).all()}


@router.put("/{key}", response_model=SettingModel)
def update_setting(key: str, body: SettingUpdate, db: Session = Depends(get_db)):
  """
  Insert or replace one setting.
  E.g. PUT /settings/total_budget {"value": 50000}
  """
  if body.value is None:
    raise ValidationError("Missing required field: value is required")
  if isinstance(body.value, (dict, list)):
    raise ValidationError("Invalid value: settings hold a single string, number or boolean")
  value = setting_text(body.value)

  with store_errors(db, "Failed to update setting"):
    setting = db.get(Setting, key)
    if setting is None:
      db.add(Setting(key=key, value=value))
    else:
      setting.value = value
      setting.updated_at = datetime.now(timezone.utc)
    db.commit()
  return {"key": key, "value": value}
