import sys
import logging
import pandas as pd
from decimal import Decimal, InvalidOperation

from backend.core import config
from backend.core.database import Store
from backend.models.models import FurnishingItem, Room, ITEM_STATUSES, DEFAULT_ITEM_PRIORITY

logger = logging.getLogger(__name__)

COLUMNS = ["name", "room", "category", "cost", "budget_allocated", "vendor", "priority", "status", "delivery_date", "notes"]


def _text(value):
  if pd.isna(value):
    return None
  value = str(value).strip()
  return value or None


def _amount(value) -> Decimal:
  if pd.isna(value) or str(value).strip() == "":
    return Decimal(0)
  try:
    amount = Decimal(str(value).strip().lstrip("$").replace(",", ""))
  except InvalidOperation:
    raise ValueError(f"not an amount: {value!r}")
  if amount < 0:
    raise ValueError(f"negative amount: {value!r}")
  return amount


def import_csv_to_items(csv_path: str, store: Store) -> int:
  """
  Bulk-import furnishing items from a CSV file.
  Rows naming an unknown room, or carrying bad values, are skipped and logged.
  Everything else is committed in a single transaction. Returns the number of items added.
  """
  df = pd.read_csv(csv_path)
  df.columns = df.columns.str.strip().str.lower()
  missing = [column for column in ("name", "room") if column not in df.columns]
  if missing:
    raise ValueError(f"CSV is missing required columns: {', '.join(missing)}")
  df = df.reindex(columns=COLUMNS)

  session = store.session()
  try:
    rooms = {room.name.casefold(): room.id for room in session.query(Room).all()}
    added = 0
    for index, row in df.iterrows():
      name, room_name = _text(row["name"]), _text(row["room"])
      room_id = rooms.get((room_name or "").casefold())
      if not name or room_id is None:
        logger.warning(f"Skipping row {index + 2}: unknown room {room_name!r} or missing name")
        continue

      status = _text(row["status"]) or "Needed"
      if status not in ITEM_STATUSES:
        logger.warning(f"Skipping row {index + 2}: invalid status {status!r}")
        continue

      try:
        cost, budget_allocated = _amount(row["cost"]), _amount(row["budget_allocated"])
      except ValueError as e:
        logger.warning(f"Skipping row {index + 2}: {e}")
        continue

      session.add(FurnishingItem(
        name=name,
        room_id=room_id,
        category=_text(row["category"]),
        cost=cost,
        budget_allocated=budget_allocated,
        vendor=_text(row["vendor"]),
        priority=_text(row["priority"]) or DEFAULT_ITEM_PRIORITY,
        status=status,
        delivery_date=_text(row["delivery_date"]),
        notes=_text(row["notes"]),
      ))
      added += 1

    session.commit()
  except Exception:
    session.rollback()
    logger.exception("Import failed, nothing was written")
    raise
  finally:
    session.close()

  logger.info(f"Imported {added} of {len(df)} rows from {csv_path}")
  return added


if __name__ == "__main__":
  config.configure_logging()
  if len(sys.argv) != 2:
    sys.exit("usage: python -m backend.scripts.import_items <csv_path>")
  store = Store(config.DATABASE_URL).open()
  try:
    import_csv_to_items(sys.argv[1], store)
  finally:
    store.close()
