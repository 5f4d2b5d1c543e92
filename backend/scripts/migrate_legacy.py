"""
One-off clean-up for databases created before the Day 1 / Week 1 / ... priority scheme.

  - item priorities Critical and must-have become Day 1, nice-to-have becomes
    Month 1, future becomes Later
  - logistics priority Critical becomes Day 1
  - legacy PriorityLevel rows are removed and the default sort orders re-applied
  - items without a vendor get one guessed from their name and category

Usage: python -m backend.scripts.migrate_legacy
"""
import logging
from sqlalchemy import or_

from backend.core import config
from backend.core.database import Store
from backend.core.seed import DEFAULT_PRIORITIES
from backend.models.models import FurnishingItem, LogisticsEntry, PriorityLevel

logger = logging.getLogger(__name__)

ITEM_PRIORITY_MAP = {
  "Critical": "Day 1",
  "must-have": "Day 1",
  "nice-to-have": "Month 1",
  "future": "Later",
}
LOGISTICS_PRIORITY_MAP = {"Critical": "Day 1"}
LEGACY_PRIORITIES = ["Critical", "must-have", "nice-to-have", "future", "undefined"]

DEFAULT_VENDOR = "IKEA"
# First match wins. Keywords are matched against the lower-cased item name.
VENDOR_RULES = [
  ("Harvey Norman", ["mattress", "refrigerator", "washer", "dryer", "tv", "monitor", "projector", "surround sound"]),
  ("Kmart", ["rug", "lamp", "microwave", "kettle", "toaster", "dish rack", "chopping board",
             "vacuum", "iron", "mop", "broom"]),
  ("Bunnings", ["curtain", "blind", "trash bin", "waste bin", "plant", "bbq", "tool", "workbench"]),
  ("Kogan", ["pot", "pan", "air fryer", "rice cooker", "knife", "popcorn"]),
  ("IKEA", ["bed", "sofa", "table", "chair", "wardrobe", "dresser", "kallax", "bookshelf", "desk", "caddy"]),
  ("Target", ["towel", "sheet", "pillow", "quilt"]),
]
LINEN_CATEGORIES = ["linen", "bedding"]


def infer_vendor(name: str, category: str = None) -> str:
  name = (name or "").lower()
  category = (category or "").lower()
  for vendor, keywords in VENDOR_RULES:
    if any(keyword in name for keyword in keywords):
      return vendor
  if any(linen in category for linen in LINEN_CATEGORIES):
    return "Target"
  return DEFAULT_VENDOR


def remap_priorities(db, model, mapping) -> int:
  changed = 0
  for old, new in mapping.items():
    count = db.query(model).filter(model.priority == old).update({model.priority: new}, synchronize_session=False)
    if count:
      logger.info(f"{model.__tablename__}: {count} rows moved from {old!r} to {new!r}")
    changed += count
  return changed


def reset_priority_levels(db):
  deleted = db.query(PriorityLevel).filter(PriorityLevel.name.in_(LEGACY_PRIORITIES)).delete(synchronize_session=False)
  logger.info(f"Deleted {deleted} legacy priorities")
  for name, sort_order in DEFAULT_PRIORITIES:
    level = db.query(PriorityLevel).filter(PriorityLevel.name == name).first()
    if level:
      level.sort_order = sort_order
    else:
      db.add(PriorityLevel(name=name, sort_order=sort_order))
      logger.info(f"Inserted missing priority: {name}")


def fill_missing_vendors(db) -> int:
  items = db.query(FurnishingItem).filter(or_(FurnishingItem.vendor.is_(None), FurnishingItem.vendor == "")).all()
  for item in items:
    item.vendor = infer_vendor(item.name, item.category)
  logger.info(f"Assigned vendors to {len(items)} items")
  return len(items)


def migrate(store: Store) -> dict:
  """Run every step in one transaction. Returns a summary of what changed."""
  db = store.session()
  try:
    summary = {
      "items": remap_priorities(db, FurnishingItem, ITEM_PRIORITY_MAP),
      "logistics": remap_priorities(db, LogisticsEntry, LOGISTICS_PRIORITY_MAP),
    }
    reset_priority_levels(db)
    summary["vendors"] = fill_missing_vendors(db)
    db.commit()
  except Exception:
    db.rollback()
    logger.exception("Migration failed, rolled back")
    raise
  finally:
    db.close()
  logger.info("Migration completed successfully.")
  return summary


if __name__ == "__main__":
  config.configure_logging()
  store = Store(config.DATABASE_URL).open()
  try:
    migrate(store)
  finally:
    store.close()
