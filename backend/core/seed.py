import logging
from sqlalchemy.exc import SQLAlchemyError

from backend.models.models import FurnishingItem, LogisticsEntry, PriorityLevel, Room, Setting

logger = logging.getLogger(__name__)

# --- Default data ---

DEFAULT_PRIORITIES = [
  ("Day 1", 10),
  ("Week 1", 20),
  ("Week 2", 30),
  ("Month 1", 40),
  ("Later", 50),
]

DEFAULT_ROOMS = [
  ("Living Room", 5000), ("Dining Room", 3000), ("Kitchen", 2000),
  ("Master Bedroom", 4000), ("Bedroom 2", 2000), ("Bedroom 3", 2000),
  ("Bathroom", 1000), ("Ensuite", 1000), ("Laundry", 1500), ("Garage", 1000),
  ("Outdoor/Patio", 3000), ("Study/Office", 2500), ("Hallway", 500),
  ("Home Theatre", 6000),
]

# room -> [(name, category, cost, priority, vendor)]
DEFAULT_ITEMS = {
  "Living Room": [
    ("Sofa", "Furniture", 1500, "Day 1", "IKEA"),
    ("Coffee Table", "Furniture", 300, "Week 1", "IKEA"),
    ("TV Unit", "Furniture", 400, "Week 1", "IKEA"),
    ("Area Rug", "Decor", 200, "Month 1", "Kmart"),
    ("Curtains/Blinds", "Decor", 500, "Day 1", "Bunnings"),
    ("Floor Lamp", "Lighting", 100, "Month 1", "Target"),
  ],
  "Dining Room": [
    ("Dining Table", "Furniture", 800, "Day 1", "IKEA"),
    ("Dining Chairs (x6)", "Furniture", 600, "Day 1", "IKEA"),
    ("Buffet/Sideboard", "Furniture", 500, "Month 1", "IKEA"),
  ],
  "Kitchen": [
    ("Refrigerator", "Appliances", 1200, "Day 1", "Harvey Norman"),
    ("Microwave", "Appliances", 150, "Day 1", "Kmart"),
    ("Bar Stools (x3)", "Furniture", 300, "Month 1", "IKEA"),
    ("Dish Rack", "Accessories", 50, "Day 1", "Kmart"),
    ("Trash Bin", "Accessories", 80, "Day 1", "Bunnings"),
    ("Pots & Pans Set", "Cookware", 300, "Day 1", "Kogan"),
    ("Cutlery Set", "Tableware", 100, "Day 1", "IKEA"),
    ("Knife Block", "Cookware", 150, "Day 1", "Kogan"),
    ("Utensil Set", "Cookware", 50, "Day 1", "Kmart"),
    ("Chopping Boards", "Cookware", 40, "Day 1", "Kmart"),
    ("Food Containers", "Storage", 50, "Week 1", "Kmart"),
    ("Meal Prep Containers", "Storage", 40, "Week 1", "Kmart"),
    ("Air Fryer", "Appliances", 200, "Week 1", "Kogan"),
    ("Rice Cooker", "Appliances", 100, "Week 1", "Kogan"),
    ("Toaster", "Appliances", 80, "Day 1", "Kmart"),
    ("Kettle", "Appliances", 60, "Day 1", "Kmart"),
    ("Dinner Set (Plates/Bowls)", "Tableware", 150, "Day 1", "IKEA"),
    ("Glassware Set", "Tableware", 60, "Day 1", "IKEA"),
    ("Mugs", "Tableware", 40, "Day 1", "Kmart"),
  ],
  "Master Bedroom": [
    ("King Bed Frame", "Furniture", 800, "Day 1", "IKEA"),
    ("King Mattress", "Furniture", 1200, "Day 1", "Harvey Norman"),
    ("Bedside Tables (x2)", "Furniture", 200, "Week 1", "IKEA"),
    ("Dresser", "Furniture", 400, "Month 1", "IKEA"),
    ("Bedside Lamps (x2)", "Lighting", 100, "Month 1", "Kmart"),
    ("TV", "Electronics", 800, "Week 1", None),
    ("Quilt/Doona", "Bedding", 200, "Day 1", None),
    ("Quilt Cover Set", "Bedding", 100, "Day 1", None),
    ("Sheet Set", "Bedding", 100, "Day 1", None),
    ("Pillows (x2)", "Bedding", 80, "Day 1", None),
    ("Mattress Protector", "Bedding", 50, "Day 1", None),
  ],
  "Bedroom 2": [
    ("Queen Bed Frame", "Furniture", 500, "Week 2", "IKEA"),
    ("Queen Mattress", "Furniture", 800, "Week 2", "Harvey Norman"),
    ("Bedside Table", "Furniture", 80, "Week 2", "IKEA"),
    ("Quilt/Doona", "Bedding", 150, "Week 2", "Target"),
    ("Quilt Cover Set", "Bedding", 80, "Week 2", "Target"),
    ("Sheet Set", "Bedding", 80, "Week 2", "Target"),
    ("Pillows (x2)", "Bedding", 60, "Week 2", "Target"),
  ],
  "Bedroom 3": [
    ("Queen Bed Frame", "Furniture", 500, "Later", "IKEA"),
    ("Queen Mattress", "Furniture", 800, "Later", "Harvey Norman"),
    ("Bedside Table", "Furniture", 80, "Later", "IKEA"),
    ("Quilt/Doona", "Bedding", 150, "Later", "Target"),
    ("Quilt Cover Set", "Bedding", 80, "Later", "Target"),
    ("Sheet Set", "Bedding", 80, "Later", "Target"),
    ("Pillows (x2)", "Bedding", 60, "Later", "Target"),
  ],
  "Bathroom": [
    ("Toilet Brush Holder", "Accessories", 20, "Week 1", "Kmart"),
    ("Bath Towels (x4)", "Linen", 100, "Day 1", "Target"),
    ("Hand Towels (x2)", "Linen", 30, "Day 1", "Target"),
    ("Bath Mat", "Linen", 30, "Day 1", "Target"),
    ("Shower Caddy", "Accessories", 40, "Week 1", "Kmart"),
    ("Waste Bin", "Accessories", 20, "Week 1", "Kmart"),
  ],
  "Ensuite": [
    ("Toilet Brush Holder", "Accessories", 20, "Week 1", "Kmart"),
    ("Bath Towels (x2)", "Linen", 60, "Day 1", "Target"),
    ("Hand Towel", "Linen", 15, "Day 1", "Target"),
    ("Bath Mat", "Linen", 30, "Day 1", "Target"),
    ("Waste Bin", "Accessories", 20, "Week 1", "Kmart"),
  ],
  "Laundry": [
    ("Washing Machine", "Appliances", 800, "Critical", "Harvey Norman"),
    ("Dryer", "Appliances", 600, "Month 1", "Harvey Norman"),
    ("Laundry Hamper", "Accessories", 30, "Week 1", "Kmart"),
    ("Vacuum Cleaner", "Appliances", 400, "Week 1", "Kmart"),
    ("Iron", "Appliances", 60, "Week 1", "Kmart"),
    ("Ironing Board", "Accessories", 50, "Week 1", "Kmart"),
    ("Mop & Bucket", "Cleaning", 40, "Day 1", "Bunnings"),
    ("Broom & Dustpan", "Cleaning", 30, "Day 1", "Bunnings"),
    ("Clothes Airer", "Accessories", 40, "Week 1", "Kmart"),
  ],
  "Study/Office": [
    ("Office Desk", "Furniture", 300, "Week 1", "IKEA"),
    ("Ergonomic Chair", "Furniture", 250, "Week 1", "IKEA"),
    ("Monitor", "Electronics", 300, "Week 1", "Harvey Norman"),
    ("Bookshelf", "Furniture", 150, "Month 1", "IKEA"),
  ],
  "Outdoor/Patio": [
    ("Outdoor Table Set", "Furniture", 800, "Later", "IKEA"),
    ("BBQ Grill", "Appliances", 500, "Later", "Bunnings"),
  ],
  "Garage": [
    ("Shelving Unit", "Storage", 150, "Month 1", "Bunnings"),
    ("Workbench", "Furniture", 200, "Later", "Bunnings"),
  ],
  "Hallway": [
    ("Runner Rug", "Decor", 80, "Month 1", "Kmart"),
    ("Console Table", "Furniture", 150, "Month 1", "IKEA"),
    ("Wall Art", "Decor", 100, "Later", "Kmart"),
  ],
  "Home Theatre": [
    ("Projector / Large TV", "Electronics", 2500, "Month 1", "Harvey Norman"),
    ("Surround Sound System", "Electronics", 1500, "Month 1", "Harvey Norman"),
    ("Recliner Seats (x4)", "Furniture", 2000, "Month 1", "Harvey Norman"),
    ("Blackout Curtains", "Decor", 300, "Month 1", "Bunnings"),
    ("Popcorn Machine", "Appliances", 100, "Later", "Kogan"),
  ],
}

# (service_type, provider_name, priority, notes)
DEFAULT_LOGISTICS = [
  ("Electricity", "SA Power Networks (Distributor)", "Day 1",
   "Choose a retailer (AGL, Origin, etc.) and book connection for Day 1."),
  ("Gas", "Elgas / Kleenheat", "Day 1", "Check if you need LPG bottles ordered. Book delivery."),
  ("Water", "SA Water", "Day 1", "Ensure account is in your name."),
  ("Internet", "NBN Provider (AussieBB/Telstra)", "Day 1",
   "Book appointment. Hardware (modem) usually mailed to you."),
  ("Insurance", "Home & Contents", "Day 1", "Policy must start from the moment you settle/get keys."),
  ("Bins", "Victor Harbor Council", "Week 1", "Order General, Recycle, and Green bins if missing."),
  ("Mail", "AusPost", "Week 1", "Set up redirection."),
]

DEFAULT_SETTINGS = {"total_budget": "50000"}


# --- Seed batches ---
# Each batch only runs against an empty table.

def _seed_priorities(db):
  db.add_all([PriorityLevel(name=name, sort_order=order) for name, order in DEFAULT_PRIORITIES])


def _seed_rooms(db):
  db.add_all([Room(name=name, budget=budget) for name, budget in DEFAULT_ROOMS])


def _seed_items(db):
  room_ids = {name: room_id for room_id, name in db.query(Room.id, Room.name).all()}
  for room_name, items in DEFAULT_ITEMS.items():
    room_id = room_ids.get(room_name)
    if room_id is None:
      continue
    for name, category, cost, priority, vendor in items:
      db.add(FurnishingItem(
        name=name,
        room_id=room_id,
        category=category,
        description=f"Standard {name}",
        cost=cost,
        budget_allocated=cost,
        status="Needed",
        priority=priority,
        vendor=vendor,
      ))


def _seed_logistics(db):
  db.add_all([
    LogisticsEntry(service_type=service_type, provider_name=provider, priority=priority, notes=notes)
    for service_type, provider, priority, notes in DEFAULT_LOGISTICS
  ])


def _seed_settings(db):
  db.add_all([Setting(key=key, value=value) for key, value in DEFAULT_SETTINGS.items()])


SEED_BATCHES = [
  ("priorities", PriorityLevel, _seed_priorities),
  ("rooms", Room, _seed_rooms),
  ("furnishing items", FurnishingItem, _seed_items),
  ("logistics", LogisticsEntry, _seed_logistics),
  ("settings", Setting, _seed_settings),
]


def seed_defaults(store):
  """
  Populate empty tables with the default move plan.
  Every batch is its own transaction. A failed batch is rolled back and logged,
  the remaining batches still run and the caller is never interrupted.
  Returns the names of the batches that were seeded.
  """
  seeded = []
  for label, model, seed in SEED_BATCHES:
    db = store.session()
    try:
      if db.query(model).first() is not None:
        continue
      seed(db)
      db.commit()
      seeded.append(label)
      logger.info(f"Seeded default {label}")
    except SQLAlchemyError as e:
      db.rollback()
      logger.error(f"Failed to seed default {label}: {e}")
    finally:
      db.close()
  return seeded
