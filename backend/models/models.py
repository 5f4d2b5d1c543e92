from sqlalchemy import Column, Integer, String, Text, Numeric, ForeignKey, DateTime, Index
from sqlalchemy.orm import relationship
from backend.core.database import Base
from datetime import datetime, timezone


def _utcnow():
  return datetime.now(timezone.utc)


# --- SQLAlchemy Models (Database Table Definitions) ---

ITEM_STATUSES = ["Needed", "Researching", "Ready to Purchase", "Ordered", "Delivered", "Completed"]
COMPLETION_STATUSES = ["Pending", "In Progress", "Completed"]

# Historical default, predates the PriorityLevel table (see DESIGN.md)
DEFAULT_ITEM_PRIORITY = "must-have"
DEFAULT_LOGISTICS_PRIORITY = "Normal"

# Amounts are stored as exact decimals
Amount = Numeric(12, 2)


# Room Model: a named space in the dwelling with an optional budget ceiling
class Room(Base):
  __tablename__ = "rooms"
  id = Column(Integer, primary_key=True, autoincrement=True)
  name = Column(String, nullable=False, unique=True)
  description = Column(Text, nullable=True)
  budget = Column(Amount, nullable=False, default=0)
  created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
  updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

  # Deleting a room deletes its furnishing items
  items = relationship("FurnishingItem", back_populates="room",
                       cascade="all, delete-orphan")


# PriorityLevel Model: orderable urgency bucket, referenced by name from items
class PriorityLevel(Base):
  __tablename__ = "priorities"
  id = Column(Integer, primary_key=True, autoincrement=True)
  name = Column(String, nullable=False, unique=True)
  sort_order = Column(Integer, nullable=False)


# FurnishingItem Model: a purchasable object assigned to a room
class FurnishingItem(Base):
  __tablename__ = "furnishing_items"
  id = Column(Integer, primary_key=True, autoincrement=True)
  name = Column(String, nullable=False)
  room_id = Column(Integer, ForeignKey("rooms.id", ondelete="CASCADE"), nullable=False)
  category = Column(String, nullable=True)
  description = Column(Text, nullable=True)
  dimensions = Column(String, nullable=True)
  cost = Column(Amount, nullable=False, default=0)
  budget_allocated = Column(Amount, nullable=False, default=0)
  vendor = Column(String, nullable=True)
  status = Column(String, nullable=False, default="Needed")
  priority = Column(String, nullable=True, default=DEFAULT_ITEM_PRIORITY)
  delivery_date = Column(String, nullable=True)
  notes = Column(Text, nullable=True)
  created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
  updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

  room = relationship("Room", back_populates="items")

  __table_args__ = (
    Index("idx_items_room", "room_id"),
    Index("idx_items_status", "status"),
    Index("idx_items_priority", "priority"),
  )


# LogisticsEntry Model: a utility/service setup task
class LogisticsEntry(Base):
  __tablename__ = "logistics"
  id = Column(Integer, primary_key=True, autoincrement=True)
  service_type = Column(String, nullable=False)
  provider_name = Column(String, nullable=True)
  application_date = Column(String, nullable=True)
  scheduled_date = Column(String, nullable=True)
  completion_status = Column(String, nullable=False, default="Pending")
  # Free text, not checked against the priorities table
  priority = Column(String, nullable=True, default=DEFAULT_LOGISTICS_PRIORITY)
  account_number = Column(String, nullable=True)
  contact_info = Column(String, nullable=True)
  cost = Column(Amount, nullable=False, default=0)
  notes = Column(Text, nullable=True)
  created_at = Column(DateTime(timezone=True), default=_utcnow, nullable=False)
  updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)

  __table_args__ = (
    Index("idx_logistics_service", "service_type"),
    Index("idx_logistics_status", "completion_status"),
    Index("idx_logistics_priority", "priority"),
  )


# Setting Model: process-wide key -> value strings
class Setting(Base):
  __tablename__ = "settings"
  key = Column(String, primary_key=True)
  value = Column(Text, nullable=True)
  updated_at = Column(DateTime(timezone=True), default=_utcnow, onupdate=_utcnow, nullable=False)
