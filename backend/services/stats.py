import logging
from datetime import date
from decimal import Decimal
from typing import Optional
from sqlalchemy import func, case
from sqlalchemy.orm import Session, joinedload

from backend.models.models import FurnishingItem, LogisticsEntry, PriorityLevel, Room
from backend.schemas.schemas import (
  ItemStats, ItemOverallStats, RoomStats, PriorityStats, ItemModel,
  LogisticsStats, LogisticsOverallStats, ServiceTypeStats, LogisticsModel,
)
from backend.services.listing import is_upcoming, parse_date

logger = logging.getLogger(__name__)


def _amount(value) -> Decimal:
  return Decimal(str(value)) if value is not None else Decimal(0)


def _count_where(condition):
  return func.coalesce(func.sum(case((condition, 1), else_=0)), 0)


def effective_budget(room_budget, item_budget_sum) -> Decimal:
  """A room without its own budget is measured against what its items were allocated."""
  room_budget = _amount(room_budget)
  return room_budget if room_budget > 0 else _amount(item_budget_sum)


# --- Furnishing items ---

def item_stats(db: Session, today: Optional[date] = None) -> ItemStats:
  """
  Budget and progress rollups over all furnishing items.
  Always computed from the current rows; nothing is cached.
  """
  completed = _count_where(FurnishingItem.status == "Completed")
  spent = func.coalesce(func.sum(FurnishingItem.cost), 0)
  allocated = func.coalesce(func.sum(FurnishingItem.budget_allocated), 0)

  total_items, completed_items, total_spent, total_budget = db.query(
    func.count(FurnishingItem.id), completed, spent, allocated
  ).one()

  overall = ItemOverallStats(
    total_items=total_items,
    completed_items=completed_items,
    total_spent=_amount(total_spent),
    total_budget=_amount(total_budget),
  )

  # Every room appears, with or without items
  room_rows = (
    db.query(Room.id, Room.name, Room.budget, func.count(FurnishingItem.id), completed, spent, allocated)
    .outerjoin(FurnishingItem, FurnishingItem.room_id == Room.id)
    .group_by(Room.id, Room.name, Room.budget)
    .order_by(Room.name)
    .all()
  )
  by_room = [
    RoomStats(
      room=name,
      room_id=room_id,
      total_items=count,
      completed_items=done,
      spent=_amount(room_spent),
      room_budget=_amount(room_budget),
      item_budget_sum=_amount(item_budget_sum),
      budget=effective_budget(room_budget, item_budget_sum),
    )
    for room_id, name, room_budget, count, done, room_spent, item_budget_sum in room_rows
  ]

  priority_rows = (
    db.query(FurnishingItem.priority, PriorityLevel.sort_order, func.count(FurnishingItem.id), spent, allocated)
    .outerjoin(PriorityLevel, PriorityLevel.name == FurnishingItem.priority)
    .group_by(FurnishingItem.priority, PriorityLevel.sort_order)
    .all()
  )
  # Priorities missing from the priorities table go last
  priority_rows.sort(key=lambda row: (row[1] is None, row[1] or 0))
  by_priority = [
    PriorityStats(priority=priority, total_items=count, spent=_amount(p_spent), budget=_amount(p_budget))
    for priority, _, count, p_spent, p_budget in priority_rows
  ]

  return ItemStats(
    overall=overall,
    byRoom=by_room,
    byPriority=by_priority,
    upcomingDeliveries=[ItemModel.model_validate(item) for item in upcoming_deliveries(db, today)],
  )


def upcoming_deliveries(db: Session, today: Optional[date] = None):
  """Items delivered between today and seven days from today, inclusive, earliest first."""
  candidates = (
    db.query(FurnishingItem)
    .options(joinedload(FurnishingItem.room))
    .filter(FurnishingItem.delivery_date.isnot(None))
    .all()
  )
  upcoming = [item for item in candidates if is_upcoming(item.delivery_date, today)]
  return sorted(upcoming, key=lambda item: parse_date(item.delivery_date))


# --- Logistics ---

def logistics_stats(db: Session, today: Optional[date] = None) -> LogisticsStats:
  total, done, in_progress, pending, total_cost = db.query(
    func.count(LogisticsEntry.id),
    _count_where(LogisticsEntry.completion_status == "Completed"),
    _count_where(LogisticsEntry.completion_status == "In Progress"),
    _count_where(LogisticsEntry.completion_status == "Pending"),
    func.coalesce(func.sum(LogisticsEntry.cost), 0),
  ).one()

  overall = LogisticsOverallStats(
    total_services=total,
    completed_services=done,
    in_progress_services=in_progress,
    pending_services=pending,
    total_cost=_amount(total_cost),
  )

  # One row per (service_type, completion_status) pair, not per service type
  service_rows = (
    db.query(
      LogisticsEntry.service_type,
      LogisticsEntry.completion_status,
      func.count(LogisticsEntry.id),
      _count_where(LogisticsEntry.completion_status == "Completed"),
    )
    .group_by(LogisticsEntry.service_type, LogisticsEntry.completion_status)
    .order_by(LogisticsEntry.service_type, LogisticsEntry.completion_status)
    .all()
  )
  by_service_type = [
    ServiceTypeStats(service_type=service_type, completion_status=status, total=count, completed=completed)
    for service_type, status, count, completed in service_rows
  ]

  return LogisticsStats(
    overall=overall,
    byServiceType=by_service_type,
    upcomingAppointments=[LogisticsModel.model_validate(entry) for entry in upcoming_appointments(db, today)],
  )


def upcoming_appointments(db: Session, today: Optional[date] = None):
  candidates = db.query(LogisticsEntry).filter(LogisticsEntry.scheduled_date.isnot(None)).all()
  upcoming = [entry for entry in candidates if is_upcoming(entry.scheduled_date, today)]
  return sorted(upcoming, key=lambda entry: parse_date(entry.scheduled_date))
