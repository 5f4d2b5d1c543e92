from pydantic import BaseModel, Field, PlainSerializer, field_validator
from typing import Optional, List, Any, Annotated
from datetime import datetime
from decimal import Decimal

# Amounts are exact decimals in Python and plain numbers in JSON
AmountOut = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]
AmountIn = Annotated[Decimal, Field(ge=0), PlainSerializer(float, return_type=float, when_used="json")]

# --- Pydantic Schemas for Rooms ---

class RoomCreate(BaseModel):
  name: Optional[str] = None
  description: Optional[str] = None
  budget: Optional[AmountIn] = None

class RoomModel(BaseModel):
  id: int
  name: str
  description: Optional[str] = None
  budget: AmountOut = Decimal(0)
  created_at: Optional[datetime] = None
  updated_at: Optional[datetime] = None

  class Config:
    from_attributes = True # Allows Pydantic to work with SQLAlchemy models directly


# --- Pydantic Schemas for Priorities ---

class PriorityModel(BaseModel):
  id: int
  name: str
  sort_order: int

  class Config:
    from_attributes = True


# --- Pydantic Schemas for Furnishing Items ---

# Everything is optional here; required fields depend on create vs update
# and are checked by backend.services.validation
class ItemCreate(BaseModel):
  name: Optional[str] = None
  room_id: Optional[int] = None
  category: Optional[str] = None
  description: Optional[str] = None
  dimensions: Optional[str] = None
  cost: Optional[AmountIn] = None
  budget_allocated: Optional[AmountIn] = None
  vendor: Optional[str] = None
  status: Optional[str] = None
  priority: Optional[str] = None
  delivery_date: Optional[str] = None
  notes: Optional[str] = None

class ItemModel(BaseModel):
  id: int
  name: str
  room_id: int
  room: Optional[str] = None
  category: Optional[str] = None
  description: Optional[str] = None
  dimensions: Optional[str] = None
  cost: AmountOut = Decimal(0)
  budget_allocated: AmountOut = Decimal(0)
  vendor: Optional[str] = None
  status: str
  priority: Optional[str] = None
  delivery_date: Optional[str] = None
  notes: Optional[str] = None
  created_at: Optional[datetime] = None
  updated_at: Optional[datetime] = None

  class Config:
    from_attributes = True

  @field_validator("room", mode="before")
  @classmethod
  def room_name(cls, value):
    # The ORM relationship hands us a Room; the API exposes its name
    return getattr(value, "name", value)


# --- Pydantic Schemas for Logistics ---

class LogisticsCreate(BaseModel):
  service_type: Optional[str] = None
  provider_name: Optional[str] = None
  application_date: Optional[str] = None
  scheduled_date: Optional[str] = None
  completion_status: Optional[str] = None
  priority: Optional[str] = None
  account_number: Optional[str] = None
  contact_info: Optional[str] = None
  cost: Optional[AmountIn] = None
  notes: Optional[str] = None

class LogisticsModel(BaseModel):
  id: int
  service_type: str
  provider_name: Optional[str] = None
  application_date: Optional[str] = None
  scheduled_date: Optional[str] = None
  completion_status: str
  priority: Optional[str] = None
  account_number: Optional[str] = None
  contact_info: Optional[str] = None
  cost: AmountOut = Decimal(0)
  notes: Optional[str] = None
  created_at: Optional[datetime] = None
  updated_at: Optional[datetime] = None

  class Config:
    from_attributes = True


# --- Pydantic Schemas for Settings ---

class SettingUpdate(BaseModel):
  value: Any = None

class SettingModel(BaseModel):
  key: str
  value: Optional[str] = None


# --- Pydantic Schemas for Statistics ---

class ItemOverallStats(BaseModel):
  total_items: int
  completed_items: int
  total_spent: AmountOut
  total_budget: AmountOut

class RoomStats(BaseModel):
  room: str
  room_id: int
  total_items: int
  completed_items: int
  spent: AmountOut
  room_budget: AmountOut
  item_budget_sum: AmountOut
  budget: AmountOut

class PriorityStats(BaseModel):
  priority: Optional[str] = None
  total_items: int
  spent: AmountOut
  budget: AmountOut

class ItemStats(BaseModel):
  overall: ItemOverallStats
  byRoom: List[RoomStats]
  byPriority: List[PriorityStats]
  upcomingDeliveries: List[ItemModel]

class LogisticsOverallStats(BaseModel):
  total_services: int
  completed_services: int
  in_progress_services: int
  pending_services: int
  total_cost: AmountOut

class ServiceTypeStats(BaseModel):
  service_type: str
  completion_status: str
  total: int
  completed: int

class LogisticsStats(BaseModel):
  overall: LogisticsOverallStats
  byServiceType: List[ServiceTypeStats]
  upcomingAppointments: List[LogisticsModel]


# --- Misc ---

class MessageModel(BaseModel):
  message: str

class HealthModel(BaseModel):
  status: str
  message: str
