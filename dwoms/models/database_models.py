from pydantic import BaseModel, Field
from typing import Optional, List
from datetime import datetime, date as date_cls
from enum import Enum


class Shift(str, Enum):
    MORNING = "morning"
    AFTERNOON = "afternoon"
    NIGHT = "night"


class TaskStatus(str, Enum):
    ASSIGNED = "Assigned"
    IN_PROGRESS = "In Progress"
    QUALITY_CHECK = "Quality Check"
    COMPLETED = "Completed"


# Production Entry Model (append-only)
class ProductionEntry(BaseModel):
    id: str
    worker_id: str
    worker_name: str  # snapshot at creation
    product_name: str
    quantity: int = Field(..., ge=0)
    shift: Shift
    date: date_cls  # calendar day the work was done
    timestamp: datetime  # when the entry was recorded


# Task Model
class Task(BaseModel):
    id: str
    product_type: str
    assigned_worker_id: str
    assigned_worker_name: str  # snapshot at creation
    status: TaskStatus = TaskStatus.ASSIGNED
    estimated_time: int = Field(..., gt=0)  # minutes
    created_by: str
    timestamp: datetime
    completed_at: Optional[datetime] = None


# Inventory Model
class InventoryItem(BaseModel):
    id: str
    item_name: str
    current_stock: int = Field(..., ge=0)
    min_stock_level: int = Field(..., ge=0)
    unit: str  # pcs, kg, liters, ...
    last_updated: datetime

    @property
    def is_low_stock(self) -> bool:
        return self.current_stock <= self.min_stock_level


class WorkerProductivity(BaseModel):
    worker_id: str
    worker_name: str
    quantity: int


class TaskCounts(BaseModel):
    assigned: int = 0
    in_progress: int = 0
    quality_check: int = 0
    completed: int = 0
    total: int = 0


class DashboardMetrics(BaseModel):
    total_production: int
    active_tasks: int
    completed_tasks: int
    low_stock_items: int
    today_production: int
    worker_productivity: List[WorkerProductivity] = []
