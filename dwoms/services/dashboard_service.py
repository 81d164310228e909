from typing import List, Optional
from datetime import date
import logging

from ..models.database_models import DashboardMetrics, Task
from ..auth.permissions import TaskScope, task_scope
from ..models.user import User, UserRole
from .inventory_service import InventoryService, inventory_service
from .production_service import ProductionService, production_service
from .task_service import TaskService, task_service

logger = logging.getLogger(__name__)

# Rows of the worker productivity table shown on the dashboard
PRODUCTIVITY_ROWS = 6


class DashboardService:
    def __init__(self, production: Optional[ProductionService] = None, tasks: Optional[TaskService] = None,
                 inventory: Optional[InventoryService] = None):
        self.production = production or production_service
        self.tasks = tasks or task_service
        self.inventory = inventory or inventory_service

    async def get_metrics(self, user: User, today: Optional[date] = None) -> DashboardMetrics:
        """Headline figures. Worker productivity is only filled in for roles that see every task."""
        entries = await self.production.list_entries()
        counts = await self.tasks.get_task_counts()
        low_stock = await self.inventory.get_low_stock_items()

        productivity = []
        if task_scope(user.role) == TaskScope.ALL:
            productivity = (await self.production.get_worker_productivity())[:PRODUCTIVITY_ROWS]

        return DashboardMetrics(
            total_production=sum(e.quantity for e in entries),
            # Quality Check is not counted as active
            active_tasks=counts.assigned + counts.in_progress,
            completed_tasks=counts.completed,
            low_stock_items=len(low_stock),
            today_production=await self.production.get_today_total(today),
            worker_productivity=productivity,
        )

    async def recent_tasks(self, user: User, limit: int = 5) -> List[Task]:
        """A worker's own tasks, or every task for other roles. Oldest first, as stored."""
        if user.role == UserRole.WORKER:
            tasks = await self.tasks.get_tasks_by_worker(user.id)
        else:
            tasks = await self.tasks.list_tasks()
        return tasks[:limit]


dashboard_service = DashboardService()
