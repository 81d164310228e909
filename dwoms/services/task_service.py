from typing import List, Optional
from datetime import datetime
import logging

from ..auth.permissions import can_advance_task, can_view_task
from ..core.exceptions import NotAuthorized, NotFound
from ..models.database_models import Task, TaskCounts, TaskStatus
from ..models.user import User
from . import task_workflow
from .collection_service import CollectionService, utcnow

logger = logging.getLogger(__name__)


class TaskService(CollectionService[Task]):
    collection = "tasks"
    model = Task

    async def list_tasks(self) -> List[Task]:
        return self._load()

    async def list_tasks_for(self, user: User) -> List[Task]:
        """Tasks the user is allowed to see: all of them, or only their own for workers."""
        return [t for t in self._load() if can_view_task(user, t)]

    async def get_task(self, task_id: str) -> Task:
        for task in self._load():
            if task.id == task_id:
                return task
        raise NotFound(f"Task '{task_id}' not found")

    async def create_task(self, product_type: str, assigned_worker_id: str, assigned_worker_name: str,
                          estimated_time: int, created_by: str) -> Task:
        task = Task(
            id=self.generate_id(),
            product_type=product_type,
            assigned_worker_id=assigned_worker_id,
            assigned_worker_name=assigned_worker_name,
            status=TaskStatus.ASSIGNED,
            estimated_time=estimated_time,
            created_by=created_by,
            timestamp=utcnow(),
        )
        self._append(task)
        logger.info(f"[Tasks] Created {task.id} for {assigned_worker_id} by {created_by}")
        return task

    async def get_next_status_options(self, task_id: str) -> List[TaskStatus]:
        task = await self.get_task(task_id)
        return sorted(task_workflow.next_allowed_statuses(task.status), key=list(TaskStatus).index)

    async def update_task_status(self, task_id: str, new_status: TaskStatus, actor: User,
                                 now: Optional[datetime] = None) -> Task:
        """
        Advance a task on behalf of ``actor``.

        The ownership check runs first, so a worker touching someone else's
        task gets NotAuthorized even when the move itself would be legal.
        Illegal moves raise InvalidTransition and leave the stored task as is.
        """
        tasks = self._load()
        for i, task in enumerate(tasks):
            if task.id != task_id:
                continue
            if not can_advance_task(actor, task):
                logger.warning(f"[Tasks] {actor.id} ({actor.role.value}) may not update {task_id}")
                raise NotAuthorized("You can only update tasks assigned to you")
            updated = task_workflow.advance(task, new_status, now=now)
            tasks[i] = updated
            self._save(tasks)
            logger.info(f"[Tasks] {task_id}: {task.status.value} -> {updated.status.value} by {actor.id}")
            return updated
        raise NotFound(f"Task '{task_id}' not found")

    async def get_tasks_by_worker(self, worker_id: str) -> List[Task]:
        return [t for t in self._load() if t.assigned_worker_id == worker_id]

    async def get_task_counts(self, tasks: Optional[List[Task]] = None) -> TaskCounts:
        tasks = self._load() if tasks is None else tasks
        return TaskCounts(
            assigned=sum(1 for t in tasks if t.status == TaskStatus.ASSIGNED),
            in_progress=sum(1 for t in tasks if t.status == TaskStatus.IN_PROGRESS),
            quality_check=sum(1 for t in tasks if t.status == TaskStatus.QUALITY_CHECK),
            completed=sum(1 for t in tasks if t.status == TaskStatus.COMPLETED),
            total=len(tasks),
        )


task_service = TaskService()
