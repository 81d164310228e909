"""
Task status workflow.

    Assigned -> In Progress -> Quality Check -> Completed

Completed is terminal. Transitions only ever happen on an explicit call to
``advance``; nothing here looks at the clock except to stamp completed_at.
"""

from datetime import datetime, timezone
from typing import Dict, FrozenSet, Optional

from ..core.exceptions import InvalidTransition
from ..models.database_models import Task, TaskStatus

NEXT_STATUSES: Dict[TaskStatus, FrozenSet[TaskStatus]] = {
    TaskStatus.ASSIGNED: frozenset({TaskStatus.IN_PROGRESS}),
    TaskStatus.IN_PROGRESS: frozenset({TaskStatus.QUALITY_CHECK}),
    TaskStatus.QUALITY_CHECK: frozenset({TaskStatus.COMPLETED}),
    TaskStatus.COMPLETED: frozenset(),
}


def next_allowed_statuses(current: TaskStatus) -> FrozenSet[TaskStatus]:
    return NEXT_STATUSES[TaskStatus(current)]


def is_terminal(status: TaskStatus) -> bool:
    return not next_allowed_statuses(status)


def advance(task: Task, target: TaskStatus, now: Optional[datetime] = None) -> Task:
    """
    Return a copy of ``task`` moved to ``target``.

    Raises InvalidTransition when ``target`` is not the next status. The
    completion instant is stamped only on the move into Completed.
    """
    target = TaskStatus(target)
    if target not in next_allowed_statuses(task.status):
        raise InvalidTransition(task.status, target)

    update = {"status": target}
    if target == TaskStatus.COMPLETED:
        update["completed_at"] = now or datetime.now(timezone.utc)
    return task.model_copy(update=update)
