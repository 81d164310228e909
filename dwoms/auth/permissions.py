"""
Role → capability table.

Every router, the navigation listing and the task-status action consult this
module. It is a fixed table over closed enums plus a single ownership check
for workers advancing tasks.
"""

from enum import Enum
from typing import Dict, FrozenSet, List, NamedTuple, Optional

from ..models.user import User, UserRole
from ..models.database_models import Task


class Capability(str, Enum):
    VIEW_DASHBOARD = "view-dashboard"
    SUBMIT_PRODUCTION = "submit-production"
    MANAGE_TASKS = "manage-tasks"
    MANAGE_INVENTORY = "manage-inventory"
    VIEW_REPORTS = "view-reports"
    MANAGE_USERS = "manage-users"


class TaskScope(str, Enum):
    ALL = "all"
    OWN = "own"


ROLE_CAPABILITIES: Dict[UserRole, FrozenSet[Capability]] = {
    UserRole.ADMIN: frozenset(Capability),
    UserRole.SUPERVISOR: frozenset(Capability) - {Capability.MANAGE_USERS},
    UserRole.WORKER: frozenset({
        Capability.VIEW_DASHBOARD,
        Capability.SUBMIT_PRODUCTION,
        Capability.MANAGE_TASKS,
    }),
    UserRole.CLIENT: frozenset({Capability.VIEW_DASHBOARD}),
}

TASK_SCOPES: Dict[UserRole, TaskScope] = {
    UserRole.ADMIN: TaskScope.ALL,
    UserRole.SUPERVISOR: TaskScope.ALL,
    UserRole.WORKER: TaskScope.OWN,
}


class NavigationEntry(NamedTuple):
    name: str
    href: str
    capability: Capability


NAVIGATION: List[NavigationEntry] = [
    NavigationEntry("Dashboard", "/dashboard", Capability.VIEW_DASHBOARD),
    NavigationEntry("Production Entry", "/production", Capability.SUBMIT_PRODUCTION),
    NavigationEntry("Tasks", "/tasks", Capability.MANAGE_TASKS),
    NavigationEntry("Inventory", "/inventory", Capability.MANAGE_INVENTORY),
    NavigationEntry("Reports", "/reports", Capability.VIEW_REPORTS),
    NavigationEntry("Users", "/users", Capability.MANAGE_USERS),
]

ROUTE_CAPABILITIES: Dict[str, Capability] = {entry.href: entry.capability for entry in NAVIGATION}


def capabilities_for(role: UserRole) -> FrozenSet[Capability]:
    return ROLE_CAPABILITIES[UserRole(role)]


def has_capability(role: UserRole, capability: Capability) -> bool:
    return capability in capabilities_for(role)


def task_scope(role: UserRole) -> Optional[TaskScope]:
    """ALL for roles that manage every task, OWN for workers, None otherwise."""
    if not has_capability(role, Capability.MANAGE_TASKS):
        return None
    return TASK_SCOPES[UserRole(role)]


def can_create_task(role: UserRole) -> bool:
    return task_scope(role) == TaskScope.ALL


def can_view_task(user: User, task: Task) -> bool:
    scope = task_scope(user.role)
    if scope == TaskScope.ALL:
        return True
    return scope == TaskScope.OWN and task.assigned_worker_id == user.id


def can_advance_task(user: User, task: Task) -> bool:
    """
    Whether ``user`` may change the status of ``task``.

    Admins and supervisors may advance any task; a worker only the tasks
    assigned to them. Whether the transition itself is legal is the
    workflow's concern, not this check's.
    """
    return can_view_task(user, task)


def visible_navigation(role: UserRole) -> List[NavigationEntry]:
    allowed = capabilities_for(role)
    return [entry for entry in NAVIGATION if entry.capability in allowed]


def can_access_route(role: UserRole, path: str) -> bool:
    capability = ROUTE_CAPABILITIES.get(path)
    return capability is not None and has_capability(role, capability)
