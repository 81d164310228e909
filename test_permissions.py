from datetime import datetime, timezone

import pytest

from dwoms.auth.permissions import (
    Capability,
    TaskScope,
    can_access_route,
    can_advance_task,
    can_create_task,
    can_view_task,
    has_capability,
    task_scope,
    visible_navigation,
)
from dwoms.models.database_models import Task
from dwoms.models.user import User, UserRole


def make_user(user_id, role):
    return User(
        id=user_id,
        name=user_id,
        email=f"{user_id}@dwoms.com",
        role=role,
        created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def make_task(worker_id):
    return Task(
        id="task-1",
        product_type="Bracket",
        assigned_worker_id=worker_id,
        assigned_worker_name=worker_id,
        estimated_time=30,
        created_by="admin",
        timestamp=datetime(2024, 1, 1, tzinfo=timezone.utc),
    )


def nav_names(role):
    return [entry.name for entry in visible_navigation(role)]


def test_navigation_per_role():
    assert nav_names(UserRole.ADMIN) == [
        "Dashboard", "Production Entry", "Tasks", "Inventory", "Reports", "Users"
    ]
    assert nav_names(UserRole.SUPERVISOR) == [
        "Dashboard", "Production Entry", "Tasks", "Inventory", "Reports"
    ]
    assert nav_names(UserRole.WORKER) == ["Dashboard", "Production Entry", "Tasks"]
    assert nav_names(UserRole.CLIENT) == ["Dashboard"]


@pytest.mark.parametrize("role, capability, allowed", [
    (UserRole.ADMIN, Capability.MANAGE_USERS, True),
    (UserRole.SUPERVISOR, Capability.MANAGE_USERS, False),
    (UserRole.SUPERVISOR, Capability.VIEW_REPORTS, True),
    (UserRole.WORKER, Capability.MANAGE_INVENTORY, False),
    (UserRole.WORKER, Capability.SUBMIT_PRODUCTION, True),
    (UserRole.CLIENT, Capability.MANAGE_TASKS, False),
    (UserRole.CLIENT, Capability.VIEW_DASHBOARD, True),
])
def test_has_capability(role, capability, allowed):
    assert has_capability(role, capability) is allowed


def test_task_scopes():
    assert task_scope(UserRole.ADMIN) == TaskScope.ALL
    assert task_scope(UserRole.SUPERVISOR) == TaskScope.ALL
    assert task_scope(UserRole.WORKER) == TaskScope.OWN
    assert task_scope(UserRole.CLIENT) is None


def test_only_managers_create_tasks():
    assert can_create_task(UserRole.ADMIN)
    assert can_create_task(UserRole.SUPERVISOR)
    assert not can_create_task(UserRole.WORKER)
    assert not can_create_task(UserRole.CLIENT)


def test_worker_can_only_touch_own_tasks():
    worker = make_user("worker-1", UserRole.WORKER)
    own, other = make_task("worker-1"), make_task("worker-2")

    assert can_view_task(worker, own)
    assert can_advance_task(worker, own)
    assert not can_view_task(worker, other)
    assert not can_advance_task(worker, other)


def test_supervisor_and_client_task_access():
    supervisor = make_user("sup", UserRole.SUPERVISOR)
    client = make_user("client", UserRole.CLIENT)
    task = make_task("worker-2")

    assert can_advance_task(supervisor, task)
    assert not can_view_task(client, task)


def test_route_guard():
    assert can_access_route(UserRole.ADMIN, "/users")
    assert not can_access_route(UserRole.SUPERVISOR, "/users")
    assert not can_access_route(UserRole.CLIENT, "/reports")
    assert not can_access_route(UserRole.ADMIN, "/unknown")
