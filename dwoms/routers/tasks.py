from fastapi import APIRouter, Depends, HTTPException, Path, status
from pydantic import BaseModel, Field
from typing import Any, Dict
import logging

from ..auth.dependencies import require_capability
from ..auth.permissions import Capability, can_create_task, can_view_task
from ..core.exceptions import DwomsError, NotAuthorized, to_http_exception
from ..models.database_models import TaskStatus
from ..models.user import User, UserRole
from ..services.task_service import task_service
from ..services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/tasks",
    tags=["Tasks"],
    responses={404: {"description": "Not found"}}
)


class TaskCreate(BaseModel):
    product_type: str = Field(..., min_length=1)
    assigned_worker_id: str
    estimated_time: int = Field(..., gt=0, description="Estimated time in minutes")


class TaskStatusUpdate(BaseModel):
    status: TaskStatus


@router.get("", response_model=Dict[str, Any])
async def list_tasks(current_user: User = Depends(require_capability(Capability.MANAGE_TASKS))):
    """All tasks for admins and supervisors, own tasks for workers"""
    try:
        tasks = await task_service.list_tasks_for(current_user)
        counts = await task_service.get_task_counts(tasks)
        return {
            "success": True,
            "data": [t.model_dump(mode="json") for t in tasks],
            "counts": counts.model_dump(),
            "can_create": can_create_task(current_user.role),
        }
    except Exception as e:
        logger.error(f"Error listing tasks: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_task(
    payload: TaskCreate,
    current_user: User = Depends(require_capability(Capability.MANAGE_TASKS))
):
    """Assign a new task to a worker (Admin/Supervisor only)"""
    try:
        if not can_create_task(current_user.role):
            raise NotAuthorized("Only admins and supervisors can create tasks")

        worker = await user_service.get_user(payload.assigned_worker_id)
        if worker.role != UserRole.WORKER:
            raise HTTPException(status_code=400, detail=f"User '{worker.id}' is not a worker")

        task = await task_service.create_task(
            product_type=payload.product_type,
            assigned_worker_id=worker.id,
            assigned_worker_name=worker.name,
            estimated_time=payload.estimated_time,
            created_by=current_user.id,
        )
        return {
            "success": True,
            "message": f"Task assigned to {worker.name}",
            "data": task.model_dump(mode="json")
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error creating task: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{task_id}", response_model=Dict[str, Any])
async def get_task(
    task_id: str = Path(..., description="Task ID"),
    current_user: User = Depends(require_capability(Capability.MANAGE_TASKS))
):
    try:
        task = await task_service.get_task(task_id)
        if not can_view_task(current_user, task):
            raise NotAuthorized("You can only view tasks assigned to you")
        return {"success": True, "data": task.model_dump(mode="json")}
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting task {task_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/{task_id}/next-statuses", response_model=Dict[str, Any])
async def get_next_statuses(
    task_id: str,
    current_user: User = Depends(require_capability(Capability.MANAGE_TASKS))
):
    """Statuses the task may move to next; empty once Completed"""
    try:
        task = await task_service.get_task(task_id)
        if not can_view_task(current_user, task):
            raise NotAuthorized("You can only view tasks assigned to you")
        options = await task_service.get_next_status_options(task_id)
        return {
            "success": True,
            "current": task.status.value,
            "next": [s.value for s in options]
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting next statuses for {task_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{task_id}/status", response_model=Dict[str, Any])
async def update_task_status(
    task_id: str,
    payload: TaskStatusUpdate,
    current_user: User = Depends(require_capability(Capability.MANAGE_TASKS))
):
    """Advance a task one step along Assigned → In Progress → Quality Check → Completed"""
    try:
        task = await task_service.update_task_status(task_id, payload.status, current_user)
        return {
            "success": True,
            "message": f"Status changed to {task.status.value}",
            "data": task.model_dump(mode="json")
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating task {task_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
