#routers/users
from fastapi import APIRouter, HTTPException, status, Depends, Query
from typing import Any, Dict, Optional
import logging

from ..auth.dependencies import require_capability
from ..auth.permissions import Capability
from ..core.exceptions import DwomsError, to_http_exception
from ..models.user import User, UserCreate, UserRole, UserRoleUpdate
from ..services.user_service import user_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["user-management"])


@router.get("", response_model=Dict[str, Any])
async def list_users(
    role: Optional[UserRole] = Query(None, description="Filter by role"),
    current_user: User = Depends(require_capability(Capability.MANAGE_USERS))
):
    try:
        if role:
            users = await user_service.get_users_by_role(role)
        else:
            users = await user_service.list_users()
        return {
            "success": True,
            "data": [u.model_dump(mode="json") for u in users],
            "count": len(users)
        }
    except Exception as e:
        logger.error(f"Error listing users: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_user(
    payload: UserCreate,
    current_user: User = Depends(require_capability(Capability.MANAGE_USERS))
):
    """Add a user on someone's behalf (Admin only)"""
    try:
        user = await user_service.add_user(payload.name, payload.email, payload.role, created_by=current_user.id)
        return {
            "success": True,
            "message": f"User {user.name} created",
            "data": user.model_dump(mode="json")
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error creating user: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/{user_id}/role", response_model=Dict[str, Any])
async def update_user_role(
    user_id: str,
    payload: UserRoleUpdate,
    current_user: User = Depends(require_capability(Capability.MANAGE_USERS))
):
    try:
        user = await user_service.update_user_role(user_id, payload.role, current_user.id)
        return {
            "success": True,
            "message": f"Role updated to {user.role.value}",
            "data": user.model_dump(mode="json")
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating role for {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/{user_id}", response_model=Dict[str, Any])
async def delete_user(
    user_id: str,
    current_user: User = Depends(require_capability(Capability.MANAGE_USERS))
):
    """Delete a user. An admin cannot delete their own account."""
    try:
        await user_service.delete_user(user_id, current_user.id)
        return {"success": True, "message": "User deleted"}
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting user {user_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
