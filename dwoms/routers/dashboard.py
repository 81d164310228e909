from fastapi import APIRouter, Depends, HTTPException
from typing import Any, Dict
import logging

from ..auth.dependencies import get_current_user, require_capability
from ..auth.permissions import Capability, visible_navigation
from ..models.user import User
from ..services.dashboard_service import dashboard_service
from ..services.inventory_service import inventory_service

logger = logging.getLogger(__name__)

router = APIRouter(tags=["dashboard"])


@router.get("/navigation")
async def get_navigation(current_user: User = Depends(get_current_user)):
    """Navigation entries the current role may open"""
    return {
        "role": current_user.role.value,
        "entries": [entry._asdict() for entry in visible_navigation(current_user.role)],
    }


@router.get("/dashboard", response_model=Dict[str, Any])
async def get_dashboard(current_user: User = Depends(require_capability(Capability.VIEW_DASHBOARD))):
    """Factory overview: headline metrics, recent tasks and low stock alerts"""
    try:
        metrics = await dashboard_service.get_metrics(current_user)
        recent = await dashboard_service.recent_tasks(current_user)
        low_stock = await inventory_service.get_low_stock_items()
        return {
            "success": True,
            "welcome": f"Welcome, {current_user.name}!",
            "metrics": metrics.model_dump(mode="json"),
            "recent_tasks": [t.model_dump(mode="json") for t in recent],
            "low_stock_alerts": [i.model_dump(mode="json") for i in low_stock[:5]],
        }
    except Exception as e:
        logger.error(f"Error building dashboard: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
