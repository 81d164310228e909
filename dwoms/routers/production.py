from fastapi import APIRouter, Depends, HTTPException, status
from pydantic import BaseModel, Field
from typing import Any, Dict, Optional
from datetime import date as date_cls
import logging

from ..auth.dependencies import require_capability
from ..auth.permissions import Capability
from ..models.database_models import Shift
from ..models.user import User, UserRole
from ..services.production_service import production_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/production",
    tags=["Production"],
    responses={404: {"description": "Not found"}}
)


class ProductionEntryCreate(BaseModel):
    product_name: str = Field(..., min_length=1)
    quantity: int = Field(..., ge=0)
    shift: Shift = Shift.MORNING
    date: Optional[date_cls] = None  # defaults to today


@router.get("", response_model=Dict[str, Any])
async def list_production_entries(
    entry_date: Optional[date_cls] = None,
    current_user: User = Depends(require_capability(Capability.SUBMIT_PRODUCTION))
):
    """Recent entries, newest first. Workers only see their own."""
    try:
        if current_user.role == UserRole.WORKER:
            entries = await production_service.get_entries_by_worker(current_user.id)
        else:
            entries = await production_service.list_entries()
        if entry_date:
            entries = [e for e in entries if e.date == entry_date]
        entries = list(reversed(entries))
        return {
            "success": True,
            "data": [e.model_dump(mode="json") for e in entries],
            "count": len(entries)
        }
    except Exception as e:
        logger.error(f"Error listing production entries: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_production_entry(
    payload: ProductionEntryCreate,
    current_user: User = Depends(require_capability(Capability.SUBMIT_PRODUCTION))
):
    """Record production for the signed-in user"""
    try:
        entry = await production_service.add_entry(
            worker_id=current_user.id,
            worker_name=current_user.name,
            product_name=payload.product_name,
            quantity=payload.quantity,
            shift=payload.shift,
            entry_date=payload.date,
        )
        return {
            "success": True,
            "message": f"{entry.quantity} units of {entry.product_name} recorded",
            "data": entry.model_dump(mode="json")
        }
    except Exception as e:
        logger.error(f"Error creating production entry: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
