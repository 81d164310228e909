from fastapi import APIRouter, HTTPException, Depends, Path, status
from pydantic import BaseModel, Field
from typing import Dict, Any, Optional
from enum import Enum
import logging

from ..auth.dependencies import require_capability
from ..auth.permissions import Capability
from ..core.exceptions import DwomsError, to_http_exception
from ..models.user import User
from ..services.inventory_service import inventory_service

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/inventory",
    tags=["Inventory Management"],
    responses={404: {"description": "Not found"}}
)


class InventoryItemCreate(BaseModel):
    item_name: str = Field(..., min_length=1)
    current_stock: int = Field(..., ge=0)
    min_stock_level: int = Field(..., ge=0)
    unit: str = Field(..., min_length=1)


class InventoryItemUpdate(BaseModel):
    item_name: Optional[str] = Field(None, min_length=1)
    min_stock_level: Optional[int] = Field(None, ge=0)
    unit: Optional[str] = Field(None, min_length=1)


class StockAction(str, Enum):
    IN = "in"
    OUT = "out"


class StockUpdate(BaseModel):
    quantity: int = Field(..., gt=0)
    action: StockAction


def _item_payload(item) -> Dict[str, Any]:
    data = item.model_dump(mode="json")
    data["is_low_stock"] = item.is_low_stock
    return data

# ═══════════════════════════════════════════════════════════════════════════
# INVENTORY ITEM MANAGEMENT ENDPOINTS
# ═══════════════════════════════════════════════════════════════════════════


@router.get("/items", response_model=Dict[str, Any])
async def list_inventory_items(
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    try:
        items = await inventory_service.list_items()
        return {
            "success": True,
            "data": [_item_payload(i) for i in items],
            "count": len(items)
        }
    except Exception as e:
        logger.error(f"Error listing inventory items: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/items", response_model=Dict[str, Any], status_code=status.HTTP_201_CREATED)
async def create_inventory_item(
    payload: InventoryItemCreate,
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    """Create a new inventory item"""
    try:
        item = await inventory_service.add_item(**payload.model_dump())
        return {
            "success": True,
            "message": f"{item.item_name} added to inventory",
            "item_id": item.id,
            "data": _item_payload(item)
        }
    except Exception as e:
        logger.error(f"Error creating inventory item: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/items/{item_id}", response_model=Dict[str, Any])
async def get_inventory_item(
    item_id: str = Path(..., description="Inventory item ID"),
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    """Get inventory item by ID"""
    try:
        item = await inventory_service.get_item(item_id)
        return {"success": True, "data": _item_payload(item)}
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error getting inventory item {item_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.patch("/items/{item_id}", response_model=Dict[str, Any])
async def update_inventory_item(
    item_id: str,
    payload: InventoryItemUpdate,
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    """Edit name, unit or minimum level. Stock changes go through /stock."""
    try:
        item = await inventory_service.update_item(item_id, payload.model_dump(exclude_none=True))
        return {
            "success": True,
            "message": "Inventory item updated successfully",
            "data": _item_payload(item)
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating inventory item {item_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.post("/items/{item_id}/stock", response_model=Dict[str, Any])
async def update_item_stock(
    item_id: str,
    payload: StockUpdate,
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    """Stock in or stock out. Stock out never takes the level below zero."""
    try:
        item = await inventory_service.update_stock(item_id, payload.quantity, payload.action == StockAction.IN)
        verb = "added to" if payload.action == StockAction.IN else "removed from"
        return {
            "success": True,
            "message": f"{payload.quantity} {item.unit} {verb} {item.item_name}",
            "data": _item_payload(item)
        }
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error updating stock for {item_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/items/{item_id}", response_model=Dict[str, Any])
async def delete_inventory_item(
    item_id: str,
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    try:
        await inventory_service.delete_item(item_id)
        return {"success": True, "message": "Inventory item deleted"}
    except DwomsError as e:
        raise to_http_exception(e)
    except Exception as e:
        logger.error(f"Error deleting inventory item {item_id}: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")


@router.get("/low-stock", response_model=Dict[str, Any])
async def get_low_stock_items(
    current_user: User = Depends(require_capability(Capability.MANAGE_INVENTORY))
):
    """Items at or below their minimum stock level"""
    try:
        items = await inventory_service.get_low_stock_items()
        return {
            "success": True,
            "data": [_item_payload(i) for i in items],
            "count": len(items)
        }
    except Exception as e:
        logger.error(f"Error getting low stock items: {str(e)}")
        raise HTTPException(status_code=500, detail="Internal server error")
