from typing import Any, Dict, List
import logging

from ..core.exceptions import NotFound
from ..models.database_models import InventoryItem
from .collection_service import CollectionService, utcnow

logger = logging.getLogger(__name__)

# Fields update_item may touch. Stock only moves through update_stock.
EDITABLE_FIELDS = ("item_name", "min_stock_level", "unit")


class InventoryService(CollectionService[InventoryItem]):
    """Inventory items and their stock levels"""

    collection = "inventory"
    model = InventoryItem

    # ═══════════════════════════════════════════════════════════════════════════
    # INVENTORY ITEM MANAGEMENT
    # ═══════════════════════════════════════════════════════════════════════════

    async def list_items(self) -> List[InventoryItem]:
        return self._load()

    async def get_item(self, item_id: str) -> InventoryItem:
        for item in self._load():
            if item.id == item_id:
                return item
        raise NotFound(f"Inventory item '{item_id}' not found")

    async def add_item(self, item_name: str, current_stock: int, min_stock_level: int, unit: str) -> InventoryItem:
        item = InventoryItem(
            id=self.generate_id(),
            item_name=item_name,
            current_stock=current_stock,
            min_stock_level=min_stock_level,
            unit=unit,
            last_updated=utcnow(),
        )
        self._append(item)
        logger.info(f"[Inventory] Added {item.id} '{item_name}' with {current_stock} {unit}")
        return item

    async def update_item(self, item_id: str, updates: Dict[str, Any]) -> InventoryItem:
        """Edit descriptive fields; last_updated is refreshed even if nothing changed."""
        changes = {k: v for k, v in updates.items() if k in EDITABLE_FIELDS and v is not None}

        def apply(item: InventoryItem) -> InventoryItem:
            # re-validate so a negative min_stock_level is rejected
            return InventoryItem.model_validate({**item.model_dump(), **changes, "last_updated": utcnow()})

        return self._replace(item_id, apply)

    async def delete_item(self, item_id: str) -> None:
        items = self._load()
        remaining = [i for i in items if i.id != item_id]
        if len(remaining) == len(items):
            raise NotFound(f"Inventory item '{item_id}' not found")
        self._save(remaining)
        logger.info(f"[Inventory] Deleted {item_id}")

    # ═══════════════════════════════════════════════════════════════════════════
    # STOCK MOVEMENTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def update_stock(self, item_id: str, quantity: int, is_stock_in: bool) -> InventoryItem:
        """Stock in adds ``quantity``; stock out removes it but never below zero."""

        def apply(item: InventoryItem) -> InventoryItem:
            if is_stock_in:
                new_stock = item.current_stock + quantity
            else:
                new_stock = max(0, item.current_stock - quantity)
            logger.info(
                f"[Inventory] Stock {'in' if is_stock_in else 'out'} {quantity} on {item_id}: "
                f"{item.current_stock} -> {new_stock}"
            )
            return item.model_copy(update={"current_stock": new_stock, "last_updated": utcnow()})

        return self._replace(item_id, apply)

    async def stock_in(self, item_id: str, quantity: int) -> InventoryItem:
        return await self.update_stock(item_id, quantity, is_stock_in=True)

    async def stock_out(self, item_id: str, quantity: int) -> InventoryItem:
        return await self.update_stock(item_id, quantity, is_stock_in=False)

    async def get_low_stock_items(self) -> List[InventoryItem]:
        return [i for i in self._load() if i.is_low_stock]

    def _replace(self, item_id: str, apply) -> InventoryItem:
        items = self._load()
        for idx, item in enumerate(items):
            if item.id == item_id:
                items[idx] = apply(item)
                self._save(items)
                return items[idx]
        raise NotFound(f"Inventory item '{item_id}' not found")


inventory_service = InventoryService()
