"""
Demo data for an empty store: one account per role and a few inventory items.
Runs only when the users collection is empty.
"""

import logging
from typing import Optional

from ..models.user import UserRole
from .inventory_service import InventoryService, inventory_service
from .user_service import UserService, user_service

logger = logging.getLogger(__name__)

DEMO_USERS = [
    ("Admin User", "admin@dwoms.com", UserRole.ADMIN),
    ("Sarah Supervisor", "supervisor@dwoms.com", UserRole.SUPERVISOR),
    ("John Worker", "worker@dwoms.com", UserRole.WORKER),
    ("Maria Worker", "maria@dwoms.com", UserRole.WORKER),
    ("Client Viewer", "client@dwoms.com", UserRole.CLIENT),
]

DEMO_INVENTORY = [
    ("Steel Sheets", 150, 50, "sheets"),
    ("Aluminum Rods", 30, 40, "rods"),
    ("Screws (M6)", 2000, 500, "pcs"),
    ("Paint (Gray)", 8, 10, "liters"),
]


async def seed_demo_data(users: Optional[UserService] = None, inventory: Optional[InventoryService] = None) -> bool:
    """Returns True if demo data was written."""
    users = users or user_service
    inventory = inventory or inventory_service

    if await users.list_users():
        logger.info("[Seed] Users exist, skipping demo data")
        return False

    admin = None
    for name, email, role in DEMO_USERS:
        user = await users.add_user(name=name, email=email, role=role, created_by=admin.id if admin else None)
        if role == UserRole.ADMIN:
            admin = user

    if not await inventory.list_items():
        for item_name, stock, min_level, unit in DEMO_INVENTORY:
            await inventory.add_item(item_name=item_name, current_stock=stock, min_stock_level=min_level, unit=unit)

    logger.info(f"[Seed] Demo data created: {len(DEMO_USERS)} users, {len(DEMO_INVENTORY)} inventory items")
    return True
