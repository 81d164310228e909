import pytest

from dwoms.database.storage import LocalStorage
from dwoms.models.user import UserRole
from dwoms.services.inventory_service import InventoryService
from dwoms.services.seed_service import DEMO_INVENTORY, DEMO_USERS, seed_demo_data
from dwoms.services.user_service import UserService

# Async tests
pytestmark = pytest.mark.asyncio


async def test_seed_fills_empty_store_once():
    db = LocalStorage()
    users, inventory = UserService(db), InventoryService(db)

    assert await seed_demo_data(users, inventory) is True
    assert await seed_demo_data(users, inventory) is False

    stored = await users.list_users()
    assert len(stored) == len(DEMO_USERS)
    assert {u.role for u in stored} == set(UserRole)
    assert len(await inventory.list_items()) == len(DEMO_INVENTORY)

    admin = await users.get_user_by_email("admin@dwoms.com")
    worker = await users.get_user_by_email("worker@dwoms.com")
    assert admin.created_by is None
    assert worker.created_by == admin.id


async def test_seed_skips_when_users_exist():
    db = LocalStorage()
    users, inventory = UserService(db), InventoryService(db)
    await users.add_user("Someone", "someone@dwoms.com", UserRole.CLIENT)

    assert await seed_demo_data(users, inventory) is False
    assert await inventory.list_items() == []
