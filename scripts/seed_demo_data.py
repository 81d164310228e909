"""
Seed the DWOMS store with demo data

Creates one account per role and a handful of inventory items in the store
configured by DWOMS_STORAGE_PATH. Pass --reset to wipe the store first.
"""

import sys
from pathlib import Path

# Add parent directory to path to import dwoms modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from dwoms.database.storage import storage
from dwoms.services.seed_service import DEMO_USERS, seed_demo_data
import asyncio


async def main(reset: bool = False):
    print("=" * 60)
    print("Seeding DWOMS demo data")
    print("=" * 60)

    if reset:
        storage.clear()
        print("\n🧹 Store cleared")

    created = await seed_demo_data()
    if created:
        print("\n✅ Demo data created. Sign in with any password as:")
        for name, email, role in DEMO_USERS:
            print(f"   {role.value:<11} {email}")
    else:
        print("\nℹ️  Users already exist, nothing to do (use --reset to start over)")


if __name__ == "__main__":
    asyncio.run(main(reset="--reset" in sys.argv[1:]))
