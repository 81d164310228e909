import os

# Must be set before any dwoms module reads the settings
os.environ["DWOMS_STORAGE_PATH"] = ":memory:"
os.environ["AUTH_DELAY_SECONDS"] = "0"
os.environ["SEED_DEMO_DATA"] = "false"

import pytest

from dwoms.database.storage import storage


@pytest.fixture(autouse=True)
def clean_store():
    storage.clear()
    yield
    storage.clear()
