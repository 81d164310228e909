# dwoms/core/config.py
import os
from dotenv import load_dotenv

load_dotenv()

class Settings:
    # Key-value store file. ":memory:" keeps everything in process memory.
    DWOMS_STORAGE_PATH: str = os.getenv("DWOMS_STORAGE_PATH", "dwoms_storage.json")

    # Simulated latency on login/signup, in seconds
    AUTH_DELAY_SECONDS: float = float(os.getenv("AUTH_DELAY_SECONDS", "0.5"))

    # Populate an empty store with demo users and inventory on startup
    SEED_DEMO_DATA: bool = os.getenv("SEED_DEMO_DATA", "true").lower() == "true"

    # Reports default to the last N days
    REPORT_DEFAULT_DAYS: int = int(os.getenv("REPORT_DEFAULT_DAYS", "30"))

    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO").upper()

    # Comma separated list, "*" allows all
    CORS_ORIGINS: list = [o.strip() for o in os.getenv("CORS_ORIGINS", "*").split(",") if o.strip()]

    @property
    def storage_in_memory(self) -> bool:
        return self.DWOMS_STORAGE_PATH in ("", ":memory:")


settings = Settings()
