from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .core.config import settings
from .database.storage import storage
from .services.seed_service import seed_demo_data

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Seed an empty store with demo accounts and inventory"""
    logger.info("🚀 FastAPI startup triggered")
    if settings.SEED_DEMO_DATA:
        await seed_demo_data()
    yield
    logger.info("⛔ FastAPI shutdown triggered")


app = FastAPI(
    title="DWOMS API",
    description="Digital Workforce & Operations Management System",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def safe_include_router(router_module_path: str, router_name: str = "router"):
    """Safely include a router with error handling"""
    try:
        module = __import__(router_module_path, fromlist=[router_name])
        router = getattr(module, router_name)
        app.include_router(router)
        logger.info(f"✅ Successfully included {router_module_path}")
        return True
    except Exception as e:
        logger.exception(f"❌ Failed to include {router_module_path}: {str(e)}")
        return False


logger.info("Loading routers...")

routers_to_load = [
    ("dwoms.routers.auth", "Authentication"),
    ("dwoms.routers.dashboard", "Dashboard"),
    ("dwoms.routers.production", "Production"),
    ("dwoms.routers.tasks", "Tasks"),
    ("dwoms.routers.inventory", "Inventory Management"),
    ("dwoms.routers.reports", "Reports"),
    ("dwoms.routers.users", "Users"),
]

successful_routers = []
failed_routers = []

for router_path, router_description in routers_to_load:
    if safe_include_router(router_path):
        successful_routers.append(router_description)
    else:
        failed_routers.append(router_description)

logger.info(f"Successfully loaded routers: {successful_routers}")
if failed_routers:
    logger.warning(f"Failed to load routers: {failed_routers}")


@app.get("/")
async def root():
    return {
        "message": "Welcome to the DWOMS API",
        "loaded_routers": successful_routers,
        "failed_routers": failed_routers
    }


@app.get("/health")
async def health_check():
    return {
        "status": "healthy",
        "storage": "memory" if storage.path is None else storage.path,
        "loaded_routers": len(successful_routers),
        "failed_routers": len(failed_routers)
    }
