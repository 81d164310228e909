from typing import Dict, List, Optional
from datetime import date
import logging

from ..models.database_models import ProductionEntry, Shift, WorkerProductivity
from .collection_service import CollectionService, utcnow

logger = logging.getLogger(__name__)


class ProductionService(CollectionService[ProductionEntry]):
    """Append-only log of production entries."""

    collection = "production_entries"
    model = ProductionEntry

    async def list_entries(self) -> List[ProductionEntry]:
        return self._load()

    async def add_entry(self, worker_id: str, worker_name: str, product_name: str,
                        quantity: int, shift: Shift, entry_date: Optional[date] = None) -> ProductionEntry:
        now = utcnow()
        entry = ProductionEntry(
            id=self.generate_id(),
            worker_id=worker_id,
            worker_name=worker_name,
            product_name=product_name,
            quantity=quantity,
            shift=shift,
            date=entry_date or now.date(),
            timestamp=now,
        )
        self._append(entry)
        logger.info(f"[Production] {worker_id} recorded {quantity} x {product_name} ({entry.shift.value})")
        return entry

    async def get_entries_by_date(self, entry_date: date) -> List[ProductionEntry]:
        return [e for e in self._load() if e.date == entry_date]

    async def get_entries_by_worker(self, worker_id: str) -> List[ProductionEntry]:
        return [e for e in self._load() if e.worker_id == worker_id]

    async def get_today_total(self, today: Optional[date] = None) -> int:
        today = today or utcnow().date()
        return sum(e.quantity for e in self._load() if e.date == today)

    async def get_worker_productivity(self) -> List[WorkerProductivity]:
        """Total quantity per worker, highest first. Names come from the first entry seen."""
        totals: Dict[str, WorkerProductivity] = {}
        for entry in self._load():
            row = totals.get(entry.worker_id)
            if row:
                row.quantity += entry.quantity
            else:
                totals[entry.worker_id] = WorkerProductivity(
                    worker_id=entry.worker_id,
                    worker_name=entry.worker_name,
                    quantity=entry.quantity,
                )
        return sorted(totals.values(), key=lambda r: r.quantity, reverse=True)


production_service = ProductionService()
