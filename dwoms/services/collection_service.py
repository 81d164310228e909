from typing import Generic, List, Optional, Type, TypeVar
from datetime import datetime, timezone
import logging
import uuid

from pydantic import BaseModel, ValidationError

from ..database.storage import LocalStorage, storage
from ..database.collections import COLLECTIONS, ID_PREFIXES

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class CollectionService(Generic[ModelT]):
    """
    Read-modify-write access to one collection in the store.

    Every mutation loads the whole collection, changes a copy and writes the
    whole collection back. There is no locking; the last writer wins.
    """

    collection: str
    model: Type[ModelT]

    def __init__(self, db: Optional[LocalStorage] = None):
        self.db = db or storage

    @property
    def key(self) -> str:
        return COLLECTIONS[self.collection]

    def generate_id(self) -> str:
        return f"{ID_PREFIXES[self.collection]}-{uuid.uuid4().hex[:12]}"

    def _load(self) -> List[ModelT]:
        raw = self.db.get(self.key, [])
        if not isinstance(raw, list):
            logger.debug(f"[{self.collection}] Stored value is not a list, treating as empty")
            return []
        records = []
        for doc in raw:
            try:
                records.append(self.model.model_validate(doc))
            except ValidationError as e:
                logger.debug(f"[{self.collection}] Skipping unreadable record: {e.error_count()} errors")
        return records

    def _save(self, records: List[ModelT]) -> None:
        self.db.set(self.key, [r.model_dump(mode="json") for r in records])

    def _append(self, record: ModelT) -> ModelT:
        records = self._load()
        records.append(record)
        self._save(records)
        return record
