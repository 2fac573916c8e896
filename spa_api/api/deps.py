from fastapi import Depends

from spa_api.db.mongo import get_db
from spa_api.repositories.mongo_store import MongoRecordStore
from spa_api.repositories.record_store import RecordStore
from spa_api.services.history_service import HistoryService
from spa_api.services.period_resolver import PeriodResolver
from spa_api.services.settlement_service import SettlementService


def get_record_store(db = Depends(get_db)) -> RecordStore:
    return MongoRecordStore(db)


def get_period_resolver() -> PeriodResolver:
    """Resolver pinned to the moment the request arrived."""
    return PeriodResolver()


def get_settlement_service() -> SettlementService:
    return SettlementService()


def get_history_service() -> HistoryService:
    return HistoryService()
