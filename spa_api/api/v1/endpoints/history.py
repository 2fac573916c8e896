from fastapi import APIRouter, Depends

from spa_api.api.deps import get_history_service, get_record_store
from spa_api.core.auth import Identity, require_admin
from spa_api.models.settlement import LedgerReport
from spa_api.repositories.record_store import RecordStore
from spa_api.services.history_service import HistoryService

router = APIRouter()

@router.get("/monthly", response_model=LedgerReport)
async def get_monthly_history(
    identity: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_record_store),
    service: HistoryService = Depends(get_history_service),
):
    """Closed month-by-month ledger, newest month first"""
    appointments = await store.list_completed_appointments()
    loans = await store.list_loans()
    return service.monthly_ledger(appointments, loans)
