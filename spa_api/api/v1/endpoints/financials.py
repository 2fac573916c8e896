from typing import Optional

from fastapi import APIRouter, Depends

from spa_api.api.deps import get_period_resolver, get_record_store, get_settlement_service
from spa_api.core.auth import Identity, require_admin
from spa_api.models.settlement import DailyCashSummary, WeeklyCashSummary
from spa_api.repositories.record_store import RecordStore
from spa_api.services.aggregation import resolve_period
from spa_api.services.period_resolver import PeriodResolver
from spa_api.services.settlement_service import SettlementService

router = APIRouter()


@router.get("/daily", response_model=DailyCashSummary)
async def get_daily_cash(
    date: Optional[str] = None,
    identity: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_record_store),
    resolver: PeriodResolver = Depends(get_period_resolver),
    service: SettlementService = Depends(get_settlement_service),
):
    """Cash reconciliation for a day, today by default."""
    day, _ = resolve_period(date or resolver.today(), None)
    appointments = await store.list_completed_appointments(None, day, day)
    loans = await store.list_loans(None, day, day)
    return service.daily_cash(day, appointments, loans)


@router.get("/weekly", response_model=WeeklyCashSummary)
async def get_weekly_cash(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    identity: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_record_store),
    resolver: PeriodResolver = Depends(get_period_resolver),
    service: SettlementService = Depends(get_settlement_service),
):
    """Sales split by payment method, minus advances, for the current week by default."""
    if start_date is None and end_date is None:
        start_date, end_date = resolver.current_week()
    start, end = resolve_period(start_date, end_date)
    appointments = await store.list_completed_appointments(None, start, end)
    loans = await store.list_loans(None, start, end)
    return service.weekly_cash(start, end, appointments, loans)
