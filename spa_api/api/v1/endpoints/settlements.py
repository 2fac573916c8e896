from typing import Optional

from fastapi import APIRouter, Depends

from spa_api.api.deps import get_period_resolver, get_record_store, get_settlement_service
from spa_api.core.auth import Identity, get_identity, require_admin
from spa_api.models.settlement import WorkerSettlement
from spa_api.models.user import Role
from spa_api.repositories.record_store import RecordStore
from spa_api.schemas.settlement import StatsResponse
from spa_api.services.aggregation import resolve_period
from spa_api.services.period_resolver import PeriodResolver
from spa_api.services.settlement_service import SettlementService

router = APIRouter()


async def _settle_one(
    worker_id: str,
    store: RecordStore,
    service: SettlementService,
    start,
    end,
) -> WorkerSettlement:
    worker = await store.get_worker(worker_id)
    appointments = await store.list_completed_appointments(worker_id, start, end)
    loans = await store.list_loans(worker_id, start, end)
    return service.settle(worker_id, [worker] if worker else [], appointments, loans, start, end)


@router.get("/stats", response_model=StatsResponse)
async def get_stats(
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    all_time: bool = False,
    identity: Identity = Depends(get_identity),
    store: RecordStore = Depends(get_record_store),
    resolver: PeriodResolver = Depends(get_period_resolver),
    service: SettlementService = Depends(get_settlement_service),
):
    """Settlements for the current week unless a range (or all_time) is given."""
    if all_time:
        start_date, end_date = None, None
    elif start_date is None and end_date is None:
        start_date, end_date = resolver.current_week()
    start, end = resolve_period(start_date, end_date)

    if not identity.is_admin:
        settlement = await _settle_one(identity.worker_id, store, service, start, end)
        return StatsResponse(
            period_start=start,
            period_end=end,
            settlements=[settlement],
            totals=service.roster_totals([settlement]),
        )

    workers = await store.list_workers(Role.WORKER)
    appointments = await store.list_completed_appointments(None, start, end)
    loans = await store.list_loans(None, start, end)
    report = service.settle(None, workers, appointments, loans, start, end)
    return StatsResponse(
        period_start=report.period_start,
        period_end=report.period_end,
        settlements=report.settlements,
        totals=service.roster_totals(report.settlements),
        diagnostics=report.diagnostics,
    )


@router.get("/me", response_model=WorkerSettlement)
async def get_my_week(
    identity: Identity = Depends(get_identity),
    store: RecordStore = Depends(get_record_store),
    resolver: PeriodResolver = Depends(get_period_resolver),
    service: SettlementService = Depends(get_settlement_service),
):
    """Caller's earnings for the current week."""
    start, end = resolve_period(*resolver.current_week())
    return await _settle_one(identity.worker_id, store, service, start, end)


@router.get("/workers/{worker_id}", response_model=WorkerSettlement)
async def get_worker_settlement(
    worker_id: str,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
    identity: Identity = Depends(require_admin),
    store: RecordStore = Depends(get_record_store),
    service: SettlementService = Depends(get_settlement_service),
):
    """One worker's settlement; lifetime to date when no range is given."""
    start, end = resolve_period(start_date, end_date)
    return await _settle_one(worker_id, store, service, start, end)
