import datetime as dt
import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional, Union

from spa_api.core.errors import InvalidRange, NotFound
from spa_api.models.appointment import Appointment
from spa_api.models.loan import Loan
from spa_api.models.settlement import (
    DailyCashSummary,
    RecordDiagnostic,
    RosterTotals,
    SettlementReport,
    WeeklyCashSummary,
    WorkerSettlement,
)
from spa_api.models.user import Role, Worker
from spa_api.services.aggregation import (
    in_period,
    resolve_period,
    resolve_split,
    sales_by_method,
    split_revenue,
    total,
)
from spa_api.utils.record_validation import (
    coerce_all,
    coerce_appointment,
    coerce_loan,
    coerce_worker,
    owner_of,
)

logger = logging.getLogger(__name__)

DateLike = Union[str, dt.date, None]


class SettlementService:
    """
    Turns appointment and loan snapshots into worker payouts and cash summaries.

    Stateless: every call works only on the records it is handed.
    """

    def __init__(self, split: Optional[float] = None):
        self.split = resolve_split(split)

    def settle(
        self,
        worker_id: Optional[str],
        workers: Iterable[Any],
        appointments: Iterable[Any],
        loans: Iterable[Any],
        period_start: DateLike = None,
        period_end: DateLike = None,
    ) -> Union[WorkerSettlement, SettlementReport]:
        """
        Settle one worker, or every worker when worker_id is None.

        - Only completed appointments count.
        - Loans are matched on their date part.
        - Without bounds the whole history is settled.

        A single-worker call raises on the first malformed record. The
        all-workers call skips malformed records and lists them in the
        report's diagnostics.
        """
        start, end = resolve_period(period_start, period_end)
        if worker_id is None:
            return self._settle_roster(workers, appointments, loans, start, end)
        return self._settle_worker(str(worker_id), workers, appointments, loans, start, end)

    def _settle_worker(self, worker_id, workers, appointments, loans, start, end) -> WorkerSettlement:
        worker = next(
            (
                w for w in coerce_all(workers, coerce_worker)
                if w.id == worker_id and w.role == Role.WORKER
            ),
            None,
        )
        if worker is None:
            raise NotFound(worker_id)

        # other workers' records are neither validated nor counted
        appointments = coerce_all((a for a in appointments if owner_of(a) == worker_id), coerce_appointment)
        loans = coerce_all((l for l in loans if owner_of(l) == worker_id), coerce_loan)
        return self._build(worker, appointments, loans, start, end)

    def _settle_roster(self, workers, appointments, loans, start, end) -> SettlementReport:
        diagnostics: List[RecordDiagnostic] = []
        roster = [w for w in coerce_all(workers, coerce_worker, diagnostics) if w.role == Role.WORKER]

        by_worker: Dict[str, List[Appointment]] = defaultdict(list)
        for appointment in coerce_all(appointments, coerce_appointment, diagnostics):
            by_worker[appointment.worker_id].append(appointment)

        loans_by_worker: Dict[str, List[Loan]] = defaultdict(list)
        for loan in coerce_all(loans, coerce_loan, diagnostics):
            loans_by_worker[loan.worker_id].append(loan)

        settlements = [
            self._build(worker, by_worker.get(worker.id, []), loans_by_worker.get(worker.id, []), start, end)
            for worker in sorted(roster, key=lambda w: (w.name, w.id or ""))
        ]
        logger.debug(f"Settled {len(settlements)} workers for {start}..{end}, {len(diagnostics)} records skipped")

        return SettlementReport(
            period_start=start,
            period_end=end,
            settlements=settlements,
            diagnostics=diagnostics,
        )

    def _build(self, worker: Worker, appointments: List[Appointment], loans: List[Loan], start, end) -> WorkerSettlement:
        done = [a for a in appointments if a.is_completed and in_period(a.date, start, end)]
        advances = [l for l in loans if in_period(l.day, start, end)]

        gross = total(a.price for a in done)
        worker_share, spa_share = split_revenue(gross, self.split)
        total_loans = total(l.amount for l in advances)

        return WorkerSettlement(
            worker_id=worker.id,
            name=worker.name,
            period_start=start,
            period_end=end,
            total_services=len(done),
            gross_revenue=gross,
            worker_gross_share=worker_share,
            spa_share=spa_share,
            total_loans=total_loans,
            net_worker_payout=worker_share - total_loans,
        )

    def daily_cash(self, day: DateLike, appointments: Iterable[Any], loans: Iterable[Any]) -> DailyCashSummary:
        """Business-wide cash reconciliation for one day."""
        day, _ = resolve_period(day, day)
        if day is None:
            raise InvalidRange(day, day, reason="A day is required")
        diagnostics: List[RecordDiagnostic] = []
        todays = [a for a in coerce_all(appointments, coerce_appointment, diagnostics) if a.date == day]
        loans_today = total(l.amount for l in coerce_all(loans, coerce_loan, diagnostics) if l.day == day)

        gross, cash, transfer = sales_by_method(todays)
        return DailyCashSummary(
            date=day,
            gross_sales=gross,
            cash_sales=cash,
            transfer_sales=transfer,
            loans_today=loans_today,
            net_cash=gross - loans_today,
            diagnostics=diagnostics,
        )

    def weekly_cash(
        self,
        period_start: DateLike,
        period_end: DateLike,
        appointments: Iterable[Any],
        loans: Iterable[Any],
    ) -> WeeklyCashSummary:
        """Business-wide sales and advances between two dates, both inclusive."""
        start, end = resolve_period(period_start, period_end)
        if start is None or end is None:
            raise InvalidRange(start, end, reason="Both period bounds are required")
        diagnostics: List[RecordDiagnostic] = []
        window = [
            a for a in coerce_all(appointments, coerce_appointment, diagnostics)
            if in_period(a.date, start, end)
        ]
        total_loans = total(
            l.amount for l in coerce_all(loans, coerce_loan, diagnostics)
            if in_period(l.day, start, end)
        )

        gross, cash, transfer = sales_by_method(window)
        return WeeklyCashSummary(
            period_start=start,
            period_end=end,
            gross_sales=gross,
            cash_sales=cash,
            transfer_sales=transfer,
            total_loans=total_loans,
            net_income=gross - total_loans,
            diagnostics=diagnostics,
        )

    @staticmethod
    def roster_totals(settlements: Iterable[WorkerSettlement]) -> RosterTotals:
        settlements = list(settlements)
        return RosterTotals(
            total_revenue=total(s.gross_revenue for s in settlements),
            spa_share=total(s.spa_share for s in settlements),
            total_loans=total(s.total_loans for s in settlements),
        )
