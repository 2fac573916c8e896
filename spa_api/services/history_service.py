import logging
from collections import defaultdict
from typing import Any, Dict, Iterable, List, Optional

from spa_api.models.settlement import LedgerReport, MonthlyLedgerEntry, RecordDiagnostic
from spa_api.services.aggregation import resolve_split, split_revenue, total
from spa_api.utils.record_validation import coerce_all, coerce_appointment, coerce_loan

logger = logging.getLogger(__name__)


class HistoryService:
    def __init__(self, split: Optional[float] = None):
        self.split = resolve_split(split)

    def monthly_ledger(self, appointments: Iterable[Any], loans: Iterable[Any]) -> LedgerReport:
        """
        Close every calendar month that has completed work.

        Algorithm:
        1. Sum completed appointment prices per YYYY-MM
        2. Sum loan amounts per YYYY-MM
        3. Emit one entry per month with revenue, newest month first

        Months that only have loans produce no entry, so their advances do
        not show up in this ledger.
        """
        diagnostics: List[RecordDiagnostic] = []

        revenue: Dict[str, List[float]] = defaultdict(list)
        for appointment in coerce_all(appointments, coerce_appointment, diagnostics):
            if appointment.is_completed:
                revenue[appointment.month].append(appointment.price)

        advances: Dict[str, List[float]] = defaultdict(list)
        for loan in coerce_all(loans, coerce_loan, diagnostics):
            advances[loan.month].append(loan.amount)

        entries = []
        for month in sorted(revenue, reverse=True):
            gross = total(revenue[month])
            worker_share, spa_profit = split_revenue(gross, self.split)
            total_loans = total(advances.get(month, []))
            entries.append(
                MonthlyLedgerEntry(
                    month=month,
                    gross_revenue=gross,
                    worker_share=worker_share,
                    spa_profit=spa_profit,
                    total_loans=total_loans,
                    net_worker_pay=worker_share - total_loans,
                )
            )

        hidden = sorted(set(advances) - set(revenue))
        if hidden:
            logger.debug(f"Loans in months without revenue left out of ledger: {hidden}")

        return LedgerReport(entries=entries, diagnostics=diagnostics)
