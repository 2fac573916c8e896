"""
Settlement models - reporting structures computed from appointments and loans.

Nothing here is persisted; every structure is rebuilt on each query.

Invariants:
- worker_gross_share + spa_share == gross_revenue
- net_worker_payout = worker_gross_share - total_loans, may be negative
"""

import datetime as dt
from typing import List, Optional

from pydantic import BaseModel, Field


class RecordDiagnostic(BaseModel):
    """A record skipped while building a bulk report."""
    record_id: Optional[str] = None
    kind: str    # appointment | loan | worker
    reason: str


class WorkerSettlement(BaseModel):
    worker_id: str
    name: str
    period_start: Optional[dt.date] = None  # None means lifetime to date
    period_end: Optional[dt.date] = None
    total_services: int = 0
    gross_revenue: float = 0.0
    worker_gross_share: float = 0.0
    spa_share: float = 0.0
    total_loans: float = 0.0
    net_worker_payout: float = 0.0


class RosterTotals(BaseModel):
    """Business-wide header figures for an all-workers report."""
    total_revenue: float = 0.0
    spa_share: float = 0.0
    total_loans: float = 0.0


class SettlementReport(BaseModel):
    period_start: Optional[dt.date] = None
    period_end: Optional[dt.date] = None
    settlements: List[WorkerSettlement] = Field(default_factory=list)
    diagnostics: List[RecordDiagnostic] = Field(default_factory=list)


class MonthlyLedgerEntry(BaseModel):
    month: str  # YYYY-MM
    gross_revenue: float = 0.0
    worker_share: float = 0.0
    spa_profit: float = 0.0
    total_loans: float = 0.0
    net_worker_pay: float = 0.0


class LedgerReport(BaseModel):
    entries: List[MonthlyLedgerEntry] = Field(default_factory=list)
    diagnostics: List[RecordDiagnostic] = Field(default_factory=list)


class DailyCashSummary(BaseModel):
    date: dt.date
    gross_sales: float = 0.0
    cash_sales: float = 0.0
    transfer_sales: float = 0.0
    loans_today: float = 0.0
    net_cash: float = 0.0
    diagnostics: List[RecordDiagnostic] = Field(default_factory=list)


class WeeklyCashSummary(BaseModel):
    period_start: dt.date
    period_end: dt.date
    gross_sales: float = 0.0
    cash_sales: float = 0.0
    transfer_sales: float = 0.0
    total_loans: float = 0.0
    net_income: float = 0.0
    diagnostics: List[RecordDiagnostic] = Field(default_factory=list)
