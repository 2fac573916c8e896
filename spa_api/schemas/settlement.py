import datetime as dt
from typing import List, Optional

from pydantic import BaseModel

from spa_api.models.settlement import RecordDiagnostic, RosterTotals, WorkerSettlement


class StatsResponse(BaseModel):
    """Settlement stats for the caller's scope: the whole roster for admins, themselves otherwise."""
    period_start: Optional[dt.date] = None
    period_end: Optional[dt.date] = None
    settlements: List[WorkerSettlement]
    totals: RosterTotals
    diagnostics: List[RecordDiagnostic] = []
