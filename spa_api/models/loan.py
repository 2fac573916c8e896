"""
Loan model - cash advances paid out to a worker.

A loan is deducted from the worker's payout in the period containing its
date. The stored date is either `YYYY-MM-DD` or `YYYY-MM-DD HH:MM`; only the
date part decides period membership.
"""

import datetime as dt
from typing import Any, Optional

from pydantic import Field, field_validator

from spa_api.models.base import Record, stringify_id


class Loan(Record):
    worker_id: str
    amount: float = Field(..., ge=0, allow_inf_nan=False)
    observation: str = ""
    date: str

    @field_validator("worker_id", mode="before")
    @classmethod
    def _stringify_worker(cls, value: Any) -> Optional[str]:
        return stringify_id(value)

    @field_validator("date", mode="before")
    @classmethod
    def _normalise_date(cls, value: Any) -> Any:
        # datetime is a subclass of date, check it first
        if isinstance(value, dt.datetime):
            return value.strftime("%Y-%m-%d %H:%M")
        if isinstance(value, dt.date):
            return value.isoformat()
        if isinstance(value, str):
            value = value.strip()
            dt.date.fromisoformat(value[:10])
            if len(value) > 10 and value[10] not in (" ", "T"):
                raise ValueError(f"unrecognised loan date '{value}'")
        return value

    @property
    def day(self) -> dt.date:
        """Date part of the loan, time of day dropped."""
        return dt.date.fromisoformat(self.date[:10])

    @property
    def month(self) -> str:
        return self.date[:7]
