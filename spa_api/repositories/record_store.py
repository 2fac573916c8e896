"""
RecordStore - what the settlement engine and appointment intake need from persistence.

Range arguments are only a hint for the store to fetch less; the engine
applies its own period filter to whatever comes back.
"""

import datetime as dt
import uuid
from typing import Any, List, Mapping, Optional, Protocol, Sequence

from spa_api.models.appointment import AppointmentStatus
from spa_api.models.user import Role


class RecordStore(Protocol):
    async def list_completed_appointments(
        self,
        worker_id: Optional[str] = None,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> List[Any]: ...

    async def list_loans(
        self,
        worker_id: Optional[str] = None,
        start: Optional[dt.date] = None,
        end: Optional[dt.date] = None,
    ) -> List[Any]: ...

    async def list_workers(self, role: Role = Role.WORKER) -> List[Any]: ...

    async def get_worker(self, worker_id: str) -> Optional[Any]: ...

    async def list_services(self) -> List[Any]: ...

    async def add_appointment(self, record: Mapping[str, Any]) -> str: ...


def _field(record: Any, name: str) -> Any:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _id_of(record: Any) -> Optional[str]:
    value = _field(record, "id")
    if value is None:
        value = _field(record, "_id")
    return None if value is None else str(value)


def _value(field: Any) -> Any:
    # enums compare by their stored value
    return getattr(field, "value", field)


def _within(record: Any, start: Optional[dt.date], end: Optional[dt.date]) -> bool:
    day = str(_field(record, "date") or "")[:10]
    if start is not None and day < start.isoformat():
        return False
    if end is not None and day > end.isoformat():
        return False
    return True


class InMemoryRecordStore:
    """List-backed store. Holds records as given, raw mappings or models."""

    def __init__(
        self,
        workers: Sequence[Any] = (),
        appointments: Sequence[Any] = (),
        loans: Sequence[Any] = (),
        services: Sequence[Any] = (),
    ):
        self.workers = list(workers)
        self.appointments = list(appointments)
        self.loans = list(loans)
        self.services = list(services)

    def _owned(self, records: List[Any], worker_id: Optional[str]) -> List[Any]:
        if worker_id is None:
            return list(records)
        return [r for r in records if str(_field(r, "worker_id")) == str(worker_id)]

    async def list_completed_appointments(self, worker_id=None, start=None, end=None) -> List[Any]:
        """Completed appointments, optionally for one worker and date range."""
        return [
            a for a in self._owned(self.appointments, worker_id)
            if _value(_field(a, "status")) == AppointmentStatus.COMPLETED.value
            and _within(a, start, end)
        ]

    async def list_loans(self, worker_id=None, start=None, end=None) -> List[Any]:
        """Loans, optionally for one worker and date range (date part only)."""
        return [l for l in self._owned(self.loans, worker_id) if _within(l, start, end)]

    async def list_workers(self, role: Role = Role.WORKER) -> List[Any]:
        return [w for w in self.workers if _value(_field(w, "role")) == role.value]

    async def get_worker(self, worker_id: str) -> Optional[Any]:
        for worker in self.workers:
            if _id_of(worker) == str(worker_id):
                return worker
        return None

    async def list_services(self) -> List[Any]:
        return list(self.services)

    async def add_appointment(self, record: Mapping[str, Any]) -> str:
        """Store a new appointment and return its id."""
        record = dict(record)
        record.setdefault("id", uuid.uuid4().hex)
        self.appointments.append(record)
        return record["id"]
