"""Record validation utilities."""
import datetime as dt
import logging
from typing import Any, Callable, Iterable, List, Mapping, Optional, TypeVar, Union

from pydantic import BaseModel, ValidationError

from spa_api.core.errors import InvalidRecord, PastAppointment
from spa_api.models.appointment import Appointment
from spa_api.models.loan import Loan
from spa_api.models.service import Service
from spa_api.models.settlement import RecordDiagnostic
from spa_api.models.user import Worker

logger = logging.getLogger(__name__)

RecordT = TypeVar("RecordT", bound=BaseModel)


def record_id_of(raw: Any) -> Optional[str]:
    """Best-effort id of a raw record, for error reporting."""
    if isinstance(raw, Mapping):
        value = raw.get("id", raw.get("_id"))
    else:
        value = getattr(raw, "id", None)
    return None if value is None else str(value)


def owner_of(raw: Any) -> Optional[str]:
    """worker_id of a raw record as a string, or None when it has none."""
    if isinstance(raw, Mapping):
        value = raw.get("worker_id")
    else:
        value = getattr(raw, "worker_id", None)
    return None if value is None else str(value)


def _describe(error: ValidationError) -> str:
    first = error.errors()[0]
    location = ".".join(str(part) for part in first["loc"]) or "record"
    return f"{location}: {first['msg']}"


def _coerce(model: type, kind: str, raw: Any):
    try:
        return model.model_validate(raw)
    except ValidationError as e:
        raise InvalidRecord(record_id_of(raw), kind, _describe(e)) from e


def coerce_appointment(raw: Any) -> Appointment:
    """
    Validate one appointment record.

    Rules:
    - price must be a finite, non-negative number
    - date must be an ISO calendar date
    - status must be pending, completed or cancelled
    """
    return _coerce(Appointment, "appointment", raw)


def coerce_loan(raw: Any) -> Loan:
    """Validate one loan record (non-negative amount, ISO date with optional time)."""
    return _coerce(Loan, "loan", raw)


def coerce_worker(raw: Any) -> Worker:
    return _coerce(Worker, "worker", raw)


def coerce_service(raw: Any) -> Service:
    return _coerce(Service, "service", raw)


def coerce_all(
    records: Iterable[Any],
    coerce: Callable[[Any], RecordT],
    diagnostics: Optional[List[RecordDiagnostic]] = None,
) -> List[RecordT]:
    """
    Validate a batch of records.

    Without a diagnostics list the first bad record raises InvalidRecord.
    With one, bad records are skipped and reported there instead.
    """
    valid = []
    for raw in records:
        try:
            valid.append(coerce(raw))
        except InvalidRecord as e:
            if diagnostics is None:
                raise
            logger.warning(f"Skipping {e.kind} {e.record_id}: {e.reason}")
            diagnostics.append(
                RecordDiagnostic(record_id=e.record_id, kind=e.kind, reason=e.reason)
            )
    return valid


def as_date(value: Union[str, dt.date, None]) -> Optional[dt.date]:
    """Accept a date, an ISO string (time part ignored) or None."""
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    return dt.date.fromisoformat(str(value).strip()[:10])


def _parse_time(value: Union[str, dt.time]) -> dt.time:
    if isinstance(value, dt.time):
        return value
    hours, minutes = str(value).strip().split(":")[:2]
    return dt.time(int(hours), int(minutes))


def validate_schedule(day: Union[str, dt.date], time: Union[str, dt.time, None], resolver) -> None:
    """
    Reject a candidate appointment placed in the past.

    Rules:
    - a day before the business's today is rejected
    - today at an earlier hour/minute than the current wall clock is rejected
    """
    try:
        day = as_date(day)
        slot = _parse_time(time) if time else None
    except ValueError as e:
        raise InvalidRecord(None, "appointment", f"unreadable date/time: {e}") from e
    if day is None:
        raise InvalidRecord(None, "appointment", "date is required")

    local_now = resolver.local_now()
    today = local_now.date()

    if day < today:
        raise PastAppointment(None, "appointment", "cannot schedule on a past day")
    if day == today and slot is not None:
        if (slot.hour, slot.minute) < (local_now.hour, local_now.minute):
            raise PastAppointment(None, "appointment", "cannot schedule at a past hour")
