"""Aggregation primitives shared by the settlement and history calculators."""
import datetime as dt
import math
from typing import Iterable, Optional, Tuple, Union

from spa_api.core.config import settings
from spa_api.core.errors import InvalidRange
from spa_api.models.appointment import Appointment, PaymentMethod
from spa_api.utils.record_validation import as_date


def resolve_split(split: Optional[float]) -> float:
    if split is None:
        split = settings.REVENUE_SPLIT
    if not 0 <= split <= 1:
        raise ValueError(f"Revenue split must be between 0 and 1, got {split}")
    return split


def split_revenue(gross: float, split: float) -> Tuple[float, float]:
    """(worker share, business share). The business gets the remainder so both add up to gross."""
    worker_share = gross * split
    return worker_share, gross - worker_share


def total(amounts: Iterable[float]) -> float:
    # fsum is exact-rounded, so the result does not depend on record order
    return math.fsum(amounts)


def resolve_period(
    start: Union[str, dt.date, None],
    end: Union[str, dt.date, None],
) -> Tuple[Optional[dt.date], Optional[dt.date]]:
    """Parse period bounds; None on either side leaves it open."""
    try:
        start_day, end_day = as_date(start), as_date(end)
    except ValueError as e:
        raise InvalidRange(start, end, reason=f"unreadable period bound: {e}") from e
    if start_day and end_day and end_day < start_day:
        raise InvalidRange(start_day, end_day)
    return start_day, end_day


def in_period(day: dt.date, start: Optional[dt.date], end: Optional[dt.date]) -> bool:
    if start is not None and day < start:
        return False
    if end is not None and day > end:
        return False
    return True


def sales_by_method(appointments: Iterable[Appointment]) -> Tuple[float, float, float]:
    """
    (gross, cash, transfer) over completed appointments.

    An appointment without a payment method still counts towards gross.
    """
    completed = [a for a in appointments if a.is_completed]
    gross = total(a.price for a in completed)
    cash = total(a.price for a in completed if a.payment_method == PaymentMethod.CASH)
    transfer = total(a.price for a in completed if a.payment_method == PaymentMethod.TRANSFER)
    return gross, cash, transfer
