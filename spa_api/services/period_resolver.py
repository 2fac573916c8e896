import datetime as dt
from typing import Optional, Tuple, Union
from zoneinfo import ZoneInfo

from spa_api.core.config import settings
from spa_api.utils.record_validation import as_date


class PeriodResolver:
    """
    Calendar bounds relative to a fixed reference instant.

    All answers use the wall clock of the business zone, so the day rolls
    over at local midnight rather than UTC midnight. Weeks run Sunday to
    Saturday.
    """

    def __init__(
        self,
        now: Optional[dt.datetime] = None,
        tz: Union[str, dt.tzinfo, None] = None,
    ):
        if tz is None:
            tz = settings.BUSINESS_TIMEZONE
        self.zone = ZoneInfo(tz) if isinstance(tz, str) else tz

        if now is None:
            now = dt.datetime.now(dt.timezone.utc)
        elif now.tzinfo is None:
            # naive instants are taken as UTC
            now = now.replace(tzinfo=dt.timezone.utc)
        self.now = now

    def local_now(self) -> dt.datetime:
        return self.now.astimezone(self.zone)

    def today(self) -> str:
        """Local calendar date as YYYY-MM-DD."""
        return self.local_now().date().isoformat()

    @staticmethod
    def week_of(day: dt.date) -> Tuple[dt.date, dt.date]:
        """Sunday..Saturday week containing day."""
        # weekday(): Monday=0 .. Sunday=6
        start = day - dt.timedelta(days=(day.weekday() + 1) % 7)
        return start, start + dt.timedelta(days=6)

    def current_week(self) -> Tuple[str, str]:
        start, end = self.week_of(self.local_now().date())
        return start.isoformat(), end.isoformat()

    def current_month(self, day: Union[str, dt.date, None] = None) -> str:
        """YYYY-MM of day, or of today when no day is given."""
        day = as_date(day) or self.local_now().date()
        return day.strftime("%Y-%m")
