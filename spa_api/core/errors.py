"""Error taxonomy for the settlement engine."""
from typing import Optional


class SettlementError(Exception):
    """Base class for every error raised by the settlement engine."""
    pass


class NotFound(SettlementError):
    """Requested worker id does not resolve to a worker-role user."""

    def __init__(self, worker_id: str):
        self.worker_id = worker_id
        super().__init__(f"Worker '{worker_id}' not found")


class InvalidRange(SettlementError):
    """Period end falls before period start, or a bound cannot be read."""

    def __init__(self, start, end, reason: Optional[str] = None):
        self.start = start
        self.end = end
        super().__init__(reason or f"Period end {end} is before period start {start}")


class InvalidRecord(SettlementError):
    """An input record has a malformed date, amount or status."""

    def __init__(self, record_id: Optional[str], kind: str, reason: str):
        self.record_id = record_id
        self.kind = kind
        self.reason = reason
        super().__init__(f"Invalid {kind} '{record_id}': {reason}")


class PastAppointment(InvalidRecord):
    """Candidate appointment is scheduled before the business's current time."""
    pass
