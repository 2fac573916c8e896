import datetime as dt
from enum import Enum
from typing import Any, Optional

from pydantic import Field, field_validator

from spa_api.models.base import Record, stringify_id


class AppointmentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CASH = "cash"
    TRANSFER = "transfer"


class Appointment(Record):
    worker_id: str
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    service_name: str = ""
    price: float = Field(..., ge=0, allow_inf_nan=False)
    date: dt.date
    time: Optional[str] = None  # HH:MM, wall clock of the business zone
    status: AppointmentStatus = AppointmentStatus.PENDING
    payment_method: Optional[PaymentMethod] = None
    payment_proof: Optional[str] = None  # opaque reference to the uploaded proof

    @field_validator("worker_id", mode="before")
    @classmethod
    def _stringify_worker(cls, value: Any) -> Optional[str]:
        return stringify_id(value)

    @property
    def is_completed(self) -> bool:
        return self.status == AppointmentStatus.COMPLETED

    @property
    def month(self) -> str:
        return self.date.strftime("%Y-%m")
