from typing import Optional

from pydantic import BaseModel, Field


class AppointmentCreate(BaseModel):
    """
    Booking request.

    price falls back to the catalog price of service_id. worker_id is only
    honoured for admins; workers always book for themselves.
    """
    date: str
    time: Optional[str] = None
    service_id: Optional[str] = None
    service_name: Optional[str] = None
    price: Optional[float] = Field(default=None, ge=0, allow_inf_nan=False)
    client_name: Optional[str] = None
    client_phone: Optional[str] = None
    worker_id: Optional[str] = None
