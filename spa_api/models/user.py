from enum import Enum
from typing import Optional

from pydantic import Field

from spa_api.models.base import Record


class Role(str, Enum):
    ADMIN = "admin"
    WORKER = "worker"


class Worker(Record):
    """Salon user. Only role=worker users take part in settlement."""
    name: str = Field(..., min_length=1, max_length=100)
    # contact detail only; settlement never reads it
    email: Optional[str] = None
    role: Role = Role.WORKER
