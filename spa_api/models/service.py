from pydantic import Field

from spa_api.models.base import Record


class Service(Record):
    """Catalog entry. The price is only the default offered when booking."""
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, allow_inf_nan=False)
