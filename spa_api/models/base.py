from typing import Any, Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


def stringify_id(value: Any) -> Optional[str]:
    """Render ObjectId / integer keys as plain strings."""
    if value is None:
        return None
    return str(value)


class Record(BaseModel):
    """A row handed to the engine by the record store, keyed by a string id."""
    id: Optional[str] = Field(default=None, validation_alias=AliasChoices("id", "_id"))

    model_config = ConfigDict(
        populate_by_name=True,
        from_attributes=True
    )

    @field_validator("id", mode="before")
    @classmethod
    def _stringify_id(cls, value: Any) -> Optional[str]:
        return stringify_id(value)
