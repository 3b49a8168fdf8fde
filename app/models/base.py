"""Shared base fields for all backend records."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class WireModel(BaseModel):
    """camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )

    def to_wire(self) -> dict:
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class BaseRecord(WireModel):
    """Id + created / updated timestamps carried by every backend record."""

    id: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    def is_persisted(self) -> bool:
        return bool(self.id)

    def same_record(self, other: "BaseRecord | None") -> bool:
        return other is not None and self.id == other.id
