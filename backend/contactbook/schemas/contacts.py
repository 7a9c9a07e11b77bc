from datetime import datetime, timezone
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer


# ---------- OUT MODELS ----------
class ContactOut(BaseModel):
    id: str
    name: str
    email: str
    phone: str
    created_at: datetime = Field(serialization_alias="createdAt")
    updated_at: datetime = Field(serialization_alias="updatedAt")

    model_config = ConfigDict(from_attributes=True)

    # SQLite hands back naive datetimes; everything is stored as UTC.
    @field_serializer("created_at", "updated_at")
    def _as_utc(self, value: datetime) -> str:
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat()


class MessageOut(BaseModel):
    message: str


# ---------- IN MODELS ----------
# Everything optional so a missing field becomes our 400, not a 422.
# Used for both POST and PUT: updates replace all three fields.
class ContactIn(BaseModel):
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None

    model_config = ConfigDict(extra="ignore", coerce_numbers_to_str=True)
