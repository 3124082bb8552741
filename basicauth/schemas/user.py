"""Pydantic schemas for user listing on both sides of the wire."""

from datetime import datetime, timezone, tzinfo
from typing import Optional

from pydantic import Field, field_serializer

from basicauth.schemas.auth import CamelModel
from basicauth.utils.time_format import format_timestamp


class UserResponse(CamelModel):
    """User data returned by the API."""
    id: int = Field(..., description="Numeric user identifier")
    username: str = Field(..., description="User display name")
    email: str = Field(..., description="User email address")
    created_at: datetime = Field(..., description="Account creation timestamp")

    @field_serializer("created_at")
    def serialize_created_at(self, value: datetime) -> str:
        # SQLite drops tzinfo; stored values are UTC
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.isoformat().replace("+00:00", "Z")


class UserRecord(CamelModel):
    """User entry as received by the client. createdAt stays raw until displayed."""
    id: int
    username: str
    email: str
    created_at: str

    def formatted_created_at(self, tz: Optional[tzinfo] = None) -> str:
        """
        Creation time in local display form, e.g. "Mar 05, 2024 02:30 PM".

        Raises:
            TimestampFormatError: if created_at is not a zoned ISO-8601 value.
        """
        return format_timestamp(self.created_at, tz)
