"""
Shared Pydantic types for schema validation.

UTCDateTime: SQLite hands back naive datetimes for timezone-aware columns;
values without tzinfo are taken as UTC so createdAt/updatedAt always
serialize with an offset.
"""

from datetime import datetime, timezone
from typing import Annotated
from pydantic import AfterValidator


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


UTCDateTime = Annotated[datetime, AfterValidator(_as_utc)]
