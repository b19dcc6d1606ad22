"""Persistent counters backing sequential identifiers."""

from pydantic import Field

from ridebook.core.db import MongoModel

COUNTERS_COLLECTION = "counters"
CURRENT_VALUE_FIELD = "currentId"


class Counter(MongoModel):
    """Integer counter for one allocation namespace.

    Stored as ``{_id: <namespace>, currentId: <int>}``. A missing document reads as 0;
    the next allocated number is always ``current_value + 1``.
    """

    namespace: str = Field(alias="_id")
    current_value: int = Field(default=0, ge=0, alias=CURRENT_VALUE_FIELD)
