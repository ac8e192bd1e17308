"""Event Pydantic schemas."""

from datetime import datetime
from decimal import Decimal
from typing import Optional
from uuid import UUID

from pydantic import Field, ValidationInfo, field_validator
from pydantic_core import PydanticCustomError

from wagerline.models.event import EventStatus
from wagerline.schemas.common import FieldsSchema, TimestampSchema

RESULT_REQUIRES_COMPLETED = "can only be set when the event is completed"
RESULT_NOT_RECOGNISED = "is not a recognised outcome"


class EventFields(FieldsSchema):
    """
    Writable event fields.

    The ``outcome_labels`` validation context carries the registry's
    current label set; when it is absent the membership check is skipped.
    """

    name: str = Field(min_length=1)
    start_time: datetime
    odds: Decimal = Field(gt=0, max_digits=10, decimal_places=4)
    status: EventStatus = Field(default=EventStatus.UPCOMING, validate_default=True)
    result: Optional[str] = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise PydanticCustomError("blank", "can't be blank")
        return v

    @field_validator("result")
    @classmethod
    def result_only_when_completed(
        cls, v: Optional[str], info: ValidationInfo
    ) -> Optional[str]:
        if v is None:
            return v
        if info.data.get("status") != EventStatus.COMPLETED.value:
            raise PydanticCustomError("result_requires_completed", RESULT_REQUIRES_COMPLETED)

        labels = (info.context or {}).get("outcome_labels")
        if labels is not None and v not in labels:
            raise PydanticCustomError("result_not_recognised", RESULT_NOT_RECOGNISED)
        return v


class EventRecord(TimestampSchema):
    """Canonical serialized event, used as notification payload."""

    id: UUID
    name: str
    start_time: datetime
    odds: Decimal
    status: str
    result: Optional[str]
