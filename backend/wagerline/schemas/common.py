"""Common Pydantic schemas and base classes."""

from datetime import datetime
from typing import Any, Optional, TypeVar

from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

from wagerline.exceptions import ValidationError

T = TypeVar("T", bound=BaseModel)


class BaseSchema(BaseModel):
    """Base schema with common configuration."""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class FieldsSchema(BaseModel):
    """Base for writable-field schemas; unknown fields are rejected."""

    model_config = ConfigDict(extra="forbid", use_enum_values=True)


class TimestampSchema(BaseSchema):
    """Schema with timestamp fields."""

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


def validate_fields(
    schema: type[T],
    data: dict[str, Any],
    context: Optional[dict[str, Any]] = None,
) -> T:
    """Validate ``data`` against ``schema``, raising ValidationError on failure."""
    try:
        return schema.model_validate(data, context=context)
    except PydanticValidationError as e:
        errors: dict[str, list[str]] = {}
        for error in e.errors():
            field = ".".join(str(part) for part in error["loc"]) or "base"
            errors.setdefault(field, []).append(error["msg"])
        raise ValidationError(errors) from e
