"""Schema validation of inbound JSON payloads."""

from collections.abc import Sequence
from typing import Any, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from src.books_api.core.errors import ValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def format_violation(loc: Sequence[str | int], msg: str) -> str:
    """Render one pydantic error as ``"<field>: <message>"``."""
    field = ".".join(str(part) for part in loc) if loc else "body"
    return f"{field}: {msg}"


def validate_payload(payload: Any, schema: type[ModelT]) -> ModelT:
    """Parse ``payload`` with ``schema`` or raise ``ValidationError``."""
    try:
        return schema.model_validate(payload)
    except PydanticValidationError as exc:
        violations = [format_violation(err["loc"], err["msg"]) for err in exc.errors()]
        raise ValidationError(violations) from exc
