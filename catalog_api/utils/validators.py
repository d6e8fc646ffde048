"""
Input validation utilities
"""
from typing import Any, Dict, Iterable, Optional, Type, TypeVar
from uuid import UUID

from pydantic import BaseModel, ValidationError

from catalog_api.errors import RequestValidationFailed

ModelT = TypeVar("ModelT", bound=BaseModel)


def parse_uuid(value: str) -> Optional[UUID]:
    """Return the UUID for ``value`` or None when it is not one"""
    try:
        return UUID(str(value))
    except (ValueError, TypeError, AttributeError):
        return None


def is_missing(value: Any) -> bool:
    """Absent, null and blank strings count as missing; 0 and False do not"""
    if value is None:
        return True
    return isinstance(value, str) and not value.strip()


def require_fields(payload: Optional[Dict[str, Any]], required: Iterable[str]) -> Dict[str, Any]:
    if not payload:
        raise RequestValidationFailed("Request body is empty or not parsed correctly")

    required = list(required)
    missing = [field for field in required if is_missing(payload.get(field))]
    if missing:
        raise RequestValidationFailed(
            "Missing required fields",
            required=required,
            missing=missing,
            received=list(payload.keys()),
        )
    return payload


def parse_model(model: Type[ModelT], payload: Dict[str, Any]) -> ModelT:
    """Validate ``payload`` against ``model``, reporting failures as a 400"""
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        details = [
            {
                "field": ".".join(str(part) for part in error["loc"]) or None,
                "message": error["msg"],
                "type": error["type"],
            }
            for error in exc.errors()
        ]
        raise RequestValidationFailed("Invalid field values", details=details) from exc
