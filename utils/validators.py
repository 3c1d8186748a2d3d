"""
Request-body validation for the User resource.

``validate_user`` never touches the store; it only normalizes the payload or
reports what is wrong with it.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple, Type

from pydantic import ValidationError

from utils.schemas import UserCreate, UserInput

FieldError = Dict[str, Any]


def _field_error(error: Dict[str, Any]) -> FieldError:
    return {
        "path": list(error.get("loc", ())),
        "message": error.get("msg", "Invalid value"),
        "type": error.get("type", "value_error"),
    }


def validate_user(
    payload: Any,
    *,
    creating: bool = False,
) -> Tuple[Optional[UserInput], List[FieldError]]:
    """
    Validate an untyped payload against the user schema.

    Returns ``(record, [])`` on success, or ``(None, errors)`` where every
    error is ``{"path": [...], "message": str, "type": str}`` in the order
    the fields are declared.
    """
    model: Type[UserInput] = UserCreate if creating else UserInput
    try:
        return model.model_validate(payload), []
    except ValidationError as exc:
        return None, [_field_error(err) for err in exc.errors(include_url=False)]
