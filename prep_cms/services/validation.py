# validation.py
from __future__ import annotations

from typing import Any, Mapping, TypeVar

from pydantic import BaseModel, ValidationError

from prep_cms.errors import FormValidationError


FormT = TypeVar("FormT", bound=BaseModel)

FORM_ERROR_KEY = "_form"


def _message(error: Mapping[str, Any]) -> str:
    kind = error.get("type")
    if kind == "missing":
        return "This field is required."
    if kind == "extra_forbidden":
        return "Unknown field."
    if kind == "value_error":
        # Our own validators raise ValueError with a user-facing message.
        ctx_error = (error.get("ctx") or {}).get("error")
        if ctx_error is not None:
            return str(ctx_error)
    return str(error.get("msg") or "Invalid value.")


def field_errors(exc: ValidationError) -> dict[str, list[str]]:
    """Flatten a pydantic error into ``{field: [message, ...]}``."""

    result: dict[str, list[str]] = {}
    for error in exc.errors():
        loc = [str(part) for part in error.get("loc", ())]
        key = ".".join(loc) if loc else FORM_ERROR_KEY
        messages = result.setdefault(key, [])
        message = _message(error)
        if message not in messages:
            messages.append(message)
    return result


def validate_form(schema: type[FormT], data: Any, *, current: Mapping[str, Any] | None = None) -> FormT:
    """Validate submitted form fields, optionally on top of the stored values.

    Passing ``current`` turns the submission into a partial update: omitted
    fields keep their stored value and the merged result is validated as a whole.
    """

    if not isinstance(data, Mapping):
        raise FormValidationError({FORM_ERROR_KEY: ["Expected an object of form fields."]})
    payload = {**(current or {}), **data}
    try:
        return schema.model_validate(payload)
    except ValidationError as exc:
        raise FormValidationError(field_errors(exc)) from exc


def validate_paging(page: int, page_size: int) -> None:
    errors: dict[str, list[str]] = {}
    if page < 1:
        errors["page"] = ["Page must be at least 1."]
    if page_size < 1:
        errors["page_size"] = ["Page size must be at least 1."]
    if errors:
        raise FormValidationError(errors)
