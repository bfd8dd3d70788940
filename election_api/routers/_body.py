"""Request body helpers shared by the resource routers.

``request_body`` accepts JSON and URL-encoded bodies and always hands the
route a plain dict, so presence checks run before any typing happens.
``require_fields`` (presence) and ``coerce_body`` (typing, only where a value
must be an id) turn validation problems into ``InvalidInputError`` (400).
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel, ValidationError

from election_api.core.errors import InvalidInputError
from election_api.core.validation import FieldError, RequiredField, validate_required


ModelT = TypeVar("ModelT", bound=BaseModel)

_JSON = "application/json"
_FORM = "application/x-www-form-urlencoded"


async def request_body(request: Request) -> dict[str, Any]:
    """Parse the request body into a dict.

    Empty or unsupported bodies become ``{}``; malformed JSON and JSON
    that is not an object are rejected with 400.
    """
    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()

    if content_type == _FORM:
        form = await request.form()
        return {key: value for key, value in form.items()}

    if content_type == _JSON or content_type.endswith("+json"):
        if not await request.body():
            return {}
        try:
            payload = await request.json()
        except ValueError as exc:
            raise InvalidInputError("Malformed JSON body") from exc
        if not isinstance(payload, dict):
            raise InvalidInputError("Request body must be a JSON object")
        return payload

    return {}


def require_fields(body: dict[str, Any], fields: Iterable[RequiredField]) -> None:
    """Raise ``InvalidInputError`` listing every missing required field."""
    result = validate_required(body, fields)
    if not result.ok:
        raise InvalidInputError(result.message, result.errors)


def coerce_body(model: type[ModelT], body: dict[str, Any]) -> ModelT:
    """Validate *body* against *model*, mapping type errors to 400."""
    try:
        return model.model_validate(body)
    except ValidationError as exc:
        details = [
            FieldError(
                field=".".join(str(loc) for loc in e["loc"]),
                message=f"Invalid {'.'.join(str(loc) for loc in e['loc'])}: {e['msg']}.",
            )
            for e in exc.errors()
        ]
        raise InvalidInputError(" ".join(d.message for d in details), details) from exc
