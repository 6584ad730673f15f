"""
Handler Outcomes and Response Translation

Handlers never build HTTP responses themselves. They return an Outcome,
and render() turns it into the status code and body the client sees:

| Outcome          | Status | Body                                   |
|------------------|--------|----------------------------------------|
| ok               | 200    | read shape(s)                          |
| created          | 201    | created read shape (+ Location header) |
| no_content       | 204    | empty                                  |
| not_found        | 404    | {"detail": message}                    |
| bad_request      | 400    | {"detail": ..., "errors": {...}}       |
| unauthorized     | 401    | echoed credentials, never the password |
| internal_error   | 500    | generic message                        |

The 500 body is always GENERIC_ERROR_MESSAGE. Exception text and other
diagnostics go to the log only.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from fastapi import Response, status
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel

GENERIC_ERROR_MESSAGE = "Something went wrong. Please contact the administrator"


class OutcomeKind(str, Enum):
    OK = "ok"
    CREATED = "created"
    NO_CONTENT = "no_content"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    UNAUTHORIZED = "unauthorized"
    INTERNAL_ERROR = "internal_error"


STATUS_CODES = {
    OutcomeKind.OK: status.HTTP_200_OK,
    OutcomeKind.CREATED: status.HTTP_201_CREATED,
    OutcomeKind.NO_CONTENT: status.HTTP_204_NO_CONTENT,
    OutcomeKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    OutcomeKind.BAD_REQUEST: status.HTTP_400_BAD_REQUEST,
    OutcomeKind.UNAUTHORIZED: status.HTTP_401_UNAUTHORIZED,
    OutcomeKind.INTERNAL_ERROR: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


@dataclass(frozen=True)
class Outcome:
    """
    Result of one handler call.

    Attributes:
        kind: Which row of the table above applies
        body: Response payload for ok/created/unauthorized
        message: Human-readable detail for error outcomes
        errors: Field-level reasons for bad_request
        location: URL of a newly created resource
    """

    kind: OutcomeKind
    body: Any = None
    message: str | None = None
    errors: dict[str, list[str]] = field(default_factory=dict)
    location: str | None = None

    @property
    def status_code(self) -> int:
        return STATUS_CODES[self.kind]

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------
    @classmethod
    def ok(cls, body: Any) -> "Outcome":
        return cls(OutcomeKind.OK, body=body)

    @classmethod
    def created(cls, body: Any, location: str | None = None) -> "Outcome":
        return cls(OutcomeKind.CREATED, body=body, location=location)

    @classmethod
    def no_content(cls) -> "Outcome":
        return cls(OutcomeKind.NO_CONTENT)

    @classmethod
    def not_found(cls, message: str) -> "Outcome":
        return cls(OutcomeKind.NOT_FOUND, message=message)

    @classmethod
    def bad_request(
        cls,
        errors: dict[str, list[str]],
        message: str = "The request was invalid",
    ) -> "Outcome":
        return cls(OutcomeKind.BAD_REQUEST, message=message, errors=errors)

    @classmethod
    def unauthorized(cls, body: Any) -> "Outcome":
        return cls(OutcomeKind.UNAUTHORIZED, body=body)

    @classmethod
    def internal_error(cls) -> "Outcome":
        return cls(OutcomeKind.INTERNAL_ERROR, message=GENERIC_ERROR_MESSAGE)


def _encode(body: Any) -> Any:
    """Serialize schemas by alias (camelCase), lists item by item."""
    if isinstance(body, BaseModel):
        return body.model_dump(mode="json", by_alias=True)
    if isinstance(body, (list, tuple)):
        return [_encode(item) for item in body]
    return jsonable_encoder(body)


def render(outcome: Outcome) -> Response:
    """
    Convert an Outcome into a FastAPI response.

    Args:
        outcome: What the handler decided

    Returns:
        JSONResponse, or an empty Response for 204
    """
    if outcome.kind is OutcomeKind.NO_CONTENT:
        return Response(status_code=outcome.status_code)

    if outcome.kind is OutcomeKind.BAD_REQUEST:
        content = {"detail": outcome.message, "errors": outcome.errors}
    elif outcome.kind in (OutcomeKind.NOT_FOUND, OutcomeKind.INTERNAL_ERROR):
        content = {"detail": outcome.message}
    else:
        content = _encode(outcome.body)

    headers = {"Location": outcome.location} if outcome.location else None
    return JSONResponse(
        status_code=outcome.status_code,
        content=content,
        headers=headers,
    )
