"""
Validation Policy

Decides whether a create or update body is well-formed before anything
touches the database.

Rules:
- The body must be present and be a JSON object
- Every required field of the schema must be present and valid
- Create bodies never carry an id
- Update: the path id must be a positive integer and equal the body id

Reasons are returned per field, keyed by the field's wire name
(e.g. "lastName"), so a client can show them next to the right input.
"""

from dataclasses import dataclass, field
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

SchemaT = TypeVar("SchemaT", bound=BaseModel)

BODY_FIELD = "body"
ID_FIELD = "id"


@dataclass
class ValidationResult:
    """Pass/fail plus field-level reasons."""

    errors: dict[str, list[str]] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors

    def add(self, field_name: str, reason: str) -> None:
        self.errors.setdefault(field_name, []).append(reason)

    def merge(self, other: "ValidationResult") -> None:
        for field_name, reasons in other.errors.items():
            for reason in reasons:
                self.add(field_name, reason)


def errors_from_pydantic(exc: ValidationError) -> ValidationResult:
    """
    Flatten a Pydantic ValidationError into field-level reasons.

    The first element of each error location is the field name (its
    alias, since bodies are validated by alias). Errors about the body as
    a whole have an empty location and are filed under "body".
    """
    result = ValidationResult()
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        field_name = ".".join(loc) if loc else BODY_FIELD
        result.add(field_name, error["msg"])
    return result


def check_body(payload: Any) -> ValidationResult:
    """A body must be present and be a JSON object."""
    result = ValidationResult()
    if payload is None:
        result.add(BODY_FIELD, "A request body is required")
    elif not isinstance(payload, dict):
        result.add(BODY_FIELD, "The request body must be a JSON object")
    return result


def check_path_id(path_id: int) -> ValidationResult:
    """Path identifiers are positive integers."""
    result = ValidationResult()
    if path_id < 1:
        result.add(ID_FIELD, "The id must be a positive integer")
    return result


def check_id_match(path_id: int, payload: Any) -> ValidationResult:
    """
    Cheap identity checks for an update, run before any database call.

    The path id must be positive and the body must carry the same id.
    Full field validation happens later, once the record is known to exist.
    """
    result = check_path_id(path_id)
    result.merge(check_body(payload))
    if not result.is_valid:
        return result

    body_id = payload.get(ID_FIELD)
    if body_id is None:
        result.add(ID_FIELD, "The body must include the id of the record")
    elif type(body_id) is not int:
        # bool is an int subclass: true would otherwise equal id 1
        result.add(ID_FIELD, "The id in the body must be an integer")
    elif body_id != path_id:
        result.add(
            ID_FIELD,
            f"The id in the body ({body_id}) does not match the id in the URL ({path_id})",
        )
    return result


def _parse(schema: type[SchemaT], payload: Any) -> tuple[SchemaT | None, ValidationResult]:
    result = check_body(payload)
    if not result.is_valid:
        return None, result
    try:
        return schema.model_validate(payload), result
    except ValidationError as exc:
        return None, errors_from_pydantic(exc)


def validate_create(
    schema: type[SchemaT],
    payload: Any,
) -> tuple[SchemaT | None, ValidationResult]:
    """
    Validate a create body.

    Returns:
        (shape, result): shape is None whenever result is not valid
    """
    shape, result = _parse(schema, payload)
    if isinstance(payload, dict) and payload.get(ID_FIELD) is not None:
        result.add(ID_FIELD, "An id must not be supplied when creating a record")
        shape = None
    return shape, result


def validate_update(
    schema: type[SchemaT],
    path_id: int,
    payload: Any,
) -> tuple[SchemaT | None, ValidationResult]:
    """
    Validate an update body against the path id.

    Returns:
        (shape, result): shape is None whenever result is not valid
    """
    result = check_id_match(path_id, payload)
    if not result.is_valid:
        return None, result
    return _parse(schema, payload)


def validate_shape(
    schema: type[SchemaT],
    payload: Any,
) -> tuple[SchemaT | None, ValidationResult]:
    """Validate a body that has no id rules (e.g. login credentials)."""
    return _parse(schema, payload)
