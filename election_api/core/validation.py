"""Declarative required-field validation for request bodies.

Each write operation declares the fields it needs as a tuple of
``RequiredField`` descriptors; ``validate_required`` evaluates any such
tuple against a parsed request body and returns a ``ValidationResult``.

A field counts as missing when the key is absent, the value is ``None``,
or the value is an empty (or whitespace-only) string.  ``0`` and ``False``
are legitimate values, e.g. ``industry_connected = 0``.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class FieldError:
    """A single problem with one field of a request body."""
    field: str
    message: str

    def to_dict(self) -> dict[str, str]:
        return {"field": self.field, "message": self.message}


@dataclass(frozen=True)
class RequiredField:
    """Descriptor for a field that must be present in a request body."""
    name: str

    def is_missing(self, record: Mapping[str, Any]) -> bool:
        value = record.get(self.name)
        if value is None:
            return True
        if isinstance(value, str) and not value.strip():
            return True
        return False

    def error(self) -> FieldError:
        return FieldError(field=self.name, message=f"No {self.name} specified.")


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of a validation pass: ``ok`` or a list of field errors."""
    errors: list[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def message(self) -> str:
        """All error messages joined into one human-readable string."""
        return " ".join(e.message for e in self.errors)


CANDIDATE_CREATE_FIELDS: tuple[RequiredField, ...] = (
    RequiredField("first_name"),
    RequiredField("last_name"),
    RequiredField("industry_connected"),
)

PARTY_ASSIGNMENT_FIELDS: tuple[RequiredField, ...] = (
    RequiredField("party_id"),
)


def validate_required(
    record: Mapping[str, Any] | None,
    fields: Iterable[RequiredField],
) -> ValidationResult:
    """Check that every field in *fields* is present in *record*.

    Returns one ``FieldError`` per missing field, in declaration order.
    A ``None`` record is treated as an empty body.
    """
    record = record or {}
    return ValidationResult(
        errors=[f.error() for f in fields if f.is_missing(record)]
    )
