"""Required-Field Enforcement — pure checks run before any store round trip.

Invariants:
    - A field is missing when it is None or blank after stripping whitespace
    - find_missing_fields is PURE: returns names, raises nothing
    - Field order in the result follows the caller's declaration order

Design Decisions:
    - Re-checked inside the service even though schemas already validate:
      the service is callable without the HTTP layer
"""

from collections.abc import Mapping

from account_store.core.errors import MissingFieldsError


def is_blank(value: str | None) -> bool:
    """True for None, empty, or whitespace-only strings."""
    return value is None or not value.strip()


def find_missing_fields(fields: Mapping[str, str | None]) -> list[str]:
    """Return the names of required fields that are blank."""
    return [name for name, value in fields.items() if is_blank(value)]


def require_fields(**fields: str | None) -> None:
    """Raise MissingFieldsError if any named field is blank."""
    missing = find_missing_fields(fields)
    if missing:
        raise MissingFieldsError(missing)


def password_supplied(password: str | None) -> bool:
    """Profile edits treat a blank password as 'keep the current one'."""
    return not is_blank(password)
