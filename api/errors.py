"""
Errors raised by the books API and mapped to HTTP responses in api.main.
"""

from typing import Dict, List


class BooksAPIError(Exception):
    """Base class for errors the API turns into client responses."""


class AuthenticationError(BooksAPIError):
    """Missing, invalid or unverifiable token, or unknown user."""

    def __init__(self, reason: str = "unauthenticated"):
        super().__init__(reason)
        self.reason = reason


class BookValidationError(BooksAPIError):
    """A book failed its field constraints."""

    def __init__(self, errors: Dict[str, List[str]]):
        super().__init__(f"Book validation failed: {errors}")
        self.errors = errors


class NotFoundError(BooksAPIError):
    """A referenced record does not exist."""

    def __init__(self, resource: str, resource_id):
        super().__init__(f"{resource} with id '{resource_id}' not found")
        self.resource = resource
        self.resource_id = resource_id


def field_errors(validation_errors, skip_prefix: int = 0) -> Dict[str, List[str]]:
    """
    Collapse pydantic error entries into a {field: [messages]} map.

    Args:
        validation_errors: Output of ``ValidationError.errors()``
        skip_prefix: Number of leading location parts to drop (e.g. "body")
    """
    errors: Dict[str, List[str]] = {}
    for error in validation_errors:
        location = [str(part) for part in error.get("loc", ())][skip_prefix:]
        field = ".".join(location) or "base"
        message = error.get("msg", "is invalid")
        if message.startswith("Value error, "):
            message = message[len("Value error, "):]
        errors.setdefault(field, []).append(message)
    return errors
