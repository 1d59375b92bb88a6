"""Custom scalar handlers.

A handler converts a custom GraphQL scalar between its JSON form and a
Python value. Fields built with `fields.scalar` decode through
`deserialize`.

Example usage:
    from gql_codec.core.fields import scalar
    from gql_codec.core.scalars import DateTimeHandler

    created_at = scalar("createdAt", DateTimeHandler())

    # Custom handler
    class MoneyHandler:
        type_name = "Money"

        def serialize(self, value):
            return str(value)

        def deserialize(self, value):
            from decimal import Decimal
            return Decimal(value)
"""

from datetime import date, datetime
from typing import Any, Protocol, runtime_checkable
from uuid import UUID


@runtime_checkable
class ScalarHandler(Protocol):
    """Protocol for custom scalar handlers.

    Attributes:
        type_name: The GraphQL scalar name, used in decode failure messages

    `deserialize` signals a malformed value by raising ValueError or
    TypeError.
    """

    type_name: str

    def serialize(self, value: Any) -> Any:
        """Convert a Python value to its JSON form."""
        ...

    def deserialize(self, value: Any) -> Any:
        """Convert a JSON value from the response to a Python value."""
        ...


def _require_str(value: Any, type_name: str) -> str:
    if not isinstance(value, str):
        raise TypeError(f"{type_name} must be a string")
    return value


class DateTimeHandler:
    """Handler for DateTime scalars using ISO 8601 format."""

    type_name = "DateTime"

    def serialize(self, value: datetime) -> str:
        return value.isoformat()

    def deserialize(self, value: Any) -> datetime:
        """Parse ISO 8601, accepting a trailing `Z` for UTC."""
        text = _require_str(value, self.type_name)
        return datetime.fromisoformat(text.replace("Z", "+00:00"))


class DateHandler:
    """Handler for Date scalars using ISO 8601 date format."""

    type_name = "Date"

    def serialize(self, value: date) -> str:
        return value.isoformat()

    def deserialize(self, value: Any) -> date:
        return date.fromisoformat(_require_str(value, self.type_name))


class UUIDHandler:
    type_name = "UUID"

    def serialize(self, value: UUID) -> str:
        return str(value)

    def deserialize(self, value: Any) -> UUID:
        return UUID(_require_str(value, self.type_name))


class JSONHandler:
    """Handler for JSON scalars (pass-through)."""

    type_name = "JSON"

    def serialize(self, value: Any) -> Any:
        return value

    def deserialize(self, value: Any) -> Any:
        return value
