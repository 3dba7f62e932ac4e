"""
Nullable scalar wrappers for HubSpot property values.

HubSpot treats an omitted property differently from a property sent as an
empty string: omitting it leaves the stored value alone, while "" clears it.
The wrappers here keep that distinction by carrying an explicit "absent"
state alongside the literal value.
"""

from datetime import datetime, timedelta, timezone
from typing import Any

from .models import PropertyDecodeError

EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


class HsStr:
    """
    String-valued property.

    HsStr("Acme") is present, HsStr("") is present and empty,
    HsStr() is absent.
    """

    __slots__ = ("_value",)

    def __init__(self, value: str | None = None):
        if value is not None and not isinstance(value, str):
            value = str(value)
        self._value = value

    @property
    def value(self) -> str | None:
        """The literal value, or None when absent."""
        return self._value

    @property
    def is_set(self) -> bool:
        """Whether the property carries a value (possibly empty)."""
        return self._value is not None

    def to_wire(self) -> str | None:
        return self._value

    @classmethod
    def from_wire(cls, raw: Any) -> "HsStr":
        """
        Decode a raw JSON value.

        None yields an absent wrapper. Numbers and booleans are kept as their
        string form, since HubSpot returns every property value as a string
        but accepts either on input.
        """
        if raw is None:
            return cls()
        if isinstance(raw, bool):
            return cls("true" if raw else "false")
        if isinstance(raw, (str, int, float)):
            return cls(str(raw))
        raise PropertyDecodeError(f"Cannot decode {type(raw).__name__} as a string property")

    def __str__(self) -> str:
        return self._value if self._value is not None else ""

    def __repr__(self) -> str:
        if self._value is None:
            return "HsStr()"
        return f"HsStr({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HsStr):
            return self._value == other._value
        if isinstance(other, str):
            return self._value == other
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


class HsTime:
    """
    Timestamp-valued property.

    Values are timezone-aware datetimes; naive datetimes are taken as UTC.
    """

    __slots__ = ("_value",)

    def __init__(self, value: datetime | None = None):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        self._value = value

    @property
    def value(self) -> datetime | None:
        return self._value

    @property
    def is_set(self) -> bool:
        return self._value is not None

    def to_wire(self) -> str | None:
        """ISO-8601 in UTC with a Z suffix, or None when absent."""
        if self._value is None:
            return None
        text = self._value.astimezone(timezone.utc).isoformat()
        return text.replace("+00:00", "Z")

    @classmethod
    def from_wire(cls, raw: Any) -> "HsTime":
        """
        Decode a raw JSON value.

        Accepts ISO-8601 strings and epoch milliseconds (as a number or a
        string of digits). None and "" yield an absent wrapper; HubSpot sends
        "" for a date property that has been cleared.

        Raises:
            PropertyDecodeError: If the value is not a recognisable timestamp
        """
        if raw is None or raw == "":
            return cls()
        if isinstance(raw, bool):
            raise PropertyDecodeError("Cannot decode bool as a timestamp property")
        if isinstance(raw, (int, float)):
            return cls._from_epoch_ms(raw)
        if not isinstance(raw, str):
            raise PropertyDecodeError(f"Cannot decode {type(raw).__name__} as a timestamp property")

        text = raw.strip()
        if text.isascii() and text.isdigit():
            return cls._from_epoch_ms(int(text))
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        try:
            return cls(datetime.fromisoformat(text))
        except ValueError as e:
            raise PropertyDecodeError(f"Invalid timestamp {raw!r}: {e}")

    @classmethod
    def _from_epoch_ms(cls, millis: int | float) -> "HsTime":
        try:
            return cls(EPOCH + timedelta(milliseconds=millis))
        except (OverflowError, ValueError) as e:
            raise PropertyDecodeError(f"Invalid epoch timestamp {millis!r}: {e}")

    def __str__(self) -> str:
        return self.to_wire() or ""

    def __repr__(self) -> str:
        if self._value is None:
            return "HsTime()"
        return f"HsTime({self._value!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, HsTime):
            return self._value == other._value
        if isinstance(other, datetime):
            return self._value == HsTime(other)._value
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._value)


def new_string(value: str) -> HsStr:
    """Shorthand for a present string property."""
    return HsStr(value)


def new_time(value: datetime) -> HsTime:
    """Shorthand for a present timestamp property."""
    return HsTime(value)
