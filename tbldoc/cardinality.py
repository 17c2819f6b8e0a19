"""Cardinality of the ends of a relation between tables."""

from __future__ import annotations

from enum import Enum

__all__ = ["Cardinality", "to_cardinality"]


class Cardinality(str, Enum):
    """How many rows may sit on one end of a relation."""

    ZERO_OR_ONE = "Zero or one"
    EXACTLY_ONE = "Exactly one"
    ZERO_OR_MORE = "Zero or more"
    ONE_OR_MORE = "One or more"
    UNKNOWN = ""

    def __str__(self) -> str:
        return self.value


_ALIASES: dict[str, Cardinality] = {
    "zero or one": Cardinality.ZERO_OR_ONE,
    "exactly one": Cardinality.EXACTLY_ONE,
    "zero or more": Cardinality.ZERO_OR_MORE,
    "one or more": Cardinality.ONE_OR_MORE,
    "one or zero": Cardinality.ZERO_OR_ONE,
    "zero or many": Cardinality.ZERO_OR_MORE,
    "one or many": Cardinality.ONE_OR_MORE,
    "many(0)": Cardinality.ZERO_OR_MORE,
    "many(1)": Cardinality.ONE_OR_MORE,
    "0+": Cardinality.ZERO_OR_MORE,
    "1+": Cardinality.ONE_OR_MORE,
    "*": Cardinality.ZERO_OR_MORE,
    "0..*": Cardinality.ZERO_OR_MORE,
    "0..1": Cardinality.ZERO_OR_ONE,
    "1..*": Cardinality.ONE_OR_MORE,
    "1": Cardinality.EXACTLY_ONE,
    "": Cardinality.UNKNOWN,
}


def to_cardinality(value: str) -> Cardinality:
    """Parse a cardinality name or alias, case-insensitively.

    Raises ValueError when the text is not a known cardinality.
    """
    try:
        return _ALIASES[value.lower()]
    except KeyError:
        raise ValueError(f"invalid cardinality: {value}") from None