"""Turn raw strings into typed values.

A coercion is any ``Callable[[str], T]``. It reports bad input by raising
:class:`.ParseError`; any other exception is treated as a bug in the coercion
and propagates to the caller untouched.
"""

import math
from typing import Any

from attrs import define

from argsieve.exceptions import ParseError
from argsieve.parameter import FLAG, Kind, Param
from argsieve.token import Token
from argsieve.utils import UNSET

__all__ = [
    "FLAG",
    "Coerced",
    "coerce",
    "integer",
    "number",
]

MAX_SAFE_INTEGER = 2**53 - 1
"""Largest integer exactly representable by an IEEE-754 double."""


def number(arg: str) -> float:
    """Parse a finite floating point number."""
    try:
        value = float(arg)
    except ValueError:
        raise ParseError(f"'{arg}' is not a valid number") from None
    if not math.isfinite(value):
        raise ParseError(f"'{arg}' is not a valid number")
    return value


def integer(arg: str) -> int:
    """Parse an integer that is exactly representable as a double.

    Integral float notation such as ``"2.0"`` or ``"1e3"`` is accepted.
    """
    try:
        value = int(arg)
    except ValueError:
        try:
            as_float = float(arg)
        except ValueError:
            raise ParseError(f"'{arg}' is not a valid integer") from None
        if not as_float.is_integer():
            raise ParseError(f"'{arg}' is not a valid integer") from None
        value = int(as_float)

    if abs(value) > MAX_SAFE_INTEGER:
        raise ParseError(f"'{arg}' is not a valid integer")
    return value


@define(frozen=True)
class Coerced:
    """Outcome of coercing one raw token; exactly one of ``value``/``error`` is set."""

    value: Any = UNSET
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def coerce(name: str, param: Param, token: Token) -> Coerced:
    """Coerce ``token`` for parameter ``param``.

    Parameters
    ----------
    name: str
        Schema name of ``param``; attached to any :class:`.ParseError` for reporting.
    param: Param
        Parameter being resolved.
    token: Token
        Raw input.

    Returns
    -------
    Coerced
        Either the typed value or the :class:`.ParseError` describing why the
        token was rejected.
    """
    match param.kind:
        case Kind.FLAG:
            # Presence, not boolean parsing: ``--verbose=false`` is still ``True``.
            return Coerced(bool(token.value))
        case Kind.STRING:
            return Coerced(token.value)

    assert callable(param.type)
    try:
        return Coerced(param.type(token.value))
    except ParseError as e:
        e.token = token
        e.name = name
        return Coerced(error=e)
