from attrs import define, field

from argsieve.token import Token

__all__ = [
    "ArgsieveError",
    "ParseError",
    "SchemaError",
]


class SchemaError(Exception):
    """A parameter descriptor is malformed or declares conflicting presence rules."""

    # This doesn't derive from ArgsieveError since this is a developer error
    # rather than a runtime error.


@define
class ArgsieveError(Exception):
    """Root exception for runtime errors."""

    msg: str | None = None
    """
    Human-readable description of the problem.
    """

    def __str__(self):
        return "" if self.msg is None else self.msg


@define
class ParseError(ArgsieveError):
    """A raw string could not be coerced into the parameter's type.

    Coercion functions raise this to report bad input; the parser collects it
    into :attr:`.ErrorReport.invalid` instead of propagating it.

    .. code-block:: python

        def even(arg: str) -> int:
            value = int(arg)
            if value % 2:
                raise ParseError(f"'{arg}' is not even")
            return value
    """

    token: Token | None = field(default=None, kw_only=True)
    """
    Input token that couldn't be coerced. Attached by the parser.
    """

    name: str | None = field(default=None, kw_only=True)
    """
    Schema name of the parameter being resolved. Attached by the parser.
    """

    def __str__(self):
        msg = self.msg
        if msg is None:
            msg = f"'{self.token.value}' is not valid" if self.token else "invalid value"

        if self.token is not None and self.token.keyword is not None:
            return f'Invalid value for "{self.token.keyword}": {msg}'
        elif self.token is not None and self.token.source == "default" and self.name:
            return f'Invalid default for "{self.name}": {msg}'
        elif self.name:
            return f'Invalid value for "{self.name.upper()}": {msg}'
        else:
            return msg
