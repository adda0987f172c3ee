from collections.abc import Callable, Iterable, Mapping
from enum import Enum, auto
from typing import Any, cast

from attrs import field, fields

from argsieve.exceptions import SchemaError
from argsieve.utils import frozen, to_tuple_converter

__all__ = [
    "FLAG",
    "Kind",
    "Param",
    "Presence",
    "normalize_schema",
]

FLAG = "bool"
"""Type tag marking a parameter as a boolean flag."""


class Kind(Enum):
    FLAG = auto()
    """Boolean switch; present means :obj:`True`."""

    VALUE = auto()
    """Raw string passed through a coercion function."""

    STRING = auto()
    """Raw string used as-is."""


class Presence(Enum):
    ALWAYS = auto()
    """Boolean flags; :obj:`False` when not supplied."""

    DEFAULTED = auto()
    REQUIRED = auto()
    OPTIONAL = auto()


def _short_validator(instance, attribute, value):
    if value is None:
        return
    if len(value) != 1 or value == "-":
        raise SchemaError(f'short alias must be a single non-hyphen character, got "{value}".')


def _long_validator(instance, attribute, values):
    for value in values:
        if not value or value.startswith("-"):
            raise SchemaError(f'long alias must be non-empty and must NOT start with "-", got "{value}".')


def _type_validator(instance, attribute, value):
    if value is None or value == FLAG or callable(value):
        return
    raise SchemaError(f'type must be "{FLAG}", None, or a callable, got {value!r}.')


@frozen(kw_only=True)
class Param:
    """Declarative description of a single command-line parameter.

    Example usage:

    .. code-block:: python

        from argsieve import FLAG, Param, integer, parse

        schema = {
            "src": Param(),
            "verbose": Param(short="v", type=FLAG),
            "width": Param(short="w", long="width", type=integer, default="640"),
        }
        result, errors, help = parse("-v photo.jpg --width 720", schema)

    A parameter without any alias is positional; positionals are filled from
    the leftover input tokens in declaration order.
    """

    short: str | None = field(default=None, validator=_short_validator)

    # This can ONLY ever be a tuple[str, ...]
    long: None | str | Iterable[str] = field(
        default=None,
        converter=lambda x: cast(tuple[str, ...], to_tuple_converter(x)),
        validator=_long_validator,
    )

    type: None | str | Callable[[str], Any] = field(default=None, validator=_type_validator, hash=False)

    optional: bool = False

    default: str | None = None

    def __attrs_post_init__(self):
        if self.type == FLAG and (self.optional or self.default is not None):
            raise SchemaError("A boolean flag is always present; it cannot be optional or have a default.")
        if self.optional and self.default is not None:
            raise SchemaError("A parameter with a default is always present; it cannot also be optional.")

    @property
    def kind(self) -> Kind:
        if self.type == FLAG:
            return Kind.FLAG
        elif self.type is None:
            return Kind.STRING
        else:
            return Kind.VALUE

    @property
    def presence(self) -> Presence:
        if self.kind is Kind.FLAG:
            return Presence.ALWAYS
        elif self.default is not None:
            return Presence.DEFAULTED
        elif self.optional:
            return Presence.OPTIONAL
        else:
            return Presence.REQUIRED

    @property
    def positional(self) -> bool:
        return self.short is None and not self.long

    @property
    def aliases(self) -> tuple[str, ...]:
        """Aliases as they would be typed on the command line; short first."""
        out = [f"-{self.short}"] if self.short else []
        out.extend(f"--{name}" for name in self.long)
        return tuple(out)


_PARAM_FIELDS = frozenset(a.name for a in fields(Param))


def normalize_schema(schema: Mapping[str, Param | Mapping[str, Any]]) -> dict[str, Param]:
    """Convert a user-supplied schema into ``{name: Param}``, preserving declaration order.

    Values may be :class:`Param` instances or plain mappings of :class:`Param` fields.

    Raises
    ------
    SchemaError
        If a descriptor has unknown fields or conflicting presence rules.
    """
    out = {}
    for name, descriptor in schema.items():
        if isinstance(descriptor, Param):
            out[name] = descriptor
            continue

        unknown = set(descriptor) - _PARAM_FIELDS
        if unknown:
            raise SchemaError(f'Parameter "{name}" has unknown fields: {", ".join(sorted(unknown))}.')
        out[name] = Param(**descriptor)
    return out
