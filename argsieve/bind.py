import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, NamedTuple

from attrs import define, field

from argsieve.coercion import Coerced, coerce
from argsieve.exceptions import ParseError
from argsieve.parameter import Kind, Param, Presence
from argsieve.split import RawArguments
from argsieve.token import Token
from argsieve.utils import UNSET

if TYPE_CHECKING:
    from argsieve.help import Help

logger = logging.getLogger(__name__)

__all__ = ["ErrorReport", "ParseOutcome", "resolve"]


@define
class ErrorReport:
    """Every problem found while resolving a single input."""

    invalid: dict[str, ParseError] = field(factory=dict)
    """Parameter name to the coercion failure for that parameter."""

    missing: list[str] = field(factory=list)
    """Required parameters that were not supplied, in schema order."""

    unexpected: list[str] = field(factory=list)
    """Option names and positional values no parameter claimed, in input order."""

    def __bool__(self) -> bool:
        return bool(self.invalid or self.missing or self.unexpected)

    def messages(self) -> list[str]:
        out = [str(e) for e in self.invalid.values()]
        out.extend(f'Parameter "{name}" requires an argument.' for name in self.missing)
        out.extend(f'Unexpected input: "{value}".' for value in self.unexpected)
        return out

    def __str__(self):
        return "\n".join(self.messages())


class ParseOutcome(NamedTuple):
    """Exactly one of ``result`` and ``errors`` is :obj:`None`."""

    result: dict[str, Any] | None
    errors: ErrorReport | None
    help: "Help"


class _Resolver:
    """Working state for a single resolution pass.

    ``raw`` is never modified; consumption is tracked with ``claimed`` and ``cursor``.
    """

    def __init__(self, raw: RawArguments):
        self.raw = raw
        self.claimed: set[str] = set()
        self.cursor = 0
        self.result: dict[str, Any] = {}
        self.errors = ErrorReport()

    def claim(self, alias: str) -> Token | None:
        if alias in self.claimed or alias not in self.raw.options:
            return None
        self.claimed.add(alias)
        return self.raw.options[alias]

    def next_positional(self) -> Token | None:
        if self.cursor >= len(self.raw.positionals):
            return None
        token = self.raw.positionals[self.cursor]
        self.cursor += 1
        return token

    def apply(self, name: str, coerced: Coerced) -> Any:
        if coerced.ok:
            return coerced.value
        assert coerced.error is not None
        self.errors.invalid[name] = coerced.error
        return UNSET

    def layer(self, name: str, param: Param, value: Any, token: Token) -> Any:
        """Coerce ``token`` and combine it with the value resolved so far."""
        coerced = self.apply(name, coerce(name, param, token))
        if param.kind is Kind.FLAG:
            return bool(value) or bool(coerced)
        return value if coerced is UNSET else coerced

    def resolve_param(self, name: str, param: Param):
        value = UNSET

        if param.default is not None:
            value = self.apply(name, coerce(name, param, Token(value=param.default, source="default")))

        if param.short and (token := self.claim(param.short)) and token.value:
            logger.debug("%s: short alias %s", name, token.keyword)
            value = self.layer(name, param, value, token)

        for alias in param.long:
            token = self.claim(alias)
            if token is None or not token.value:
                continue
            logger.debug("%s: long alias %s", name, token.keyword)
            value = self.layer(name, param, value, token)

        if param.positional and (token := self.next_positional()) is not None:
            logger.debug("%s: positional %r", name, token.value)
            value = self.layer(name, param, value, token)

        if value is UNSET:
            match param.presence:
                case Presence.ALWAYS:
                    value = False
                case Presence.REQUIRED | Presence.DEFAULTED:
                    # A defaulted parameter only lands here if its default failed to coerce.
                    self.errors.missing.append(name)

        if value is not UNSET:
            self.result[name] = value

    def leftovers(self) -> list[str]:
        pending = [(token.index, alias) for alias, token in self.raw.options.items() if alias not in self.claimed]
        pending.extend((token.index, token.value) for token in self.raw.positionals[self.cursor :])
        return [value for _, value in sorted(pending, key=lambda x: x[0])]


def resolve(schema: Mapping[str, Param], raw: RawArguments) -> tuple[dict[str, Any] | None, ErrorReport]:
    """Map raw options and positionals onto ``schema``.

    Parameters are resolved in schema order; each one layers its sources,
    later ones overriding earlier ones:

    1. ``default`` (coerced).
    2. ``short`` alias.
    3. ``long`` aliases in declaration order. Boolean flags OR their matches;
       other kinds keep the last match.
    4. For parameters without aliases, the next leftover positional.

    An alias claimed by one parameter is invisible to later parameters.
    Unresolved boolean flags become :obj:`False`; unresolved required
    parameters are reported as missing.

    Returns
    -------
    result: dict[str, Any] | None
        Typed values; :obj:`None` if any problem was found.
    errors: ErrorReport
        All problems found; empty on success.
    """
    resolver = _Resolver(raw)
    for name, param in schema.items():
        resolver.resolve_param(name, param)

    resolver.errors.unexpected.extend(resolver.leftovers())

    if resolver.errors:
        logger.debug(
            "resolution failed: invalid=%s missing=%s unexpected=%s",
            list(resolver.errors.invalid),
            resolver.errors.missing,
            resolver.errors.unexpected,
        )
        return None, resolver.errors
    return resolver.result, resolver.errors
