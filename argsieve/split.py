"""Separate an argument vector into named options and leftover positionals.

This is a getopt-style splitter that never rejects input: options that were
not declared are still collected so that the resolver can report them.
"""

from collections.abc import Collection, Sequence

from attrs import define, field

from argsieve.token import Token
from argsieve.utils import is_option_like

__all__ = ["RawArguments", "split"]


@define
class RawArguments:
    options: dict[str, Token] = field(factory=dict)
    """Option name (without hyphens) to the token that supplied it, in first-encounter order."""

    positionals: tuple[Token, ...] = ()


def split(
    tokens: Sequence[str],
    *,
    options: Collection[str] = (),
    flags: Collection[str] = (),
    end_of_options_delimiter: str = "--",
) -> RawArguments:
    """Split ``tokens`` into options and positionals.

    Parameters
    ----------
    tokens: Sequence[str]
        Argument vector.
    options: Collection[str]
        Names (short or long, without hyphens) that take a string value.
    flags: Collection[str]
        Names that are pure boolean switches and never consume the following token.
    end_of_options_delimiter: str
        Every token after this one is positional. An empty string disables the delimiter.

    Returns
    -------
    RawArguments
    """
    found: dict[str, Token] = {}
    positionals: list[Token] = []

    def bind(name: str, keyword: str, value: str, index: int):
        # Last occurrence wins, but keeps its first-encounter position.
        if name in found:
            index = found[name].index
        found[name] = Token(keyword=keyword, value=value, index=index)

    def follow_up(name: str, index: int) -> str | None:
        """Consume the next token as ``name``'s value, if it can be one."""
        if name in flags or index + 1 >= len(tokens):
            return None
        candidate = tokens[index + 1]
        if is_option_like(candidate) or (end_of_options_delimiter and candidate == end_of_options_delimiter):
            return None
        return candidate

    skip_next = False
    for i, token in enumerate(tokens):
        if skip_next:
            skip_next = False
            continue

        if end_of_options_delimiter and token == end_of_options_delimiter:
            positionals.extend(Token(value=t, index=j) for j, t in enumerate(tokens[i + 1 :], start=i + 1))
            break

        if not is_option_like(token):
            positionals.append(Token(value=token, index=i))
            continue

        if token.startswith("--"):
            name, sep, value = token[2:].partition("=")
            if not name:
                positionals.append(Token(value=token, index=i))
                continue
            keyword = f"--{name}"
            if not sep:
                value = follow_up(name, i)
                if value is None:
                    value = "" if name in options else "true"
                else:
                    skip_next = True
            bind(name, keyword, value, i)
            continue

        # Short option cluster, e.g. ``-abc``, ``-ovalue`` or ``-o=value``.
        chars = token[1:]
        for position, char in enumerate(chars):
            remainder = chars[position + 1 :]
            if remainder.startswith("="):
                bind(char, f"-{char}", remainder[1:], i)
                break

            if char in flags:
                bind(char, f"-{char}", "true", i)
                continue

            if remainder:
                if char in options:
                    bind(char, f"-{char}", remainder, i)
                    break
                # Unknown character in the middle of a cluster.
                bind(char, f"-{char}", "true", i)
                continue

            value = follow_up(char, i)
            if value is None:
                value = "" if char in options else "true"
            else:
                skip_next = True
            bind(char, f"-{char}", value, i)

    return RawArguments(options=found, positionals=tuple(positionals))
