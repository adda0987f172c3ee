"""Split a single command-line string into an argument vector.

Unlike :func:`shlex.split`, this lexer never fails: an unterminated quote simply
runs to the end of the input.
"""

from enum import Enum, auto

__all__ = ["tokenize"]

WHITESPACE = frozenset(" \t")

ESCAPES = {
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
    "v": "\v",
}


class State(Enum):
    SKIPPING = auto()
    READING = auto()
    SINGLE = auto()
    DOUBLE = auto()


def tokenize(s: str) -> list[str]:
    """Split ``s`` into tokens, honoring single quotes, double quotes and escapes.

    * Space and tab separate tokens.
    * Single quotes preserve their contents verbatim.
    * Double quotes decode backslash escapes (``\\n``, ``\\t``, ...); any other
      escaped character is kept literally without the backslash.
    * Quotes inside an unquoted word are ordinary characters.
    * A quoted section immediately following another quoted section, with no
      whitespace in between, continues the same token.

    Parameters
    ----------
    s: str
        Command-line string.

    Returns
    -------
    list[str]
        Tokens in input order; empty tokens are dropped.

    Example
    -------
    .. code-block:: python

        >>> tokenize("--name 'Jane Doe' -v")
        ['--name', 'Jane Doe', '-v']
    """
    tokens: list[str] = []
    current: list[str] = []
    state = State.SKIPPING
    glued = False  # A quoted section just closed; the next non-whitespace continues its token.

    def push():
        tokens.append("".join(current))
        current.clear()

    chars = iter(s)
    for char in chars:
        match state:
            case State.SKIPPING:
                if char in WHITESPACE:
                    glued = False
                    continue
                if not glued:
                    push()
                glued = False
                if char == "'":
                    state = State.SINGLE
                elif char == '"':
                    state = State.DOUBLE
                else:
                    current.append(char)
                    state = State.READING
            case State.READING:
                if char in WHITESPACE:
                    state = State.SKIPPING
                else:
                    current.append(char)
            case State.SINGLE:
                if char == "'":
                    state, glued = State.SKIPPING, True
                else:
                    current.append(char)
            case State.DOUBLE:
                if char == '"':
                    state, glued = State.SKIPPING, True
                elif char == "\\":
                    escaped = next(chars, "")
                    current.append(ESCAPES.get(escaped, escaped))
                else:
                    current.append(char)

    push()
    return [token for token in tokens if token]
