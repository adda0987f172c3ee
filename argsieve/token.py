from attrs import field

from argsieve.utils import frozen


@frozen(kw_only=True)
class Token:
    """Tracks how a raw value reached the parser."""

    keyword: str | None = None
    """Option as written on the command line (e.g. ``--width`` or ``-w``); :obj:`None` for positionals and defaults."""

    value: str = ""

    source: str = "cli"
    """Either ``"cli"`` or ``"default"``."""

    index: int = field(default=-1)
    """Position of the originating token in the input stream; ``-1`` if it didn't come from the input."""
