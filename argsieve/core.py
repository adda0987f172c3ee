from collections.abc import Iterable, Mapping
from typing import TYPE_CHECKING, Any

from attrs import define, field

from argsieve.bind import ErrorReport, ParseOutcome, resolve
from argsieve.help import Help, build_help, format_help
from argsieve.panel import ArgsievePanel
from argsieve.parameter import Kind, Param, normalize_schema
from argsieve.split import split
from argsieve.tokenizer import tokenize

if TYPE_CHECKING:
    from rich.console import Console

__all__ = ["Parser", "parse"]


@define
class Parser:
    """A schema together with the settings used to parse input against it.

    .. code-block:: python

        from argsieve import FLAG, Parser, integer

        parser = Parser(
            {
                "src": {},
                "dst": {},
                "verbose": {"short": "v", "type": FLAG},
                "width": {"short": "w", "long": "width", "type": integer},
            },
            name="resize",
        )

        result, errors, help = parser.parse("-v in.jpg -w 720 out.jpg")
        if errors:
            parser.print_errors(errors)
            parser.print_help()

    Parsing is pure; a :class:`Parser` may be reused for any number of inputs.
    """

    schema: dict[str, Param] = field(converter=normalize_schema)
    """Parameter name to :class:`Param`. Plain dicts are converted on construction."""

    name: str | None = None
    """Program name shown in the usage line."""

    end_of_options_delimiter: str = "--"
    """All tokens after this delimiter are positional. Set to an empty string to disable."""

    console: "Console | None" = field(default=None, kw_only=True)
    """Default :class:`~rich.console.Console` for :meth:`print_help` and :meth:`print_errors`."""

    def _aliases(self, flags: bool) -> set[str]:
        names = set()
        for param in self.schema.values():
            if (param.kind is Kind.FLAG) != flags:
                continue
            if param.short:
                names.add(param.short)
            names.update(param.long)
        return names

    def parse(self, tokens: str | Iterable[str]) -> ParseOutcome:
        """Parse ``tokens`` against the schema.

        Parameters
        ----------
        tokens: str | Iterable[str]
            A single command-line string (split with :func:`.tokenize`) or an
            already-split argument vector.

        Returns
        -------
        ParseOutcome
            ``(result, None, help)`` on success, ``(None, errors, help)`` otherwise.
        """
        tokens = tokenize(tokens) if isinstance(tokens, str) else list(tokens)
        raw = split(
            tokens,
            options=self._aliases(flags=False),
            flags=self._aliases(flags=True),
            end_of_options_delimiter=self.end_of_options_delimiter,
        )
        result, errors = resolve(self.schema, raw)
        return ParseOutcome(result, errors if result is None else None, self.help())

    def help(self) -> Help:
        return build_help(self.schema)

    def _resolve_console(self, console: "Console | None") -> "Console":
        if console is not None:
            return console
        if self.console is not None:
            return self.console
        from rich.console import Console

        return Console()

    def print_help(self, console: "Console | None" = None) -> None:
        self._resolve_console(console).print(format_help(self.help(), self.name))

    def print_errors(self, errors: ErrorReport, console: "Console | None" = None) -> None:
        self._resolve_console(console).print(ArgsievePanel(errors))


def parse(tokens: str | Iterable[str], schema: Mapping[str, Param | Mapping[str, Any]]) -> ParseOutcome:
    """Parse ``tokens`` against ``schema`` with default settings.

    Shorthand for ``Parser(schema).parse(tokens)``.

    Example
    -------
    .. code-block:: python

        >>> parse("apple carrot", {"fruit": {}, "vegetable": {}}).result
        {'fruit': 'apple', 'vegetable': 'carrot'}
    """
    return Parser(schema).parse(tokens)
