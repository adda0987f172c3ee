from collections.abc import Mapping
from typing import TYPE_CHECKING

from attrs import field

from argsieve.parameter import Kind, Param
from argsieve.utils import frozen, to_tuple_converter

if TYPE_CHECKING:
    from rich.console import RenderableType
    from rich.text import Text

__all__ = ["Help", "build_help", "format_help", "format_usage"]


@frozen
class Help:
    """Usage strings for a schema, independent of any particular input."""

    params: tuple[str, ...] = field(default=(), converter=to_tuple_converter)
    """Positional parameters, rendered ``<name>`` or ``<name=default>``."""

    options: tuple[str, ...] = field(default=(), converter=to_tuple_converter)
    """Aliased parameters, e.g. ``-w --width <width>`` or ``-v --verbose``."""


def _placeholder(name: str, param: Param) -> str:
    if param.default is not None:
        return f"<{name}={param.default}>"
    return f"<{name}>"


def build_help(schema: Mapping[str, Param]) -> Help:
    params, options = [], []
    for name, param in schema.items():
        if param.positional:
            params.append(_placeholder(name, param))
            continue

        words = list(param.aliases)
        if param.kind is not Kind.FLAG:
            words.append(_placeholder(name, param))
        options.append(" ".join(words))
    return Help(params=params, options=options)


def format_usage(help: Help, name: str | None = None) -> "Text":
    from rich.text import Text

    usage = ["Usage:"]
    if name:
        usage.append(name)
    if help.options:
        usage.append("[OPTIONS]")
    usage.extend(help.params)
    return Text(" ".join(usage) + "\n", style="bold")


def _panel(title: str, rows: tuple[str, ...]) -> "RenderableType":
    from rich import box
    from rich.panel import Panel
    from rich.table import Table
    from rich.text import Text

    table = Table.grid(padding=(0, 2))
    table.add_column(style="cyan", no_wrap=True)
    for row in rows:
        table.add_row(Text(row))
    return Panel(table, title=title, box=box.ROUNDED, expand=True, title_align="left")


def format_help(help: Help, name: str | None = None) -> "RenderableType":
    """Assemble a rich renderable with a usage line and one panel per non-empty list.

    .. code-block:: text

        Usage: resize [OPTIONS] <in> <out>

        ╭─ Arguments ──────────────────────────────╮
        │ <in>                                     │
        │ <out>                                    │
        ╰──────────────────────────────────────────╯
        ╭─ Options ────────────────────────────────╮
        │ -w --width <width>                       │
        ╰──────────────────────────────────────────╯
    """
    from rich.console import Group

    parts: list["RenderableType"] = [format_usage(help, name)]
    if help.params:
        parts.append(_panel("Arguments", help.params))
    if help.options:
        parts.append(_panel("Options", help.options))
    return Group(*parts)
