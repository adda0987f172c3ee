"""Rich panel utilities for terminal output."""

from typing import TYPE_CHECKING, Any

from argsieve.bind import ErrorReport

if TYPE_CHECKING:
    from rich.panel import Panel


def ArgsievePanel(message: Any, title: str | None = None, style: str = "red") -> "Panel":  # noqa: N802
    """Create a :class:`~rich.panel.Panel` with a consistent style.

    An :class:`.ErrorReport` is rendered one problem per line: invalid values
    first, then missing parameters, then unexpected input.

    .. code-block:: text

        ╭─ 2 Errors ───────────────────────────────╮
        │ Parameter "fruit" requires an argument.  │
        │ Unexpected input: "extra".               │
        ╰──────────────────────────────────────────╯

    Parameters
    ----------
    message: Any
        An :class:`.ErrorReport`, or anything else to be displayed via :class:`str`.
    title: str | None
        Title of the panel that appears in the top-left corner.
        Defaults to ``"Error"``, or ``"N Errors"`` for a report with several problems.
    style: str
        Rich `style <https://rich.readthedocs.io/en/stable/style.html>`_ for the panel border.

    Returns
    -------
    ~rich.panel.Panel
        Formatted panel object.
    """
    from rich import box
    from rich.panel import Panel
    from rich.text import Text

    if isinstance(message, ErrorReport):
        lines = message.messages()
        body = Text("\n".join(lines), "default")
        if title is None:
            title = f"{len(lines)} Errors" if len(lines) > 1 else "Error"
    else:
        body = Text(str(message), "default")

    if title is None:
        title = "Error"

    return Panel(
        body,
        title=title,
        style=style,
        box=box.ROUNDED,
        expand=True,
        title_align="left",
    )
