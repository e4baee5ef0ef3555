"""line-menu: pick one line of piped input with a fuzzy query.

Main Textual application and command-line entry point.
"""

import logging
import sys
from collections.abc import Sequence
from pathlib import Path

import click
from textual.app import App
from textual.binding import Binding

from line_menu import __version__
from line_menu.models.exceptions import MenuError
from line_menu.screens.picker import PickerScreen
from line_menu.services.config import ConfigManager, MenuConfig
from line_menu.services.fuzzy import rank
from line_menu.services.input import read_candidates, reattach_terminal
from line_menu.styles import BASE_CSS

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


class LineMenuApp(App[str | None]):
    """Full-screen line picker. Exits with the chosen line or None."""

    TITLE = "line-menu"
    CSS = BASE_CSS + """
    Screen {
        background: $background;
    }
    """

    BINDINGS = [
        Binding("ctrl+c", "cancel", "Cancel", show=False, priority=True),
    ]

    def __init__(
        self,
        candidates: Sequence[str],
        config: MenuConfig | None = None,
        **kwargs,
    ):
        """Initialize the app.

        Args:
            candidates: Lines to pick from; never mutated
            config: Resolved configuration (defaults if not provided)
            **kwargs: Additional Textual app arguments
        """
        super().__init__(**kwargs)
        self.candidates = candidates
        self.config = config or MenuConfig()

    def on_mount(self) -> None:
        """Show the picker."""
        self.push_screen(PickerScreen(self.candidates, self.config))

    def on_app_blur(self) -> None:
        """Close when the terminal loses focus, unless persistent."""
        if self.config.effective_persistent:
            return
        logger.debug("Terminal lost focus, closing")
        self.exit(None)

    def action_cancel(self) -> None:
        self.exit(None)


def _configure_logging(ctx: click.Context, log_file: Path | None) -> None:
    """Send package debug logs to a file; the terminal belongs to the UI.

    The handler is removed again when the command context closes.
    """
    if log_file is None:
        return
    package_logger = logging.getLogger("line_menu")
    previous_level = package_logger.level
    handler = logging.FileHandler(log_file, encoding="utf-8")
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    package_logger.addHandler(handler)
    package_logger.setLevel(logging.DEBUG)

    def _detach() -> None:
        package_logger.removeHandler(handler)
        package_logger.setLevel(previous_level)
        handler.close()

    ctx.call_on_close(_detach)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("-p", "--placeholder", default=None, help="Placeholder text for the search field.")
@click.option(
    "--persistent",
    is_flag=True,
    default=False,
    help="Stay open when the terminal loses focus.",
)
@click.option(
    "-f",
    "--filter",
    "filter_query",
    default=None,
    metavar="QUERY",
    help="Print the lines matching QUERY, best first, and exit.",
)
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Config directory (default: ~/.config/line-menu).",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Write debug logs to this file.",
)
@click.version_option(__version__, "-v", "--version", prog_name="line-menu")
@click.pass_context
def main(
    ctx: click.Context,
    placeholder: str | None,
    persistent: bool,
    filter_query: str | None,
    config_dir: Path | None,
    log_file: Path | None,
) -> None:
    """Pick one line of piped input with a fuzzy query.

    Reads lines from stdin, lets you narrow them down by typing, and
    prints the chosen line to stdout.

    \b
    Keys:
      up / ctrl+p     move selection up
      down / ctrl+n   move selection down
      enter, click    choose the selected line
      esc             clear the query, or quit when it is empty
    """
    _configure_logging(ctx, log_file)

    overrides = MenuConfig(
        placeholder=placeholder,
        persistent=True if persistent else None,
    )
    try:
        config = ConfigManager(config_dir).resolve(overrides)
        candidates = read_candidates(sys.stdin)
    except MenuError as e:
        raise click.ClickException(str(e)) from e

    if filter_query is not None:
        ranked = rank(filter_query, candidates, config.scoring.to_score_config())
        for line in ranked:
            click.echo(line)
        ctx.exit(0 if ranked else 1)

    try:
        reattach_terminal()
    except MenuError as e:
        raise click.ClickException(str(e)) from e

    result = LineMenuApp(candidates, config).run()
    if result is None:
        logger.debug("Picker cancelled")
        ctx.exit(1)

    click.echo(result)


if __name__ == "__main__":
    main()
