"""Command-line runner for the scoreboard protocol."""

import logging
from typing import Iterable, TextIO

import click

from .contest import ContestState, apply_command, default_state
from .protocol import iter_commands

logger = logging.getLogger(__name__)


def run(lines: Iterable[str], out: TextIO, state: ContestState | None = None) -> ContestState:
    """Feed protocol lines to a contest until END or end of input."""
    state = state if state is not None else default_state()
    for cmd in iter_commands(lines):
        outcome = apply_command(state, cmd)
        for line in outcome.lines:
            out.write(line + "\n")
        if outcome.stop:
            break
    return state


@click.command()
@click.version_option(version="1.0.0")
@click.argument("source", type=click.File("r"), default="-")
@click.option(
    "-o",
    "--output",
    type=click.File("w"),
    default="-",
    help="Where to write protocol output (default: stdout).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Diagnostics level; logs go to stderr.",
)
def cli(source, output, log_level):
    """Run an ICPC contest from SOURCE (a command file, or stdin)."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(levelname)s %(name)s: %(message)s",
    )
    state = run(source, output)
    logger.info(
        f"Processed contest: {len(state.team_list)} teams, "
        f"started={state.started}, ended={state.ended}"
    )


if __name__ == "__main__":
    cli()
