"""Entry point for the `slrf` command group."""

from __future__ import annotations

import logging

import click

from slr_filter.cli.filter_cli import filter_command
from slr_filter.cli.predict_cli import predict_command
from slr_filter.cli.smooth_cli import smooth_command


@click.group()
@click.version_option(package_name="slr-filter")
@click.option("--verbose", "-v", count=True, help="Increase log verbosity (-v info, -vv debug).")
def cli(verbose: int) -> None:
    """slr-filter CLI for SLR residual filtering and prediction."""
    level = logging.WARNING
    if verbose == 1:
        level = logging.INFO
    elif verbose >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


cli.add_command(filter_command)
cli.add_command(predict_command)
cli.add_command(smooth_command)


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
