"""CLI entry point for commitlens.

Commands:
  summarize  post one summary comment per commit of a pull request
"""

from __future__ import annotations

import importlib.metadata
import logging

import click

from commitlens_cli.commands.summarize import summarize_cmd


@click.group()
@click.version_option(
    version=importlib.metadata.version("commitlens"),
    prog_name="commitlens",
)
@click.option(
    "--config",
    "config_path",
    default=".commitlens.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="COMMITLENS_CONFIG",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, config_path: str, verbose: bool):
    """Summarize each commit of a GitHub pull request as a review comment."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


main.add_command(summarize_cmd)
