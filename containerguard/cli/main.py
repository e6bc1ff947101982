#!/usr/bin/env python3
"""
ContainerGuard CLI

Main command-line interface entry point.
"""

import logging
import sys

import click

from containerguard import __version__
from containerguard.config import get_config
from containerguard.observability.logging import setup_logging

logger = logging.getLogger(__name__)


@click.group()
@click.version_option(version=__version__)
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose logging")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-error output")
@click.option(
    "--log-format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default=None,
    help="Log format (default: LOG_FORMAT or text)",
)
@click.option(
    "--log-file",
    type=click.Path(dir_okay=False, writable=True),
    default=None,
    help="Also write logs to this file",
)
@click.pass_context
def cli(ctx, verbose, quiet, log_format, log_file):
    """
    ContainerGuard: vulnerability audit for running containers

    Detects the OS and installed packages of every running container and
    checks them against the Vulners audit API. The Docker connection is
    taken from DOCKER_HOST and related environment variables.
    """
    try:
        config = get_config()
    except ValueError as e:
        click.echo(f"Invalid configuration: {e}", err=True)
        sys.exit(1)

    if verbose:
        log_level = "DEBUG"
    elif quiet:
        log_level = "ERROR"
    else:
        log_level = config.log_level

    setup_logging(
        log_level=log_level,
        log_format=log_format or config.log_format,
        log_file=log_file,
    )

    ctx.ensure_object(dict)
    ctx.obj["config"] = config
    ctx.obj["quiet"] = quiet


@cli.command()
@click.option(
    "--format",
    "-f",
    "output_format",
    type=click.Choice(["text", "json"], case_sensitive=False),
    default="text",
    help="Report format",
)
@click.option(
    "--output",
    "-o",
    "output_path",
    type=click.Path(dir_okay=False, writable=True),
    help="Write the report to a file instead of stdout",
)
@click.option(
    "--continue-on-error",
    is_flag=True,
    help="Record a failing container and keep scanning the rest",
)
@click.option(
    "--fail-on-vulnerable",
    is_flag=True,
    help="Exit with status 2 when any container has vulnerabilities",
)
@click.option("--vulners-url", default=None, help="Vulners audit endpoint URL")
@click.option("--timeout", type=float, default=None, help="Vulners request timeout in seconds")
@click.option("--no-color", is_flag=True, help="Disable colored output")
@click.pass_context
def scan(ctx, output_format, output_path, continue_on_error, fail_on_vulnerable,
         vulners_url, timeout, no_color):
    """
    Scan all running containers for known vulnerabilities.

    Example:
        containerguard scan --format json --output report.json
    """
    from containerguard.cli.commands.scan import execute_scan

    exit_code = execute_scan(
        config=ctx.obj["config"],
        output_format=output_format.lower(),
        output_path=output_path,
        continue_on_error=continue_on_error or None,
        fail_on_vulnerable=fail_on_vulnerable,
        vulners_url=vulners_url,
        timeout=timeout,
        no_color=no_color,
        quiet=ctx.obj["quiet"],
    )
    sys.exit(exit_code)


def main():
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
