"""Click CLI interface definitions.

Defines the command-line interface structure and routes commands
to their respective runners.
"""

from __future__ import annotations

from pathlib import Path

import click
from dotenv import load_dotenv

from PipeUpgrade.cli.runner import CommandRunner
from PipeUpgrade.config import AppConfig, load_config, load_config_with_defaults
from PipeUpgrade.core.models import PLATFORM_BLOG_ID

DEFAULT_CONFIG_PATH = Path("config/default.yml")


def resolve_config(config_path: Path, default_path: Path = DEFAULT_CONFIG_PATH) -> AppConfig:
    """Load ``config_path`` layered over the default config when one exists.

    Args:
        config_path: File passed with ``--config``.
        default_path: Default config; skipped when missing or same as ``config_path``.

    Returns:
        Parsed application config.

    Raises:
        click.BadParameter: If the file cannot be read or does not validate.
    """
    try:
        if config_path != default_path and default_path.is_file():
            return load_config_with_defaults(config_path, default_path=default_path)
        return load_config(config_path)
    except (OSError, TypeError, ValueError) as e:
        raise click.BadParameter(str(e), param_hint="'--config'") from e


@click.group(help="pipe-upgrade: bring a Pipe installation's data to the running release.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path, dir_okay=False),
    default=DEFAULT_CONFIG_PATH,
    show_default=True,
    help="YAML config file; its keys override config/default.yml.",
)
@click.pass_context
def cli(ctx: click.Context, config_path: Path) -> None:
    """CLI entry group.

    Loads environment variables from .env file before processing config.
    """
    load_dotenv()

    ctx.obj = resolve_config(config_path)


@cli.command("upgrade")
@click.pass_context
def upgrade_cmd(ctx: click.Context) -> None:
    """Upgrade stored data from the previous release to this one.

    Does nothing when the data is already current or the platform is not
    initialized. Exits with status 1 when more than one release was skipped.
    """
    CommandRunner(ctx.obj).run_upgrade(action=ctx.command.name)


@cli.command("status")
@click.pass_context
def status_cmd(ctx: click.Context) -> None:
    """Show stored and running versions and what `upgrade` would do."""
    CommandRunner(ctx.obj).run_status(action=ctx.command.name)


@cli.command("init")
@click.option("--blog-id", type=click.IntRange(min=0), default=PLATFORM_BLOG_ID, show_default=True)
@click.option(
    "--version",
    "version",
    default=None,
    help="Version written to the marker (defaults to the running release).",
)
@click.pass_context
def init_cmd(ctx: click.Context, blog_id: int, version: str | None) -> None:
    """Create the version marker and default settings of a blog."""
    CommandRunner(ctx.obj).run_init(action=ctx.command.name, blog_id=blog_id, version=version)
