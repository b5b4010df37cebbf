"""Config command - read and write configuration."""

import click

from sprig.core.config import get_config
from sprig.core.errors import InvalidOperands, NotFound
from sprig.core.repository import RepositoryContext
from sprig.cli.output import reports_errors


def split_key(key):
    """Split 'section.key' into its parts."""
    section, _, option = key.partition('.')
    if not section or not option:
        raise InvalidOperands(f"Key must look like section.key: {key}")
    return section.lower(), option.lower()


@click.command('config')
@click.argument('key')
@click.argument('value', required=False)
@click.option('--global', 'is_global', is_flag=True, help='Use the global config file')
@reports_errors
def config_cmd(key, value, is_global):
    """
    Get or set a configuration value.

    With VALUE, KEY is written to the repository config (or ~/.sprigconfig
    with --global). Without VALUE, the effective value is printed.

    Examples:
        sprig config init.defaultbranch main --global
        sprig config log.utc true
        sprig config log.utc
    """
    section, option = split_key(key)

    ctx = None if is_global else RepositoryContext.find_repository()
    if value is not None and not is_global and ctx is None:
        raise InvalidOperands("Not in a Sprig repository (use --global)")

    config = get_config(ctx)
    if value is not None:
        config.set(section, option, value, global_config=is_global)
        return

    current = config.get(section, option)
    if current is None:
        raise NotFound(f"No value set for {key}.")
    click.echo(current)
