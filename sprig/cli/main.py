"""Main CLI entry point for Sprig."""

import logging

import click
from colorama import init

from sprig import __version__
from sprig.cli.commands import (init_cmd, add_cmd, commit_cmd, rm_cmd, branch_cmd,
                                rm_branch_cmd, checkout_cmd, reset_cmd, merge_cmd,
                                log_cmd, global_log_cmd, find_cmd, status_cmd,
                                config_cmd)

# Initialize colorama for cross-platform colored output
init(autoreset=True)

LOG_FORMAT = '%(levelname)s:%(name)s:%(message)s'


@click.group()
@click.version_option(version=__version__)
@click.option('--verbose', '-v', is_flag=True, help='Log internal operations to stderr')
def cli(verbose):
    """Sprig - a small version-control system."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        force=True,
    )


# Register commands
cli.add_command(init_cmd)
cli.add_command(add_cmd)
cli.add_command(commit_cmd)
cli.add_command(rm_cmd)
cli.add_command(rm_cmd, name='rm')
cli.add_command(branch_cmd)
cli.add_command(rm_branch_cmd)
cli.add_command(rm_branch_cmd, name='rm-branch')
cli.add_command(checkout_cmd)
cli.add_command(reset_cmd)
cli.add_command(merge_cmd)
cli.add_command(log_cmd)
cli.add_command(global_log_cmd)
cli.add_command(find_cmd)
cli.add_command(status_cmd)
cli.add_command(config_cmd)


def main():
    """Main entry point."""
    cli()


if __name__ == '__main__':
    main()
