"""Log commands - show commit history and search it."""

import click

from sprig.cli.output import format_commit, reports_errors
from sprig.cli.workspace import open_workspace


@click.command('log')
@reports_errors
def log_cmd():
    """
    Show the history of the current branch, newest first.

    Only first parents are followed. Merge commits show both parents
    on a Merge: line.
    """
    workspace = open_workspace()
    utc = workspace.config.log_utc
    for commit in workspace.log():
        click.echo(format_commit(commit, utc))


@click.command('global-log')
@reports_errors
def global_log_cmd():
    """Show every commit ever made, newest first."""
    workspace = open_workspace()
    utc = workspace.config.log_utc
    for commit in workspace.global_log():
        click.echo(format_commit(commit, utc))


@click.command('find')
@click.argument('message')
@reports_errors
def find_cmd(message):
    """
    Print the ids of all commits with exactly MESSAGE, one per line.

    Examples:
        sprig find "initial commit"
    """
    for commit_hash in open_workspace().find(message):
        click.echo(commit_hash)
