"""Commit command - create a commit from staged changes."""

import click

from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace


@click.command('commit')
@click.argument('message', required=False, default='')
@reports_errors
def commit_cmd(message):
    """
    Record the staged changes as a new commit on the current branch.

    The new commit's snapshot is the current commit's snapshot with
    staged additions applied and staged removals dropped. The staging
    area is cleared afterwards.

    Examples:
        sprig commit "Fix typo in README"
    """
    open_workspace().commit(message)
