"""Branch commands - create and remove branches."""

import click

from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace


@click.command('branch')
@click.argument('name')
@reports_errors
def branch_cmd(name):
    """
    Create a branch pointing at the current commit.

    The new branch is not checked out.

    Examples:
        sprig branch feature
    """
    open_workspace().branch(name)


@click.command('remove-branch')
@click.argument('name')
@reports_errors
def rm_branch_cmd(name):
    """
    Delete a branch pointer. Commits made on it are kept.

    Examples:
        sprig remove-branch feature
        sprig rm-branch feature
    """
    open_workspace().remove_branch(name)
