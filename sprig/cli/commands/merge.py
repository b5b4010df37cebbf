"""Merge command for Sprig."""

import click

from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace


@click.command('merge')
@click.argument('branch')
@reports_errors
def merge_cmd(branch):
    """
    Merge BRANCH into the current branch.

    If BRANCH is already contained in the current branch nothing happens;
    if the current branch is contained in BRANCH it is fast-forwarded.
    Otherwise a merge commit with two parents is created. Conflicting
    files are written with both versions between conflict markers and
    are committed as they stand.

    Examples:
        sprig merge feature
    """
    result = open_workspace().merge(branch)
    if result.message:
        click.echo(result.message)
