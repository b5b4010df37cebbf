"""Reset command - move the current branch to a commit."""

import click

from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace


@click.command('reset')
@click.argument('commit')
@reports_errors
def reset_cmd(commit):
    """
    Check out every file of COMMIT and move the current branch to it.

    Files tracked by the current commit but not by COMMIT are deleted,
    and the staging area is cleared. COMMIT may be abbreviated.

    Examples:
        sprig reset a1b2c3d
    """
    open_workspace().reset(commit)
