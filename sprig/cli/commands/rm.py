"""Remove command - unstage or stop tracking a file."""

import click

from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace, to_repo_path


@click.command('remove')
@click.argument('path')
@reports_errors
def rm_cmd(path):
    """
    Unstage a file, and stop tracking it if the current commit does.

    A tracked file is staged for removal and deleted from the work tree.

    Examples:
        sprig remove old.txt
        sprig rm old.txt
    """
    workspace = open_workspace()
    workspace.remove(to_repo_path(workspace, path))
