"""Add command - stage a file for commit."""

import click

from sprig.cli.output import reports_errors
from sprig.cli.workspace import open_workspace, to_repo_path


@click.command('add')
@click.argument('path')
@reports_errors
def add_cmd(path):
    """
    Add a file's current contents to the staging area.

    Staging a file identical to the committed version unstages it
    instead, and cancels a pending removal.

    Examples:
        sprig add notes.txt
    """
    workspace = open_workspace()
    workspace.add(to_repo_path(workspace, path))
