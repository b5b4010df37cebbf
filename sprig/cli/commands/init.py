"""Initialize a new Sprig repository."""

import click

from sprig.core.repository import RepositoryContext
from sprig.operations.workspace import Workspace
from sprig.cli.output import reports_errors


@click.command('init')
@reports_errors
def init_cmd():
    """
    Initialize a new Sprig repository in the current directory.

    Creates a .sprig directory holding the object store, branch
    references and staging area, and records the initial commit on
    the default branch (init.defaultbranch, 'master' unless configured).

    Examples:
        sprig init
    """
    Workspace(RepositoryContext('.')).init()
