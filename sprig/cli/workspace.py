"""Locate the repository and translate user paths for CLI commands."""

from pathlib import Path

from sprig.core.errors import InvalidOperands, NotInitialized
from sprig.core.repository import SPRIG_DIR, RepositoryContext
from sprig.operations.workspace import Workspace


def open_workspace() -> Workspace:
    """
    Find the repository containing the current directory.

    Raises:
        NotInitialized: If there is none
    """
    ctx = RepositoryContext.find_repository()
    if ctx is None:
        raise NotInitialized()
    return Workspace(ctx)


def to_repo_path(workspace: Workspace, user_path: str) -> str:
    """
    Convert a path typed by the user into a work-tree-relative POSIX path.

    Raises:
        InvalidOperands: If the path lies outside the work tree
    """
    path = Path(user_path)
    if not path.is_absolute():
        path = Path.cwd() / path

    # Resolve the parent only, so a deleted file still maps to its path
    resolved = path.parent.resolve() / path.name
    try:
        rel_path = resolved.relative_to(workspace.ctx.work_tree)
    except ValueError:
        raise InvalidOperands(f"Path is outside the repository: {user_path}")

    if not rel_path.parts or rel_path.parts[0] == SPRIG_DIR:
        raise InvalidOperands()
    return rel_path.as_posix()
