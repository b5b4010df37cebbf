"""Reference management for Sprig."""

import logging
from typing import List, Optional, Tuple

from .errors import InvalidOperands, NotFound

logger = logging.getLogger(__name__)

HEADS_PREFIX = 'refs/heads/'


class RefManager:
    """
    Manages branch references and HEAD.

    Handles:
    - Branch references (refs/heads/<name>, one file per branch)
    - HEAD, a symbolic pointer to the current branch
    """

    def __init__(self, ctx):
        """
        Args:
            ctx: RepositoryContext instance
        """
        self.ctx = ctx
        self.heads_dir = ctx.heads_dir
        self.head_file = ctx.head_file

    def _branch_path(self, name: str):
        """
        Map a branch name to its reference file.

        Raises:
            InvalidOperands: If the name would leave refs/heads
        """
        if not name or name.startswith('/') or '\\' in name:
            raise InvalidOperands(f"Invalid branch name: {name!r}")
        if any(part in ('', '.', '..') for part in name.split('/')):
            raise InvalidOperands(f"Invalid branch name: {name!r}")

        branch_path = self.heads_dir / name
        heads_dir = self.heads_dir.resolve()
        if heads_dir not in branch_path.resolve().parents:
            raise InvalidOperands(f"Invalid branch name: {name!r}")
        return branch_path

    def get_branch(self, name: str) -> Optional[str]:
        """
        Read a branch and return its commit hash.

        Returns:
            Commit hash, or None if no such branch exists
        """
        branch_path = self._branch_path(name)
        if branch_path.is_file():
            return branch_path.read_text().strip()
        return None

    def branch_exists(self, name: str) -> bool:
        return self._branch_path(name).is_file()

    def set_branch(self, name: str, commit_hash: str) -> None:
        """
        Create or overwrite a branch.

        Raises:
            NotFound: If commit_hash is not a stored commit
        """
        if not self.ctx.commits.contains(commit_hash):
            raise NotFound("No commit with that id exists.")

        branch_path = self._branch_path(name)
        branch_path.parent.mkdir(parents=True, exist_ok=True)
        branch_path.write_text(commit_hash + '\n')
        logger.debug("Branch %s -> %s", name, commit_hash[:7])

    def delete_branch(self, name: str) -> bool:
        """
        Delete a branch reference.

        Returns:
            True if deleted, False if not found
        """
        branch_path = self._branch_path(name)
        if not branch_path.is_file():
            return False
        branch_path.unlink()
        logger.debug("Deleted branch %s", name)
        return True

    def list_branches(self) -> List[Tuple[str, str]]:
        """
        List all branches.

        Returns:
            List of (branch_name, commit_hash) tuples sorted by name
        """
        if not self.heads_dir.exists():
            return []

        branches = []
        for branch_file in self.heads_dir.rglob('*'):
            if branch_file.is_file():
                branch_name = branch_file.relative_to(self.heads_dir).as_posix()
                branches.append((branch_name, branch_file.read_text().strip()))

        return sorted(branches, key=lambda x: x[0])

    def set_head(self, name: str) -> None:
        """Point HEAD at a branch. Callers ensure the branch exists."""
        self._branch_path(name)
        self.head_file.write_text(f'{HEADS_PREFIX}{name}\n')
        logger.debug("HEAD -> %s", name)

    def get_head_branch(self) -> str:
        """Get the current branch name."""
        content = self.head_file.read_text().strip()
        if content.startswith(HEADS_PREFIX):
            return content[len(HEADS_PREFIX):]
        return content

    def head_commit_id(self) -> str:
        """
        Resolve HEAD to a commit hash.

        Raises:
            NotFound: If HEAD names a branch with no reference
        """
        branch = self.get_head_branch()
        commit_hash = self.get_branch(branch)
        if commit_hash is None:
            raise NotFound(f"HEAD names missing branch '{branch}'")
        return commit_hash
