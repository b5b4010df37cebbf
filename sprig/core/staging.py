"""Staging area implementation."""

import logging
import shutil
from enum import Enum
from pathlib import Path
from typing import Dict, Mapping, Set

from .errors import NothingToRemove
from .hash import hash_object

logger = logging.getLogger(__name__)


class RemoveOutcome(Enum):
    """What stage_remove did with a path."""

    UNSTAGED = 'unstaged'
    STAGED_FOR_REMOVAL = 'staged_for_removal'


class StagingArea:
    """
    The delta the next commit applies to its parent's tree.

    Pending additions are stored as files under staged_add/<path>
    holding the content to commit; pending removals as empty marker
    files under staged_rm/<path>. A path is never in both sets.
    """

    def __init__(self, ctx):
        """
        Args:
            ctx: RepositoryContext instance
        """
        self.ctx = ctx
        self.add_dir = ctx.staged_add_dir
        self.rm_dir = ctx.staged_rm_dir

    @staticmethod
    def _list(root: Path) -> list:
        if not root.exists():
            return []
        return sorted(
            p.relative_to(root).as_posix() for p in root.rglob('*') if p.is_file()
        )

    @staticmethod
    def _discard(root: Path, path: str) -> bool:
        target = root / path
        if not target.is_file():
            return False
        target.unlink()
        # Drop directories left empty by nested paths
        parent = target.parent
        while parent != root and not any(parent.iterdir()):
            parent.rmdir()
            parent = parent.parent
        return True

    def additions(self) -> Dict[str, bytes]:
        """Map of path -> staged content."""
        return {path: (self.add_dir / path).read_bytes() for path in self._list(self.add_dir)}

    def addition_hashes(self) -> Dict[str, str]:
        """Map of path -> blob hash of the staged content."""
        return {path: hash_object(data) for path, data in self.additions().items()}

    def removals(self) -> Set[str]:
        return set(self._list(self.rm_dir))

    def is_staged_for_addition(self, path: str) -> bool:
        return (self.add_dir / path).is_file()

    def is_staged_for_removal(self, path: str) -> bool:
        return (self.rm_dir / path).is_file()

    def is_empty(self) -> bool:
        return not self._list(self.add_dir) and not self._list(self.rm_dir)

    def stage_add(self, path: str, content: bytes, head_tree: Mapping[str, str]) -> bool:
        """
        Stage content for path.

        If content matches what the head commit tracks at path, any
        pending addition or removal of the path is cancelled instead.

        Args:
            path: Work-tree-relative path
            content: Bytes to commit
            head_tree: Tree of the current commit

        Returns:
            True if the content was staged, False if it matched HEAD
        """
        self._discard(self.rm_dir, path)

        if head_tree.get(path) == hash_object(content):
            self._discard(self.add_dir, path)
            logger.debug("%s matches HEAD; nothing staged", path)
            return False

        target = self.add_dir / path
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(content)
        logger.debug("Staged %s for addition", path)
        return True

    def stage_remove(self, path: str, head_tree: Mapping[str, str]) -> RemoveOutcome:
        """
        Stage path for removal.

        A pending addition is simply dropped. Otherwise a path tracked
        by HEAD is marked for removal; deleting the working copy is left
        to the caller.

        Raises:
            NothingToRemove: If path is neither staged nor tracked
        """
        staged = self.is_staged_for_addition(path)
        tracked = path in head_tree

        if not staged and not tracked:
            raise NothingToRemove()

        if staged:
            self._discard(self.add_dir, path)
            logger.debug("Unstaged %s", path)
            return RemoveOutcome.UNSTAGED

        self.mark_removal(path)
        return RemoveOutcome.STAGED_FOR_REMOVAL

    def mark_removal(self, path: str) -> None:
        """Record a pending removal, dropping any pending addition."""
        self._discard(self.add_dir, path)
        marker = self.rm_dir / path
        marker.parent.mkdir(parents=True, exist_ok=True)
        marker.touch()
        logger.debug("Staged %s for removal", path)

    def clear(self) -> None:
        """Empty both staging sets."""
        for root in (self.add_dir, self.rm_dir):
            if root.exists():
                shutil.rmtree(root)
            root.mkdir(parents=True)
        logger.debug("Cleared staging area")

    def __len__(self) -> int:
        return len(self._list(self.add_dir)) + len(self._list(self.rm_dir))

    def __repr__(self) -> str:
        return f"StagingArea(entries={len(self)})"
