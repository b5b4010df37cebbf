"""Merge operations for Sprig."""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple

from sprig.core.errors import ForbiddenOperation, NotFound, UncommittedChanges
from sprig.operations.checkout import (
    check_untracked,
    delete_file,
    restore_tree,
    write_file,
)

logger = logging.getLogger(__name__)

CONFLICT_START = b"<<<<<<< HEAD\n"
CONFLICT_SEPARATOR = b"=======\n"
CONFLICT_END = b">>>>>>>\n"


class MergeOutcome(Enum):
    ANCESTOR = 'ancestor'
    FAST_FORWARD = 'fast-forward'
    MERGED = 'merged'


class FileAction(Enum):
    """What a three-way merge does with one path."""

    KEEP = 'keep'
    DELETE = 'delete'
    TAKE_THEIRS = 'take-theirs'
    CONFLICT = 'conflict'


@dataclass
class MergeConflict:
    """Represents a merge conflict in a file."""
    path: str
    base_hash: Optional[str]
    ours_hash: Optional[str]
    theirs_hash: Optional[str]

    def __repr__(self) -> str:
        return f"MergeConflict({self.path})"


@dataclass
class MergeResult:
    """Result of a merge operation."""
    outcome: MergeOutcome
    conflicts: List[MergeConflict] = field(default_factory=list)
    commit_hash: Optional[str] = None
    split_point: Optional[str] = None

    @property
    def has_conflicts(self) -> bool:
        return bool(self.conflicts)

    @property
    def message(self) -> str:
        if self.outcome is MergeOutcome.ANCESTOR:
            return "Given branch is an ancestor of the current branch."
        if self.outcome is MergeOutcome.FAST_FORWARD:
            return "Current branch fast-forwarded."
        if self.conflicts:
            return "Encountered a merge conflict."
        return ""

    def __repr__(self) -> str:
        return f"MergeResult({self.outcome.value}, conflicts={len(self.conflicts)})"


def classify(
    base: Optional[str], ours: Optional[str], theirs: Optional[str]
) -> FileAction:
    """
    Decide what to do with one path given its blob hash at the split
    point (base), the current branch (ours) and the given branch
    (theirs). None means the path is absent. Rules apply in order.
    """
    if ours == theirs:
        return FileAction.KEEP
    if ours is None and base == theirs:
        return FileAction.KEEP
    if theirs is None and base == ours:
        return FileAction.DELETE
    if base == ours and base != theirs:
        return FileAction.TAKE_THEIRS
    if base == theirs and base != ours:
        return FileAction.KEEP
    if ours is None and theirs is None:
        return FileAction.KEEP
    if ours is not None and theirs is None:
        return FileAction.KEEP
    if ours is None and theirs is not None:
        return FileAction.TAKE_THEIRS
    return FileAction.CONFLICT


def conflict_content(ours: Optional[bytes], theirs: Optional[bytes]) -> bytes:
    """Mark up both sides of a conflicted file."""
    return b''.join([
        CONFLICT_START,
        ours or b'',
        CONFLICT_SEPARATOR,
        theirs or b'',
        CONFLICT_END,
    ])


class MergeEngine:
    """
    Handles merging another branch into the current one.

    Supports:
    - Ancestor detection (nothing to do)
    - Fast-forward merges
    - Three-way merges with conflict markup and a two-parent commit
    """

    def __init__(self, workspace):
        """
        Args:
            workspace: Workspace instance
        """
        self.workspace = workspace
        self.ctx = workspace.ctx

    def plan(
        self,
        base_tree: Dict[str, str],
        ours_tree: Dict[str, str],
        theirs_tree: Dict[str, str],
    ) -> List[Tuple[str, FileAction]]:
        """Classify every path of the three trees, sorted by path."""
        all_paths = set(base_tree) | set(ours_tree) | set(theirs_tree)
        return [
            (path, classify(base_tree.get(path), ours_tree.get(path), theirs_tree.get(path)))
            for path in sorted(all_paths)
        ]

    def merge(self, branch: str) -> MergeResult:
        """
        Merge branch into the current branch.

        All preconditions are checked before the work tree, staging
        area or references change.

        Raises:
            UncommittedChanges: If the staging area is not empty
            NotFound: If branch does not exist
            ForbiddenOperation: If branch is the current branch
            UntrackedFileConflict: If the merge would clobber an untracked file
        """
        ws = self.workspace
        refs = ws.refs
        staging = ws.staging
        graph = ws.graph

        if not staging.is_empty():
            raise UncommittedChanges()

        theirs_hash = refs.get_branch(branch)
        if theirs_hash is None:
            raise NotFound("A branch with that name does not exist.")

        current_branch = refs.get_head_branch()
        if branch == current_branch:
            raise ForbiddenOperation("Cannot merge a branch with itself.")

        ours_hash = refs.head_commit_id()
        split_hash = graph.lowest_common_ancestor(ours_hash, theirs_hash)
        if split_hash is None:
            raise NotFound(f"No common ancestor with branch '{branch}'.")

        ours = graph.get(ours_hash)
        theirs = graph.get(theirs_hash)
        base = graph.get(split_hash)
        ours_tree = ours.tree
        theirs_tree = theirs.tree
        base_tree = base.tree

        check_untracked(self.ctx, ours_tree, set(theirs_tree) | set(base_tree))

        if split_hash == theirs_hash:
            logger.info("%s is an ancestor of %s", branch, current_branch)
            return MergeResult(MergeOutcome.ANCESTOR, split_point=split_hash)

        if split_hash == ours_hash:
            restore_tree(self.ctx, ours_tree, theirs_tree)
            refs.set_branch(current_branch, theirs_hash)
            staging.clear()
            logger.info("Fast-forwarded %s to %s", current_branch, theirs_hash[:7])
            return MergeResult(
                MergeOutcome.FAST_FORWARD,
                commit_hash=theirs_hash,
                split_point=split_hash,
            )

        plan = self.plan(base_tree, ours_tree, theirs_tree)

        # Load every blob the plan needs before touching the work tree
        writes: Dict[str, bytes] = {}
        conflicts: List[MergeConflict] = []
        deletions: List[str] = []
        for path, action in plan:
            if action is FileAction.TAKE_THEIRS:
                writes[path] = self.ctx.blobs.get(theirs_tree[path])
            elif action is FileAction.DELETE:
                deletions.append(path)
            elif action is FileAction.CONFLICT:
                ours_data = self._read(ours_tree.get(path))
                theirs_data = self._read(theirs_tree.get(path))
                writes[path] = conflict_content(ours_data, theirs_data)
                conflicts.append(MergeConflict(
                    path=path,
                    base_hash=base_tree.get(path),
                    ours_hash=ours_tree.get(path),
                    theirs_hash=theirs_tree.get(path),
                ))

        for path in deletions:
            delete_file(self.ctx, path)
            staging.mark_removal(path)

        for path, data in writes.items():
            write_file(self.ctx, path, data)
            self.ctx.blobs.put(data)
            staging.stage_add(path, data, ours_tree)

        for conflict in conflicts:
            logger.info("Merge conflict in %s", conflict.path)

        commit_hash = ws.record_commit(
            f"Merged {branch} into {current_branch}.",
            second_parent=theirs_hash,
            allow_empty=True,
        )
        return MergeResult(
            MergeOutcome.MERGED,
            conflicts=conflicts,
            commit_hash=commit_hash,
            split_point=split_hash,
        )

    def _read(self, blob_hash: Optional[str]) -> Optional[bytes]:
        if blob_hash is None:
            return None
        return self.ctx.blobs.get(blob_hash)
