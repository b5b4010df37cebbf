"""Working tree status computation."""

from dataclasses import dataclass, field
from typing import List, Mapping, Set, Tuple

from sprig.core.hash import hash_file

MODIFIED = 'modified'
DELETED = 'deleted'


@dataclass
class StatusReport:
    """Everything `status` prints, already sorted."""
    current_branch: str
    branches: List[str] = field(default_factory=list)
    staged: List[str] = field(default_factory=list)
    removed: List[str] = field(default_factory=list)
    unstaged: List[Tuple[str, str]] = field(default_factory=list)
    untracked: List[str] = field(default_factory=list)

    @property
    def is_clean(self) -> bool:
        return not (self.staged or self.removed or self.unstaged or self.untracked)


def compute_status(
    ctx,
    current_branch: str,
    branches: List[str],
    head_tree: Mapping[str, str],
    staged_hashes: Mapping[str, str],
    removals: Set[str],
) -> StatusReport:
    """
    Compare HEAD, the staging area and the work tree.

    Unstaged modifications are files that are:
    - tracked by HEAD, changed in the work tree and not staged;
    - staged for addition with different work tree contents;
    - staged for addition but deleted from the work tree;
    - tracked by HEAD, not staged for removal, and deleted.

    Untracked files are present in the work tree, not staged for
    addition, and either unknown to HEAD or staged for removal.
    """
    working = {path: hash_file(ctx.work_path(path)) for path in ctx.working_files()}

    unstaged = []
    for path in sorted(set(head_tree) | set(staged_hashes)):
        if path in staged_hashes:
            if path not in working:
                unstaged.append((path, DELETED))
            elif working[path] != staged_hashes[path]:
                unstaged.append((path, MODIFIED))
        elif path in removals:
            continue
        elif path not in working:
            unstaged.append((path, DELETED))
        elif working[path] != head_tree[path]:
            unstaged.append((path, MODIFIED))

    untracked = [
        path for path in sorted(working)
        if path not in staged_hashes and (path not in head_tree or path in removals)
    ]

    return StatusReport(
        current_branch=current_branch,
        branches=sorted(branches),
        staged=sorted(staged_hashes),
        removed=sorted(removals),
        unstaged=unstaged,
        untracked=untracked,
    )
