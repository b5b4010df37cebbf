"""Commit graph traversal: history walks, ancestry and merge bases."""

import logging
from collections import deque
from typing import Dict, Iterator, Mapping, Optional, Set

from sprig.core.errors import NotFound, NothingStaged
from sprig.core.objects import Commit

logger = logging.getLogger(__name__)


def build_tree(
    parent_tree: Mapping[str, str],
    staged_adds: Mapping[str, str],
    staged_removes: Set[str],
    allow_empty: bool = False,
) -> Dict[str, str]:
    """
    Apply staged changes to a parent snapshot.

    Args:
        parent_tree: path -> blob hash of the parent commit
        staged_adds: path -> blob hash of pending additions
        staged_removes: paths pending removal
        allow_empty: Accept an empty staging area (merge commits)

    Returns:
        New path -> blob hash mapping

    Raises:
        NothingStaged: If nothing is staged and allow_empty is False
    """
    if not staged_adds and not staged_removes and not allow_empty:
        raise NothingStaged()

    tree = dict(parent_tree)
    tree.update(staged_adds)
    for path in staged_removes:
        tree.pop(path, None)
    return tree


class CommitGraph:
    """
    Read access to the commit DAG.

    Commits are loaded from the commit store on first use and memoized
    here, so parent resolution never touches the commit objects themselves.
    """

    def __init__(self, commits):
        """
        Args:
            commits: CommitStore instance
        """
        self.commits = commits
        self._cache: Dict[str, Commit] = {}

    def get(self, commit_hash: str) -> Commit:
        """
        Load a commit.

        Raises:
            NotFound: If no commit has that hash
        """
        commit = self._cache.get(commit_hash)
        if commit is None:
            try:
                commit = self.commits.get_commit(commit_hash)
            except NotFound:
                raise NotFound("No commit with that id exists.")
            self._cache[commit_hash] = commit
        return commit

    def contains(self, commit_hash: Optional[str]) -> bool:
        return bool(commit_hash) and (
            commit_hash in self._cache or self.commits.contains(commit_hash)
        )

    def resolve_parent(self, commit: Commit) -> Optional[Commit]:
        """Return the first parent commit, or None for the initial commit."""
        if commit.parent is None:
            return None
        return self.get(commit.parent)

    def resolve_second_parent(self, commit: Commit) -> Optional[Commit]:
        if commit.second_parent is None:
            return None
        return self.get(commit.second_parent)

    def first_parent_history(self, start: str) -> Iterator[Commit]:
        """Yield start and its first-parent ancestors, newest first."""
        commit = self.get(start)
        while commit is not None:
            yield commit
            commit = self.resolve_parent(commit)

    def all_commits(self) -> Iterator[Commit]:
        """Yield every stored commit, reachable or not."""
        for commit_hash in self.commits.ids():
            yield self.get(commit_hash)

    def ancestor_distances(self, start: str) -> Dict[str, int]:
        """
        Breadth-first walk over both parent links.

        Returns:
            Dict mapping each ancestor hash (start included, at 0) to its
            shortest distance in parent hops from start
        """
        distances = {start: 0}
        queue = deque([start])

        while queue:
            current = queue.popleft()
            for parent in self.get(current).parents:
                if parent not in distances:
                    distances[parent] = distances[current] + 1
                    queue.append(parent)

        return distances

    def is_ancestor(self, ancestor: str, descendant: str) -> bool:
        return ancestor in self.ancestor_distances(descendant)

    def lowest_common_ancestor(self, a: str, b: str) -> Optional[str]:
        """
        Find the split point of two commits.

        If b is an ancestor of a, b is returned directly. Otherwise the
        graph is walked breadth-first from b, and every commit also
        reachable from a is scored by the larger of its two distances;
        the lowest score wins, ties going to the first found from b.

        Returns:
            Hash of the split point, or None if either commit is missing
            or they share no history
        """
        if not self.contains(a) or not self.contains(b):
            return None
        if a == b:
            return a

        dist_a = self.ancestor_distances(a)
        if b in dist_a:
            return b

        best = None
        best_score = None
        dist_b = {b: 0}
        queue = deque([b])

        while queue:
            current = queue.popleft()
            if current in dist_a:
                score = max(dist_a[current], dist_b[current])
                if best_score is None or score < best_score:
                    best, best_score = current, score
            for parent in self.get(current).parents:
                if parent not in dist_b:
                    dist_b[parent] = dist_b[current] + 1
                    queue.append(parent)

        logger.debug("Split point of %s and %s: %s", a[:7], b[:7], best and best[:7])
        return best
