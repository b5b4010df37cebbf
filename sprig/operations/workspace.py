"""High-level Sprig operations on a repository and its work tree."""

import logging
from typing import List, Optional

from sprig.core.config import get_config
from sprig.core.errors import (
    AlreadyExists,
    ForbiddenOperation,
    InvalidOperands,
    NotFound,
)
from sprig.core.objects import Commit
from sprig.core.refs import RefManager
from sprig.core.staging import RemoveOutcome, StagingArea
from sprig.operations.checkout import (
    check_untracked,
    checkout_file,
    delete_file,
    restore_tree,
)
from sprig.operations.graph import CommitGraph, build_tree
from sprig.operations.status import StatusReport, compute_status

logger = logging.getLogger(__name__)


class Workspace:
    """
    Runs Sprig commands against one repository.

    Each public method is one command. Every precondition is checked
    before the first write to the work tree, staging area or refs.
    Paths are POSIX paths relative to the work tree root.
    """

    def __init__(self, ctx):
        """
        Args:
            ctx: RepositoryContext instance
        """
        self.ctx = ctx

        # Initialize managers lazily
        self._refs = None
        self._staging = None
        self._graph = None
        self._merge_engine = None

    @property
    def refs(self) -> RefManager:
        if self._refs is None:
            self._refs = RefManager(self.ctx)
        return self._refs

    @property
    def staging(self) -> StagingArea:
        if self._staging is None:
            self._staging = StagingArea(self.ctx)
        return self._staging

    @property
    def graph(self) -> CommitGraph:
        if self._graph is None:
            self._graph = CommitGraph(self.ctx.commits)
        return self._graph

    @property
    def merge_engine(self):
        if self._merge_engine is None:
            from sprig.operations.merge import MergeEngine
            self._merge_engine = MergeEngine(self)
        return self._merge_engine

    @property
    def config(self):
        return get_config(self.ctx)

    def init(self) -> str:
        """
        Create the repository with its initial commit on the default branch.

        Returns:
            Hash of the initial commit

        Raises:
            AlreadyExists: If a repository is already present
        """
        config = self.config
        self.ctx.create_layout()

        commit = Commit.initial(config.initial_message)
        commit_hash = self.ctx.commits.put_commit(commit)

        branch = config.default_branch
        self.refs.set_branch(branch, commit_hash)
        self.refs.set_head(branch)
        logger.info("Initialized repository in %s on %s", self.ctx.sprig_dir, branch)
        return commit_hash

    def head_commit(self) -> Commit:
        self.ctx.require_initialized()
        return self.graph.get(self.refs.head_commit_id())

    def resolve_commit(self, commit_id: str) -> Commit:
        """
        Look up a commit by full or abbreviated hash.

        Raises:
            NotFound: If no single commit matches
        """
        full_hash = self.ctx.commits.resolve_prefix(commit_id)
        if full_hash is None:
            raise NotFound("No commit with that id exists.")
        return self.graph.get(full_hash)

    def add(self, path: str) -> bool:
        """
        Stage the work tree version of path.

        Returns:
            True if staged, False if it matched the current commit

        Raises:
            NotFound: If path is not a file in the work tree
        """
        head = self.head_commit()
        file_path = self.ctx.work_path(path)
        if not file_path.is_file():
            raise NotFound("File does not exist.")

        data = file_path.read_bytes()
        staged = self.staging.stage_add(path, data, head.tree)
        if staged:
            self.ctx.blobs.put(data)
        return staged

    def commit(self, message: str) -> str:
        """
        Commit the staging area on the current branch.

        Raises:
            InvalidOperands: If message is empty
            NothingStaged: If the staging area is empty
        """
        self.ctx.require_initialized()
        if not message or not message.strip():
            raise InvalidOperands("Please enter a commit message.")
        return self.record_commit(message)

    def record_commit(
        self,
        message: str,
        second_parent: Optional[str] = None,
        allow_empty: bool = False,
    ) -> str:
        """
        Build a commit from HEAD plus the staging area and advance the
        current branch to it.

        Returns:
            Hash of the new commit
        """
        head = self.head_commit()
        additions = {
            path: self.ctx.blobs.put(data)
            for path, data in self.staging.additions().items()
        }
        tree = build_tree(head.tree, additions, self.staging.removals(), allow_empty)

        commit = Commit.create(message, tree, head.id, second_parent)
        commit_hash = self.ctx.commits.put_commit(commit)

        branch = self.refs.get_head_branch()
        self.refs.set_branch(branch, commit_hash)
        self.staging.clear()
        logger.info("Created commit %s on %s", commit_hash[:7], branch)
        return commit_hash

    def remove(self, path: str) -> RemoveOutcome:
        """
        Unstage path, and stop tracking it if the current commit does.

        Raises:
            NothingToRemove: If path is neither staged nor tracked
        """
        head = self.head_commit()
        outcome = self.staging.stage_remove(path, head.tree)
        if outcome is RemoveOutcome.STAGED_FOR_REMOVAL:
            delete_file(self.ctx, path)
        return outcome

    def branch(self, name: str) -> str:
        """
        Create a branch at the current commit.

        Raises:
            AlreadyExists: If the branch exists
        """
        head = self.head_commit()
        if self.refs.branch_exists(name):
            raise AlreadyExists("A branch with that name already exists.")
        self.refs.set_branch(name, head.id)
        return head.id

    def remove_branch(self, name: str) -> None:
        """
        Delete a branch pointer; its commits stay in the store.

        Raises:
            NotFound: If the branch does not exist
            ForbiddenOperation: If it is the current branch
        """
        self.ctx.require_initialized()
        if not self.refs.branch_exists(name):
            raise NotFound("A branch with that name does not exist.")
        if name == self.refs.get_head_branch():
            raise ForbiddenOperation("Cannot remove the current branch.")
        self.refs.delete_branch(name)

    def checkout_branch(self, name: str) -> None:
        """
        Switch to branch name, replacing the tracked files in the work tree.

        Raises:
            NotFound: If the branch does not exist
            ForbiddenOperation: If it is already the current branch
            UntrackedFileConflict: If an untracked file would be overwritten
        """
        head = self.head_commit()
        target_hash = self.refs.get_branch(name)
        if target_hash is None:
            raise NotFound("No such branch exists.")
        if name == self.refs.get_head_branch():
            raise ForbiddenOperation("No need to checkout the current branch.")

        target = self.graph.get(target_hash)
        self._restore(head, target)
        self.refs.set_head(name)
        logger.info("Switched to branch %s", name)

    def checkout_file(self, path: str, commit_id: Optional[str] = None) -> None:
        """
        Overwrite path in the work tree with its version in a commit
        (HEAD by default). The staging area is not touched.

        Raises:
            NotFound: If the commit does not exist or does not track path
        """
        if commit_id is None:
            commit = self.head_commit()
        else:
            self.ctx.require_initialized()
            commit = self.resolve_commit(commit_id)

        blob_hash = commit.blob_for(path)
        if blob_hash is None:
            raise NotFound("File does not exist in that commit.")
        checkout_file(self.ctx, path, blob_hash)

    def reset(self, commit_id: str) -> None:
        """
        Move the current branch to a commit and check out its files.

        Raises:
            NotFound: If the commit does not exist
            UntrackedFileConflict: If an untracked file would be overwritten
        """
        head = self.head_commit()
        target = self.resolve_commit(commit_id)
        self._restore(head, target)
        self.refs.set_branch(self.refs.get_head_branch(), target.id)
        logger.info("Reset to %s", target.id[:7])

    def _restore(self, head: Commit, target: Commit) -> None:
        head_tree = head.tree
        target_tree = target.tree
        check_untracked(self.ctx, head_tree, target_tree)
        restore_tree(self.ctx, head_tree, target_tree)
        self.staging.clear()

    def merge(self, branch: str):
        """Merge branch into the current branch. See MergeEngine.merge."""
        self.ctx.require_initialized()
        return self.merge_engine.merge(branch)

    def log(self) -> List[Commit]:
        """First-parent history of HEAD, newest first."""
        head = self.head_commit()
        return list(self.graph.first_parent_history(head.id))

    def global_log(self) -> List[Commit]:
        """Every commit ever made, newest first."""
        self.ctx.require_initialized()
        return sorted(
            self.graph.all_commits(),
            key=lambda c: (c.timestamp, c.id),
            reverse=True,
        )

    def find(self, message: str) -> List[str]:
        """
        Hashes of all commits whose message equals message.

        Raises:
            NotFound: If there are none
        """
        self.ctx.require_initialized()
        matches = [c.id for c in self.graph.all_commits() if c.message == message]
        if not matches:
            raise NotFound("Found no commit with that message.")
        return matches

    def status(self) -> StatusReport:
        head = self.head_commit()
        return compute_status(
            self.ctx,
            current_branch=self.refs.get_head_branch(),
            branches=[name for name, _ in self.refs.list_branches()],
            head_tree=head.tree,
            staged_hashes=self.staging.addition_hashes(),
            removals=self.staging.removals(),
        )

    def __repr__(self) -> str:
        return f"Workspace(path={self.ctx.work_tree})"
