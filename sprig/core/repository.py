"""Repository paths and layout for Sprig."""

import logging
from pathlib import Path
from typing import Optional

from .errors import AlreadyExists, NotInitialized
from .store import BlobStore, CommitStore

logger = logging.getLogger(__name__)

SPRIG_DIR = '.sprig'


class RepositoryContext:
    """
    Holds every path a Sprig repository uses.

    A context is passed explicitly to each component, so several
    repositories (for example temporary ones in tests) can coexist
    in one process.
    """

    def __init__(self, path: str = '.'):
        """
        Args:
            path: Path to the work tree root (defaults to current directory)
        """
        self.work_tree = Path(path).resolve()
        self.sprig_dir = self.work_tree / SPRIG_DIR
        self.objects_dir = self.sprig_dir / 'objects'
        self.blobs_dir = self.objects_dir / 'blobs'
        self.commits_dir = self.objects_dir / 'commits'
        self.refs_dir = self.sprig_dir / 'refs'
        self.heads_dir = self.refs_dir / 'heads'
        self.head_file = self.sprig_dir / 'HEAD'
        self.staged_add_dir = self.sprig_dir / 'staged_add'
        self.staged_rm_dir = self.sprig_dir / 'staged_rm'
        self.config_file = self.sprig_dir / 'config'

        self.blobs = BlobStore(self.blobs_dir)
        self.commits = CommitStore(self.commits_dir)

    @property
    def is_initialized(self) -> bool:
        return self.sprig_dir.is_dir()

    def require_initialized(self) -> 'RepositoryContext':
        if not self.is_initialized:
            raise NotInitialized()
        return self

    def create_layout(self) -> None:
        """
        Create the .sprig directory structure:

        .sprig/
        ├── objects/
        │   ├── blobs/      # File contents
        │   └── commits/    # Commit records
        ├── refs/heads/     # Branch references
        ├── staged_add/     # Pending additions
        ├── staged_rm/      # Pending removals
        ├── HEAD            # Current branch
        └── config          # Repository configuration

        Raises:
            AlreadyExists: If a repository is already present
        """
        if self.sprig_dir.exists():
            raise AlreadyExists()

        for directory in (
            self.sprig_dir,
            self.blobs_dir,
            self.commits_dir,
            self.heads_dir,
            self.staged_add_dir,
            self.staged_rm_dir,
        ):
            directory.mkdir(parents=True)

        self.config_file.write_text('[core]\n\trepositoryformatversion = 0\n')
        logger.debug("Created repository layout in %s", self.sprig_dir)

    def working_files(self) -> list:
        """
        List files in the work tree as POSIX paths relative to its root.

        The repository directory itself is skipped.
        """
        files = []
        for path in self.work_tree.rglob('*'):
            rel_path = path.relative_to(self.work_tree)
            if rel_path.parts[0] == SPRIG_DIR:
                continue
            if path.is_file():
                files.append(rel_path.as_posix())
        return sorted(files)

    def work_path(self, rel_path: str) -> Path:
        return self.work_tree / rel_path

    @classmethod
    def find_repository(cls, path: str = '.') -> Optional['RepositoryContext']:
        """
        Find repository by searching up the directory tree.

        Args:
            path: Starting path for search

        Returns:
            RepositoryContext if found, None otherwise
        """
        current = Path(path).resolve()

        while True:
            if (current / SPRIG_DIR).is_dir():
                return cls(str(current))

            # Reached filesystem root
            if current == current.parent:
                return None

            current = current.parent

    def __repr__(self) -> str:
        return f"RepositoryContext(path={self.work_tree})"
