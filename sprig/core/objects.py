"""Sprig objects: blobs and commits."""

import time
from abc import ABC, abstractmethod
from typing import Dict, Mapping, Optional
from .hash import hash_object


EPOCH = 0


class SprigObject(ABC):
    """Base class for all Sprig objects."""

    def __init__(self):
        self._hash: Optional[str] = None

    @abstractmethod
    def serialize(self) -> bytes:
        """
        Serialize object to bytes.

        Returns:
            bytes: Canonical object data
        """
        pass

    @property
    def type(self) -> str:
        """Return object type name (blob, commit)."""
        return self.__class__.__name__.lower()

    def compute_hash(self) -> str:
        """
        Compute and cache object hash.

        The digest covers the canonical serialization and nothing else,
        so a blob's id is the SHA-1 of the raw file bytes.

        Returns:
            str: 40-character SHA-1 hash
        """
        if self._hash is None:
            self._hash = hash_object(self.serialize())
        return self._hash

    @property
    def hash(self) -> str:
        """Get object hash."""
        return self.compute_hash()


class Blob(SprigObject):
    """
    Represents file content.

    A blob stores the raw content of a file without any metadata
    like filename or permissions.
    """

    def __init__(self, data: Optional[bytes] = None):
        super().__init__()
        self.data = data or b''

    def serialize(self) -> bytes:
        return self.data

    @classmethod
    def deserialize(cls, data: bytes) -> 'Blob':
        return cls(data)

    @classmethod
    def from_file(cls, filepath) -> 'Blob':
        """
        Create blob from file.

        Args:
            filepath: Path to file

        Returns:
            Blob: New blob containing file content
        """
        with open(filepath, 'rb') as f:
            return cls(f.read())

    def __repr__(self) -> str:
        return f"Blob(hash={self.hash[:7]}, size={len(self.data)})"


class Commit(SprigObject):
    """
    Represents a snapshot of every tracked file plus history metadata.

    A commit captures:
    - Message and timestamp
    - Parent commit (None only for the initial commit)
    - Second parent (merge commits only)
    - Tree: path -> blob hash for the complete snapshot

    Commits are immutable once created. Only parent digests are stored;
    resolving them to commits is the commit graph's job.
    """

    def __init__(
        self,
        message: str,
        timestamp: int,
        tree: Optional[Mapping[str, str]] = None,
        parent: Optional[str] = None,
        second_parent: Optional[str] = None,
    ):
        super().__init__()
        self._message = message
        self._timestamp = int(timestamp)
        self._tree: Dict[str, str] = dict(sorted((tree or {}).items()))
        self._parent = parent
        self._second_parent = second_parent

    @property
    def message(self) -> str:
        return self._message

    @property
    def timestamp(self) -> int:
        return self._timestamp

    @property
    def parent(self) -> Optional[str]:
        return self._parent

    @property
    def second_parent(self) -> Optional[str]:
        return self._second_parent

    @property
    def parents(self) -> list:
        """Parent digests, first parent first."""
        return [p for p in (self._parent, self._second_parent) if p]

    @property
    def tree(self) -> Dict[str, str]:
        """Copy of the path -> blob hash snapshot."""
        return dict(self._tree)

    @property
    def is_merge(self) -> bool:
        return self._second_parent is not None

    def tracks(self, path: str) -> bool:
        return path in self._tree

    def blob_for(self, path: str) -> Optional[str]:
        return self._tree.get(path)

    @property
    def id(self) -> str:
        return self.hash

    def serialize(self) -> bytes:
        """
        Serialize commit to its canonical record.

        Format:
        timestamp <seconds>
        parent <parent-hash>          (absent for the initial commit)
        second-parent <parent-hash>   (merge commits only)
        file <blob-hash> <path>       (sorted by path)

        <commit message>

        Returns:
            bytes: Serialized commit data
        """
        lines = [f'timestamp {self._timestamp}']

        if self._parent:
            lines.append(f'parent {self._parent}')
        if self._second_parent:
            lines.append(f'second-parent {self._second_parent}')

        for path in sorted(self._tree):
            lines.append(f'file {self._tree[path]} {path}')

        lines.append('')
        lines.append(self._message)

        return '\n'.join(lines).encode('utf-8')

    @classmethod
    def deserialize(cls, data: bytes) -> 'Commit':
        """
        Deserialize commit from its canonical record.

        Args:
            data: Serialized commit data
        """
        lines = data.decode('utf-8').split('\n')

        timestamp = EPOCH
        parent = None
        second_parent = None
        tree = {}

        message_start = len(lines)
        for i, line in enumerate(lines):
            if not line:
                message_start = i + 1
                break

            if line.startswith('timestamp '):
                timestamp = int(line[10:])
            elif line.startswith('parent '):
                parent = line[7:]
            elif line.startswith('second-parent '):
                second_parent = line[14:]
            elif line.startswith('file '):
                blob_hash, path = line[5:].split(' ', 1)
                tree[path] = blob_hash
            else:
                raise ValueError(f"Invalid commit record line: {line!r}")

        message = '\n'.join(lines[message_start:])
        return cls(message, timestamp, tree, parent, second_parent)

    @classmethod
    def create(
        cls,
        message: str,
        tree: Mapping[str, str],
        parent: Optional[str],
        second_parent: Optional[str] = None,
        timestamp: Optional[int] = None,
    ) -> 'Commit':
        """
        Create a new commit stamped with the current time.

        Args:
            message: Commit message
            tree: Complete path -> blob hash snapshot
            parent: First parent hash
            second_parent: Merged-in branch tip, for merge commits
            timestamp: Seconds since the epoch (defaults to now)

        Returns:
            Commit: New commit object
        """
        if timestamp is None:
            timestamp = int(time.time())
        return cls(message, timestamp, tree, parent, second_parent)

    @classmethod
    def initial(cls, message: str) -> 'Commit':
        """The root commit: empty tree, no parent, epoch timestamp."""
        return cls(message, EPOCH, {}, None, None)

    def __eq__(self, other) -> bool:
        return isinstance(other, Commit) and self.hash == other.hash

    def __hash__(self) -> int:
        return hash(self.hash)

    def __repr__(self) -> str:
        parent_info = f", parents={len(self.parents)}" if self.parents else ""
        msg_preview = self._message.split('\n')[0][:50]
        return f"Commit(hash={self.hash[:7]}{parent_info}, msg='{msg_preview}')"
