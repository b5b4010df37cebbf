"""Content-addressable object storage."""

import logging
from pathlib import Path
from typing import Iterator, Optional

from .errors import NotFound, StorageError
from .hash import hash_object, is_digest
from .objects import Blob, Commit

logger = logging.getLogger(__name__)


class ObjectStore:
    """
    Write-once storage of byte strings keyed by their SHA-1 digest.

    Objects live in subdirectories named by the first 2 characters of
    the hash, with the remaining 38 characters as the filename.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    def object_path(self, digest: str) -> Path:
        """
        Get filesystem path for an object.

        Example: ab/cdef0123456789... for hash abcdef0123456789...
        """
        return self.root / digest[:2] / digest[2:]

    def put(self, data: bytes) -> str:
        """
        Store data under its digest if absent.

        Returns:
            str: SHA-1 hash of the data
        """
        digest = hash_object(data)
        path = self.object_path(digest)

        if path.exists():
            return digest

        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
        logger.debug("Stored %s (%d bytes) in %s", digest[:7], len(data), self.root.name)
        return digest

    def get(self, digest: str) -> bytes:
        """
        Read the bytes stored under digest.

        Raises:
            NotFound: If no object has that digest
        """
        if not is_digest(digest):
            raise NotFound(f"Object {digest} not found")
        path = self.object_path(digest)
        if not path.is_file():
            raise NotFound(f"Object {digest} not found")
        return path.read_bytes()

    def contains(self, digest: str) -> bool:
        return is_digest(digest) and self.object_path(digest).is_file()

    def ids(self) -> Iterator[str]:
        """Yield every stored digest."""
        if not self.root.exists():
            return
        for subdir in sorted(self.root.iterdir()):
            if subdir.is_dir() and len(subdir.name) == 2:
                for obj_file in sorted(subdir.iterdir()):
                    yield subdir.name + obj_file.name

    def resolve_prefix(self, prefix: str) -> Optional[str]:
        """
        Expand an abbreviated digest.

        Returns:
            The unique stored digest starting with prefix, or None if
            there is no match or more than one.
        """
        prefix = prefix.lower()
        if not prefix or any(c not in '0123456789abcdef' for c in prefix):
            return None
        if len(prefix) == 40:
            return prefix if self.contains(prefix) else None

        if len(prefix) >= 2:
            subdir = self.root / prefix[:2]
            candidates = (
                prefix[:2] + f.name for f in subdir.iterdir()
            ) if subdir.is_dir() else iter(())
        else:
            candidates = self.ids()

        matches = [digest for digest in candidates if digest.startswith(prefix)]
        if len(matches) == 1:
            return matches[0]
        return None


class BlobStore(ObjectStore):
    """Object store for file contents."""

    def put_blob(self, blob: Blob) -> str:
        return self.put(blob.serialize())

    def get_blob(self, digest: str) -> Blob:
        return Blob.deserialize(self.get(digest))


class CommitStore(ObjectStore):
    """Object store for canonical commit records."""

    def put_commit(self, commit: Commit) -> str:
        """
        Store a commit record.

        Raises:
            StorageError: If the stored digest is not the commit's id
        """
        digest = self.put(commit.serialize())
        if digest != commit.hash:
            raise StorageError(
                f"Storage failure: commit {commit.hash[:7]} stored as {digest[:7]}"
            )
        return digest

    def get_commit(self, digest: str) -> Commit:
        return Commit.deserialize(self.get(digest))
