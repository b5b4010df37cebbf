"""Hash utilities for Sprig."""

import hashlib


DIGEST_LENGTH = 40


def hash_object(data: bytes) -> str:
    """
    Compute SHA-1 hash of data.

    Args:
        data: Bytes to hash

    Returns:
        40-character hex string
    """
    return hashlib.sha1(data).hexdigest()


def hash_file(filepath) -> str:
    """
    Compute SHA-1 hash of a file's exact contents.

    Args:
        filepath: Path to file

    Returns:
        40-character hex string
    """
    with open(filepath, 'rb') as f:
        return hash_object(f.read())


def is_digest(value: str) -> bool:
    """Return True if value looks like a full hex digest."""
    return len(value) == DIGEST_LENGTH and all(c in '0123456789abcdef' for c in value)
