"""Core functionality for Sprig.

This module contains the core data structures:
- Sprig objects (Blob, Commit)
- Content-addressed object stores
- Repository paths and layout
- Staging area
- Reference management
- Configuration management
- Hashing utilities
- Error taxonomy

For operations like checkout, merge and status, see sprig.operations
"""

from sprig.core.objects import SprigObject, Blob, Commit
from sprig.core.store import ObjectStore, BlobStore, CommitStore
from sprig.core.repository import RepositoryContext
from sprig.core.hash import hash_object, hash_file
from sprig.core.staging import StagingArea, RemoveOutcome
from sprig.core.refs import RefManager
from sprig.core.config import Config, get_config

__all__ = [
    'SprigObject',
    'Blob',
    'Commit',
    'ObjectStore',
    'BlobStore',
    'CommitStore',
    'RepositoryContext',
    'StagingArea',
    'RemoveOutcome',
    'RefManager',
    'Config',
    'get_config',
    'hash_object',
    'hash_file',
]
