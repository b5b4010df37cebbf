"""Sprig - a minimal content-addressed version control system."""

__version__ = '0.1.0'

from sprig.core.repository import RepositoryContext
from sprig.core.objects import SprigObject, Blob, Commit
from sprig.operations.workspace import Workspace

__all__ = [
    'RepositoryContext',
    'SprigObject',
    'Blob',
    'Commit',
    'Workspace',
]
