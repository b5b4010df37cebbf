"""Operations module for high-level Sprig operations.

This module contains the business logic for Sprig commands:
- Commit graph traversal and merge bases
- Working tree restoration
- Merge algorithm
- Status computation
- The Workspace that ties them together
"""

from sprig.operations.graph import CommitGraph, build_tree
from sprig.operations.merge import MergeEngine, MergeResult, MergeConflict, MergeOutcome
from sprig.operations.status import StatusReport
from sprig.operations.workspace import Workspace

__all__ = [
    'CommitGraph', 'build_tree',
    'MergeEngine', 'MergeResult', 'MergeConflict', 'MergeOutcome',
    'StatusReport',
    'Workspace',
]
