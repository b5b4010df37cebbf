"""Working tree restoration for checkout, reset and fast-forward merges."""

import logging
from typing import Iterable, List, Mapping

from sprig.core.errors import UntrackedFileConflict

logger = logging.getLogger(__name__)


def untracked_files(ctx, head_tree: Mapping[str, str]) -> List[str]:
    """Working files the current commit does not track."""
    return [path for path in ctx.working_files() if path not in head_tree]


def check_untracked(ctx, head_tree: Mapping[str, str], incoming: Iterable[str]) -> None:
    """
    Refuse to overwrite files the current commit does not track.

    Args:
        ctx: RepositoryContext instance
        head_tree: Tree of the current commit
        incoming: Paths the operation is about to write or delete

    Raises:
        UntrackedFileConflict: If an untracked working file is among incoming
    """
    incoming = set(incoming)
    in_the_way = [path for path in untracked_files(ctx, head_tree) if path in incoming]
    if in_the_way:
        logger.debug("Untracked files in the way: %s", ', '.join(in_the_way))
        raise UntrackedFileConflict()


def write_file(ctx, path: str, data: bytes) -> None:
    """Write data to a work tree path, creating parent directories."""
    full_path = ctx.work_path(path)
    full_path.parent.mkdir(parents=True, exist_ok=True)
    full_path.write_bytes(data)


def delete_file(ctx, path: str) -> bool:
    """
    Delete a work tree file if present.

    Directories left empty are pruned up to the work tree root.
    """
    full_path = ctx.work_path(path)
    if not full_path.is_file():
        return False

    full_path.unlink()
    parent = full_path.parent
    while parent != ctx.work_tree and not any(parent.iterdir()):
        parent.rmdir()
        parent = parent.parent
    return True


def checkout_file(ctx, path: str, blob_hash: str) -> None:
    """Overwrite one work tree file with a stored blob."""
    write_file(ctx, path, ctx.blobs.get(blob_hash))


def restore_tree(ctx, current_tree: Mapping[str, str], target_tree: Mapping[str, str]) -> int:
    """
    Make the work tree match target_tree.

    Files tracked by current_tree but absent from target_tree are
    deleted; every target file is written. Untracked files are left
    alone, so callers must run check_untracked first.

    Returns:
        Number of files written
    """
    # Read every blob before the first write
    contents = {path: ctx.blobs.get(blob_hash) for path, blob_hash in target_tree.items()}

    for path in current_tree:
        if path not in target_tree:
            delete_file(ctx, path)
            logger.debug("Removed: %s", path)

    for path, data in contents.items():
        write_file(ctx, path, data)

    return len(contents)
