"""Unit tests for the merge engine."""

import pytest
from sprig.core.errors import (
    ForbiddenOperation,
    NotFound,
    UncommittedChanges,
    UntrackedFileConflict,
)
from sprig.operations.merge import (
    FileAction,
    MergeOutcome,
    classify,
    conflict_content,
)

S, A, C = 's' * 40, 'a' * 40, 'c' * 40


@pytest.mark.parametrize('base,ours,theirs,expected', [
    (S, S, S, FileAction.KEEP),           # unchanged everywhere
    (S, A, A, FileAction.KEEP),           # same change on both sides
    (None, A, A, FileAction.KEEP),        # same file added on both sides
    (S, None, S, FileAction.KEEP),        # removed here, unchanged there
    (S, S, None, FileAction.DELETE),      # unchanged here, removed there
    (S, S, C, FileAction.TAKE_THEIRS),    # modified only there
    (S, A, S, FileAction.KEEP),           # modified only here
    (S, None, None, FileAction.KEEP),     # removed on both sides
    (None, A, None, FileAction.KEEP),     # added only here
    (None, None, C, FileAction.TAKE_THEIRS),  # added only there
    (S, A, None, FileAction.KEEP),        # modified here, removed there
    (S, None, C, FileAction.TAKE_THEIRS),  # removed here, modified there
    (S, A, C, FileAction.CONFLICT),       # modified differently
    (None, A, C, FileAction.CONFLICT),    # added differently
])
def test_classify(base, ours, theirs, expected):
    assert classify(base, ours, theirs) is expected


def test_conflict_content():
    assert conflict_content(b'mine\n', b'yours\n') == (
        b'<<<<<<< HEAD\nmine\n=======\nyours\n>>>>>>>\n'
    )


def test_conflict_content_missing_side():
    assert conflict_content(None, b'yours\n') == b'<<<<<<< HEAD\n=======\nyours\n>>>>>>>\n'


def test_plan_is_sorted(workspace):
    plan = workspace.merge_engine.plan(
        {'b.txt': S},
        {'b.txt': S, 'c.txt': A},
        {'a.txt': C, 'b.txt': S},
    )
    assert plan == [
        ('a.txt', FileAction.TAKE_THEIRS),
        ('b.txt', FileAction.KEEP),
        ('c.txt', FileAction.KEEP),
    ]


def test_merge_ancestor(workspace, commit_file):
    workspace.branch('old')
    commit_file('a.txt', 'one')
    head = workspace.head_commit().id

    result = workspace.merge('old')
    assert result.outcome is MergeOutcome.ANCESTOR
    assert result.message == "Given branch is an ancestor of the current branch."
    assert result.commit_hash is None
    assert workspace.head_commit().id == head


def test_merge_fast_forward(workspace, commit_file, read):
    workspace.branch('feature')
    workspace.checkout_branch('feature')
    tip = commit_file('a.txt', 'feature work')
    workspace.checkout_branch('master')

    result = workspace.merge('feature')
    assert result.outcome is MergeOutcome.FAST_FORWARD
    assert result.message == "Current branch fast-forwarded."
    assert workspace.refs.get_branch('master') == tip
    assert workspace.refs.get_head_branch() == 'master'
    assert read('a.txt') == 'feature work'
    assert len(workspace.log()) == 2


def test_merge_three_way_clean(workspace, commit_file, write, read, temp_dir):
    commit_file('keep.txt', 'base')
    commit_file('gone.txt', 'base')
    workspace.branch('other')

    commit_file('mine.txt', 'master only', message='master adds mine')
    workspace.checkout_branch('other')
    commit_file('keep.txt', 'changed on other', message='other edits keep')
    workspace.remove('gone.txt')
    workspace.commit('other removes gone')
    other_tip = workspace.head_commit().id
    workspace.checkout_branch('master')

    result = workspace.merge('other')
    assert result.outcome is MergeOutcome.MERGED
    assert not result.has_conflicts
    assert result.message == ""

    merge = workspace.head_commit()
    assert merge.message == "Merged other into master."
    assert merge.second_parent == other_tip
    assert read('keep.txt') == 'changed on other'
    assert read('mine.txt') == 'master only'
    assert not (temp_dir / 'gone.txt').exists()
    assert not merge.tracks('gone.txt')
    assert workspace.staging.is_empty()


def test_merge_conflict(workspace, commit_file, read):
    workspace.branch('other')
    commit_file('x.txt', 'master version\n', message='master x')
    master_tip = workspace.head_commit().id

    workspace.checkout_branch('other')
    commit_file('x.txt', 'other version\n', message='other x')
    other_tip = workspace.head_commit().id
    workspace.checkout_branch('master')

    result = workspace.merge('other')
    assert result.has_conflicts
    assert [c.path for c in result.conflicts] == ['x.txt']
    assert result.message == "Encountered a merge conflict."

    expected = "<<<<<<< HEAD\nmaster version\n=======\nother version\n>>>>>>>\n"
    assert read('x.txt') == expected

    merge = workspace.head_commit()
    assert merge.parents == [master_tip, other_tip]
    assert workspace.ctx.blobs.get(merge.blob_for('x.txt')) == expected.encode()


def test_merge_with_nothing_to_change_still_commits(workspace, commit_file):
    commit_file('a.txt', 'base')
    workspace.branch('other')
    commit_file('a.txt', 'changed', message='master change')

    workspace.checkout_branch('other')
    commit_file('b.txt', 'b', message='other adds b')
    workspace.remove('b.txt')
    workspace.commit('other removes b')
    workspace.checkout_branch('master')

    result = workspace.merge('other')
    assert result.outcome is MergeOutcome.MERGED
    assert workspace.head_commit().is_merge


def test_merge_uncommitted_changes(workspace, write):
    workspace.branch('other')
    write('a.txt', 'a')
    workspace.add('a.txt')
    with pytest.raises(UncommittedChanges):
        workspace.merge('other')


def test_merge_missing_branch(workspace):
    with pytest.raises(NotFound) as exc_info:
        workspace.merge('nope')
    assert str(exc_info.value) == "A branch with that name does not exist."


def test_merge_with_itself(workspace):
    with pytest.raises(ForbiddenOperation) as exc_info:
        workspace.merge('master')
    assert str(exc_info.value) == "Cannot merge a branch with itself."


def test_merge_untracked_file_in_the_way(workspace, commit_file, write, read):
    workspace.branch('other')
    commit_file('a.txt', 'master', message='master a')
    workspace.checkout_branch('other')
    commit_file('new.txt', 'from other', message='other new')
    workspace.checkout_branch('master')

    write('new.txt', 'precious')
    head = workspace.head_commit().id
    with pytest.raises(UntrackedFileConflict):
        workspace.merge('other')
    assert read('new.txt') == 'precious'
    assert workspace.head_commit().id == head
    assert workspace.staging.is_empty()
