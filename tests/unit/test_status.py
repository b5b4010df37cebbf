"""Unit tests for status computation."""

from sprig.operations.status import DELETED, MODIFIED


def test_clean_status(workspace):
    report = workspace.status()
    assert report.current_branch == 'master'
    assert report.branches == ['master']
    assert report.is_clean


def test_branches_sorted(workspace):
    workspace.branch('zeta')
    workspace.branch('alpha')
    assert workspace.status().branches == ['alpha', 'master', 'zeta']


def test_staged_and_removed(workspace, commit_file, write):
    commit_file('old.txt', 'old')
    write('new.txt', 'new')
    workspace.add('new.txt')
    workspace.remove('old.txt')

    report = workspace.status()
    assert report.staged == ['new.txt']
    assert report.removed == ['old.txt']
    assert report.unstaged == []
    assert report.untracked == []


def test_unstaged_modifications(workspace, commit_file, write, temp_dir):
    commit_file('changed.txt', 'v1')
    commit_file('deleted.txt', 'v1')
    write('changed.txt', 'v2')
    (temp_dir / 'deleted.txt').unlink()

    write('staged_edit.txt', 'staged')
    workspace.add('staged_edit.txt')
    write('staged_edit.txt', 'edited after add')

    write('staged_gone.txt', 'staged')
    workspace.add('staged_gone.txt')
    (temp_dir / 'staged_gone.txt').unlink()

    assert workspace.status().unstaged == [
        ('changed.txt', MODIFIED),
        ('deleted.txt', DELETED),
        ('staged_edit.txt', MODIFIED),
        ('staged_gone.txt', DELETED),
    ]


def test_untracked(workspace, commit_file, write):
    commit_file('tracked.txt', 't')
    write('loose.txt', 'l')
    workspace.remove('tracked.txt')
    write('tracked.txt', 'recreated')

    report = workspace.status()
    assert report.untracked == ['loose.txt', 'tracked.txt']
    assert report.removed == ['tracked.txt']
