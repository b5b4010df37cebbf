"""Unit tests for commit graph traversal and merge bases."""

import pytest
from sprig.core.errors import NotFound, NothingStaged
from sprig.core.objects import Commit
from sprig.core.store import CommitStore
from sprig.operations.graph import CommitGraph, build_tree


@pytest.fixture
def store(tmp_path):
    return CommitStore(tmp_path / 'commits')


@pytest.fixture
def graph(store):
    return CommitGraph(store)


@pytest.fixture
def make(store):
    """Store a commit with the given parents; timestamps increase per call."""
    counter = {'t': 0}

    def _make(message, parent=None, second_parent=None):
        counter['t'] += 1
        commit = Commit(message, counter['t'], {}, parent, second_parent)
        return store.put_commit(commit)
    return _make


def test_build_tree():
    parent = {'a.txt': '1' * 40, 'b.txt': '2' * 40}
    tree = build_tree(parent, {'b.txt': '3' * 40, 'c.txt': '4' * 40}, {'a.txt'})
    assert tree == {'b.txt': '3' * 40, 'c.txt': '4' * 40}
    assert parent == {'a.txt': '1' * 40, 'b.txt': '2' * 40}


def test_build_tree_nothing_staged():
    with pytest.raises(NothingStaged):
        build_tree({'a.txt': '1' * 40}, {}, set())


def test_build_tree_allow_empty():
    assert build_tree({'a.txt': '1' * 40}, {}, set(), allow_empty=True) == {'a.txt': '1' * 40}


def test_get_missing(graph):
    with pytest.raises(NotFound) as exc_info:
        graph.get('0' * 40)
    assert str(exc_info.value) == "No commit with that id exists."


def test_get_is_memoized(graph, make):
    c = make('c')
    assert graph.get(c) is graph.get(c)


def test_resolve_parents(graph, make):
    a = make('a')
    b = make('b')
    m = make('m', a, b)
    merge = graph.get(m)
    assert graph.resolve_parent(merge).id == a
    assert graph.resolve_second_parent(merge).id == b
    assert graph.resolve_parent(graph.get(a)) is None
    assert graph.resolve_second_parent(graph.get(a)) is None


def test_first_parent_history(graph, make):
    root = make('root')
    side = make('side', root)
    main = make('main', root)
    merge = make('merge', main, side)
    history = [c.id for c in graph.first_parent_history(merge)]
    assert history == [merge, main, root]


def test_all_commits(graph, make):
    ids = {make('one'), make('two')}
    assert {c.id for c in graph.all_commits()} == ids


def test_ancestor_distances(graph, make):
    root = make('root')
    a = make('a', root)
    b = make('b', root)
    m = make('m', a, b)
    assert graph.ancestor_distances(m) == {m: 0, a: 1, b: 1, root: 2}


def test_is_ancestor(graph, make):
    root = make('root')
    child = make('child', root)
    assert graph.is_ancestor(root, child)
    assert not graph.is_ancestor(child, root)


def test_lca_same_commit(graph, make):
    x = make('x')
    assert graph.lowest_common_ancestor(x, x) == x


def test_lca_missing_commit(graph, make):
    x = make('x')
    assert graph.lowest_common_ancestor(x, 'f' * 40) is None
    assert graph.lowest_common_ancestor('f' * 40, x) is None


def test_lca_other_is_ancestor(graph, make):
    root = make('root')
    mid = make('mid', root)
    tip = make('tip', mid)
    assert graph.lowest_common_ancestor(tip, mid) == mid
    assert graph.lowest_common_ancestor(tip, root) == root


def test_lca_current_is_ancestor(graph, make):
    root = make('root')
    tip = make('tip', make('mid', root))
    assert graph.lowest_common_ancestor(root, tip) == root


def test_lca_fork(graph, make):
    root = make('root')
    split = make('split', root)
    left = make('left2', make('left1', split))
    right = make('right1', split)
    assert graph.lowest_common_ancestor(left, right) == split


def test_lca_unrelated(graph, make):
    assert graph.lowest_common_ancestor(make('a'), make('b')) is None


def test_lca_through_merge_commit(graph, make):
    """
    root - a1 - a2 ------- m (master)
             \\          /
              b1 ---- b2 - b3 (other)

    m already merged b2, so the split point of m and b3 is b2.
    """
    root = make('root')
    a1 = make('a1', root)
    a2 = make('a2', a1)
    b1 = make('b1', a1)
    b2 = make('b2', b1)
    m = make('m', a2, b2)
    b3 = make('b3', b2)
    assert graph.lowest_common_ancestor(m, b3) == b2


def test_lca_prefers_closest_by_larger_distance(graph, make):
    """
    Two common ancestors: c1 (far from both) and c2 (one hop from each).
    """
    c1 = make('c1')
    c2 = make('c2', c1)
    a = make('a', c2)
    b = make('b', c2)
    assert graph.lowest_common_ancestor(a, b) == c2


def test_lca_criss_cross_tie_goes_to_first_found(graph, make):
    """
    With two equally close candidates the one reached first from b wins;
    first parents are walked before second parents.
    """
    root = make('root')
    x = make('x', root)
    y = make('y', root)
    a = make('a', x, y)
    b = make('b', y, x)
    assert graph.lowest_common_ancestor(a, b) == y
