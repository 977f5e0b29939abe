import random

import pytest

from moviemaniacs.entities import Movie
from moviemaniacs.rbtree import BLACK, RED, OrderedCatalogIndex


def _check_invariants(tree: OrderedCatalogIndex) -> None:
    nil = tree.NIL
    assert nil.color is BLACK
    assert nil.left is None and nil.right is None
    assert tree.root.color is BLACK
    if tree.root is not nil:
        assert tree.root.parent is None

    def walk(node, lo, hi):
        if node is nil:
            return 1
        assert node.left is not None and node.right is not None
        if lo is not None:
            assert node.key > lo
        if hi is not None:
            assert node.key < hi
        if node.color is RED:
            assert node.left.color is BLACK
            assert node.right.color is BLACK
        for child in (node.left, node.right):
            if child is not nil:
                assert child.parent is node
        left_height = walk(node.left, lo, node.key)
        right_height = walk(node.right, node.key, hi)
        assert left_height == right_height
        return left_height + (1 if node.color is BLACK else 0)

    walk(tree.root, None, None)
    ids = [m.id for m in tree.in_order()]
    assert ids == sorted(set(ids))
    assert len(ids) == len(tree)


def _movie(movie_id: int) -> Movie:
    return Movie(id=movie_id, title=f"Movie {movie_id}")


def test_random_insertions_keep_invariants():
    rng = random.Random(7)
    ids = rng.sample(range(10_000), 400)
    tree = OrderedCatalogIndex()
    for movie_id in ids:
        tree.insert(_movie(movie_id))
        _check_invariants(tree)
    assert [m.id for m in tree.in_order()] == sorted(ids)


@pytest.mark.parametrize("ids", [list(range(200)), list(range(200, 0, -1))])
def test_monotonic_insertions_stay_balanced(ids):
    tree = OrderedCatalogIndex()
    for movie_id in ids:
        tree.insert(_movie(movie_id))
    _check_invariants(tree)

    def height(node):
        if node is tree.NIL:
            return 0
        return 1 + max(height(node.left), height(node.right))

    # red-black bound: h <= 2 * log2(n + 1)
    assert height(tree.root) <= 16


def test_search_hits_and_misses():
    tree = OrderedCatalogIndex()
    for movie_id in (5, 3, 8, 1, 4):
        tree.insert(_movie(movie_id))
    assert tree.search(4).title == "Movie 4"
    assert tree.search(42) is None
    assert 8 in tree
    assert 9 not in tree


def test_duplicate_insert_rejected():
    tree = OrderedCatalogIndex()
    tree.insert(_movie(1))
    tree.insert(_movie(2))
    with pytest.raises(ValueError):
        tree.insert(Movie(id=2, title="Impostor"))
    assert len(tree) == 2
    assert tree.search(2).title == "Movie 2"
    _check_invariants(tree)


def test_random_removals_keep_invariants():
    rng = random.Random(11)
    ids = rng.sample(range(5_000), 300)
    tree = OrderedCatalogIndex()
    for movie_id in ids:
        tree.insert(_movie(movie_id))

    to_remove = rng.sample(ids, 150)
    for movie_id in to_remove:
        assert tree.remove(movie_id) is True
        assert tree.search(movie_id) is None
        _check_invariants(tree)

    remaining = sorted(set(ids) - set(to_remove))
    assert [m.id for m in tree.in_order()] == remaining


def test_remove_everything_leaves_empty_tree():
    tree = OrderedCatalogIndex()
    for movie_id in range(50):
        tree.insert(_movie(movie_id))
    for movie_id in range(50):
        tree.remove(movie_id)
        _check_invariants(tree)
    assert len(tree) == 0
    assert tree.root is tree.NIL
    assert list(tree.in_order()) == []


def test_remove_missing_is_noop():
    tree = OrderedCatalogIndex()
    assert tree.remove(1) is False
    tree.insert(_movie(1))
    assert tree.remove(2) is False
    assert len(tree) == 1
    _check_invariants(tree)


def test_interleaved_insert_and_remove():
    rng = random.Random(3)
    tree = OrderedCatalogIndex()
    present = set()
    for _ in range(600):
        movie_id = rng.randrange(120)
        if movie_id in present:
            tree.remove(movie_id)
            present.discard(movie_id)
        else:
            tree.insert(_movie(movie_id))
            present.add(movie_id)
    _check_invariants(tree)
    assert [m.id for m in tree] == sorted(present)


def test_in_order_is_restartable_and_lazy():
    tree = OrderedCatalogIndex()
    for movie_id in (3, 1, 2):
        tree.insert(_movie(movie_id))
    first = tree.in_order()
    assert next(first).id == 1
    assert [m.id for m in tree.in_order()] == [1, 2, 3]
    assert [m.id for m in first] == [2, 3]


def test_minimum_and_maximum():
    tree = OrderedCatalogIndex()
    assert tree.minimum() is None
    assert tree.maximum() is None
    for movie_id in (40, 10, 30, 20):
        tree.insert(_movie(movie_id))
    assert tree.minimum().id == 10
    assert tree.maximum().id == 40
