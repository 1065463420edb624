import pytest

from islandmerge.union_find import UnionFind


def test_new_structure_has_singletons():
    uf = UnionFind(6)
    assert uf.component_count() == 6
    assert [uf.find(i) for i in range(6)] == list(range(6))


def test_union_merges_and_reports():
    uf = UnionFind(4)
    assert uf.union(0, 1) is True
    assert uf.component_count() == 3
    assert uf.union(1, 0) is False
    assert uf.component_count() == 3


def test_connected_is_transitive():
    uf = UnionFind(5)
    uf.union(0, 1)
    uf.union(1, 2)
    assert uf.connected(0, 2)
    assert not uf.connected(0, 3)
    assert uf.find(0) == uf.find(2)


def test_union_all_gives_single_component():
    size = 50
    uf = UnionFind(size)
    for a, b in zip(range(size), range(1, size)):
        uf.union(a, b)
    assert uf.component_count() == 1
    root = uf.find(0)
    assert all(uf.find(i) == root for i in range(size))


def test_long_chain_does_not_overflow():
    size = 5000
    uf = UnionFind(size)
    for i in range(1, size):
        uf.union(i, i - 1)
    assert uf.connected(0, size - 1)


@pytest.mark.parametrize("bad", [-1, 3, 100])
def test_out_of_range_raises(bad):
    uf = UnionFind(3)
    with pytest.raises(IndexError):
        uf.find(bad)


def test_negative_size_rejected():
    with pytest.raises(ValueError):
        UnionFind(-1)