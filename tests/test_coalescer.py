import pytest

from memlab import Block, BlockTable, TableInvariantViolation, coalesce


def test_merges_runs_of_free_blocks():
    blocks = [
        Block(0, 10),
        Block(10, 20),
        Block(30, 5, "A"),
        Block(35, 15),
        Block(50, 25),
        Block(75, 25),
    ]
    merged = coalesce(blocks)
    assert [block.as_tuple() for block in merged] == [
        (None, 0, 30),
        ("A", 30, 5),
        (None, 35, 65),
    ]


def test_input_is_not_modified():
    blocks = [Block(0, 10), Block(10, 10)]
    coalesce(blocks)
    assert [block.as_tuple() for block in blocks] == [(None, 0, 10), (None, 10, 10)]


def test_owned_neighbours_stay_separate():
    blocks = [Block(0, 10, "A"), Block(10, 10, "A"), Block(20, 10, "B")]
    merged = coalesce(blocks)
    assert [block.as_tuple() for block in merged] == [("A", 0, 10), ("A", 10, 10), ("B", 20, 10)]


def test_idempotent():
    blocks = [Block(0, 10), Block(10, 10), Block(20, 10, "A"), Block(30, 10), Block(40, 60)]
    once = coalesce(blocks)
    twice = coalesce(once)
    assert [block.as_tuple() for block in once] == [block.as_tuple() for block in twice]


def test_preserves_total_size_and_leaves_no_adjacent_free():
    blocks = [Block(0, 7), Block(7, 3), Block(10, 4, "A"), Block(14, 6), Block(20, 1, "B"), Block(21, 9)]
    merged = coalesce(blocks)
    assert sum(block.size for block in merged) == 30
    for left, right in zip(merged, merged[1:]):
        assert left.end == right.start
        assert not (left.is_free and right.is_free)


def test_address_drift_is_reported():
    with pytest.raises(TableInvariantViolation):
        coalesce([Block(0, 10), Block(12, 10)])
    with pytest.raises(TableInvariantViolation):
        coalesce([Block(5, 10)])
    with pytest.raises(TableInvariantViolation):
        coalesce([Block(0, 0), Block(0, 10)])


def test_table_coalesce_in_place():
    table = BlockTable(100)
    table.replace(0, 1, [Block(0, 40), Block(40, 60)])
    table.coalesce()
    assert table.snapshot() == [(None, 0, 100)]
    table.check_invariants()
