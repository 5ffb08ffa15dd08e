import logging
import math

import pytest

from numrange import Range, RangeCollection, parse_range_collection

INF = math.inf


def collection(*texts: str) -> RangeCollection:
    return parse_range_collection(texts, ":")


def test_construct_from_ranges() -> None:
    c = RangeCollection([Range(start=1, end=2), Range(start=4, end=INF)])

    assert len(c) == 2
    assert c[0] == Range(start=1, end=2)
    assert c[-1] == Range(start=4, end=INF)
    assert list(c) == [Range(start=1, end=2), Range(start=4, end=INF)]


def test_construct_accepts_any_iterable() -> None:
    c = RangeCollection(Range.singleton(v) for v in (3, 1))
    assert len(c) == 2


def test_construct_rejects_non_ranges() -> None:
    with pytest.raises(TypeError):
        RangeCollection(["1:2"])  # type: ignore[list-item]


def test_slicing_returns_collection() -> None:
    c = collection("1:2", "4:5", "7:8")
    assert c[1:] == collection("4:5", "7:8")


def test_contains() -> None:
    c = collection("1:2", "4:")

    assert c.contains(1.5)
    assert 100 in c
    assert 3 not in c
    assert not RangeCollection().contains(0)


def test_str_and_repr() -> None:
    c = collection("1:2", "4:")

    assert str(c) == "[1:2, 4:]"
    assert repr(c).startswith("RangeCollection([")


class TestIsMerged:
    def test_empty_collection_is_merged(self) -> None:
        assert RangeCollection().is_merged()

    def test_single_range_is_merged(self) -> None:
        assert collection("1:5").is_merged()

    def test_sorted_disjoint_collection_is_merged(self) -> None:
        assert collection("1:2", "4:").is_merged()

    def test_unsorted_collection_is_not_merged(self) -> None:
        assert not collection("4:", "1:2").is_merged()

    def test_overlapping_collection_is_not_merged(self) -> None:
        assert not collection("1:5", "3:7").is_merged()

    def test_touching_ranges_are_not_merged(self) -> None:
        assert not collection("1:5", "5:7").is_merged()

    def test_sort_tie_breaks_on_end(self) -> None:
        assert collection("1:2", "1:4").is_sorted()
        assert not collection("1:4", "1:2").is_sorted()


class TestMerge:
    def test_merges_empty_list(self) -> None:
        assert RangeCollection().merge() == RangeCollection()

    def test_merged_collection_is_returned_as_is(self) -> None:
        c = collection("1:2", "4:")
        assert c.merge() is c

    def test_merges_non_overlapping_list(self) -> None:
        assert collection("1:2", "4:").merge() == RangeCollection(
            [Range(start=1, end=2), Range(start=4, end=INF)]
        )

    def test_merges_start_overlapping_list(self) -> None:
        assert collection("1:2", "1:").merge() == RangeCollection(
            [Range(start=1, end=INF)]
        )

    def test_merges_middle_overlapping_list(self) -> None:
        assert collection("1:5", "3:").merge() == RangeCollection(
            [Range(start=1, end=INF)]
        )

    def test_merges_infinite_beginning(self) -> None:
        assert collection("1:5", ":3").merge() == RangeCollection(
            [Range(start=-INF, end=5)]
        )

    def test_merges_infinite_ending(self) -> None:
        assert collection("1:5", "7:", "4:6").merge() == RangeCollection(
            [Range(start=1, end=6), Range(start=7, end=INF)]
        )

    def test_stops_at_unbounded_end(self) -> None:
        assert collection("10:20", "1:", "5:8").merge() == RangeCollection(
            [Range(start=1, end=INF)]
        )

    def test_merges_everything_into_unbounded(self) -> None:
        assert collection("1:2", ":", "-4:-3").merge() == RangeCollection(
            [Range.unbounded()]
        )

    def test_sorts_disjoint_ranges(self) -> None:
        assert collection("7:8", "1:2", "4:5").merge() == collection(
            "1:2", "4:5", "7:8"
        )

    def test_collapses_duplicates(self) -> None:
        assert collection("1:2", "1:2", "1:2").merge() == collection("1:2")

    @pytest.mark.parametrize(
        "texts",
        [
            ["1:5", "7:", "4:6"],
            ["4:6", "1:5", "7:"],
            ["7:", "4:6", "1:5"],
        ],
    )
    def test_result_does_not_depend_on_input_order(self, texts: list[str]) -> None:
        assert collection(*texts).merge() == collection("1:6", "7:")

    @pytest.mark.parametrize(
        "texts",
        [
            [],
            ["3"],
            ["1:2", "4:"],
            ["1:5", "7:", "4:6"],
            [":3", "10:", "2:11", "20:30"],
            ["5:10", "-100:-50"],
        ],
    )
    def test_merge_is_idempotent(self, texts: list[str]) -> None:
        once = collection(*texts).merge()

        assert once.merge() == once
        assert once.is_merged()

    def test_merge_leaves_receiver_untouched(self) -> None:
        c = collection("4:6", "1:5")
        c.merge()

        assert c == collection("4:6", "1:5")

    def test_merge_logs_sizes(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="numrange.collection"):
            collection("1:5", "3:7").merge()

        assert "merged 2 ranges into 1" in caplog.text

    def test_sorted_keeps_overlaps(self) -> None:
        assert collection("3:7", "1:5").sorted() == collection("1:5", "3:7")


class TestEqual:
    def test_equal_collections(self) -> None:
        assert collection("1:2", "4:").equal(collection("1:2", "4:"))

    def test_equality_is_reflexive(self) -> None:
        c = collection("1:2", "4:")
        assert c.equal(c)
        assert c == c

    def test_unequal_collections(self) -> None:
        assert not collection("1:2", "4:").equal(collection("1:3", "4:"))

    def test_unequal_length_collections(self) -> None:
        assert not collection("1:2", "4:").equal(collection("1:2"))

    def test_equality_is_positional(self) -> None:
        first = collection("1:2", "4:5")
        second = collection("4:5", "1:2")

        assert first != second
        assert first.merge() == second.merge()

    def test_equal_collections_hash_alike(self) -> None:
        assert hash(collection("1:2")) == hash(collection("1:2"))

    def test_not_equal_to_other_types(self) -> None:
        assert collection("1:2") != [Range(start=1, end=2)]


class TestUnion:
    def test_union_merges_operands(self) -> None:
        left = collection("1:3")
        right = collection("10:12", "2:5")

        assert (left | right) == collection("1:5", "10:12")

    def test_union_of_many(self) -> None:
        result = collection("1:2").union(collection("5:6"), collection("2:5"))
        assert result == collection("1:6")

    def test_union_with_empty(self) -> None:
        assert (RangeCollection() | collection("3:4")) == collection("3:4")

    def test_union_coalesces_within_an_operand(self) -> None:
        left = collection("5:9", "1:6")
        right = collection("20:", "12:14")

        assert (left | right) == collection("1:9", "12:14", "20:")

    def test_union_of_empty_collections(self) -> None:
        assert RangeCollection().union(RangeCollection()) == RangeCollection()


class TestValues:
    def test_values_of_empty_collection(self) -> None:
        assert RangeCollection().values() == []

    def test_values_concatenate_ranges(self) -> None:
        assert collection("1:2", "4:5").values() == [1, 2, 4, 5]

    def test_values_merge_first(self) -> None:
        assert collection("2:5", "1:3").values() == [1, 2, 3, 4, 5]

    def test_values_with_open_ranges(self) -> None:
        assert collection("7:", "1:2", ":-5").values() == [-INF, -5, 1, 2, 7, INF]

    def test_value_map(self) -> None:
        assert collection("1:2", "4:").value_map(lambda v: v * 2) == [2, 4, 8, INF]

    def test_each_value(self) -> None:
        seen: list[float] = []
        collection("1:2", "1:3").each_value(seen.append)
        assert seen == [1, 2, 3]

    def test_values_in_range(self) -> None:
        c = collection("6:9", "1:3")
        assert c.values_in_range(Range(start=2, end=7)) == [2, 3, 6, 7]

    def test_values_in_open_range(self) -> None:
        c = collection("1:3", "6:")
        assert c.values_in_range(Range(start=-INF, end=7)) == [1, 2, 3, 6, 7]
        assert c.values_in_range(Range(start=2, end=INF)) == [2, 3, 6, INF]

    def test_map_value_in_range(self) -> None:
        c = collection("1:3", "5:6")
        assert c.map_value_in_range(Range(start=3, end=5), lambda v: -v) == [-3, -5]

    def test_each_value_in_range(self) -> None:
        seen: list[float] = []
        collection(":").each_value_in_range(Range(start=-INF, end=0), seen.append)
        assert seen == [-INF, 0]

    def test_values_merge_once(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="numrange.collection"):
            assert collection("3:4", "1:3").values() == [1, 2, 3, 4]

        assert caplog.text.count("merged 2 ranges into 1") == 1

    def test_values_of_merged_collection_do_not_merge(
        self, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.DEBUG, logger="numrange.collection"):
            assert collection("1:2", "4:5").values() == [1, 2, 4, 5]

        assert "merged" not in caplog.text
