"""Tests for comparator builders and array utilities."""

import random
from collections import namedtuple
from functools import cmp_to_key

import pytest

from sort_helpers import (
    SortRule,
    compare_by_key,
    compare_by_multiple,
    generate_random_sequence,
    is_sorted,
    natural_order,
    shuffle,
)

Player = namedtuple("Player", "name team points")

PLAYERS = [
    Player("ana", "red", 12),
    Player("ben", "blue", 12),
    Player("cai", "red", 30),
    Player("dee", "blue", 7),
    Player("eli", "red", 12),
]


class TestNaturalOrder:
    def test_signs(self):
        assert natural_order(1, 2) < 0
        assert natural_order(2, 1) > 0
        assert natural_order(3, 3) == 0
        assert natural_order("a", "b") < 0


class TestCompareByKey:
    def test_attribute(self):
        result = sorted(PLAYERS, key=cmp_to_key(compare_by_key("points")))
        assert [p.points for p in result] == [7, 12, 12, 12, 30]

    def test_descending(self):
        result = sorted(PLAYERS, key=cmp_to_key(compare_by_key("points", "desc")))
        assert [p.points for p in result] == [30, 12, 12, 12, 7]

    def test_mapping_key(self):
        compare = compare_by_key("age")
        assert compare({"age": 3}, {"age": 5}) < 0
        assert compare({"age": 5}, {"age": 5}) == 0

    def test_callable_field(self):
        compare = compare_by_key(len, "desc")
        assert compare("abc", "a") < 0

    def test_invalid_direction(self):
        with pytest.raises(ValueError):
            compare_by_key("points", "up")

    def test_missing_attribute_propagates(self):
        with pytest.raises(AttributeError):
            compare_by_key("rating")(PLAYERS[0], PLAYERS[1])


class TestCompareByMultiple:
    def test_tie_break_chain(self):
        compare = compare_by_multiple([
            SortRule(field="points", direction="desc"),
            SortRule(field="name"),
        ])
        result = sorted(PLAYERS, key=cmp_to_key(compare))
        assert [p.name for p in result] == ["cai", "ana", "ben", "eli", "dee"]

    def test_mapping_rules(self):
        compare = compare_by_multiple([
            {"key": "team"},
            {"key": "points", "direction": "desc"},
        ])
        result = sorted(PLAYERS, key=cmp_to_key(compare))
        assert [p.name for p in result] == ["ben", "dee", "cai", "ana", "eli"]

    def test_custom_comparator_with_direction(self):
        by_points = lambda a, b: a.points - b.points
        compare = compare_by_multiple([
            SortRule(compare=by_points, direction="desc"),
            SortRule(field="name"),
        ])
        assert compare(PLAYERS[2], PLAYERS[3]) < 0
        assert compare(PLAYERS[0], PLAYERS[1]) < 0

    def test_all_rules_tie(self):
        compare = compare_by_multiple([SortRule(field="team"), SortRule(field="points")])
        assert compare(PLAYERS[0], PLAYERS[4]) == 0

    def test_empty_chain_ties_everything(self):
        assert compare_by_multiple([])(1, 2) == 0

    def test_rule_needs_field_or_compare(self):
        with pytest.raises(ValueError):
            SortRule()

    def test_rejects_unknown_rule_type(self):
        with pytest.raises(TypeError):
            compare_by_multiple(["points"])


class TestIsSorted:
    @pytest.mark.parametrize("seq", [[], [1], [1, 1, 2], ["a", "b"]])
    def test_sorted(self, seq):
        assert is_sorted(seq)

    def test_inversion(self):
        assert not is_sorted([1, 3, 2])

    def test_comparator(self):
        assert is_sorted([3, 2, 1], lambda a, b: b - a)

    def test_stops_at_first_inversion(self):
        calls = []

        def compare(a, b):
            calls.append((a, b))
            return a - b

        assert not is_sorted([2, 1, 3, 4, 5], compare)
        assert len(calls) == 1


class TestShuffle:
    def test_returns_permutation_copy(self):
        data = list(range(50))
        result = shuffle(data, random.Random(1))
        assert result is not data
        assert data == list(range(50))
        assert sorted(result) == data

    def test_shuffles(self):
        assert not is_sorted(shuffle(range(200), random.Random(2)))

    def test_empty(self):
        assert shuffle([]) == []


class TestGenerateRandomSequence:
    def test_size_and_bounds(self):
        seq = generate_random_sequence(500, -3, 3, random.Random(0))
        assert len(seq) == 500
        assert set(seq) == set(range(-3, 4))

    def test_defaults(self):
        seq = generate_random_sequence(100)
        assert all(0 <= x <= 100 for x in seq)

    def test_single_value_range(self):
        assert generate_random_sequence(4, 7, 7) == [7, 7, 7, 7]

    def test_seeded_reproducible(self):
        assert (generate_random_sequence(20, rng=random.Random(5))
                == generate_random_sequence(20, rng=random.Random(5)))

    @pytest.mark.parametrize("args", [(-1, 0, 5), (3, 5, 0)])
    def test_invalid(self, args):
        with pytest.raises(ValueError):
            generate_random_sequence(*args)
