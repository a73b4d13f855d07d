"""
Comparator builders and array utilities.

Comparators here follow the classic cmp protocol: compare(a, b) returns a
negative number when a orders before b, zero when they tie and a positive
number otherwise. They plug straight into QuickSort, and into the builtin
sorted() via functools.cmp_to_key.
"""

from __future__ import annotations

import random
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

CompareFn = Callable[[Any, Any], int]
FieldSpec = Union[str, Callable[[Any], Any]]

DIRECTIONS = {"asc": 1, "desc": -1}


def natural_order(a, b):
    """Default comparator: the elements' own < and > operators."""
    return (a > b) - (a < b)


def _direction_sign(direction):
    try:
        return DIRECTIONS[direction]
    except KeyError:
        raise ValueError(f"direction must be 'asc' or 'desc', got {direction!r}") from None


def _field_getter(field):
    """
    Turn a field spec into a key function.

    A callable is used as-is. A string reads a mapping key for dict-like
    elements and an attribute for everything else.
    """
    if callable(field):
        return field

    def get(obj):
        if isinstance(obj, Mapping):
            return obj[field]
        return getattr(obj, field)

    return get


def compare_by_key(field: FieldSpec, direction: str = "asc") -> CompareFn:
    """Build a comparator ordering elements by one field's natural order."""
    get = _field_getter(field)
    sign = _direction_sign(direction)

    def compare(a, b):
        return sign * natural_order(get(a), get(b))

    return compare


@dataclass(frozen=True)
class SortRule:
    """One step of a tie-break chain: a field or a custom comparator, plus a direction."""
    field: Optional[FieldSpec] = None
    compare: Optional[CompareFn] = None
    direction: str = "asc"

    def __post_init__(self):
        if self.field is None and self.compare is None:
            raise ValueError("SortRule needs a field or a compare function")
        _direction_sign(self.direction)

    @classmethod
    def coerce(cls, rule) -> "SortRule":
        if isinstance(rule, cls):
            return rule
        if isinstance(rule, Mapping):
            return cls(field=rule.get("key"), compare=rule.get("fn"),
                       direction=rule.get("direction", "asc"))
        raise TypeError(f"expected SortRule or mapping, got {type(rule).__name__}")

    def build(self) -> CompareFn:
        if self.compare is None:
            return compare_by_key(self.field, self.direction)
        if self.direction == "asc":
            return self.compare
        fn = self.compare
        return lambda a, b: -fn(a, b)


def compare_by_multiple(rules: Iterable[Union[SortRule, Mapping]]) -> CompareFn:
    """
    Build a lexicographic comparator from an ordered list of rules.

    Each rule is evaluated in turn and the first nonzero result wins; if every
    rule ties the elements compare equal. Rules may be SortRule instances or
    mappings with "key", "fn" and "direction" entries.
    """
    chain = [SortRule.coerce(r).build() for r in rules]

    def compare(a, b):
        for fn in chain:
            result = fn(a, b)
            if result != 0:
                return result
        return 0

    return compare


# =============================================================================
# Array utilities
# =============================================================================

def is_sorted(seq: Sequence, compare: Optional[CompareFn] = None) -> bool:
    """True when no adjacent pair is inverted. Stops at the first inversion."""
    compare = compare or natural_order
    for i in range(1, len(seq)):
        if compare(seq[i - 1], seq[i]) > 0:
            return False
    return True


def shuffle(seq: Iterable, rng: Optional[random.Random] = None) -> List:
    """Return a uniformly shuffled copy (Fisher-Yates via Random.shuffle)."""
    result = list(seq)
    (rng or random).shuffle(result)
    return result


def generate_random_sequence(size: int, minimum: int = 0, maximum: int = 100,
                             rng: Optional[random.Random] = None) -> List[int]:
    """Return `size` independent uniform integers from [minimum, maximum]."""
    if size < 0:
        raise ValueError(f"size must be >= 0, got {size}")
    if minimum > maximum:
        raise ValueError(f"minimum ({minimum}) exceeds maximum ({maximum})")
    rng = rng or random
    return [rng.randint(minimum, maximum) for _ in range(size)]


__all__ = [
    'CompareFn',
    'SortRule',
    'natural_order',
    'compare_by_key',
    'compare_by_multiple',
    'is_sorted',
    'shuffle',
    'generate_random_sequence',
]
