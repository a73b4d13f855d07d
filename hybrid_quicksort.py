"""
Hybrid quicksort with configurable partitioning, pivot choice and order statistics.

The engine sorts any mutable indexable sequence in place under a cmp-style
comparator. It supports three partition schemes (Lomuto, Hoare, three-way),
four pivot heuristics, an adaptive switch to three-way partitioning on
duplicate-heavy windows, and a driver that keeps call-stack depth at O(log n)
no matter how bad the pivots are.

Typical use:

    sorter = QuickSort(partition_strategy="hoare", pivot_strategy="median_of_three")
    sorter.sort(data)
    third = sorter.quick_select(data, 3)
    stats = sorter.get_statistics()
"""

from __future__ import annotations

import dataclasses
import enum
import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from sort_helpers import natural_order

log = logging.getLogger(__name__)


class UsageError(ValueError):
    """Raised for arguments outside an operation's contract, such as k out of range."""


class PartitionStrategy(str, enum.Enum):
    LOMUTO = "lomuto"
    HOARE = "hoare"
    THREE_WAY = "three_way"


class PivotStrategy(str, enum.Enum):
    FIRST = "first"
    LAST = "last"
    RANDOM = "random"
    MEDIAN_OF_THREE = "median_of_three"


# =============================================================================
# Configuration & statistics
# =============================================================================

@dataclass(frozen=True)
class QuickSortConfig:
    compare: Callable[[Any, Any], int] = natural_order
    insertion_cutoff: int = 10
    partition_strategy: PartitionStrategy = PartitionStrategy.LOMUTO
    pivot_strategy: PivotStrategy = PivotStrategy.LAST
    adaptive_three_way: bool = True
    adaptive_min_window: int = 20
    sample_size: int = 5
    distinct_ratio: float = 0.7
    seed: Optional[int] = None
    rng: Optional[random.Random] = field(default=None, compare=False, repr=False)

    def __post_init__(self):
        #Accept plain strings for the strategies ("hoare", "median_of_three", ...)
        for name, kind in (("partition_strategy", PartitionStrategy),
                           ("pivot_strategy", PivotStrategy)):
            value = getattr(self, name)
            try:
                object.__setattr__(self, name, kind(value))
            except ValueError:
                choices = ", ".join(m.value for m in kind)
                raise UsageError(f"{name} must be one of {choices}; got {value!r}") from None

        if self.compare is None:
            object.__setattr__(self, "compare", natural_order)
        if self.insertion_cutoff < 1:
            raise UsageError(f"insertion_cutoff must be >= 1, got {self.insertion_cutoff}")
        if self.sample_size < 1:
            raise UsageError(f"sample_size must be >= 1, got {self.sample_size}")
        if not 0.0 < self.distinct_ratio <= 1.0:
            raise UsageError(f"distinct_ratio must be in (0, 1], got {self.distinct_ratio}")

    def make_rng(self) -> random.Random:
        return self.rng if self.rng is not None else random.Random(self.seed)


@dataclass
class SortStatistics:
    operation: str = ""
    size: int = 0
    comparisons: int = 0
    swaps: int = 0
    recursion_depth: int = 0
    max_recursion_depth: int = 0
    three_way_switches: int = 0
    elapsed: float = 0.0

    def enter(self, depth):
        self.recursion_depth = depth
        if depth > self.max_recursion_depth:
            self.max_recursion_depth = depth

    def to_dict(self):
        return dataclasses.asdict(self)


# =============================================================================
# Partition primitives
# =============================================================================

def swap(a, i, j, stats=None):
    """Exchange a[i] and a[j]. Self-swaps are skipped and not counted."""
    if i != j:
        a[i], a[j] = a[j], a[i]
        if stats is not None:
            stats.swaps += 1


def insertion_sort(a, left, right, compare=natural_order):
    """
    Sort the inclusive window a[left..right] by insertion.

    Elements are shifted rather than swapped, so only comparisons cost
    anything in the statistics.
    """
    for i in range(left + 1, right + 1):
        key = a[i]
        j = i - 1
        while j >= left and compare(a[j], key) > 0:
            a[j + 1] = a[j]
            j -= 1
        a[j + 1] = key


def lomuto_partition(a, left, right, pivot_index, compare=natural_order, stats=None):
    """
    Lomuto scheme. Returns the pivot's final index p, with
    a[left..p-1] <= a[p] < a[p+1..right].
    """
    swap(a, pivot_index, right, stats)
    pivot = a[right]
    store = left
    for j in range(left, right):
        if compare(a[j], pivot) <= 0:
            swap(a, store, j, stats)
            store += 1
    swap(a, store, right, stats)
    return store


def hoare_partition(a, left, right, pivot_index, compare=natural_order, stats=None):
    """
    Hoare scheme. Returns a split index j with a[left..j] <= pivot <= a[j+1..right].

    j is a boundary only; the pivot value may end up on either side of it.
    The pivot is parked at `left` first, which keeps j < right so both halves
    are always non-empty.
    """
    swap(a, pivot_index, left, stats)
    pivot = a[left]
    i = left - 1
    j = right + 1
    while True:
        i += 1
        while compare(a[i], pivot) < 0:
            i += 1
        j -= 1
        while compare(a[j], pivot) > 0:
            j -= 1
        if i >= j:
            return j
        swap(a, i, j, stats)


def three_way_partition(a, left, right, pivot_index, compare=natural_order, stats=None):
    """
    Dutch national flag pass. Returns (lt, gt) such that
    a[left..lt-1] < pivot, a[lt..gt] == pivot and a[gt+1..right] > pivot.
    """
    swap(a, pivot_index, left, stats)
    pivot = a[left]
    lt, gt = left, right
    i = left + 1
    while i <= gt:
        c = compare(a[i], pivot)
        if c < 0:
            swap(a, lt, i, stats)
            lt += 1
            i += 1
        elif c > 0:
            swap(a, i, gt, stats)
            gt -= 1
        else:
            i += 1
    return lt, gt


# =============================================================================
# Pivot selection & adaptive dispatch
# =============================================================================

def median_of_three(a, left, right, compare=natural_order):
    """Index of the median of a[left], a[mid], a[right]. At most 3 comparisons."""
    mid = (left + right) // 2
    x, y, z = a[left], a[mid], a[right]
    if compare(x, y) > 0:
        if compare(y, z) > 0:
            return mid
        return right if compare(x, z) > 0 else left
    if compare(x, z) > 0:
        return left
    return right if compare(y, z) > 0 else mid


def select_pivot(a, left, right, strategy, compare=natural_order, rng=None):
    if strategy is PivotStrategy.FIRST:
        return left
    if strategy is PivotStrategy.RANDOM:
        return (rng or random).randint(left, right)
    if strategy is PivotStrategy.MEDIAN_OF_THREE:
        return median_of_three(a, left, right, compare)
    return right


def wants_three_way(a, left, right, compare=natural_order, rng=None,
                    min_window=20, sample_size=5, distinct_ratio=0.7):
    """
    Sample the window and report whether it looks duplicate-heavy.

    A wrong answer only costs speed: a false positive pays for an unneeded
    three-way pass, a false negative misses the shortcut.
    """
    size = right - left + 1
    if size < min_window:
        return False

    rng = rng or random
    n = min(sample_size, size)
    distinct = []
    for _ in range(n):
        value = a[rng.randint(left, right)]
        #Duplicates are judged by the comparator, so unhashable elements work too
        if not any(compare(value, seen) == 0 for seen in distinct):
            distinct.append(value)
    return len(distinct) < n * distinct_ratio


# =============================================================================
# Engine
# =============================================================================

class _Run:
    """Per-call state: fresh counters plus the counting comparator."""

    def __init__(self, config, rng, operation, size):
        self.stats = SortStatistics(operation=operation, size=size)
        self.rng = rng
        base = config.compare
        stats = self.stats

        def compare(a, b):
            stats.comparisons += 1
            return base(a, b)

        self.compare = compare


class QuickSort:
    """
    Configurable in-place quicksort engine.

    Build it once with a QuickSortConfig (or the same fields as keywords) and
    reuse it. Each top-level call records its own SortStatistics and publishes
    them when it returns; get_statistics() hands back a copy. Use one instance
    per thread if you read the statistics.
    """

    def __init__(self, config: Optional[QuickSortConfig] = None, **options):
        if config is None:
            config = QuickSortConfig(**options)
        elif options:
            config = dataclasses.replace(config, **options)
        self.config = config
        self._rng = config.make_rng()
        self._stats = SortStatistics()
        log.debug("QuickSort configured: partition=%s pivot=%s cutoff=%d adaptive=%s",
                  config.partition_strategy.value, config.pivot_strategy.value,
                  config.insertion_cutoff, config.adaptive_three_way)

    # ----------------------------------------------------------------- public

    def sort(self, seq):
        """Sort seq in place and return it."""
        run = self._begin("sort", seq)
        t0 = time.perf_counter()
        if len(seq) > 1:
            self._sort_range(run, seq, 0, len(seq) - 1, 0)
        self._finish(run, t0)
        return seq

    def sort_copy(self, seq) -> List:
        """Return a sorted list, leaving seq untouched."""
        return self.sort(list(seq))

    def quick_select(self, seq, k: int):
        """
        Return the k-th smallest element (1-indexed).

        seq is partially reordered as a side effect. Raises UsageError unless
        1 <= k <= len(seq).
        """
        n = len(seq)
        if not 1 <= k <= n:
            raise UsageError(f"k must be between 1 and {n}, got {k}")

        run = self._begin("quick_select", seq)
        t0 = time.perf_counter()
        target = k - 1
        left, right = 0, n - 1
        cutoff = self.config.insertion_cutoff
        while left < right:
            if right - left + 1 <= cutoff:
                insertion_sort(seq, left, right, run.compare)
                break
            left_end, right_start = self._partition(run, seq, left, right)
            if target <= left_end:
                right = left_end
            elif target >= right_start:
                left = right_start
            else:
                #target sits inside the pivot / equal zone, already final
                break
        self._finish(run, t0)
        return seq[target]

    def partial_sort(self, seq, k: int):
        """
        Put the k smallest elements, sorted, at the front of seq and return it.

        The tail is left unordered. k >= len(seq) is a full sort; k == 0 does
        nothing.
        """
        if k < 0:
            raise UsageError(f"k must be >= 0, got {k}")
        if k >= len(seq):
            return self.sort(seq)

        run = self._begin("partial_sort", seq)
        t0 = time.perf_counter()
        if k > 0 and len(seq) > 1:
            self._partial_range(run, seq, 0, len(seq) - 1, k, 0)
        self._finish(run, t0)
        return seq

    def get_statistics(self) -> SortStatistics:
        """Copy of the statistics from the most recently finished call."""
        return dataclasses.replace(self._stats)

    # ---------------------------------------------------------------- drivers

    def _begin(self, operation, seq):
        return _Run(self.config, self._rng, operation, len(seq))

    def _finish(self, run, t0):
        stats = run.stats
        stats.elapsed = time.perf_counter() - t0
        self._stats = stats
        log.debug("%s n=%d comparisons=%d swaps=%d max_depth=%d three_way=%d elapsed=%.6fs",
                  stats.operation, stats.size, stats.comparisons, stats.swaps,
                  stats.max_recursion_depth, stats.three_way_switches, stats.elapsed)

    def _sort_range(self, run, a, left, right, depth):
        """
        Bounded driver: recurse into the smaller side, loop on the larger.
        Each recursive call at least halves the window, so depth stays O(log n).
        """
        run.stats.enter(depth)
        cutoff = self.config.insertion_cutoff
        while left < right:
            if right - left + 1 <= cutoff:
                insertion_sort(a, left, right, run.compare)
                return
            left_end, right_start = self._partition(run, a, left, right)
            if left_end - left < right - right_start:
                if left < left_end:
                    self._sort_range(run, a, left, left_end, depth + 1)
                    run.stats.enter(depth)
                left = right_start
            else:
                if right_start < right:
                    self._sort_range(run, a, right_start, right, depth + 1)
                    run.stats.enter(depth)
                right = left_end

    def _partial_range(self, run, a, left, right, k, depth):
        run.stats.enter(depth)
        cutoff = self.config.insertion_cutoff
        while left < right and left < k:
            if right - left + 1 <= cutoff:
                insertion_sort(a, left, right, run.compare)
                return
            left_end, right_start = self._partition(run, a, left, right)
            if right_start >= k:
                #Everything from right_start on belongs to the unordered tail
                right = left_end
            elif left_end - left < right - right_start:
                if left < left_end:
                    self._partial_range(run, a, left, left_end, k, depth + 1)
                    run.stats.enter(depth)
                left = right_start
            else:
                if right_start < right:
                    self._partial_range(run, a, right_start, right, k, depth + 1)
                    run.stats.enter(depth)
                right = left_end

    def _partition(self, run, a, left, right):
        """
        Partition a[left..right] and return (left_end, right_start): the
        caller still has to order a[left..left_end] and a[right_start..right],
        everything strictly between is final.
        """
        config = self.config
        strategy = config.partition_strategy
        if (config.adaptive_three_way and strategy is not PartitionStrategy.THREE_WAY
                and wants_three_way(a, left, right, run.compare, run.rng,
                                    config.adaptive_min_window, config.sample_size,
                                    config.distinct_ratio)):
            strategy = PartitionStrategy.THREE_WAY
            run.stats.three_way_switches += 1

        p = select_pivot(a, left, right, config.pivot_strategy, run.compare, run.rng)
        if strategy is PartitionStrategy.THREE_WAY:
            lt, gt = three_way_partition(a, left, right, p, run.compare, run.stats)
            return lt - 1, gt + 1
        if strategy is PartitionStrategy.HOARE:
            j = hoare_partition(a, left, right, p, run.compare, run.stats)
            return j, j + 1
        p = lomuto_partition(a, left, right, p, run.compare, run.stats)
        return p - 1, p + 1


# =============================================================================
# Convenience functions
# =============================================================================

def quicksort(seq, compare=None):
    """Sorted copy of seq with the default configuration."""
    return QuickSort(compare=compare).sort_copy(seq)


def quicksort_in_place(seq, compare=None):
    return QuickSort(compare=compare).sort(seq)


def quick_select(seq, k, compare=None):
    """k-th smallest element of seq (1-indexed); seq itself is not modified."""
    return QuickSort(compare=compare).quick_select(list(seq), k)


__all__ = [
    'UsageError',
    'PartitionStrategy',
    'PivotStrategy',
    'QuickSortConfig',
    'SortStatistics',
    'QuickSort',
    'swap',
    'insertion_sort',
    'lomuto_partition',
    'hoare_partition',
    'three_way_partition',
    'median_of_three',
    'select_pivot',
    'wants_three_way',
    'quicksort',
    'quicksort_in_place',
    'quick_select',
]
