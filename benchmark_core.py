"""
Quicksort Configuration Benchmark - Core Module
===============================================

Contains: input patterns, the partition x pivot configuration matrix,
timing statistics, complexity fitting, the benchmark engine and
report/table output.
"""

from __future__ import annotations
import gc, itertools, logging, math, platform, random, sys, time
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from hybrid_quicksort import (
    PartitionStrategy, PivotStrategy, QuickSort, QuickSortConfig, SortStatistics,
)
from sort_helpers import is_sorted

log = logging.getLogger(__name__)

# =============================================================================
# Configuration
# =============================================================================

@dataclass(frozen=True)
class BenchmarkConfig:
    seed: int = 42
    warmup_runs: int = 1
    runs: int = 5
    gc_between_runs: bool = True
    scaling_sizes: Tuple[int, ...] = (250, 500, 1000, 2500, 5000, 10000)

class Colors:
    HEADER = '\033[95m'
    CYAN = '\033[96m'
    GREEN = '\033[92m'
    YELLOW = '\033[93m'
    RED = '\033[91m'
    BOLD = '\033[1m'
    END = '\033[0m'

    @classmethod
    def disable(cls):
        for a in ['HEADER', 'CYAN', 'GREEN', 'YELLOW', 'RED', 'BOLD', 'END']:
            setattr(cls, a, '')

if not sys.stdout.isatty():
    Colors.disable()

# =============================================================================
# Timing statistics
# =============================================================================

@dataclass
class TimingSummary:
    n: int
    mean: float
    median: float
    std_dev: float
    min_val: float
    max_val: float
    p25: float
    p75: float
    raw_values: List[float] = field(default_factory=list, repr=False)

    @classmethod
    def from_samples(cls, samples: List[float]) -> "TimingSummary":
        if not samples:
            return cls(0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 0.0, [])
        x = np.asarray(samples, dtype=float)
        p25, p75 = np.percentile(x, [25, 75])
        return cls(n=len(x), mean=float(x.mean()), median=float(np.median(x)),
                   std_dev=float(x.std(ddof=1)) if len(x) > 1 else 0.0,
                   min_val=float(x.min()), max_val=float(x.max()),
                   p25=float(p25), p75=float(p75), raw_values=list(samples))

    def to_dict(self):
        return {
            "n_samples": self.n,
            "mean_seconds": self.mean,
            "median_seconds": self.median,
            "std_dev": self.std_dev,
            "min": self.min_val,
            "max": self.max_val,
            "p25": self.p25,
            "p75": self.p75,
        }


COMPLEXITY_MODELS: Dict[str, Callable[[np.ndarray], np.ndarray]] = {
    "O(n)": lambda n: n,
    "O(n log n)": lambda n: n * np.log2(n),
    "O(n^2)": lambda n: n * n,
}


def estimate_complexity(sizes: List[int], values: List[float]) -> Tuple[str, float]:
    """Fit each growth model by least squares; return the best label and its R^2."""
    if len(sizes) < 3 or len(values) < 3:
        return ("unknown", 0.0)

    n = np.asarray(sizes, dtype=float)
    y = np.asarray(values, dtype=float)
    ss_tot = float(((y - y.mean()) ** 2).sum())
    if ss_tot == 0:
        return ("O(1)", 1.0)

    best = ("unknown", -math.inf)
    for label, model in COMPLEXITY_MODELS.items():
        slope, intercept = np.polyfit(model(n), y, 1)
        pred = slope * model(n) + intercept
        r2 = 1 - float(((y - pred) ** 2).sum()) / ss_tot
        if r2 > best[1]:
            best = (label, r2)
    return best


# =============================================================================
# Input patterns
# =============================================================================

@dataclass(frozen=True)
class InputPattern:
    name: str
    description: str
    build: Callable[[int, random.Random], List[int]]

    def generate(self, n: int, rng: random.Random) -> List[int]:
        return self.build(n, rng)


def _random(n, rng):
    return [rng.randrange(max(1, n)) for _ in range(n)]

def _nearly_sorted(n, rng):
    a = list(range(n))
    for _ in range(int(n * 0.05)):
        i, j = rng.randrange(n), rng.randrange(n)
        a[i], a[j] = a[j], a[i]
    return a

def _organ_pipe(n, rng):
    m = n // 2
    return list(range(m)) + list(range(n - m - 1, -1, -1))


INPUT_PATTERNS: Dict[str, InputPattern] = {p.name: p for p in [
    InputPattern("random", "Uniform ints in [0, n)", _random),
    InputPattern("sorted", "Already ascending", lambda n, rng: list(range(n))),
    InputPattern("reversed", "Descending order", lambda n, rng: list(range(n, 0, -1))),
    InputPattern("nearly_sorted", "Ascending with ~5% random swaps", _nearly_sorted),
    InputPattern("many_duplicates", "~n/10 distinct values",
                 lambda n, rng: [rng.randrange(max(1, n // 10)) for _ in range(n)]),
    InputPattern("few_unique", "Values drawn from 1..5",
                 lambda n, rng: [rng.randint(1, 5) for _ in range(n)]),
    InputPattern("three_values", "Three-letter alphabet repeated",
                 lambda n, rng: [(0, 1, 2)[i % 3] for i in range(n)]),
    InputPattern("all_equal", "Every element identical", lambda n, rng: [42] * n),
    InputPattern("organ_pipe", "Ascending then descending", _organ_pipe),
]}


# =============================================================================
# Configuration matrix
# =============================================================================

def config_label(config: QuickSortConfig) -> str:
    label = f"{config.partition_strategy.value}/{config.pivot_strategy.value}"
    if not config.adaptive_three_way and config.partition_strategy is not PartitionStrategy.THREE_WAY:
        label += " (no adapt)"
    return label


def all_configurations(**overrides) -> List[QuickSortConfig]:
    """Every partition x pivot combination, sharing the given extra settings."""
    return [QuickSortConfig(partition_strategy=part, pivot_strategy=pivot, **overrides)
            for part, pivot in itertools.product(PartitionStrategy, PivotStrategy)]


# =============================================================================
# Result types
# =============================================================================

@dataclass
class ConfigResult:
    label: str
    input_type: str
    n: int
    timing: TimingSummary
    correct: bool
    stats: Optional[SortStatistics] = None
    error: Optional[str] = None

    def to_dict(self):
        return {
            "configuration": self.label,
            "input_type": self.input_type,
            "n": self.n,
            "correct": self.correct,
            "error": self.error,
            "sort_statistics": self.stats.to_dict() if self.stats else None,
            "timing": self.timing.to_dict(),
        }


@dataclass
class ScalingResult:
    label: str
    input_type: str
    sizes: List[int]
    comparisons: List[int]
    max_depths: List[int]
    estimated_complexity: str
    r_squared: float

    def to_dict(self):
        return {
            "configuration": self.label,
            "input_type": self.input_type,
            "sizes": self.sizes,
            "comparisons": self.comparisons,
            "max_recursion_depths": self.max_depths,
            "estimated_complexity": self.estimated_complexity,
            "r_squared": self.r_squared,
        }


@dataclass
class BenchmarkReport:
    metadata: Dict[str, Any]
    results: List[ConfigResult]
    scaling: List[ScalingResult]
    analysis: Optional[List[Dict[str, Any]]] = None

    @property
    def all_correct(self) -> bool:
        return all(r.correct for r in self.results)

    def to_dict(self):
        return {
            "metadata": self.metadata,
            "results": [r.to_dict() for r in self.results],
            "scaling": [s.to_dict() for s in self.scaling],
            "analysis": self.analysis,
        }


# =============================================================================
# Benchmark Engine
# =============================================================================

class BenchmarkEngine:
    def __init__(self, config: BenchmarkConfig = BenchmarkConfig()):
        self.config = config

    @contextmanager
    def _gc_pause(self):
        if self.config.gc_between_runs:
            gc.collect()
            gc.disable()
        try:
            yield
        finally:
            if self.config.gc_between_runs:
                gc.enable()

    def time_once(self, sorter: QuickSort, arr: List[int]) -> Tuple[float, List[int]]:
        a = arr[:]
        with self._gc_pause():
            t0 = time.perf_counter()
            sorter.sort(a)
            t1 = time.perf_counter()
        return (t1 - t0, a)

    @staticmethod
    def verify(result: List[int], original: List[int]) -> bool:
        """Sorted and the same multiset as the input, checked against numpy's sort."""
        return is_sorted(result) and np.array_equal(np.sort(np.asarray(original)), np.asarray(result))

    def measure(self, qs_config: QuickSortConfig, pattern: InputPattern, n: int) -> ConfigResult:
        label = config_label(qs_config)
        sorter = QuickSort(qs_config)
        inputs = [pattern.generate(n, random.Random(self.config.seed + i))
                  for i in range(self.config.runs + self.config.warmup_runs)]

        _, first = self.time_once(sorter, inputs[0])
        stats = sorter.get_statistics()
        if not self.verify(first, inputs[0]):
            log.warning("%s produced an unsorted result on %s (n=%d)", label, pattern.name, n)
            return ConfigResult(label, pattern.name, n, TimingSummary.from_samples([]),
                                False, stats, "result is not a sorted permutation")

        for i in range(self.config.warmup_runs):
            self.time_once(sorter, inputs[i])

        times = [self.time_once(sorter, arr)[0] for arr in inputs[self.config.warmup_runs:]]
        return ConfigResult(label, pattern.name, n, TimingSummary.from_samples(times), True, stats)

    def run_scaling(self, qs_config: QuickSortConfig, pattern: InputPattern,
                    sizes: List[int]) -> ScalingResult:
        """Track comparison counts and recursion depth as n grows."""
        sorter = QuickSort(qs_config)
        comparisons, depths = [], []
        for n in sizes:
            arr = pattern.generate(n, random.Random(self.config.seed))
            sorter.sort(arr)
            s = sorter.get_statistics()
            comparisons.append(s.comparisons)
            depths.append(s.max_recursion_depth)

        comp, r2 = estimate_complexity(list(sizes), comparisons)
        return ScalingResult(config_label(qs_config), pattern.name, list(sizes),
                             comparisons, depths, comp, r2)


def analyze_patterns(size: int = 1000, seed: int = 42,
                     qs_config: Optional[QuickSortConfig] = None) -> List[Dict[str, Any]]:
    """Sort one input of every pattern and collect the statistics snapshot of each."""
    sorter = QuickSort(qs_config or QuickSortConfig(seed=seed))
    results = []
    for name, pattern in INPUT_PATTERNS.items():
        arr = pattern.generate(size, random.Random(seed))
        sorter.sort(arr)
        results.append({
            "pattern": name,
            "size": size,
            "sorted": is_sorted(arr),
            "stats": sorter.get_statistics().to_dict(),
        })
    return results


# =============================================================================
# Formatting & Output
# =============================================================================

def fmt_time(t):
    """Format time with appropriate units."""
    if t < 1e-3:
        return f"{t*1e6:.1f}us"
    if t < 1:
        return f"{t*1e3:.2f}ms"
    return f"{t:.3f}s"


def get_system_info():
    """Gather system information for reproducibility."""
    return {
        "timestamp": datetime.now().isoformat(),
        "python_version": sys.version,
        "platform": platform.platform(),
        "machine": platform.machine(),
        "numpy_version": np.__version__,
    }


def print_header(text):
    print(f"\n{Colors.BOLD}{Colors.HEADER}{'='*78}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{text.center(78)}{Colors.END}")
    print(f"{Colors.BOLD}{Colors.HEADER}{'='*78}{Colors.END}\n")


def print_subheader(text):
    print(f"\n{Colors.BOLD}{Colors.CYAN}{text}{Colors.END}")
    print(f"{Colors.CYAN}{'-'*len(text)}{Colors.END}")


def print_results_table(results: List[ConfigResult]):
    """Print one row per configuration, fastest first."""
    results = sorted(results, key=lambda r: r.timing.median if r.timing.n > 0 else float('inf'))
    best = next((r.timing.median for r in results if r.timing.n > 0), None)

    hdr = (f"{'Configuration':<30} {'Median':>10} {'Compares':>10} {'Swaps':>9} "
           f"{'Depth':>6} {'3-way':>6} {'vs Best':>8} {'Status':>7}")
    print(f"{Colors.BOLD}{hdr}{Colors.END}")
    print("-" * len(hdr))

    for r in results:
        s = r.stats
        if r.timing.n == 0 or not r.correct:
            print(f"{r.label:<30} {'-':>10} {'-':>10} {'-':>9} {'-':>6} {'-':>6} {'-':>8} "
                  f"{Colors.RED}FAIL{Colors.END}")
            continue

        ratio = r.timing.median / best if best else 1.0
        clr = Colors.GREEN if ratio <= 1.1 else Colors.YELLOW if ratio <= 2 else Colors.RED
        print(f"{r.label:<30} {fmt_time(r.timing.median):>10} {s.comparisons:>10,} {s.swaps:>9,} "
              f"{s.max_recursion_depth:>6} {s.three_way_switches:>6} "
              f"{clr}{ratio:>7.2f}x{Colors.END} {Colors.GREEN}OK{Colors.END}")


def print_scaling_table(results: List[ScalingResult]):
    """Print comparison counts per size with the fitted growth model."""
    if not results:
        return

    sizes = results[0].sizes
    hdr = f"{'Configuration':<30} " + " ".join(f"{'n='+str(s):>11}" for s in sizes) + f" {'Fit':>12}"
    print(f"{Colors.BOLD}{hdr}{Colors.END}")
    print("-" * len(hdr))

    for sr in results:
        row = f"{sr.label:<30} " + " ".join(f"{c:>11,}" for c in sr.comparisons)
        print(row + f" {sr.estimated_complexity:>12}")
        depth_row = f"{'  max depth':<30} " + " ".join(f"{d:>11}" for d in sr.max_depths)
        print(f"{Colors.CYAN}{depth_row}{Colors.END}")


def print_analysis(analysis: List[Dict[str, Any]]):
    hdr = f"{'Pattern':<18} {'Compares':>11} {'Swaps':>10} {'Depth':>6} {'3-way':>6} {'Time':>10} {'Status':>7}"
    print(f"{Colors.BOLD}{hdr}{Colors.END}")
    print("-" * len(hdr))
    for row in analysis:
        s = row["stats"]
        status = f"{Colors.GREEN}OK{Colors.END}" if row["sorted"] else f"{Colors.RED}FAIL{Colors.END}"
        print(f"{row['pattern']:<18} {s['comparisons']:>11,} {s['swaps']:>10,} "
              f"{s['max_recursion_depth']:>6} {s['three_way_switches']:>6} "
              f"{fmt_time(s['elapsed']):>10} {status}")
