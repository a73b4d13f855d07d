"""Tests for the benchmark harness and its CLI runner."""

import json
import random

import numpy as np
import pytest

import benchmark_sorts
from benchmark_core import (
    BenchmarkConfig,
    BenchmarkEngine,
    INPUT_PATTERNS,
    TimingSummary,
    all_configurations,
    analyze_patterns,
    config_label,
    estimate_complexity,
)
from hybrid_quicksort import QuickSortConfig

SMALL = BenchmarkConfig(seed=1, warmup_runs=0, runs=2, gc_between_runs=False)


class TestEstimateComplexity:
    SIZES = [100, 200, 400, 800, 1600, 3200]

    def test_linear(self):
        assert estimate_complexity(self.SIZES, [3 * n + 5 for n in self.SIZES])[0] == "O(n)"

    def test_n_log_n(self):
        label, r2 = estimate_complexity(self.SIZES, [n * np.log2(n) for n in self.SIZES])
        assert label == "O(n log n)"
        assert r2 == pytest.approx(1.0)

    def test_quadratic(self):
        assert estimate_complexity(self.SIZES, [n * n / 2 for n in self.SIZES])[0] == "O(n^2)"

    def test_too_few_points(self):
        assert estimate_complexity([10, 20], [1, 2]) == ("unknown", 0.0)


class TestTimingSummary:
    def test_from_samples(self):
        s = TimingSummary.from_samples([1.0, 2.0, 3.0, 4.0])
        assert s.n == 4
        assert s.median == pytest.approx(2.5)
        assert s.min_val == 1.0 and s.max_val == 4.0

    def test_empty(self):
        assert TimingSummary.from_samples([]).n == 0


class TestPatternsAndConfigurations:
    @pytest.mark.parametrize("name", list(INPUT_PATTERNS))
    def test_pattern_length(self, name):
        assert len(INPUT_PATTERNS[name].generate(37, random.Random(0))) == 37

    def test_twelve_configurations(self):
        configs = all_configurations(seed=3)
        assert len(configs) == 12
        assert len({config_label(c) for c in configs}) == 12
        assert all(c.seed == 3 for c in configs)

    def test_label_marks_disabled_adaptation(self):
        assert config_label(QuickSortConfig(adaptive_three_way=False)) == "lomuto/last (no adapt)"


class TestBenchmarkEngine:
    def test_measure(self):
        result = BenchmarkEngine(SMALL).measure(QuickSortConfig(seed=1), INPUT_PATTERNS["random"], 300)
        assert result.correct
        assert result.timing.n == 2
        assert result.stats.comparisons > 0
        assert result.to_dict()["configuration"] == "lomuto/last"

    def test_measure_flags_broken_comparator(self):
        broken = QuickSortConfig(compare=lambda a, b: 0)
        result = BenchmarkEngine(SMALL).measure(broken, INPUT_PATTERNS["reversed"], 50)
        assert not result.correct
        assert result.error

    def test_scaling_three_values_is_linear(self):
        sizes = [300, 600, 1200, 2400]
        result = BenchmarkEngine(SMALL).run_scaling(
            QuickSortConfig(partition_strategy="three_way"), INPUT_PATTERNS["three_values"], sizes)
        assert result.sizes == sizes
        assert result.estimated_complexity == "O(n)"

    def test_analyze_patterns(self):
        rows = analyze_patterns(size=200, seed=4)
        assert {r["pattern"] for r in rows} == set(INPUT_PATTERNS)
        assert all(r["sorted"] for r in rows)


class TestRunner:
    def test_quick_mode(self):
        assert benchmark_sorts.main(["--quick", "--n", "200", "--runs", "1", "-q"]) == 0

    def test_json_report(self, tmp_path):
        out = tmp_path / "report.json"
        code = benchmark_sorts.main(["--scaling", "--max-n", "500", "--case", "sorted",
                                     "--pivot", "median_of_three", "-q", "-o", str(out)])
        assert code == 0
        report = json.loads(out.read_text())
        assert report["scaling"][0]["configuration"] == "lomuto/median_of_three"
        assert report["scaling"][0]["sizes"][-1] == 500

    def test_analyze_mode_prints(self, capsys):
        assert benchmark_sorts.main(["--analyze", "--n", "100", "--partition", "hoare"]) == 0
        assert "organ_pipe" in capsys.readouterr().out

    def test_bad_cutoff(self):
        assert benchmark_sorts.main(["--quick", "--cutoff", "0", "-q"]) == 2
