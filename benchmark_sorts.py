#!/usr/bin/env python3
"""
Quicksort Configuration Benchmark - Main Runner
===============================================

Compares the partition x pivot configurations of the hybrid quicksort.

Usage:
    python benchmark_sorts.py --quick
    python benchmark_sorts.py --full --n 5000 --output report.json
    python benchmark_sorts.py --scaling --partition hoare --pivot last --case sorted
    python benchmark_sorts.py --analyze --n 3000
"""

import argparse
import json
import logging
import sys

from benchmark_core import (
    BenchmarkConfig, BenchmarkEngine, BenchmarkReport, INPUT_PATTERNS,
    all_configurations, analyze_patterns, get_system_info,
    print_analysis, print_header, print_results_table, print_scaling_table,
    print_subheader, Colors,
)
from hybrid_quicksort import PartitionStrategy, PivotStrategy, QuickSortConfig, UsageError


def run_quick_benchmark(config: BenchmarkConfig, configs: list, case: str, n: int, quiet: bool = False):
    """Every configuration on one input pattern."""
    engine = BenchmarkEngine(config)
    pattern = INPUT_PATTERNS[case]

    if not quiet:
        print_header("Quick Benchmark")
        print(f"  n = {n}, input = {pattern.description}\n")

    results = [engine.measure(c, pattern, n) for c in configs]

    if not quiet:
        print_results_table(results)

    return results


def run_full_benchmark(config: BenchmarkConfig, configs: list, n: int, quiet: bool = False):
    """Every configuration on every input pattern."""
    engine = BenchmarkEngine(config)
    all_results = []

    if not quiet:
        print_header("Full Benchmark Suite")
        print(f"  n = {n}, {len(configs)} configurations x {len(INPUT_PATTERNS)} input patterns\n")

    for pattern in INPUT_PATTERNS.values():
        if not quiet:
            print_subheader(f"Input: {pattern.name}")
            print(f"  {pattern.description}\n")

        results = [engine.measure(c, pattern, n) for c in configs]
        all_results.extend(results)

        if not quiet:
            print_results_table(results)

    return all_results


def run_scaling_analysis(config: BenchmarkConfig, qs_config: QuickSortConfig, case: str,
                         max_n: int, quiet: bool = False):
    """Comparison-count growth for one configuration."""
    engine = BenchmarkEngine(config)
    pattern = INPUT_PATTERNS[case]

    sizes = [s for s in config.scaling_sizes if s <= max_n]
    if max_n not in sizes:
        sizes.append(max_n)
    sizes = sorted(sizes)

    if not quiet:
        print_header("Scaling Analysis")
        print(f"  Input: {pattern.name}, sizes: {sizes}\n")

    result = engine.run_scaling(qs_config, pattern, sizes)

    if not quiet:
        print_scaling_table([result])
        print(f"\n  Estimated complexity: {result.estimated_complexity} (R^2={result.r_squared:.3f})")

    return [result]


def build_report(config: BenchmarkConfig, results: list, scaling: list,
                 analysis: list = None) -> BenchmarkReport:
    metadata = get_system_info()
    metadata.update({
        "benchmark_version": "1.0.0",
        "config": {
            "seed": config.seed,
            "warmup_runs": config.warmup_runs,
            "runs": config.runs,
        }
    })
    return BenchmarkReport(metadata=metadata, results=results, scaling=scaling, analysis=analysis)


def build_parser():
    parser = argparse.ArgumentParser(
        description="Hybrid quicksort configuration benchmark",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s --quick                                  All configurations, random input
  %(prog)s --full --n 5000 --output report.json     Every pattern, JSON report
  %(prog)s --scaling --case sorted --pivot last     Comparison growth on sorted input
  %(prog)s --analyze --partition three_way          One configuration, every pattern
        """
    )

    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--quick", action="store_true", help="All configurations on one pattern")
    mode.add_argument("--full", action="store_true", help="All configurations on every pattern")
    mode.add_argument("--scaling", action="store_true", help="Comparison growth for one configuration")
    mode.add_argument("--analyze", action="store_true", help="One configuration on every pattern")

    parser.add_argument("--n", type=int, default=10000, help="Array size (default: 10000)")
    parser.add_argument("--max-n", type=int, default=10000, help="Max size for scaling (default: 10000)")
    parser.add_argument("--runs", type=int, default=5, help="Timed runs per measurement (default: 5)")
    parser.add_argument("--seed", type=int, default=42, help="Random seed (default: 42)")
    parser.add_argument("--case", choices=list(INPUT_PATTERNS.keys()), default="random",
                        help="Input pattern (default: random)")
    parser.add_argument("--partition", choices=[p.value for p in PartitionStrategy],
                        default=PartitionStrategy.LOMUTO.value, help="Partition scheme for --scaling/--analyze")
    parser.add_argument("--pivot", choices=[p.value for p in PivotStrategy],
                        default=PivotStrategy.LAST.value, help="Pivot strategy for --scaling/--analyze")
    parser.add_argument("--cutoff", type=int, default=10, help="Insertion sort cutoff (default: 10)")
    parser.add_argument("--no-adaptive", action="store_true", help="Disable the adaptive three-way switch")
    parser.add_argument("--output", "-o", type=str, help="JSON output path")
    parser.add_argument("--quiet", "-q", action="store_true", help="Minimal output")
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging from the engine")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = BenchmarkConfig(seed=args.seed, runs=args.runs)
    try:
        shared = dict(insertion_cutoff=args.cutoff, adaptive_three_way=not args.no_adaptive, seed=args.seed)
        qs_config = QuickSortConfig(partition_strategy=args.partition, pivot_strategy=args.pivot, **shared)
        configs = all_configurations(**shared)
    except UsageError as e:
        print(f"{Colors.RED}error: {e}{Colors.END}", file=sys.stderr)
        return 2

    if not args.quiet:
        print(f"\n{Colors.BOLD}Hybrid Quicksort Benchmark{Colors.END}")
        print(f"Python {sys.version.split()[0]} | seed {args.seed}\n")

    results = []
    scaling = []
    analysis = None

    if args.analyze:
        if not args.quiet:
            print_header("Pattern Analysis")
        analysis = analyze_patterns(args.n, args.seed, qs_config)
        if not args.quiet:
            print_analysis(analysis)

    elif args.scaling:
        scaling = run_scaling_analysis(config, qs_config, args.case, args.max_n, args.quiet)

    elif args.full:
        results = run_full_benchmark(config, configs, args.n, args.quiet)

    else:  # Default to quick
        results = run_quick_benchmark(config, configs, args.case, args.n, args.quiet)

    report = build_report(config, results, scaling, analysis)

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            json.dump(report.to_dict(), f, indent=2, default=str)
        if not args.quiet:
            print(f"\n{Colors.GREEN}JSON report saved to {args.output}{Colors.END}")

    ok = report.all_correct and all(row["sorted"] for row in analysis or [])
    if not args.quiet:
        done = f"{Colors.CYAN}Benchmark complete.{Colors.END}" if ok else f"{Colors.RED}Incorrect results found.{Colors.END}"
        print(f"\n{done}\n")
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
