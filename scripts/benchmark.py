"""
rxpipe vs RxPY Performance Benchmark
====================================

Runs the same operator pipelines through rxpipe and RxPY (``reactivex``),
scaling the workload until each run takes about ``--time-limit`` seconds, and
prints a side-by-side throughput table.

Usage:
    python scripts/benchmark.py
    python scripts/benchmark.py --list
    python scripts/benchmark.py --category Flattening --time-limit 0.5
"""

import argparse
import os
import sys
import time
from dataclasses import dataclass
from functools import wraps
from typing import Any, Callable, Dict, List, Optional

# Ensure we use the local rxpipe package, not the installed one
script_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(script_dir, ".."))
sys.path.insert(0, project_root)

import reactivex
from reactivex import operators as ops
from reactivex.subject import Subject
from rich.console import Console
from rich.table import Table

from rxpipe import Signal
from rxpipe import operators as rx

# ============================================================================
# Configuration
# ============================================================================


@dataclass
class BenchmarkConfig:
    """Benchmark configuration parameters."""

    time_limit: float = 0.2
    starting_n: int = 10
    scale_factor: float = 2.0
    max_n: int = 2_000_000


CONFIG = BenchmarkConfig()


@dataclass
class BenchmarkResult:
    library: str
    name: str
    n: int
    elapsed: float

    @property
    def ops_per_second(self) -> float:
        return self.n / self.elapsed if self.elapsed > 0 else float("inf")


# ============================================================================
# Registry
# ============================================================================


class BenchmarkRegistry:
    """Benchmark function registry."""

    def __init__(self):
        self.benchmarks: Dict[str, Dict[str, Callable[[int], int]]] = {}
        self.categories: Dict[str, str] = {}

    def register(
        self, name: str, library: str, func: Callable[[int], int], category: str
    ) -> None:
        self.benchmarks.setdefault(name, {})[library] = func
        self.categories[name] = category

    def get_benchmark(self, name: str, library: str) -> Optional[Callable[[int], int]]:
        return self.benchmarks.get(name, {}).get(library)

    def list_benchmarks(self) -> List[str]:
        return list(self.benchmarks.keys())

    def get_category(self, name: str) -> str:
        return self.categories.get(name, "General")


REGISTRY = BenchmarkRegistry()


def benchmark(name: str, *, library: str = "rxpipe", category: str = "General"):
    """Register a benchmark function. It takes n and returns the emission count."""

    def decorator(func: Callable[[int], int]) -> Callable[[int], int]:
        REGISTRY.register(name, library, func, category)

        @wraps(func)
        def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        return wrapper

    return decorator


# ============================================================================
# Transformations
# ============================================================================


@benchmark("Map + Filter", category="Transformations")
def bench_map_where_rxpipe(n):
    received = []
    pipeline = rx.pipe([rx.map(lambda x: x * 2), rx.where(lambda x: x % 3 == 0)])
    pipeline(rx.of(*range(n))).subscribe(received.append)
    return n


@benchmark("Map + Filter", library="rxpy", category="Transformations")
def bench_map_where_rxpy(n):
    received = []
    reactivex.of(*range(n)).pipe(
        ops.map(lambda x: x * 2), ops.filter(lambda x: x % 3 == 0)
    ).subscribe(received.append)
    return n


@benchmark("Event Relay", category="Transformations")
def bench_signal_rxpipe(n):
    signal = Signal()
    received = []
    subscription = rx.from_signal(signal).pipe(rx.map(lambda x: x + 1)).subscribe(
        received.append
    )
    for i in range(n):
        signal.fire(i)
    subscription.dispose()
    return n


@benchmark("Event Relay", library="rxpy", category="Transformations")
def bench_signal_rxpy(n):
    subject = Subject()
    received = []
    disposable = subject.pipe(ops.map(lambda x: x + 1)).subscribe(received.append)
    for i in range(n):
        subject.on_next(i)
    disposable.dispose()
    return n


# ============================================================================
# Flattening
# ============================================================================


@benchmark("Flat Map", category="Flattening")
def bench_flat_map_rxpipe(n):
    received = []
    rx.of(*range(n)).pipe(rx.flat_map(lambda x: rx.of(x, x))).subscribe(
        received.append
    )
    return n


@benchmark("Flat Map", library="rxpy", category="Flattening")
def bench_flat_map_rxpy(n):
    received = []
    reactivex.of(*range(n)).pipe(ops.flat_map(lambda x: reactivex.of(x, x))).subscribe(
        received.append
    )
    return n


@benchmark("Switch Map", category="Flattening")
def bench_switch_map_rxpipe(n):
    signal = Signal()
    received = []
    subscription = rx.from_signal(signal).pipe(
        rx.switch_map(lambda x: rx.of(x))
    ).subscribe(received.append)
    for i in range(n):
        signal.fire(i)
    subscription.dispose()
    return n


@benchmark("Switch Map", library="rxpy", category="Flattening")
def bench_switch_map_rxpy(n):
    subject = Subject()
    received = []
    disposable = subject.pipe(
        ops.map(lambda x: reactivex.of(x)), ops.switch_latest()
    ).subscribe(received.append)
    for i in range(n):
        subject.on_next(i)
    disposable.dispose()
    return n


# ============================================================================
# Combination
# ============================================================================


@benchmark("Combine Latest", category="Combination")
def bench_combine_latest_rxpipe(n):
    left, right = Signal(), Signal()
    received = []
    subscription = rx.combine_latest(
        [rx.from_signal(left), rx.from_signal(right)]
    ).subscribe(received.append)
    for i in range(n):
        left.fire(i)
        right.fire(i)
    subscription.dispose()
    return 2 * n


@benchmark("Combine Latest", library="rxpy", category="Combination")
def bench_combine_latest_rxpy(n):
    left, right = Subject(), Subject()
    received = []
    disposable = reactivex.combine_latest(left, right).subscribe(received.append)
    for i in range(n):
        left.on_next(i)
        right.on_next(i)
    disposable.dispose()
    return 2 * n


@benchmark("Merge", category="Combination")
def bench_merge_rxpipe(n):
    received = []
    half = max(n // 2, 1)
    rx.merge([rx.of(*range(half)), rx.of(*range(half))]).subscribe(received.append)
    return 2 * half


@benchmark("Merge", library="rxpy", category="Combination")
def bench_merge_rxpy(n):
    received = []
    half = max(n // 2, 1)
    reactivex.merge(reactivex.of(*range(half)), reactivex.of(*range(half))).subscribe(
        received.append
    )
    return 2 * half


# ============================================================================
# Adaptive Benchmark Runner
# ============================================================================


def run_adaptive_benchmark(
    library: str, name: str, func: Callable[[int], int], config: BenchmarkConfig
) -> BenchmarkResult:
    """Grow n until one run takes at least config.time_limit seconds."""
    n = config.starting_n
    while True:
        start = time.perf_counter()
        operations = func(n)
        elapsed = time.perf_counter() - start
        if elapsed >= config.time_limit or n >= config.max_n:
            return BenchmarkResult(library, name, operations, elapsed)
        n = int(n * config.scale_factor)


def run_comparison(
    registry: BenchmarkRegistry,
    config: BenchmarkConfig,
    benchmark_names: Optional[List[str]] = None,
) -> List[Dict[str, Any]]:
    rows = []
    for name in benchmark_names or registry.list_benchmarks():
        row: Dict[str, Any] = {"name": name, "category": registry.get_category(name)}
        for library in ("rxpipe", "rxpy"):
            func = registry.get_benchmark(name, library)
            if func is not None:
                row[library] = run_adaptive_benchmark(library, name, func, config)
        rows.append(row)
    return rows


def render_results(console: Console, rows: List[Dict[str, Any]]) -> None:
    table = Table(title="rxpipe vs RxPY")
    table.add_column("Category", style="cyan")
    table.add_column("Benchmark")
    table.add_column("rxpipe ops/s", justify="right")
    table.add_column("RxPY ops/s", justify="right")
    table.add_column("Ratio", justify="right")

    for row in rows:
        ours = row.get("rxpipe")
        theirs = row.get("rxpy")
        ratio = ""
        if ours and theirs and theirs.ops_per_second:
            speedup = ours.ops_per_second / theirs.ops_per_second
            style = "green" if speedup >= 1 else "red"
            ratio = f"[{style}]{speedup:.2f}x[/{style}]"
        table.add_row(
            row["category"],
            row["name"],
            f"{ours.ops_per_second:,.0f}" if ours else "-",
            f"{theirs.ops_per_second:,.0f}" if theirs else "-",
            ratio,
        )
    console.print(table)


def main():
    parser = argparse.ArgumentParser(description="rxpipe vs RxPY Performance Comparison")
    parser.add_argument("--list", action="store_true", help="List available benchmarks")
    parser.add_argument("--benchmarks", nargs="+", help="Run specific benchmarks")
    parser.add_argument("--time-limit", type=float, help="Target seconds per run")
    parser.add_argument("--category", help="Run only benchmarks in this category")

    args = parser.parse_args()
    console = Console()

    if args.list:
        console.print("\n[bold]Available Benchmarks:[/bold]")
        categories: Dict[str, List[str]] = {}
        for name in REGISTRY.list_benchmarks():
            categories.setdefault(REGISTRY.get_category(name), []).append(name)
        for category in sorted(categories):
            console.print(f"\n[cyan]{category}:[/cyan]")
            for name in sorted(categories[category]):
                console.print(f"  - {name}")
        return

    if args.time_limit:
        CONFIG.time_limit = args.time_limit

    benchmark_names = args.benchmarks
    if args.category:
        benchmark_names = [
            name
            for name in REGISTRY.list_benchmarks()
            if REGISTRY.get_category(name) == args.category
        ]

    render_results(console, run_comparison(REGISTRY, CONFIG, benchmark_names))


if __name__ == "__main__":
    main()
