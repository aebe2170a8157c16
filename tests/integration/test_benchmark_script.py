"""Smoke test for scripts/benchmark.py."""

import importlib.util
import os

import pytest

pytest.importorskip("reactivex")
pytest.importorskip("rich")

SCRIPT = os.path.join(os.path.dirname(__file__), "..", "..", "scripts", "benchmark.py")


@pytest.fixture(scope="module")
def benchmark_module():
    spec = importlib.util.spec_from_file_location("rxpipe_benchmark", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.mark.integration
def test_every_benchmark_has_both_libraries(benchmark_module):
    registry = benchmark_module.REGISTRY

    for name in registry.list_benchmarks():
        assert registry.get_benchmark(name, "rxpipe") is not None
        assert registry.get_benchmark(name, "rxpy") is not None


@pytest.mark.integration
def test_comparison_runs_with_tiny_budget(benchmark_module):
    config = benchmark_module.BenchmarkConfig(time_limit=0.0, starting_n=4)

    rows = benchmark_module.run_comparison(benchmark_module.REGISTRY, config)

    assert rows
    for row in rows:
        assert row["rxpipe"].n > 0
        assert row["rxpy"].n > 0
