#!/usr/bin/env python3
"""
Accuracy and Speed Benchmark for the In-place FFT Engine

For every configured size this script measures:
  1. Forward transform time (ms per call)
  2. Max relative error against scipy.fft
  3. Round-trip error of compute_inverse(compute(x))
  4. Parseval (energy) error

Usage:
    python scripts/benchmark_fft.py [--config CONFIG_PATH] [--output OUTPUT_DIR] [--sizes N ...]
"""

import sys
import json
import argparse
import time
from pathlib import Path
from datetime import datetime
from typing import Dict, List, Optional
from dataclasses import dataclass, asdict

import numpy as np
from scipy.fft import fft as scipy_fft

from rich.console import Console
from rich.progress import (
    Progress,
    SpinnerColumn,
    TextColumn,
    BarColumn,
    TaskProgressColumn,
    TimeElapsedColumn,
)
from rich.table import Table
from rich.panel import Panel
from rich import box

from radix2fft import compute, compute_inverse, load_config, BenchmarkConfig
from radix2fft.utils import RunLogger, set_seed

PROJECT_ROOT = Path(__file__).parent.parent

console = Console()


@dataclass
class SizeMetrics:
    """Accuracy and timing for a single transform length."""
    n: int
    forward_time_ms: float
    forward_std_ms: float
    max_rel_error: float  # vs scipy.fft
    roundtrip_error: float  # max |x - ifft(fft(x))|
    parseval_error: float  # relative
    passed: bool

    def to_dict(self) -> Dict:
        return asdict(self)


def reference_transform(z: np.ndarray) -> np.ndarray:
    """scipy.fft under the engine's positive-exponent convention."""
    return np.conj(scipy_fft(np.conj(z)))


def measure_forward_time(real: np.ndarray, imag: np.ndarray, n_iter: int, warmup: int):
    """Time compute() on fresh copies of the channels."""
    for _ in range(warmup):
        compute(real.copy(), imag.copy())

    times = []
    for _ in range(n_iter):
        re, im = real.copy(), imag.copy()
        start = time.perf_counter()
        compute(re, im)
        times.append((time.perf_counter() - start) * 1000)  # ms

    return float(np.mean(times)), float(np.std(times))


def measure_size(n: int, config: BenchmarkConfig, rng: np.random.Generator) -> SizeMetrics:
    dtype = np.dtype(config.dtype)
    real = rng.standard_normal(n).astype(dtype)
    imag = rng.standard_normal(n).astype(dtype)
    z = real.astype(np.float64) + 1j * imag.astype(np.float64)

    time_ms, std_ms = measure_forward_time(real, imag, config.n_iter, config.warmup)

    re, im = real.copy(), imag.copy()
    compute(re, im)
    X = re.astype(np.float64) + 1j * im.astype(np.float64)
    X_ref = reference_transform(z)
    max_rel_error = float(np.abs(X - X_ref).max() / np.abs(X_ref).max())

    energy_time = float(np.sum(np.abs(z) ** 2))
    energy_freq = float(np.sum(np.abs(X) ** 2)) / n
    parseval_error = abs(energy_time - energy_freq) / energy_time

    compute_inverse(re, im)
    roundtrip_error = float(max(np.abs(re - real).max(), np.abs(im - imag).max()))

    passed = max_rel_error < config.tolerance and parseval_error < config.tolerance

    return SizeMetrics(
        n=n,
        forward_time_ms=time_ms,
        forward_std_ms=std_ms,
        max_rel_error=max_rel_error,
        roundtrip_error=roundtrip_error,
        parseval_error=parseval_error,
        passed=passed,
    )


def display_results_table(results: List[SizeMetrics]):
    table = Table(title="FFT Engine Benchmark", box=box.ROUNDED)
    table.add_column("N", justify="right", style="bold")
    table.add_column("Forward (ms)", justify="right")
    table.add_column("Rel Error", justify="right")
    table.add_column("Round-trip", justify="right")
    table.add_column("Parseval", justify="right")
    table.add_column("Status", justify="center")

    for r in results:
        table.add_row(
            str(r.n),
            f"{r.forward_time_ms:.4f}±{r.forward_std_ms:.4f}",
            f"{r.max_rel_error:.2e}",
            f"{r.roundtrip_error:.2e}",
            f"{r.parseval_error:.2e}",
            "[green]✓ PASS[/green]" if r.passed else "[red]✗ FAIL[/red]",
        )

    console.print(table)


def run_benchmark(config: BenchmarkConfig, output_dir: Path) -> List[SizeMetrics]:
    output_dir.mkdir(parents=True, exist_ok=True)
    run_logger = RunLogger('benchmark_fft', log_dir=config.log_dir)
    run_logger.log_config(config.to_dict())

    rng = set_seed(config.seed)

    console.print(Panel.fit(
        "[bold blue]FFT Engine Benchmark[/bold blue]\n"
        f"dtype: {config.dtype}  sizes: {config.sizes}",
        border_style="blue"
    ))

    results = []
    with Progress(
        SpinnerColumn(),
        TextColumn("[bold blue]{task.description}"),
        BarColumn(bar_width=30),
        TaskProgressColumn(),
        TimeElapsedColumn(),
        console=console,
    ) as progress:
        task = progress.add_task("[cyan]Benchmarking", total=len(config.sizes))

        for n in config.sizes:
            progress.update(task, description=f"[cyan]N={n}")

            metrics = measure_size(n, config, rng)
            results.append(metrics)

            run_logger.info(
                f"N={n}: time={metrics.forward_time_ms:.4f}ms, "
                f"rel_err={metrics.max_rel_error:.2e}, passed={metrics.passed}"
            )
            if not metrics.passed:
                run_logger.warning(f"N={n} exceeds tolerance {config.tolerance:g}")

            progress.update(task, advance=1)

    console.print("\n")
    display_results_table(results)

    results_dict = {
        'timestamp': datetime.now().isoformat(),
        'config': config.to_dict(),
        'sizes': [r.to_dict() for r in results],
    }
    with open(output_dir / 'benchmark.json', 'w') as f:
        json.dump(results_dict, f, indent=2)

    run_logger.log_results({str(r.n): r.to_dict() for r in results})
    run_logger.close()

    console.print(f"\n[green]✓[/green] Results saved to {output_dir}")
    return results


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="FFT Engine Benchmark")
    parser.add_argument(
        '--config',
        type=str,
        default=str(PROJECT_ROOT / 'configs' / 'default.yaml'),
        help='Path to configuration file'
    )
    parser.add_argument(
        '--output',
        type=str,
        default=None,
        help='Output directory (overrides config)'
    )
    parser.add_argument(
        '--sizes',
        type=int,
        nargs='+',
        default=None,
        help='Transform lengths (overrides config)'
    )
    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.sizes is not None:
        config = BenchmarkConfig.from_dict({**config.to_dict(), 'sizes': args.sizes})

    output_dir = Path(args.output or config.output_dir)
    results = run_benchmark(config, output_dir)

    return 0 if all(r.passed for r in results) else 1


if __name__ == "__main__":
    sys.exit(main())
