#!/usr/bin/env python3
"""
Benchmark Barnes-Hut force evaluation against the direct sum.

Usage:
    uv run python scripts/benchmark_forces.py [--sizes N,...] [--thetas T,...]

Examples:
    uv run python scripts/benchmark_forces.py
    uv run python scripts/benchmark_forces.py --sizes 500,2000 --thetas 0.3,0.5,1.0
    uv run python scripts/benchmark_forces.py --output results.json
"""

from __future__ import annotations

import argparse
import json
import random
import time
from pathlib import Path
from typing import Any

import numpy as np

from gravity_tree import (
    BarnesHutConfig,
    Body,
    build_tree,
    compute_accelerations,
    direct_accelerations,
    force_errors,
)


def create_bodies(n: int, seed: int = 42, spread: float = 1000.0) -> list[Body]:
    """Create n bodies with random positions and masses."""
    rng = random.Random(seed)
    return [
        Body(
            rng.uniform(0, spread),
            rng.uniform(0, spread),
            mass=rng.uniform(1.0, 10.0),
            index=i,
        )
        for i in range(n)
    ]


def benchmark_direct(bodies: list[Body]) -> tuple[np.ndarray, float]:
    """Time the exact O(n^2) sum."""
    start = time.perf_counter()
    acc = direct_accelerations(bodies)
    return acc, time.perf_counter() - start


def benchmark_barnes_hut(
    bodies: list[Body],
    exact: np.ndarray,
    theta: float,
) -> dict[str, Any]:
    """
    Time one Barnes-Hut step and measure its error.

    Returns:
        Dict with timing, tree shape and error info
    """
    config = BarnesHutConfig(theta=theta)

    start = time.perf_counter()
    acc = compute_accelerations(bodies, config)
    elapsed = time.perf_counter() - start

    tree = build_tree(bodies, config)
    errors = force_errors(acc, exact)
    return {
        "theta": theta,
        "time_ms": elapsed * 1000,
        "nodes": tree.node_count(),
        "depth": tree.depth(),
        "mean_error": float(errors.mean()) if errors.size else 0.0,
        "max_error": float(errors.max()) if errors.size else 0.0,
    }


def main() -> None:
    parser = argparse.ArgumentParser(description="Benchmark Barnes-Hut force evaluation")
    parser.add_argument(
        "--sizes",
        type=str,
        default="100,500,1000,2000",
        help="Comma-separated body counts (default: 100,500,1000,2000)",
    )
    parser.add_argument(
        "--thetas",
        type=str,
        default="0.3,0.5,0.8,1.0",
        help="Comma-separated opening angles (default: 0.3,0.5,0.8,1.0)",
    )
    parser.add_argument("--seed", type=int, default=42, help="Random seed")
    parser.add_argument("--output", type=str, help="Output JSON file for results")
    args = parser.parse_args()

    sizes = [int(s) for s in args.sizes.split(",") if s.strip()]
    thetas = [float(t) for t in args.thetas.split(",") if t.strip()]

    print(f"Benchmarking sizes {sizes} with theta {thetas}")
    print("-" * 78)
    print(f"{'N':>6} {'theta':>6} {'BH ms':>10} {'direct ms':>10} {'speedup':>8} "
          f"{'mean err':>10} {'max err':>10} {'nodes':>7}")
    print("-" * 78)

    results: list[dict[str, Any]] = []
    for n in sizes:
        bodies = create_bodies(n, seed=args.seed)
        exact, direct_time = benchmark_direct(bodies)
        for theta in thetas:
            result = benchmark_barnes_hut(bodies, exact, theta)
            result["n"] = n
            result["direct_ms"] = direct_time * 1000
            speedup = result["direct_ms"] / result["time_ms"] if result["time_ms"] > 0 else 0.0
            result["speedup"] = speedup
            results.append(result)
            print(
                f"{n:>6} {theta:>6.2f} {result['time_ms']:>10.2f} {result['direct_ms']:>10.2f} "
                f"{speedup:>8.2f} {result['mean_error']:>10.2e} {result['max_error']:>10.2e} "
                f"{result['nodes']:>7}"
            )

    print("-" * 78)

    if args.output:
        output_path = Path(args.output)
        with open(output_path, "w") as f:
            json.dump(results, f, indent=2)
        print(f"Results saved to {output_path}")


if __name__ == "__main__":
    main()
