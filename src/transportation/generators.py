"""
Random problem generator for benchmarking.

Costs and a hidden shipment grid are drawn uniformly at random; supply is
the row sums of the grid and demand its column sums, so every generated
problem is balanced.
"""

from typing import Optional

import numpy as np

from .table import Table


def generate_problem(n: int, m: int, low: int = 1, high: int = 100, seed: Optional[int] = None) -> Table:
    """
    Generate a random balanced n x m problem.

    Args:
        n: Number of supply rows
        m: Number of demand columns
        low: Smallest cost / shipment value (inclusive)
        high: Largest cost / shipment value (exclusive)
        seed: Random seed for reproducibility

    Returns:
        Table with an empty plan
    """
    if n <= 0 or m <= 0:
        raise ValueError(f"Problem dimensions must be positive, got {n}x{m}")
    if low >= high:
        raise ValueError(f"Empty value range [{low}, {high})")

    rng = np.random.default_rng(seed)
    costs = rng.integers(low, high, size=(n, m), dtype=np.int64)
    shipments = rng.integers(low, high, size=(n, m), dtype=np.int64)

    return Table(costs, shipments.sum(axis=1), shipments.sum(axis=0))
