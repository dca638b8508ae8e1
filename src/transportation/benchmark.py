"""
Benchmark runner for the North-West-Corner rule.

Generates random balanced problems, times how long the North-West-Corner
rule takes on each of them and prints the average and worst times. A small
solved problem is rendered at the end as a sanity check.
"""

import argparse
import logging
import sys
import time
from typing import Any, Dict, List, Optional

from .generators import generate_problem
from .main import setup_logging
from .table import demand_label, supply_label
from .utils import format_matrix, format_table, validate_plan


def run_benchmark(n: int, m: int, problems: int, seed: Optional[int] = None) -> Dict[str, Any]:
    """
    Time the North-West-Corner rule on random problems.

    Only the plan construction is timed; generating each problem is not.

    Args:
        n: Number of supply rows per problem
        m: Number of demand columns per problem
        problems: Number of problems to solve
        seed: Seed of the first problem (problem k uses seed + k)

    Returns:
        Dictionary with the per-problem times and their average, worst and total
    """
    if problems <= 0:
        raise ValueError(f"Number of problems must be positive, got {problems}")

    times: List[float] = []
    infeasible = 0
    for k in range(problems):
        table = generate_problem(n, m, seed=None if seed is None else seed + k)
        start_time = time.time()
        table.north_west_corner()
        times.append(time.time() - start_time)
        if not validate_plan(table):
            infeasible += 1

    return {
        'problems': problems,
        'rows': n,
        'cols': m,
        'times': times,
        'average': sum(times) / len(times),
        'worst': max(times),
        'total': sum(times),
        'infeasible': infeasible,
    }


def print_summary(results: Dict[str, Any]) -> None:
    """
    Print timing statistics.

    Args:
        results: Dictionary returned by run_benchmark
    """
    print("\n" + "=" * 60)
    print("BENCHMARK SUMMARY")
    print("=" * 60)
    print(f"Problems:            {results['problems']} ({results['rows']}x{results['cols']})")
    print(f"Average time:        {results['average'] * 1000:.3f} ms")
    print(f"Worst time:          {results['worst'] * 1000:.3f} ms")
    print(f"Total time:          {results['total']:.3f} seconds")
    if results['infeasible']:
        print(f"Infeasible plans:    {results['infeasible']}")
    print("=" * 60)


def show_solution(size: int, seed: Optional[int] = None) -> None:
    """Solve one size x size problem and print its costs, plan and total cost."""
    table = generate_problem(size, size, seed=seed)
    print("\nCOSTS")
    print(format_table(table))

    table.north_west_corner()
    supply_labels = [supply_label(i) for i in range(table.n)]
    demand_labels = [demand_label(j) for j in range(table.m)]
    print("\nNORTH-WEST-CORNER PLAN")
    print(format_matrix(table.transport, supply_labels, demand_labels))
    print(f"\nTotal cost:          {table.total_cost()}")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Benchmark the North-West-Corner rule on random problems',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '--problems',
        type=int,
        default=100,
        help='Number of random problems to time'
    )

    parser.add_argument(
        '--rows',
        type=int,
        default=1000,
        help='Supply rows per problem'
    )

    parser.add_argument(
        '--cols',
        type=int,
        default=1000,
        help='Demand columns per problem'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Random seed for reproducibility'
    )

    parser.add_argument(
        '--show',
        type=int,
        default=10,
        help='Size of the solved problem printed at the end (0 to skip)'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the benchmark runner.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_arguments(argv)

    # north_west_corner logs at INFO once per problem
    if args.verbose:
        setup_logging(verbose=True)
    logger = logging.getLogger(__name__)

    print("\nNorth-West-Corner Benchmark Runner")
    print("=" * 60)
    print(f"Problems:            {args.problems}")
    print(f"Problem size:        {args.rows}x{args.cols}")
    if args.seed is not None:
        print(f"Seed:                {args.seed}")

    try:
        results = run_benchmark(args.rows, args.cols, args.problems, seed=args.seed)
    except ValueError as e:
        logger.error(f"Invalid benchmark settings: {e}")
        return 1

    print_summary(results)

    if args.show > 0:
        show_solution(args.show, seed=args.seed)

    return 1 if results['infeasible'] else 0


if __name__ == '__main__':
    sys.exit(main())
