"""
Entry point for the transportation table solver.

Loads a problem file, builds the North-West-Corner plan, repairs it into a
spanning tree and prints the potentials and marginal costs of that plan.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import numpy as np

from .exceptions import TransportationError
from .table import Table, demand_label, supply_label
from .utils import format_matrix, format_table, validate_plan

DTYPES = {
    'int64': np.int64,
    'float64': np.float64,
    'fraction': object,
}


def setup_logging(verbose: bool = False) -> None:
    """
    Configure logging for the application.

    Args:
        verbose: If True, set logging level to DEBUG
    """
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description='Evaluate a North-West-Corner plan for a transportation problem',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )

    parser.add_argument(
        '-i', '--input',
        type=str,
        required=True,
        help='Problem file ("n m", n cost rows ending with supply, one demand line)'
    )

    parser.add_argument(
        '--seed',
        type=int,
        default=None,
        help='Seed for spanning-tree repair tie-breaking (clock if omitted)'
    )

    parser.add_argument(
        '--dtype',
        choices=sorted(DTYPES),
        default='int64',
        help='Number type for costs, supply and demand'
    )

    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose (debug) logging'
    )

    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point.

    Returns:
        Exit code (0 for success, 1 for failure)
    """
    args = parse_arguments(argv)

    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    input_path = Path(args.input)
    if not input_path.exists():
        logger.error(f"Input file not found: {input_path}")
        return 1

    try:
        table = Table.from_file(input_path, dtype=DTYPES[args.dtype])

        table.north_west_corner()
        if not validate_plan(table):
            logger.error("North-West-Corner produced an infeasible plan")
            return 1

        tree = table.spanning_tree(seed=args.seed)
        u, v = table.potentials(tree)
        marginal = table.marginal_cost(tree)
        value, (i, j) = marginal.argmin()

    except TransportationError as e:
        logger.error(f"{type(e).__name__}: {e}")
        return 1

    supply_labels = [supply_label(r) for r in range(table.n)]
    demand_labels = [demand_label(c) for c in range(table.m)]

    print("\n" + "=" * 60)
    print("COSTS")
    print("=" * 60)
    print(format_table(table))
    print("\nNORTH-WEST-CORNER PLAN")
    print(format_matrix(table.transport, supply_labels, demand_labels))
    print(f"\nTotal cost:          {table.total_cost()}")
    print(f"Tree edges:          {', '.join(f'{e.source}-{e.target}' for e in tree.edges)}")
    print(f"Potentials u:        {[str(x) for x in u]}")
    print(f"Potentials v:        {[str(x) for x in v]}")
    print("\nMARGINAL COSTS")
    print(format_matrix(marginal, supply_labels, demand_labels))
    print(f"\nMin marginal cost:   {value} at {supply_label(i)}-{demand_label(j)}")
    print(f"Optimal:             {'Yes' if value >= 0 else 'No'}")
    print("=" * 60)

    return 0


if __name__ == '__main__':
    sys.exit(main())
