"""
Utility functions for transportation tables.

Plan validation plus plain-text rendering of matrices and tables.
"""

from typing import Any, List, Optional, Sequence
import logging

import numpy as np

from .matrix import Matrix
from .table import Table, demand_label, supply_label

logger = logging.getLogger(__name__)


def validate_plan(table: Table) -> bool:
    """
    Check that the table's plan is feasible.

    Every row must ship exactly its supply, every column must receive
    exactly its demand, and no cell may be negative.

    Args:
        table: Table whose current plan is checked

    Returns:
        True if the plan is feasible
    """
    plan = table.transport.data
    if np.any(plan < 0):
        i, j = np.argwhere(plan < 0)[0]
        logger.warning(f"Negative shipment in cell ({i}, {j}): {plan[i, j]}")
        return False

    for i, (shipped, supply) in enumerate(zip(plan.sum(axis=1), table.supply)):
        if shipped != supply:
            logger.warning(f"Row {supply_label(i)} ships {shipped}, supply is {supply}")
            return False

    for j, (received, demand) in enumerate(zip(plan.sum(axis=0), table.demand)):
        if received != demand:
            logger.warning(f"Column {demand_label(j)} receives {received}, demand is {demand}")
            return False

    return True


def format_matrix(
    matrix: Matrix,
    row_labels: Optional[Sequence[str]] = None,
    col_labels: Optional[Sequence[str]] = None,
) -> str:
    """Render a matrix as right-aligned text columns, optionally labelled."""
    cells: List[List[str]] = [[str(v) for v in row] for row in matrix.to_list()]
    if col_labels is not None:
        cells.insert(0, list(col_labels))
    if row_labels is not None:
        header = [""] if col_labels is not None else []
        labels = header + list(row_labels)
        cells = [[label] + row for label, row in zip(labels, cells)]

    if not cells:
        return ""
    width = max(len(c) for row in cells for c in row)
    return "\n".join(" ".join(c.rjust(width) for c in row) for row in cells)


def format_table(table: Table, matrix: Optional[Matrix] = None) -> str:
    """
    Render costs (or another n x m matrix) with a supply column and demand row.

    Args:
        table: Table supplying labels and vectors
        matrix: Matrix to show in the body (costs if None)
    """
    body = table.costs if matrix is None else matrix
    rows: List[List[Any]] = [row + [s] for row, s in zip(body.to_list(), table.supply.tolist())]
    rows.append(table.demand.tolist() + [""])
    col_labels = [demand_label(j) for j in range(table.m)] + ["supply"]
    row_labels = [supply_label(i) for i in range(table.n)] + ["demand"]
    return format_matrix(Matrix(rows, dtype=object), row_labels, col_labels)
