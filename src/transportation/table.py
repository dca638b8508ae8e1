"""
Transportation table.

Holds a balanced transportation problem and runs the evaluation pipeline:
North-West-Corner plan -> bipartite plan graph -> spanning-tree repair ->
dual potentials -> marginal (reduced) costs.
"""

from fractions import Fraction
from pathlib import Path
from typing import Any, Callable, List, Optional, Sequence, Tuple
import logging

import numpy as np

from .exceptions import ContainsCycle, DimensionMismatch, NotATree, UnbalancedProblem
from .graph import Edge, Graph
from .matrix import Matrix, exact_cast
from .parser import parse_problem_file, parse_problem_text

logger = logging.getLogger(__name__)


def supply_label(i: int) -> str:
    """Vertex label of supply row ``i`` (0-based index, 1-based label)."""
    return f"S{i + 1}"


def demand_label(j: int) -> str:
    return f"D{j + 1}"


def _native(value: Any) -> Any:
    return value.item() if isinstance(value, np.generic) else value


def _token_parser(dtype: Any) -> Callable[[str], Any]:
    dtype = np.dtype(dtype)
    if dtype == np.dtype(object):
        return Fraction
    if dtype.kind in 'iu':
        return lambda token: dtype.type(int(token))
    return lambda token: dtype.type(float(token))


class Table:
    """
    A balanced transportation problem and its current shipment plan.

    Attributes:
        n: Number of supply rows
        m: Number of demand columns
        costs: Unit cost matrix (n x m)
        transport: Shipment plan (n x m)
        supply: Supply vector (length n)
        demand: Demand vector (length m)
    """

    def __init__(
        self,
        costs: Any,
        supply: Sequence[Any],
        demand: Sequence[Any],
        transport: Any = None,
        dtype: Any = np.int64,
    ) -> None:
        """
        Initialize a table.

        Args:
            costs: n x m unit costs
            supply: Supply per row
            demand: Demand per column
            transport: Initial plan (all zero if None)
            dtype: Scalar type for costs, plan and vectors

        Raises:
            DimensionMismatch: If the sizes of costs, plan and vectors disagree
            UnbalancedProblem: If total supply differs from total demand
            MalformedInput: If a value cannot be stored exactly in dtype
        """
        self._dtype = np.dtype(dtype)
        self._supply = exact_cast(supply, self._dtype)
        self._demand = exact_cast(demand, self._dtype)
        if self._supply.ndim != 1 or self._demand.ndim != 1:
            raise DimensionMismatch("Supply and demand must be flat vectors")

        self.n = len(self._supply)
        self.m = len(self._demand)

        if self.n == 0 and not isinstance(costs, (Matrix, np.ndarray)):
            costs = np.zeros((0, self.m), dtype=self._dtype)
        self._costs = Matrix(costs, dtype=self._dtype)
        if self._costs.shape != (self.n, self.m):
            raise DimensionMismatch(
                f"Cost matrix is {self._costs.rows}x{self._costs.cols}, "
                f"expected {self.n}x{self.m} from supply and demand"
            )

        if transport is None:
            self._transport = Matrix.new_empty(self.n, self.m, dtype=self._dtype)
        else:
            self._transport = Matrix(transport, dtype=self._dtype)
            if self._transport.shape != (self.n, self.m):
                raise DimensionMismatch(
                    f"Transport matrix is {self._transport.rows}x{self._transport.cols}, "
                    f"expected {self.n}x{self.m}"
                )

        if not self.is_balanced():
            raise UnbalancedProblem(
                f"Supply and demand are not balanced: "
                f"{_native(self._supply.sum())} != {_native(self._demand.sum())}"
            )

    @classmethod
    def from_file(cls, filepath: Path, dtype: Any = np.int64) -> "Table":
        """
        Load a table from a problem file.

        Raises:
            FileNotFoundError: If the file doesn't exist
            MalformedInput: If the file structure is invalid
            InvalidTrailingData: If extra content follows the demand line
            UnbalancedProblem: If total supply differs from total demand
        """
        data = parse_problem_file(filepath, scalar=_token_parser(dtype))
        table = cls(data['costs'], data['supply'], data['demand'], dtype=dtype)
        logger.info(f"Loaded {table}")
        return table

    @classmethod
    def from_text(cls, text: str, dtype: Any = np.int64) -> "Table":
        data = parse_problem_text(text, scalar=_token_parser(dtype))
        return cls(data['costs'], data['supply'], data['demand'], dtype=dtype)

    # ---------- accessors ----------

    @property
    def dtype(self) -> np.dtype:
        return self._dtype

    @property
    def costs(self) -> Matrix:
        return Matrix(self._costs)

    @property
    def transport(self) -> Matrix:
        return Matrix(self._transport)

    @property
    def supply(self) -> np.ndarray:
        return self._supply.copy()

    @property
    def demand(self) -> np.ndarray:
        return self._demand.copy()

    @property
    def labels(self) -> List[str]:
        return [supply_label(i) for i in range(self.n)] + [demand_label(j) for j in range(self.m)]

    def is_balanced(self) -> bool:
        return bool(self._supply.sum() == self._demand.sum())

    # ---------- initial plan ----------

    def north_west_corner(self) -> Matrix:
        """
        Fill the plan with the North-West-Corner rule.

        Starting in the top-left cell, ship as much as the current row and
        column allow, then move down when the row's supply is exhausted and
        right when the column's demand is met. Costs are ignored. The plan is
        reset first, and the supply/demand vectors are left untouched.

        Returns:
            Copy of the resulting plan
        """
        self._transport = Matrix.new_empty(self.n, self.m, dtype=self._dtype)
        supply = self._supply.copy()
        demand = self._demand.copy()

        i = j = 0
        while i < self.n and j < self.m:
            amount = min(supply[i], demand[j])
            self._transport[i, j] = amount
            supply[i] -= amount
            demand[j] -= amount
            if supply[i] == 0:
                i += 1
            if demand[j] == 0:
                j += 1

        basic = int(np.count_nonzero(self._transport.data))
        logger.info(f"North-West-Corner plan: {basic} nonzero cells, total cost {self.total_cost()}")
        if basic < self.n + self.m - 1:
            logger.debug(f"Degenerate plan: {basic} < {self.n + self.m - 1} cells needed for a spanning tree")
        return self.transport

    def total_cost(self) -> Any:
        """Sum of cost times shipment over the plan, computed in Python numbers."""
        rows, cols = np.nonzero(self._transport.data)
        amounts = self._transport.data[rows, cols].tolist()
        costs = self._costs.data[rows, cols].tolist()
        return sum((c * t for c, t in zip(costs, amounts)), 0)

    # ---------- graph view ----------

    def get_graph(self, seed: Optional[int] = None) -> Graph:
        """
        Bipartite graph of the current plan.

        One vertex per supply row (S1..Sn) and demand column (D1..Dm), and an
        edge Si - Dj weighted by the shipped amount for every nonzero cell.
        """
        graph = Graph(seed=seed)
        for label in self.labels:
            graph.add_node(label)
        for i, row in enumerate(self._transport.to_list()):
            for j, amount in enumerate(row):
                if amount != 0:
                    graph.add_edge(supply_label(i), demand_label(j), amount)
        return graph

    def get_unused_edges(self) -> List[Edge]:
        """One edge per empty cell, weighted by that cell's unit cost."""
        costs = self._costs.to_list()
        edges = []
        for i, row in enumerate(self._transport.to_list()):
            for j, amount in enumerate(row):
                if amount == 0:
                    edges.append(Edge(supply_label(i), demand_label(j), costs[i][j]))
        return edges

    def spanning_tree(self, seed: Optional[int] = None) -> Graph:
        """
        Plan graph repaired into a spanning tree.

        Unused cells are added one at a time, cheapest first, until the graph
        is connected.

        Raises:
            ContainsCycle: If the current plan's graph already has a cycle
        """
        graph = self.get_graph(seed=seed)
        if graph.is_cyclic():
            raise ContainsCycle("The plan graph contains a cycle and is not a basic solution")

        candidates = self.get_unused_edges()
        added = 0
        while not graph.is_connected():
            graph.k_edge_augmentation(1, candidates)
            added += 1

        logger.info(f"Spanning tree ready: {len(graph.edges)} edges ({added} added by augmentation)")
        return graph

    # ---------- potentials ----------

    def _cell_of(self, edge: Edge) -> Tuple[int, int]:
        ends = {}
        for label in (edge.source, edge.target):
            kind, index = label[:1], label[1:]
            if kind not in ('S', 'D') or not index.isdigit():
                raise NotATree(f"Vertex {label!r} is not a supply or demand node")
            ends[kind] = int(index) - 1
        if len(ends) != 2:
            raise NotATree(f"{edge} does not join a supply node to a demand node")
        return ends['S'], ends['D']

    def potentials(
        self,
        graph: Graph,
        scalar: Any = Fraction,
        reference: str = "S1",
    ) -> Tuple[List[Any], List[Any]]:
        """
        Dual potentials of a spanning tree.

        Solves ``u_i - v_j = cost[i][j]`` for every tree edge Si - Dj, plus one
        normalization equation fixing the reference vertex's potential at 0.
        Changing the reference shifts every potential by the same constant.

        Args:
            graph: Spanning tree over this table's S/D vertices
            scalar: Number type the system is solved in
            reference: Label of the vertex whose potential is 0

        Returns:
            Tuple of (u, v) with lengths n and m

        Raises:
            NotATree: If the graph is not a spanning tree of this table
            ValueError: If reference is not one of this table's labels
        """
        if not graph.is_tree():
            raise NotATree("Potentials need a spanning tree (connected and acyclic graph)")
        if sorted(graph.vertices) != sorted(self.labels):
            raise NotATree("The tree does not span this table's supply and demand nodes")
        if self.n == 0 or self.m == 0:
            raise DimensionMismatch("Potentials need at least one supply row and one demand column")
        if reference not in self.labels:
            raise ValueError(f"Unknown reference vertex {reference!r}")

        size = self.n + self.m
        system = Matrix.new_empty(size, size, dtype=np.int64)
        rhs: List[Any] = []
        costs = self._costs.to_list()
        for row, edge in enumerate(graph.edges):
            i, j = self._cell_of(edge)
            system[row, i] = 1
            system[row, self.n + j] = -1
            rhs.append(costs[i][j])

        # labels are ordered S1..Sn, D1..Dm like the system's columns
        system[size - 1, self.labels.index(reference)] = 1
        rhs.append(0)

        solution = system.solve(rhs, scalar=scalar)
        return solution[:self.n], solution[self.n:]

    def marginal_cost(self, graph: Graph, scalar: Any = Fraction, reference: str = "S1") -> Matrix:
        """Reduced costs ``cost[i][j] - (u_i - v_j)``; zero on every tree edge."""
        u, v = self.potentials(graph, scalar=scalar, reference=reference)
        costs = self._costs.to_list()
        grid = [
            [scalar(costs[i][j]) - (u[i] - v[j]) for j in range(self.m)]
            for i in range(self.n)
        ]
        return Matrix(grid, dtype=object)

    def most_improving_cell(
        self,
        graph: Graph,
        scalar: Any = Fraction,
        reference: str = "S1",
    ) -> Optional[Tuple[Any, Tuple[int, int]]]:
        """
        Most negative marginal cost and its cell.

        A non-negative value means no single cell can lower the total cost.
        """
        return self.marginal_cost(graph, scalar=scalar, reference=reference).argmin()

    def __repr__(self) -> str:
        return f"Table({self.n}x{self.m}, dtype={self._dtype}, total_supply={_native(self._supply.sum())})"
