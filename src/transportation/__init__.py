"""
Transportation problem toolkit.

This package builds and evaluates an initial shipment plan for a balanced
transportation problem:
- Matrix: dense numeric grid with an exact Gaussian-elimination solver
- Graph: undirected graph with randomized spanning-tree repair
- Table: North-West-Corner plan, dual potentials and marginal costs
"""

from .exceptions import (
    TransportationError,
    DimensionMismatch,
    UnbalancedProblem,
    MalformedInput,
    InvalidTrailingData,
    IndexOutOfBounds,
    SingularMatrix,
    DuplicateVertex,
    DuplicateEdge,
    MissingEdge,
    AlreadyConnected,
    ContainsCycle,
    InsufficientEdges,
    NotATree,
)
from .matrix import Matrix
from .graph import Edge, Graph, edge_key
from .table import Table, supply_label, demand_label
from .parser import parse_problem_file, parse_problem_text, format_problem
from .generators import generate_problem
from .utils import validate_plan, format_matrix, format_table

__version__ = "1.0.0"

__all__ = [
    'TransportationError',
    'DimensionMismatch',
    'UnbalancedProblem',
    'MalformedInput',
    'InvalidTrailingData',
    'IndexOutOfBounds',
    'SingularMatrix',
    'DuplicateVertex',
    'DuplicateEdge',
    'MissingEdge',
    'AlreadyConnected',
    'ContainsCycle',
    'InsufficientEdges',
    'NotATree',
    'Matrix',
    'Edge',
    'Graph',
    'edge_key',
    'Table',
    'supply_label',
    'demand_label',
    'parse_problem_file',
    'parse_problem_text',
    'format_problem',
    'generate_problem',
    'validate_plan',
    'format_matrix',
    'format_table',
]
