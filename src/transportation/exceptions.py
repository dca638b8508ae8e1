"""
Exceptions raised by the transportation package.

Every failure is a local validation or precondition error. None of them is
transient, so callers should not retry.
"""


class TransportationError(Exception):
    pass


class DimensionMismatch(TransportationError):
    """Matrix or vector sizes disagree."""


class UnbalancedProblem(TransportationError):
    """Total supply differs from total demand."""


class MalformedInput(TransportationError, ValueError):
    """A problem file or text is structurally invalid."""


class InvalidTrailingData(TransportationError, ValueError):
    """Extra content follows the demand line of a problem file."""


class IndexOutOfBounds(TransportationError, IndexError):
    pass


class SingularMatrix(TransportationError):
    pass


class DuplicateVertex(TransportationError):
    pass


class DuplicateEdge(TransportationError):
    pass


class MissingEdge(TransportationError, KeyError):
    """The graph has no edge between the given vertices."""


class AlreadyConnected(TransportationError):
    pass


class ContainsCycle(TransportationError):
    pass


class InsufficientEdges(TransportationError):
    pass


class NotATree(TransportationError):
    pass
