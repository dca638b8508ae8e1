"""
Parser for transportation problem files.

File layout::

    n m
    c11 c12 ... c1m s1
    ...
    cn1 cn2 ... cnm sn
    d1 d2 ... dm

The first line holds the number of supply rows and demand columns. Each of
the next ``n`` lines holds ``m`` unit costs followed by that row's supply.
The last line holds the ``m`` demands. Nothing but blank lines may follow.
"""

from pathlib import Path
from typing import Any, Callable, Dict, List
import logging

from .exceptions import InvalidTrailingData, MalformedInput

logger = logging.getLogger(__name__)


def _convert(token: str, scalar: Callable[[str], Any], line_num: int) -> Any:
    try:
        return scalar(token)
    except (ValueError, TypeError, OverflowError) as e:
        raise MalformedInput(f"Line {line_num}: invalid number {token!r}") from e


def _tokens(lines: List[str], index: int, expected: int, what: str) -> List[str]:
    if index >= len(lines):
        # an empty demand line (m == 0) may be the missing last line
        if expected == 0:
            return []
        raise MalformedInput(f"Missing {what} (line {index + 1})")
    parts = lines[index].split()
    if len(parts) != expected:
        raise MalformedInput(f"Line {index + 1}: expected {expected} values for {what}, got {len(parts)}")
    return parts


def parse_problem_text(text: str, scalar: Callable[[str], Any] = int) -> Dict[str, Any]:
    """
    Parse a problem from its text form.

    Args:
        text: File contents
        scalar: Converter applied to every cost, supply and demand token

    Returns:
        Dictionary with 'n', 'm', 'costs' (n lists of m), 'supply' and 'demand'

    Raises:
        MalformedInput: On wrong token counts, non-numeric tokens or missing lines
        InvalidTrailingData: If non-blank content follows the demand line
    """
    lines = text.splitlines()

    header = _tokens(lines, 0, 2, "header 'n m'")
    n = _convert(header[0], int, 1)
    m = _convert(header[1], int, 1)
    if n < 0 or m < 0:
        raise MalformedInput(f"Line 1: dimensions must be non-negative, got {n} {m}")

    costs: List[List[Any]] = []
    supply: List[Any] = []
    for i in range(n):
        parts = _tokens(lines, i + 1, m + 1, f"cost row {i + 1}")
        values = [_convert(p, scalar, i + 2) for p in parts]
        costs.append(values[:m])
        supply.append(values[m])

    demand_parts = _tokens(lines, n + 1, m, "demand line")
    demand = [_convert(p, scalar, n + 2) for p in demand_parts]

    for line_num, line in enumerate(lines[n + 2:], start=n + 3):
        if line.strip():
            raise InvalidTrailingData(f"Line {line_num}: unexpected content after the demand line: {line!r}")

    return {
        'n': n,
        'm': m,
        'costs': costs,
        'supply': supply,
        'demand': demand,
    }


def parse_problem_file(filepath: Path, scalar: Callable[[str], Any] = int) -> Dict[str, Any]:
    """
    Parse a problem file.

    Raises:
        FileNotFoundError: If the file doesn't exist
        MalformedInput: If the file structure is invalid
        InvalidTrailingData: If extra content follows the demand line
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    with open(filepath, 'r') as f:
        content = f.read()

    logger.info(f"Parsing problem file: {filepath}")
    data = parse_problem_text(content, scalar=scalar)
    logger.info(f"Parsed {data['n']} supply rows and {data['m']} demand columns")
    return data


def format_problem(costs: List[List[Any]], supply: List[Any], demand: List[Any]) -> str:
    """Render a problem in the file layout accepted by parse_problem_text."""
    lines = [f"{len(supply)} {len(demand)}"]
    for row, s in zip(costs, supply):
        lines.append(" ".join(str(v) for v in list(row) + [s]))
    lines.append(" ".join(str(v) for v in demand))
    return "\n".join(lines) + "\n"
