import pytest

from transportation import Table


@pytest.fixture
def small_table():
    return Table([[1, 2], [3, 4]], [5, 5], [6, 4])


@pytest.fixture
def textbook_table():
    # NWC plan is non-degenerate (5 basic cells) and not optimal
    return Table(
        [[4, 8, 8], [16, 24, 16], [8, 16, 24]],
        [76, 82, 77],
        [72, 102, 61],
    )


@pytest.fixture
def diagonal_table():
    # NWC exhausts a row and a column together on every step
    return Table(
        [[1, 5, 9], [2, 6, 3], [7, 4, 8]],
        [3, 3, 3],
        [3, 3, 3],
    )
