"""
Pytest configuration and shared fixtures for MVL tests.
"""

import pytest
import numpy as np
from pathlib import Path
import sys

# Add src to path for imports
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root / "src"))

from mvl import DenseStore, config
from mvl.sparse import CSRStore


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture(autouse=True)
def clean_config():
    """Every test starts from default settings."""
    config.reset()
    yield
    config.reset()


@pytest.fixture
def debug_mode():
    """Enable coordinate assertions for one test."""
    with config.override(debug=True):
        yield


@pytest.fixture
def square_array():
    """4x4 array with distinct entries 1..16 (row-major)."""
    return np.arange(1.0, 17.0).reshape(4, 4)


@pytest.fixture
def square_store(square_array):
    """DenseStore over square_array (float64)."""
    return DenseStore(square_array)


@pytest.fixture
def rect_store():
    """2x3 DenseStore.

    Matrix:
    [[1, 2, 3],
     [4, 5, 6]]
    """
    return DenseStore([[1.0, 2.0, 3.0], [4.0, 5.0, 6.0]])


@pytest.fixture
def complex_store():
    """2x2 complex DenseStore."""
    return DenseStore(np.array([[1 + 2j, 3 - 1j], [-2 + 0.5j, 4j]]))


@pytest.fixture
def small_csr():
    """3x3 CSR built from {(0,0,5), (1,2,3), (2,2,7)}."""
    builder = CSRStore.builder(3, 3)
    builder.set(0, 0, 5.0)
    builder.set(1, 2, 3.0)
    builder.set(2, 2, 7.0)
    return builder.build()


@pytest.fixture
def counting_receiver():
    """Factory for CountingReceiver of a given shape."""
    def make(rows, cols, dtype=None):
        return CountingReceiver(rows, cols, dtype=dtype)
    return make


# =============================================================================
# Helper Classes
# =============================================================================

class CountingReceiver:
    """Receiver that records every write before forwarding it to a DenseStore."""

    def __init__(self, rows, cols, dtype=None):
        self.target = DenseStore.make(rows, cols, dtype=dtype)
        self.cells = []
        self.rows_filled = []
        self.cols_filled = []
        self.resets = 0

    def reset(self):
        self.resets += 1
        self.target.reset()

    def fill_one(self, row, col, value):
        self.cells.append((row, col))
        self.target.fill_one(row, col, value)

    def add(self, row, col, value):
        self.cells.append((row, col))
        self.target.add(row, col, value)

    def fill_row(self, row, values):
        self.rows_filled.append(row)
        self.target.fill_row(row, values)

    def fill_column(self, col, values):
        self.cols_filled.append(col)
        self.target.fill_column(col, values)


class SliceCountingStore(DenseStore):
    """DenseStore that counts slice_row / slice_column fetches."""

    __slots__ = ('row_fetches', 'column_fetches')

    def __init__(self, data, dtype=None):
        super().__init__(data, dtype=dtype)
        self.row_fetches = []
        self.column_fetches = []

    def slice_row(self, row):
        self.row_fetches.append(row)
        return super().slice_row(row)

    def slice_column(self, col):
        self.column_fetches.append(col)
        return super().slice_column(col)


# =============================================================================
# Helper Functions
# =============================================================================

def assert_store_equal(store, expected, atol=1e-12):
    """Assert a store matches an array both cell by cell and through copy()."""
    expected = np.asarray(expected)
    assert store.shape == expected.shape
    for i in range(store.rows):
        for j in range(store.cols):
            assert store.get(i, j) == pytest.approx(expected[i, j], abs=atol)
    np.testing.assert_allclose(store.copy().to_numpy(), expected, atol=atol)
