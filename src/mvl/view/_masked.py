"""
Masked Views (Triangular / Hessenberg / Banded)

A single MaskedView class parameterized by a BandMask strategy. The mask
decides which cells may be non-zero; everything outside reads as the
algebraic zero and is skipped entirely by supply_to.

Band Model:

    A cell (r, c) is admissible when  -lower <= c - r <= upper
    (None means unbounded on that side).

    Mask                lower   upper   zero region
    ----------------------------------------------------------
    UPPER_TRIANGULAR    0       None    below the main diagonal
    LOWER_TRIANGULAR    None    0       above the main diagonal
    UPPER_HESSENBERG    1       None    below the first subdiagonal
    LOWER_HESSENBERG    None    1       above the first superdiagonal

Iteration Bounds:

    Each bound is the intersection of the mask's band with the base's own
    bounds, so nested masks keep narrowing (diagonal() visits n cells, not
    n*n). With assume_one the diagonal cell is always inside the bounds.

Example:
    >>> store = DenseStore(np.arange(16.0).reshape(4, 4))
    >>> view = MaskedView(store, LOWER_HESSENBERG)
    >>> view.limit_of_row(0)
    2
    >>> view.get(0, 3)
    0.0
"""

from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ..core.error import InvalidArgumentError
from ..store import MatrixStore
from ._logical import LogicalView

__all__ = [
    'BandMask',
    'MaskedView',
    'UPPER_TRIANGULAR',
    'LOWER_TRIANGULAR',
    'UPPER_HESSENBERG',
    'LOWER_HESSENBERG',
]


@dataclass(frozen=True)
class BandMask:
    """
    Band-shaped admissibility predicate with its index ranges.

    Attributes:
        name: Display name
        lower: Admitted subdiagonals (None = all)
        upper: Admitted superdiagonals (None = all)
    """

    name: str
    lower: Optional[int] = None
    upper: Optional[int] = None

    def __post_init__(self):
        if (self.lower is not None and self.lower < 0) or \
                (self.upper is not None and self.upper < 0):
            raise InvalidArgumentError(
                f"Band widths must be non-negative, got ({self.lower}, {self.upper})"
            )

    def admits(self, row: int, col: int) -> bool:
        offset = col - row
        if self.lower is not None and offset < -self.lower:
            return False
        if self.upper is not None and offset > self.upper:
            return False
        return True

    def row_range(self, row: int, rows: int, cols: int) -> Tuple[int, int]:
        """Admissible column range [first, limit) of ``row``."""
        first = 0 if self.lower is None else max(row - self.lower, 0)
        limit = cols if self.upper is None else min(row + self.upper + 1, cols)
        return first, limit

    def column_range(self, col: int, rows: int, cols: int) -> Tuple[int, int]:
        """Admissible row range [first, limit) of ``col``."""
        first = 0 if self.upper is None else max(col - self.upper, 0)
        limit = rows if self.lower is None else min(col + self.lower + 1, rows)
        return first, limit


UPPER_TRIANGULAR = BandMask('upper_triangular', lower=0)
LOWER_TRIANGULAR = BandMask('lower_triangular', upper=0)
UPPER_HESSENBERG = BandMask('upper_hessenberg', lower=1)
LOWER_HESSENBERG = BandMask('lower_hessenberg', upper=1)


class MaskedView(LogicalView):
    """
    View that zeroes every cell outside a band mask.

    Attributes:
        mask: BandMask deciding admissible cells
        assume_one: Force the main diagonal to the algebraic one

    Example:
        >>> unit_upper = MaskedView(store, UPPER_TRIANGULAR, assume_one=True)
        >>> unit_upper.get(1, 1)
        1.0
    """

    __slots__ = ('_mask', '_assume_one')

    def __init__(self, base: MatrixStore, mask: BandMask, assume_one: bool = False):
        super().__init__(base, base.rows, base.cols)
        self._mask = mask
        self._assume_one = bool(assume_one)

    @property
    def mask(self) -> BandMask:
        return self._mask

    @property
    def assume_one(self) -> bool:
        return self._assume_one

    # =========================================================================
    # Element Access
    # =========================================================================

    def _double_value(self, row: int, col: int) -> float:
        if self._assume_one and row == col:
            return self.factory.double_value(self.factory.one)
        if self._mask.admits(row, col):
            return self._base._double_value(row, col)
        return self.factory.double_value(self.factory.zero)

    def _get(self, row: int, col: int) -> Any:
        if self._assume_one and row == col:
            return self.factory.one
        if self._mask.admits(row, col):
            return self._base._get(row, col)
        return self.factory.zero

    # =========================================================================
    # Iteration Bounds
    # =========================================================================

    def _row_bounds(self, row: int) -> Tuple[int, int]:
        first, limit = self._mask.row_range(row, self._rows, self._cols)
        first = max(first, self._base.first_in_row(row))
        limit = min(limit, self._base.limit_of_row(row))
        if self._assume_one and row < self._cols:
            first = min(first, row)
            limit = max(limit, row + 1)
        return first, limit

    def _column_bounds(self, col: int) -> Tuple[int, int]:
        first, limit = self._mask.column_range(col, self._rows, self._cols)
        first = max(first, self._base.first_in_column(col))
        limit = min(limit, self._base.limit_of_column(col))
        if self._assume_one and col < self._rows:
            first = min(first, col)
            limit = max(limit, col + 1)
        return first, limit

    def first_in_row(self, row: int) -> int:
        return self._row_bounds(row)[0]

    def limit_of_row(self, row: int) -> int:
        return self._row_bounds(row)[1]

    def first_in_column(self, col: int) -> int:
        return self._column_bounds(col)[0]

    def limit_of_column(self, col: int) -> int:
        return self._column_bounds(col)[1]

    def __repr__(self) -> str:
        return (f"MaskedView(shape={self.shape}, mask={self._mask.name}, "
                f"assume_one={self._assume_one})")
