"""
Tests for logical views: masking, reflection, transpose/conjugate,
broadcast, clipping and reinterpretation.
"""

from fractions import Fraction

import numpy as np
import pytest

from mvl import (
    DenseStore,
    IndexOutOfBoundsError,
    InvalidArgumentError,
    FLOAT64,
    RATIONAL,
)
from mvl.view import (
    BandMask,
    MaskedView,
    SymmetricView,
    TransposedView,
    ConjugatedView,
    RepeatedRowsView,
    RepeatedColumnsView,
    LimitView,
    ColumnView,
    CastView,
    UPPER_TRIANGULAR,
    LOWER_TRIANGULAR,
    UPPER_HESSENBERG,
    LOWER_HESSENBERG,
)

from conftest import SliceCountingStore, assert_store_equal


# =============================================================================
# Masking
# =============================================================================

class TestMaskedView:
    """Test triangular and Hessenberg masks."""

    @pytest.mark.parametrize("mask, expected", [
        (UPPER_TRIANGULAR, lambda a: np.triu(a)),
        (LOWER_TRIANGULAR, lambda a: np.tril(a)),
        (UPPER_HESSENBERG, lambda a: np.triu(a, -1)),
        (LOWER_HESSENBERG, lambda a: np.tril(a, 1)),
    ])
    def test_masking_correctness(self, square_store, square_array, mask, expected):
        view = MaskedView(square_store, mask)
        assert_store_equal(view, expected(square_array))

    def test_rectangular(self, rect_store):
        array = rect_store.to_numpy()
        assert_store_equal(rect_store.triangular(upper=True), np.triu(array))
        assert_store_equal(rect_store.transpose().triangular(upper=True), np.triu(array.T))
        assert_store_equal(rect_store.triangular(upper=False), np.tril(array))

    def test_unit_diagonal(self, square_store, square_array):
        view = square_store.triangular(upper=True, assume_one=True)
        expected = np.triu(square_array)
        np.fill_diagonal(expected, 1.0)
        assert view.get(2, 2) == 1.0
        assert view.double_value(3, 3) == 1.0
        assert view.get(3, 0) == 0.0
        assert_store_equal(view, expected)

    def test_unit_diagonal_on_zero_base(self):
        view = DenseStore.make(3, 3).triangular(upper=False, assume_one=True)
        np.testing.assert_array_equal(view.to_numpy(), np.eye(3))

    def test_hessenberg_bounds(self, square_store):
        view = MaskedView(square_store, LOWER_HESSENBERG)
        assert view.limit_of_row(0) == 2
        assert view.get(0, 3) == 0.0
        upper = square_store.hessenberg(upper=True)
        assert upper.first_in_column(0) == 0
        assert upper.limit_of_column(0) == 2
        assert upper.first_in_row(3) == 2

    def test_bound_tightness(self, square_store, counting_receiver):
        """supply_to visits exactly the admissible cells."""
        view = square_store.triangular(upper=True)
        receiver = counting_receiver(4, 4)
        view.supply_to(receiver)
        assert len(receiver.cells) == 10
        assert all(r <= c for r, c in receiver.cells)

    @pytest.mark.parametrize("make_view, visited", [
        (lambda s: s.diagonal(), 4),
        (lambda s: s.bidiagonal(upper=True), 7),
        (lambda s: s.bidiagonal(upper=False), 7),
        (lambda s: s.tridiagonal(), 10),
    ])
    def test_nested_masks_narrow_bounds(self, square_store, counting_receiver,
                                        make_view, visited):
        view = make_view(square_store)
        receiver = counting_receiver(4, 4)
        view.supply_to(receiver)
        assert len(receiver.cells) == visited

    def test_nested_mask_values(self, square_store, square_array):
        assert_store_equal(square_store.diagonal(), np.diag(np.diag(square_array)))
        assert_store_equal(square_store.tridiagonal(),
                           np.triu(np.tril(square_array, 1), -1))
        assert_store_equal(square_store.bidiagonal(upper=True),
                           np.triu(np.tril(square_array, 1)))

    def test_band_mask(self):
        band = BandMask('penta', lower=2, upper=2)
        assert band.admits(0, 2)
        assert not band.admits(0, 3)
        assert band.row_range(3, 6, 6) == (1, 6)
        with pytest.raises(InvalidArgumentError):
            BandMask('bad', lower=-1)


# =============================================================================
# Reflection
# =============================================================================

class TestSymmetricView:
    """Test symmetric and Hermitian completion."""

    def test_symmetric_upper(self, square_store, square_array):
        expected = np.triu(square_array) + np.triu(square_array, 1).T
        assert_store_equal(square_store.symmetric(upper=True), expected)

    def test_symmetric_lower(self, square_store, square_array):
        expected = np.tril(square_array) + np.tril(square_array, -1).T
        assert_store_equal(square_store.symmetric(upper=False), expected)

    def test_hermitian(self, complex_store):
        array = complex_store.to_numpy()
        expected = np.triu(array) + np.triu(array, 1).conj().T
        view = complex_store.hermitian(upper=True)
        assert view.get(1, 0) == 3 + 1j
        assert view.get(0, 0) == 1 + 2j
        np.testing.assert_allclose(view.to_numpy(), expected)

    def test_hermitian_primitive_path(self, complex_store):
        """The floating reduction of a reflected value is unchanged."""
        view = complex_store.hermitian(upper=True)
        assert view.double_value(1, 0) == 3.0
        assert view.to_scalar(1, 0).get() == 3 + 1j

    def test_hermitian_lower(self, complex_store):
        view = SymmetricView(complex_store, upper=False, hermitian=True)
        assert view.get(0, 1) == -2 - 0.5j
        assert view.get(1, 1) == 4j

    def test_hermitian_is_self_adjoint(self):
        base = DenseStore(np.array([[2.0, 1 + 1j], [0.0, 3.0]]))
        view = base.hermitian()
        assert view.conjugate().equals(view)


# =============================================================================
# Transpose / Conjugate
# =============================================================================

class TestTransposedView:
    """Test transpose and conjugate transpose."""

    def test_transpose_values(self, rect_store):
        view = rect_store.transpose()
        assert isinstance(view, TransposedView)
        assert view.shape == (3, 2)
        assert_store_equal(view, rect_store.to_numpy().T)

    def test_double_transpose_identity(self, rect_store):
        assert rect_store.transpose().transpose() is rect_store

    def test_double_conjugate_identity(self, complex_store, rect_store):
        assert complex_store.conjugate().conjugate() is complex_store
        assert rect_store.conjugate().conjugate() is rect_store

    def test_conjugate_values(self, complex_store):
        view = complex_store.conjugate()
        assert isinstance(view, ConjugatedView)
        np.testing.assert_allclose(view.to_numpy(), complex_store.to_numpy().conj().T)
        assert view.get(1, 0) == 3 + 1j
        assert view.double_value(1, 0) == 3.0

    def test_conjugate_slices(self, complex_store):
        view = complex_store.conjugate()
        assert view.slice_row(0).tolist() == [1 - 2j, -2 - 0.5j]
        assert view.slice_column(1).tolist() == [-2 - 0.5j, -4j]

    def test_transpose_of_conjugate(self, complex_store):
        view = complex_store.conjugate().transpose()
        np.testing.assert_allclose(view.to_numpy(), complex_store.to_numpy().conj())

    def test_bounds_swap(self, square_store):
        upper = square_store.triangular(upper=True)
        view = upper.transpose()
        for k in range(4):
            assert view.first_in_row(k) == upper.first_in_column(k)
            assert view.limit_of_row(k) == upper.limit_of_column(k)
            assert view.limit_of_column(k) == upper.limit_of_row(k)

    def test_transpose_product_rewrite(self):
        a = DenseStore(np.arange(6.0).reshape(2, 3))
        b = DenseStore(np.arange(6.0, 12.0).reshape(3, 2))
        product = a.transpose() @ b.transpose()
        assert isinstance(product, TransposedView)
        assert product.shape == (3, 3)
        np.testing.assert_allclose(product.to_numpy(), a.to_numpy().T @ b.to_numpy().T)

    def test_conjugate_product_rewrite(self):
        a = DenseStore(np.array([[1 + 1j, 2, 0], [0, 1j, 3 - 2j]]))
        b = DenseStore(np.array([[1, 2j], [1 - 1j, 0], [2, 1]]))
        product = a.conjugate() @ b.conjugate()
        assert isinstance(product, ConjugatedView)
        expected = a.to_numpy().conj().T @ b.to_numpy().conj().T
        np.testing.assert_allclose(product.to_numpy(), expected)

    def test_mixed_product_uses_generic_path(self, complex_store):
        product = complex_store.conjugate() @ complex_store
        assert isinstance(product, DenseStore)
        array = complex_store.to_numpy()
        np.testing.assert_allclose(product.to_numpy(), array.conj().T @ array)

    def test_conjugate_rewrite_with_real_right_base(self, complex_store):
        real = DenseStore([[1.0, 2.0], [3.0, 4.0]])
        product = complex_store.conjugate() @ real.conjugate()
        assert isinstance(product, ConjugatedView)
        assert product.factory.is_complex
        expected = complex_store.to_numpy().conj().T @ real.to_numpy().T
        np.testing.assert_allclose(product.to_numpy(), expected)
        assert product.get(0, 0) == expected[0, 0]

    def test_real_times_complex_keeps_imaginary(self, complex_store):
        real = DenseStore([[1.0, 0.0], [0.0, 2.0]])
        product = real @ complex_store
        assert product.factory.is_complex
        np.testing.assert_allclose(
            product.to_numpy(), real.to_numpy() @ complex_store.to_numpy()
        )


# =============================================================================
# Broadcast
# =============================================================================

class TestRepeatedViews:
    """Test row and column repetition."""

    def test_repeat_rows(self):
        base = DenseStore([[1.0, 2.0], [3.0, 4.0]])
        view = RepeatedRowsView(base, 3)
        assert view.shape == (6, 2)
        assert view.get(4, 1) == 2.0
        assert_store_equal(view, np.tile(base.to_numpy(), (3, 1)))

    def test_repeat_columns(self):
        base = DenseStore([[1.0, 2.0], [3.0, 4.0]])
        view = RepeatedColumnsView(base, 2)
        assert view.shape == (2, 4)
        assert_store_equal(view, np.tile(base.to_numpy(), (1, 2)))

    def test_repeat_both(self, rect_store):
        view = rect_store.repeat(3, 2)
        assert view.shape == (6, 6)
        assert_store_equal(view, np.tile(rect_store.to_numpy(), (3, 2)))

    def test_repeat_once_is_identity(self, rect_store):
        assert rect_store.repeat(1, 1) is rect_store

    def test_invalid_repetitions(self, rect_store):
        with pytest.raises(InvalidArgumentError):
            RepeatedRowsView(rect_store, 0)
        with pytest.raises(InvalidArgumentError):
            rect_store.repeat(1, -2)

    def test_rows_fetched_once(self, counting_receiver):
        base = SliceCountingStore([[1.0, 2.0], [3.0, 4.0]])
        view = RepeatedRowsView(base, 3)
        receiver = counting_receiver(6, 2)
        view.supply_to(receiver)
        assert base.row_fetches == [0, 1]
        assert receiver.rows_filled == [0, 2, 4, 1, 3, 5]
        np.testing.assert_array_equal(receiver.target.to_numpy(),
                                      np.tile(base.to_numpy(), (3, 1)))

    def test_columns_fetched_once(self, counting_receiver):
        base = SliceCountingStore([[1.0, 2.0, 3.0]])
        view = RepeatedColumnsView(base, 2)
        receiver = counting_receiver(1, 6)
        view.supply_to(receiver)
        assert base.column_fetches == [0, 1, 2]
        assert receiver.cols_filled == [0, 3, 1, 4, 2, 5]

    def test_row_bounds_follow_base(self, square_store):
        view = RepeatedRowsView(square_store.triangular(upper=True), 2)
        assert view.first_in_row(5) == 1
        assert view.limit_of_row(5) == 4
        assert view.first_in_column(0) == 0
        assert view.limit_of_column(0) == 8


# =============================================================================
# Clipping
# =============================================================================

class TestLimitView:
    """Test leading sub-block clipping."""

    def test_clip_to_base(self):
        base = DenseStore(np.arange(15.0).reshape(3, 5))
        assert LimitView(10, 10, base).shape == (3, 5)

    def test_leading_block(self):
        array = np.arange(15.0).reshape(3, 5)
        view = LimitView(2, 2, DenseStore(array))
        assert view.shape == (2, 2)
        assert_store_equal(view, array[:2, :2])
        assert view.slice_row(1).tolist() == [5.0, 6.0]

    def test_limits_keeps_negative(self, rect_store):
        assert rect_store.limits(-1, 2).shape == (2, 2)
        assert rect_store.limits(1, -1).shape == (1, 3)

    def test_negative_extent(self, rect_store):
        with pytest.raises(InvalidArgumentError):
            LimitView(-1, 2, rect_store)

    def test_debug_bounds_use_clipped_extent(self, rect_store, debug_mode):
        view = LimitView(1, 2, rect_store)
        assert view.get(0, 1) == 2.0
        with pytest.raises(IndexOutOfBoundsError):
            view.get(1, 0)


# =============================================================================
# Reinterpretation
# =============================================================================

class TestWrapperViews:
    """Test ColumnView and CastView."""

    def test_column_from_list(self):
        view = ColumnView([1.0, 2.0, 3.0])
        assert view.shape == (3, 1)
        assert view.factory is FLOAT64
        assert view.get(2, 0) == 3.0
        assert view.get_at(1) == 2.0

    def test_column_from_store(self, rect_store):
        view = ColumnView(rect_store)
        assert view.shape == (6, 1)
        assert view.get(2, 0) == 2.0
        np.testing.assert_array_equal(view.to_numpy().ravel(), [1, 4, 2, 5, 3, 6])

    def test_cast_to_rational(self):
        view = CastView(DenseStore([[0.5, 0.25]]), RATIONAL)
        assert view.factory is RATIONAL
        assert view.get(0, 1) == Fraction(1, 4)
        assert view.double_value(0, 0) == 0.5
        assert view.copy().factory is RATIONAL

    def test_cast_complex_to_real(self, complex_store):
        view = CastView(complex_store, 'float64')
        assert view.get(1, 1) == 0.0
        assert view.get(0, 1) == 3.0
        assert view.to_numpy().dtype == np.float64


# =============================================================================
# Cross-Precision Consistency
# =============================================================================

def _view_zoo(store):
    return [
        store,
        store.triangular(upper=True),
        store.triangular(upper=False, assume_one=True),
        store.hessenberg(upper=True),
        store.symmetric(upper=True),
        store.hermitian(upper=False),
        store.transpose(),
        store.conjugate(),
        store.repeat(2, 3),
        store.limits(3, 2),
        store.tridiagonal().conjugate(),
    ]


class TestConsistency:
    """The three access paths agree for every view."""

    def test_real_views(self, square_store):
        for view in _view_zoo(square_store):
            for i in range(view.rows):
                for j in range(view.cols):
                    boxed = view.get(i, j)
                    assert view.double_value(i, j) == float(boxed)
                    assert view.to_scalar(i, j).double_value() == float(boxed)

    def test_complex_views(self):
        store = DenseStore(np.arange(16.0).reshape(4, 4) * (1 - 0.5j))
        for view in _view_zoo(store):
            for i in range(view.rows):
                for j in range(view.cols):
                    boxed = view.get(i, j)
                    assert view.double_value(i, j) == boxed.real
                    assert view.to_scalar(i, j).get() == boxed

    def test_rational_views(self):
        store = DenseStore(np.arange(16.0).reshape(4, 4) / 4, dtype='rational')
        for view in _view_zoo(store):
            for i in range(view.rows):
                for j in range(view.cols):
                    boxed = view.get(i, j)
                    assert isinstance(boxed, Fraction)
                    assert view.double_value(i, j) == float(boxed)

    def test_copy_matches_reads(self, square_store):
        for view in _view_zoo(square_store):
            dense = view.copy().to_numpy()
            for i in range(view.rows):
                for j in range(view.cols):
                    assert dense[i, j] == view.get(i, j)
