import numpy as np
import pytest

from hpcgbench.ell import EllMatrix, convert_to_ell, ell_block_size, extract_diagonal
from hpcgbench.sparse_matrix import SparseMatrix
from hpcgbench.vector import Vector


def _laplacian(n=5):
    rows = []
    for i in range(n):
        row = {i: 2.0 + i}
        if i > 0:
            row[i - 1] = -1.0
        if i < n - 1:
            row[i + 1] = -1.0
        rows.append(row)
    return SparseMatrix.from_rows(rows)


def _halo_matrix(total_to_be_sent=2):
    # 3 local rows, 5 local columns (columns 3 and 4 live in the halo)
    ind = np.array([[0, 1, 0], [0, 1, 3], [1, 2, 4]], dtype=np.int32)
    vals = np.array([[4.0, -1.0, 0.0], [-1.0, 4.0, -2.0], [-1.0, 4.0, -3.0]])
    return SparseMatrix(
        local_number_of_rows=3,
        local_number_of_columns=5,
        number_of_nonzeros_per_row=3,
        nonzeros_in_row=np.array([2, 3, 3], dtype=np.int32),
        mtx_ind_g=ind.astype(np.int64),
        mtx_ind_l=ind,
        matrix_values=vals,
        matrix_diagonal=np.array([0, 1, 1], dtype=np.int32),
        total_to_be_sent=total_to_be_sent,
    )


def test_block_size_for_standard_stencil():
    assert ell_block_size(27) == 32


def test_block_size_for_wide_rows():
    assert ell_block_size(64) == 16


@pytest.mark.parametrize("width", [1, 2, 5, 27, 50, 100, 200, 1024, 2000])
def test_block_size_is_supported_value(width):
    assert ell_block_size(width) in (4, 8, 16, 32)


@pytest.mark.parametrize("width", [0, -3])
def test_block_size_rejects_non_positive_width(width):
    with pytest.raises(ValueError):
        ell_block_size(width)


def test_conversion_layout_matches_rows():
    A = _laplacian()
    ell = convert_to_ell(A)
    assert ell.col_ind.shape == (A.number_of_nonzeros_per_row, A.local_number_of_rows)
    for row in range(A.local_number_of_rows):
        count = int(A.nonzeros_in_row[row])
        for p in range(ell.ell_width):
            if p < count:
                assert ell.col_ind[p, row] == A.mtx_ind_l[row, p]
                assert ell.val[p, row] == A.matrix_values[row, p]
            else:
                assert ell.col_ind[p, row] == -1


def test_single_process_has_no_halo():
    ell = convert_to_ell(_laplacian())
    assert ell.halo_rows == 0
    assert ell.halo_col_ind.shape == (ell.ell_width, 0)


def test_copy_diagonal_agrees_with_row_storage():
    A = _laplacian()
    expected = Vector(A.local_number_of_rows)
    A.copy_diagonal(expected)
    got = convert_to_ell(A).copy_diagonal()
    np.testing.assert_array_equal(got.values, expected.values)


def test_replace_diagonal_round_trip():
    A = _laplacian()
    ell = convert_to_ell(A)
    new = Vector.from_values([10.0, 20.0, 40.0, 50.0, 80.0])
    ell.replace_diagonal(new)
    np.testing.assert_array_equal(ell.copy_diagonal().values, new.values)
    np.testing.assert_allclose(ell.inv_diag * new.values, np.ones(5))


def test_replace_diagonal_keeps_off_diagonal_entries():
    ell = convert_to_ell(_laplacian())
    before = ell.val.copy()
    ell.replace_diagonal(Vector.from_values([7.0] * 5))
    off = ell.col_ind != np.arange(5)[np.newaxis, :]
    np.testing.assert_array_equal(ell.val[off], before[off])


def test_replace_diagonal_rejects_wrong_length():
    ell = convert_to_ell(_laplacian())
    with pytest.raises(ValueError):
        ell.replace_diagonal(Vector(3))


def test_extract_diagonal_indices_and_inverses():
    A = _laplacian()
    ell = convert_to_ell(A)
    extract_diagonal(ell)
    rows = np.arange(A.local_number_of_rows)
    np.testing.assert_array_equal(ell.col_ind[ell.diag_idx, rows], rows)
    diag = ell.val[ell.diag_idx, rows]
    np.testing.assert_allclose(ell.inv_diag * diag, np.ones_like(diag))


def test_extract_diagonal_requires_diagonal():
    ell = EllMatrix(
        local_number_of_rows=2,
        local_number_of_columns=2,
        ell_width=1,
        col_ind=np.array([[1, 0]], dtype=np.int32),
        val=np.array([[1.0, 1.0]]),
    )
    with pytest.raises(ValueError):
        extract_diagonal(ell)


def test_halo_rows_are_collected():
    A = _halo_matrix()
    ell = convert_to_ell(A)
    np.testing.assert_array_equal(ell.halo_row_ind, [1, 2])
    np.testing.assert_array_equal(ell.halo_col_ind[:, 0], [3, -1, -1])
    np.testing.assert_array_equal(ell.halo_col_ind[:, 1], [4, -1, -1])
    assert ell.halo_val[0, 0] == A.matrix_values[1, 2]
    assert ell.halo_val[0, 1] == A.matrix_values[2, 2]


def test_halo_diagonal_still_found():
    A = _halo_matrix()
    ell = convert_to_ell(A)
    diag = ell.copy_diagonal()
    np.testing.assert_array_equal(diag.values, [A.matrix_values[r, A.matrix_diagonal[r]] for r in range(3)])


def test_too_many_halo_rows_rejected():
    with pytest.raises(ValueError):
        convert_to_ell(_halo_matrix(total_to_be_sent=1))