"""ELLPACK storage of the system matrix, with its halo rows split out.

Entries are stored column-major by slot: ``col_ind[p, row]`` and
``val[p, row]`` hold the ``p``-th stored entry of ``row``.  Unused slots
carry the column index ``-1``.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from hpcgbench.sparse_matrix import SparseMatrix
from hpcgbench.vector import Vector

MAX_THREADS_PER_BLOCK = 1024
_SUPPORTED_ROW_BLOCKS = (32, 16, 8)
_FALLBACK_ROW_BLOCK = 4


def ell_block_size(ell_width: int) -> int:
    """Return the number of rows processed together for a given ELL width.

    The count is the largest power of two, starting from the one just above
    ``1024 // ell_width``, whose product with the width fits in 1024
    threads; anything other than 32, 16 or 8 falls back to 4.
    """
    if ell_width <= 0:
        raise ValueError("ELL width must be positive")
    base = MAX_THREADS_PER_BLOCK // ell_width
    block = 1 << base.bit_length()
    while block * ell_width > MAX_THREADS_PER_BLOCK:
        block >>= 1
    return block if block in _SUPPORTED_ROW_BLOCKS else _FALLBACK_ROW_BLOCK


@dataclass
class EllMatrix:
    """Local matrix in ELL format plus the rows that touch halo columns."""

    local_number_of_rows: int
    local_number_of_columns: int
    ell_width: int
    col_ind: np.ndarray
    val: np.ndarray
    halo_row_ind: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int32))
    halo_col_ind: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=np.int32))
    halo_val: np.ndarray = field(default_factory=lambda: np.zeros((0, 0), dtype=np.float64))
    diag_idx: np.ndarray | None = None
    inv_diag: np.ndarray | None = None

    @property
    def halo_rows(self) -> int:
        """Number of local rows holding at least one halo column."""
        return int(self.halo_row_ind.shape[0])

    @property
    def block_size(self) -> int:
        return ell_block_size(self.ell_width)

    def _diagonal_slots(self) -> tuple[np.ndarray, np.ndarray]:
        """Rows whose diagonal is reachable, and the slot holding it.

        Scanning a row stops at the first slot whose column lies outside the
        local column range, so a diagonal behind such a slot is not found.
        """
        m = self.local_number_of_rows
        n = self.local_number_of_columns
        rows = np.arange(m)
        if self.ell_width == 0 or m == 0:
            return np.zeros(0, dtype=np.intp), np.zeros(0, dtype=np.intp)
        valid = (self.col_ind >= 0) & (self.col_ind < n)
        reachable = np.logical_and.accumulate(valid, axis=0)
        hit = (self.col_ind == rows[np.newaxis, :]) & reachable
        found = hit.any(axis=0)
        slots = hit.argmax(axis=0)
        return rows[found], slots[found]

    def copy_diagonal(self) -> Vector:
        """Return the diagonal entries as a vector (zero where none is found)."""
        diagonal = Vector(self.local_number_of_rows)
        rows, slots = self._diagonal_slots()
        diagonal.values[rows] = self.val[slots, rows]
        return diagonal

    def replace_diagonal(self, diagonal: Vector) -> None:
        """Overwrite the diagonal entries and recompute their inverses."""
        m = self.local_number_of_rows
        if diagonal.local_length != m:
            raise ValueError(
                f"diagonal vector has length {diagonal.local_length}, matrix has {m} rows"
            )
        rows, slots = self._diagonal_slots()
        self.val[slots, rows] = diagonal.values[rows]
        with np.errstate(divide="ignore"):
            self.inv_diag = 1.0 / diagonal.values.astype(np.float64)


def convert_to_ell(A: SparseMatrix) -> EllMatrix:
    """Convert a row-major padded matrix into ELL storage with halo rows.

    A row is a halo row when one of its columns is at or beyond the number
    of local rows.  Halo rows are listed in ascending order; for each, its
    columns in the halo range are packed to the front of ``halo_col_ind``
    (remaining slots ``-1``) with the matching values in ``halo_val``.
    """
    m = A.local_number_of_rows
    n = A.local_number_of_columns
    width = A.number_of_nonzeros_per_row

    counts = np.asarray(A.nonzeros_in_row[:m], dtype=np.int64)
    used = np.arange(width)[np.newaxis, :] < counts[:, np.newaxis]

    cols = np.where(used, A.mtx_ind_l[:m, :width], -1).astype(np.int32)
    vals = np.where(used, A.matrix_values[:m, :width], 0.0).astype(np.float64)

    col_ind = np.ascontiguousarray(cols.T)
    val = np.ascontiguousarray(vals.T)

    is_halo_row = (cols >= m).any(axis=1)
    halo_row_ind = np.flatnonzero(is_halo_row).astype(np.int32)
    halo_count = halo_row_ind.shape[0]
    if halo_count > A.total_to_be_sent:
        raise ValueError(
            f"{halo_count} halo rows exceed the {A.total_to_be_sent} entries to be sent"
        )

    halo_col_ind = np.full((width, halo_count), -1, dtype=np.int32)
    halo_val = np.zeros((width, halo_count), dtype=np.float64)
    for gid, row in enumerate(halo_row_ind):
        row_cols = col_ind[:, row]
        in_halo = (row_cols >= m) & (row_cols < n)
        picked = np.flatnonzero(in_halo)
        halo_col_ind[: picked.shape[0], gid] = row_cols[picked]
        halo_val[: picked.shape[0], gid] = val[picked, row]

    return EllMatrix(
        local_number_of_rows=m,
        local_number_of_columns=n,
        ell_width=width,
        col_ind=col_ind,
        val=val,
        halo_row_ind=halo_row_ind,
        halo_col_ind=halo_col_ind,
        halo_val=halo_val,
    )


def extract_diagonal(ell: EllMatrix) -> None:
    """Record, for each row, the slot of its diagonal entry and its inverse.

    Sets ``ell.diag_idx`` and ``ell.inv_diag``.  Every row must store its
    diagonal entry.
    """
    m = ell.local_number_of_rows
    rows = np.arange(m)
    hit = ell.col_ind == rows[np.newaxis, :]
    found = hit.any(axis=0) if ell.ell_width else np.zeros(m, dtype=bool)
    if not found.all():
        missing = int(np.flatnonzero(~found)[0])
        raise ValueError(f"row {missing} has no diagonal entry")
    slots = hit.argmax(axis=0).astype(np.int32)
    with np.errstate(divide="ignore"):
        inv = 1.0 / ell.val[slots, rows]
    ell.diag_idx = slots
    ell.inv_diag = inv