"""The distributed sparse system matrix in row-major padded storage."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Mapping, Sequence

import numpy as np

from hpcgbench.geometry import Geometry
from hpcgbench.vector import Vector


def _empty_2d(dtype) -> np.ndarray:
    return np.zeros((0, 0), dtype=dtype)


@dataclass
class SparseMatrix:
    """Local part of the system matrix and its halo-exchange metadata.

    Row ``i`` holds ``nonzeros_in_row[i]`` entries in the leading slots of
    ``matrix_values[i]``, ``mtx_ind_g[i]`` (global column ids) and
    ``mtx_ind_l[i]`` (local column ids).  ``matrix_diagonal[i]`` is the slot
    in row ``i`` where the diagonal entry is stored.
    """

    title: str = ""
    geom: Geometry | None = None
    total_number_of_rows: int = 0
    total_number_of_nonzeros: int = 0
    local_number_of_rows: int = 0
    local_number_of_columns: int = 0
    local_number_of_nonzeros: int = 0
    number_of_nonzeros_per_row: int = 0
    nonzeros_in_row: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int32))
    mtx_ind_g: np.ndarray = field(default_factory=lambda: _empty_2d(np.int64))
    mtx_ind_l: np.ndarray = field(default_factory=lambda: _empty_2d(np.int32))
    matrix_values: np.ndarray = field(default_factory=lambda: _empty_2d(np.float64))
    matrix_diagonal: np.ndarray = field(default_factory=lambda: np.zeros(0, dtype=np.int32))
    global_to_local_map: dict[int, int] = field(default_factory=dict)
    local_to_global_map: list[int] = field(default_factory=list)

    # Optimisation is on by default; optimised kernels switch it off when they
    # fall back to reference code.
    is_dot_product_optimized: bool = True
    is_spmv_optimized: bool = True
    is_mg_optimized: bool = True
    is_waxpby_optimized: bool = True

    Ac: "SparseMatrix | None" = None
    mg_data: Any = None
    optimization_data: Any = None

    number_of_external_values: int = 0
    number_of_send_neighbors: int = 0
    total_to_be_sent: int = 0
    elements_to_send: list[int] = field(default_factory=list)
    neighbors: list[int] = field(default_factory=list)
    receive_length: list[int] = field(default_factory=list)
    send_length: list[int] = field(default_factory=list)

    @classmethod
    def from_rows(
        cls,
        rows: Sequence[Mapping[int, float]],
        geom: Geometry | None = None,
        title: str = "",
    ) -> "SparseMatrix":
        """Build a single-process matrix from per-row ``{column: value}`` maps.

        Local and global column ids coincide.  Every row must hold its
        diagonal entry.
        """
        nrow = len(rows)
        width = max((len(row) for row in rows), default=0)
        values = np.zeros((nrow, width), dtype=np.float64)
        ind_g = np.zeros((nrow, width), dtype=np.int64)
        ind_l = np.zeros((nrow, width), dtype=np.int32)
        counts = np.zeros(nrow, dtype=np.int32)
        diagonal = np.zeros(nrow, dtype=np.int32)

        for i, row in enumerate(rows):
            if i not in row:
                raise ValueError(f"row {i} has no diagonal entry")
            for slot, (col, val) in enumerate(sorted(row.items())):
                if not 0 <= col < nrow:
                    raise ValueError(f"column {col} of row {i} is out of range")
                values[i, slot] = val
                ind_g[i, slot] = col
                ind_l[i, slot] = col
                if col == i:
                    diagonal[i] = slot
            counts[i] = len(row)

        nnz = int(counts.sum())
        return cls(
            title=title,
            geom=geom,
            total_number_of_rows=nrow,
            total_number_of_nonzeros=nnz,
            local_number_of_rows=nrow,
            local_number_of_columns=nrow,
            local_number_of_nonzeros=nnz,
            number_of_nonzeros_per_row=width,
            nonzeros_in_row=counts,
            mtx_ind_g=ind_g,
            mtx_ind_l=ind_l,
            matrix_values=values,
            matrix_diagonal=diagonal,
            global_to_local_map={i: i for i in range(nrow)},
            local_to_global_map=list(range(nrow)),
        )

    def _check_diagonal_length(self, diagonal: Vector) -> None:
        if diagonal.local_length != self.local_number_of_rows:
            raise ValueError(
                f"diagonal vector has length {diagonal.local_length}, "
                f"matrix has {self.local_number_of_rows} rows"
            )

    def _diagonal_view(self) -> tuple[np.ndarray, np.ndarray]:
        rows = np.arange(self.local_number_of_rows)
        return rows, self.matrix_diagonal[: self.local_number_of_rows]

    def copy_diagonal(self, diagonal: Vector) -> None:
        """Copy the matrix diagonal into ``diagonal``."""
        self._check_diagonal_length(diagonal)
        rows, slots = self._diagonal_view()
        diagonal.values[:] = self.matrix_values[rows, slots]

    def replace_diagonal(self, diagonal: Vector) -> None:
        """Overwrite the matrix diagonal with the entries of ``diagonal``."""
        self._check_diagonal_length(diagonal)
        rows, slots = self._diagonal_view()
        self.matrix_values[rows, slots] = diagonal.values