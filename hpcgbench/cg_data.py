"""Work vectors for conjugate gradient and per-level multigrid data."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np

from hpcgbench.sparse_matrix import SparseMatrix
from hpcgbench.vector import Vector


@dataclass
class CGData:
    """Residual, preconditioned residual, direction and Krylov vectors."""

    r: Vector
    z: Vector
    p: Vector
    Ap: Vector


def initialize_cg_data(A: SparseMatrix) -> CGData:
    """Allocate the CG work vectors sized for the matrix ``A``.

    ``r`` and ``Ap`` span the local rows; ``z`` and ``p`` also cover the
    halo columns since they are operands of the matrix-vector product.
    """
    nrow = A.local_number_of_rows
    ncol = A.local_number_of_columns
    return CGData(r=Vector(nrow), z=Vector(ncol), p=Vector(ncol), Ap=Vector(nrow))


@dataclass
class MGData:
    """Coarse-level data attached to a fine-grid matrix.

    ``f2c_operator`` lists the fine-grid local ids injected into the coarse
    space; ``c2f_operator`` is its companion map back to the fine grid.
    """

    f2c_operator: np.ndarray
    c2f_operator: np.ndarray | None
    rc: Vector
    xc: Vector
    axf: Vector
    number_of_presmoother_steps: int = 1
    number_of_postsmoother_steps: int = 1
    optimization_data: Any = field(default=None)