"""Dump the problem to plain-text files for offline analysis."""

from __future__ import annotations

from contextlib import ExitStack
from pathlib import Path

from hpcgbench.geometry import Geometry
from hpcgbench.sparse_matrix import SparseMatrix
from hpcgbench.vector import Vector

FILE_NAMES = ("A.dat", "x.dat", "xexact.dat", "b.dat")


def write_problem(
    geom: Geometry,
    A: SparseMatrix,
    b: Vector,
    x: Vector,
    xexact: Vector,
    directory: str | Path = ".",
) -> list[Path]:
    """Write the matrix and vectors to A.dat, x.dat, xexact.dat and b.dat.

    The matrix is written as one-based ``row column value`` triples, the
    vectors one value per line.  Only single-process runs are supported.
    Returns the paths of the files written, in the order above.
    """
    if geom.size != 1:
        raise ValueError("writing the problem is only supported on a single process")

    base = Path(directory)
    paths = [base / name for name in FILE_NAMES]
    nrow = A.total_number_of_rows

    with ExitStack() as stack:
        fa, fx, fxexact, fb = (stack.enter_context(path.open("w")) for path in paths)
        for i in range(nrow):
            count = int(A.nonzeros_in_row[i])
            for col, value in zip(A.mtx_ind_g[i, :count], A.matrix_values[i, :count]):
                fa.write(" %d %d %22.16e\n" % (i + 1, int(col) + 1, float(value)))
            fx.write("%22.16e\n" % float(x.values[i]))
            fxexact.write("%22.16e\n" % float(xexact.values[i]))
            fb.write("%22.16e\n" % float(b.values[i]))
    return paths