"""Run parameters taken from the command line, and the run's log file name."""

from __future__ import annotations

import os
import re
from dataclasses import dataclass
from datetime import datetime
from typing import Sequence

MIN_DIMENSION = 16
MIN_POSITIONAL_VALUE = 10

_PREFIXES = (
    "--nx=",
    "--ny=",
    "--nz=",
    "--rt=",
    "--pz=",
    "--zl=",
    "--zu=",
    "--npx=",
    "--npy=",
    "--npz=",
    "--dev=",
)
_TOL_PREFIX = "--tol="

_INT_RE = re.compile(r"\s*([+-]?\d+)")
_FLOAT_RE = re.compile(
    r"\s*([+-]?(?:(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?|inf(?:inity)?|nan))",
    re.IGNORECASE,
)


@dataclass
class HpcgParams:
    """Basic parameters of a benchmark run."""

    comm_size: int = 1
    comm_rank: int = 0
    num_threads: int = 1
    nx: int = MIN_DIMENSION
    ny: int = MIN_DIMENSION
    nz: int = MIN_DIMENSION
    running_time: int = 0
    npx: int = 0
    npy: int = 0
    npz: int = 0
    pz: int = 0
    zl: int = 0
    zu: int = 0
    device: int = 0
    verify: bool = True
    tol: float = 0.0


def _scan_int(text: str) -> int | None:
    """Parse a leading integer the way a ``%d`` scan does, or return None."""
    match = _INT_RE.match(text)
    return int(match.group(1)) if match else None


def _fix_dimensions(values: list[int]) -> None:
    """Raise any dimension under the minimum to the largest of the others, or 16."""
    for i in range(3):
        if values[i] < MIN_DIMENSION:
            for j in (1, 2):
                other = values[(i + j) % 3]
                if other > values[i]:
                    values[i] = other
        if values[i] < MIN_DIMENSION:
            values[i] = MIN_DIMENSION


def parse_params(
    argv: Sequence[str] | None = None,
    comm_rank: int = 0,
    comm_size: int = 1,
    num_threads: int = 1,
) -> HpcgParams:
    """Build run parameters from the command-line arguments.

    ``argv`` excludes the program name.  The leading positional arguments
    give, in order, nx, ny, nz, rt, pz, zl, zu, npx, npy, npz and the device;
    a positional value that is missing, not an integer or below 10 counts as
    unset.  Options of the form ``--nx=N`` (and likewise for the other
    names) override them; an unparsable option value counts as unset.
    ``--tol=T`` turns reference verification off and sets the exit
    tolerance.  Grid dimensions below 16 are raised to the largest of the
    other two, or to 16.
    """
    args = list(argv) if argv is not None else []
    if comm_size < 1:
        raise ValueError("communicator size must be at least 1")
    if not 0 <= comm_rank < comm_size:
        raise ValueError(f"rank {comm_rank} out of range for size {comm_size}")

    values = [0] * len(_PREFIXES)
    for i in range(len(values)):
        parsed = _scan_int(args[i]) if i < len(args) else None
        values[i] = parsed if parsed is not None and parsed >= MIN_POSITIONAL_VALUE else 0

    verify = True
    tol = 0.0
    for arg in args:
        for j, prefix in enumerate(_PREFIXES):
            if arg.startswith(prefix):
                parsed = _scan_int(arg[len(prefix):])
                values[j] = parsed if parsed is not None else 0
        if arg.startswith(_TOL_PREFIX):
            rest = arg[len(_TOL_PREFIX):]
            if not rest.strip():
                # An empty scan reports end of input, which still counts as given.
                verify = False
            else:
                match = _FLOAT_RE.match(rest)
                if match:
                    tol = float(match.group(1))
                    verify = False

    _fix_dimensions(values)

    return HpcgParams(
        comm_size=comm_size,
        comm_rank=comm_rank,
        num_threads=num_threads,
        nx=values[0],
        ny=values[1],
        nz=values[2],
        running_time=values[3],
        pz=values[4],
        zl=values[5],
        zu=values[6],
        npx=values[7],
        npy=values[8],
        npz=values[9],
        device=values[10],
        verify=verify,
        tol=tol,
    )


def log_file_name(when: datetime | None = None, rank: int = 0, debug: bool = False) -> str:
    """Return the path of the run log for ``rank``.

    Rank 0 logs to ``hpcgYYYYMMDDTHHMMSS.txt``.  Other ranks log to the same
    name with ``_<rank>`` appended when debugging, and to the null device
    otherwise.
    """
    if when is None:
        when = datetime.now()
    stamp = when.strftime("%Y%m%dT%H%M%S")
    if rank == 0:
        return f"hpcg{stamp}.txt"
    if debug:
        return f"hpcg{stamp}_{rank}.txt"
    return os.devnull