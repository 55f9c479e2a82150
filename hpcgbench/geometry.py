"""Processor and grid geometry of the distributed problem."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class Geometry:
    """Process grid layout and the local/global grid dimensions of a problem.

    ``partz_ids`` holds, for each z-partition, the z process index where the
    next partition starts (valid values 1..npz); ``partz_nz`` holds the local
    nz used within each partition.  With no variation there is a single
    partition: ``partz_ids == [npz]`` and ``partz_nz == [nz]``.
    """

    size: int = 1
    rank: int = 0
    num_threads: int = 1
    nx: int = 0
    ny: int = 0
    nz: int = 0
    npx: int = 1
    npy: int = 1
    npz: int = 1
    pz: int = 0
    partz_ids: list[int] = field(default_factory=list)
    partz_nz: list[int] = field(default_factory=list)
    ipx: int = 0
    ipy: int = 0
    ipz: int = 0
    gnx: int = 0
    gny: int = 0
    gnz: int = 0
    gix0: int = 0
    giy0: int = 0
    giz0: int = 0

    def __post_init__(self) -> None:
        if len(self.partz_ids) != len(self.partz_nz):
            raise ValueError("partz_ids and partz_nz must have the same length")

    @property
    def npartz(self) -> int:
        """Number of z-partitions with differing nz values."""
        return len(self.partz_ids)


def compute_rank_of_matrix_row(geom: Geometry, index: int) -> int:
    """Return the rank of the process that owns the given global row index."""
    gnx = geom.gnx
    gny = geom.gny

    iz = index // (gny * gnx)
    iy = (index - iz * gny * gnx) // gnx
    ix = index % gnx

    ipz = 0
    ipartz_ids = 0
    for part_nz, part_id in zip(geom.partz_nz, geom.partz_ids):
        ipartz_ids = part_id - ipartz_ids
        if iz <= part_nz * ipartz_ids:
            ipz += iz // part_nz
            break
        ipz += ipartz_ids
        iz -= part_nz * ipartz_ids

    ipy = iy // geom.ny
    ipx = ix // geom.nx
    return ipx + ipy * geom.npx + ipz * geom.npy * geom.npx