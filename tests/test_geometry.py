from collections import Counter

import pytest

from hpcgbench.geometry import Geometry, compute_rank_of_matrix_row


def _uniform_geometry():
    return Geometry(
        size=8,
        nx=2, ny=2, nz=2,
        npx=2, npy=2, npz=2,
        partz_ids=[2], partz_nz=[2],
        gnx=4, gny=4, gnz=4,
    )


def test_first_and_last_rows_owned_by_first_and_last_rank():
    geom = _uniform_geometry()
    total = geom.gnx * geom.gny * geom.gnz
    assert compute_rank_of_matrix_row(geom, 0) == 0
    assert compute_rank_of_matrix_row(geom, total - 1) == geom.size - 1


def test_every_rank_owns_equal_share():
    geom = _uniform_geometry()
    total = geom.gnx * geom.gny * geom.gnz
    counts = Counter(compute_rank_of_matrix_row(geom, i) for i in range(total))
    assert set(counts) == set(range(geom.size))
    assert all(c == geom.nx * geom.ny * geom.nz for c in counts.values())


def test_rows_in_one_local_box_share_a_rank():
    geom = _uniform_geometry()
    seen = set()
    for bz in range(geom.npz):
        for by in range(geom.npy):
            for bx in range(geom.npx):
                ranks = {
                    compute_rank_of_matrix_row(
                        geom,
                        (bx * geom.nx + x)
                        + (by * geom.ny + y) * geom.gnx
                        + (bz * geom.nz + z) * geom.gnx * geom.gny,
                    )
                    for z in range(geom.nz)
                    for y in range(geom.ny)
                    for x in range(geom.nx)
                }
                assert len(ranks) == 1
                seen |= ranks
    assert seen == set(range(geom.size))


def test_varying_nz_partitions():
    geom = Geometry(
        size=3,
        nx=2, ny=2, nz=4,
        npx=1, npy=1, npz=3,
        partz_ids=[1, 3], partz_nz=[4, 2],
        gnx=2, gny=2, gnz=8,
    )
    plane = geom.gnx * geom.gny
    counts = Counter(
        compute_rank_of_matrix_row(geom, i) for i in range(plane * geom.gnz)
    )
    assert counts[0] == 4 * plane
    assert counts[1] == 2 * plane
    assert counts[2] == 2 * plane


def test_npartz_follows_partition_list():
    geom = Geometry(partz_ids=[1, 3], partz_nz=[4, 2])
    assert geom.npartz == len(geom.partz_ids)


def test_mismatched_partition_lists_rejected():
    with pytest.raises(ValueError):
        Geometry(partz_ids=[1, 2], partz_nz=[4])