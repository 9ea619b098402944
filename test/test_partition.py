import numpy as np
import pytest

from exactdt.calc.partition import partition, split_axis


def _coverage(shape, regions):
    count = np.zeros(shape, dtype=int)
    for region in regions:
        count[region] += 1
    return count


def test_split_axis_skips_sweep_axis_and_singletons():
    assert split_axis((4, 5, 6), 0) == 1
    assert split_axis((4, 5, 6), 2) == 0
    assert split_axis((1, 5, 6), 1) == 2
    assert split_axis((1, 5, 1), 1) is None
    assert split_axis((7,), 0) is None


def test_no_split_gives_whole_grid():
    regions = partition((1, 5, 1), 1, 4)
    assert regions == [(slice(0, 1), slice(0, 5), slice(0, 1))]


def test_chunks_with_remainder():
    regions = partition((10, 3), 1, 3)
    assert [r[0] for r in regions] == [slice(0, 4), slice(4, 8), slice(8, 10)]
    assert all(r[1] == slice(0, 3) for r in regions)


def test_fewer_chunks_than_workers():
    regions = partition((5, 8), 1, 4)
    # ceil(5 / 4) = 2 -> [0, 2), [2, 4), [4, 5)
    assert len(regions) == 3
    regions = partition((3, 8), 1, 16)
    assert len(regions) == 3


def test_regions_are_disjoint_and_cover_grid():
    print(">>> Start testing partition coverage")
    for shape in [(9, 4, 5), (1, 1, 7), (6,), (2, 13)]:
        for axis in range(len(shape)):
            for n_workers in [1, 2, 3, 8]:
                regions = partition(shape, axis, n_workers)
                assert len(regions) <= n_workers
                np.testing.assert_array_equal(_coverage(shape, regions), 1)
                # lines along the sweep axis are never cut
                for region in regions:
                    assert region[axis] == slice(0, shape[axis])


def test_partition_is_deterministic():
    assert partition((17, 9, 4), 0, 5) == partition((17, 9, 4), 0, 5)


def test_invalid_worker_count():
    with pytest.raises(ValueError):
        partition((4, 4), 0, 0)
