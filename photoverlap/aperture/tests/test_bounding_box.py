# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the bounding_box module.
"""

import numpy as np
import pytest

from photoverlap.aperture.bounding_box import BoundingBox


def test_limits_are_ints():
    bbox = BoundingBox(np.int64(-3), 4, np.int32(0), 7)
    assert (bbox.ixmin, bbox.ixmax, bbox.iymin, bbox.iymax) == (-3, 4, 0, 7)
    assert all(type(value) is int
               for value in (bbox.ixmin, bbox.ixmax, bbox.iymin, bbox.iymax))


@pytest.mark.parametrize('limits', [(1.0, 4, 0, 7), (1, 4, 0, 7.5),
                                    ([1], 4, 0, 7), (True, 4, 0, 7),
                                    (1, 4, None, 7)])
def test_invalid_limit_types(limits):
    with pytest.raises(TypeError, match='must be integers'):
        BoundingBox(*limits)


@pytest.mark.parametrize('limits', [(5, 4, 0, 7), (0, 4, 8, 7)])
def test_reversed_limits(limits):
    with pytest.raises(ValueError):
        BoundingBox(*limits)


def test_empty_box():
    bbox = BoundingBox(3, 3, 2, 2)
    assert bbox.shape == (0, 0)
    assert bbox.get_overlap_slices((10, 10)) == (None, None)


@pytest.mark.parametrize(('extents', 'expected'),
                         [((-5.0, 5.0, -2.0, 2.0), (-5, 6, -2, 3)),
                          ((0.5, 1.5, 0.5, 1.5), (0, 2, 0, 2)),
                          ((0.49, 1.51, -0.51, 0.0), (0, 3, -1, 1)),
                          ((2.2, 2.3, 7.9, 7.9), (2, 3, 8, 9))])
def test_from_float(extents, expected):
    assert BoundingBox.from_float(*extents) == BoundingBox(*expected)


def test_from_float_pixel_edges():
    # an extent on a pixel edge adds the pixel below the edge
    bbox = BoundingBox.from_float(-0.5, 0.5, -0.5, 0.5)
    assert bbox.bounds == (-1, 0, -1, 0)


def test_shape_and_bounds():
    bbox = BoundingBox(-5, 6, -2, 3)
    assert bbox.shape == (5, 11)
    assert bbox.bounds == (-5, 5, -2, 2)


def test_eq():
    bbox = BoundingBox(1, 4, 2, 6)
    assert bbox == BoundingBox(1, 4, 2, 6)
    assert bbox != BoundingBox(1, 4, 2, 7)
    assert bbox != (1, 4, 2, 6)
    with pytest.raises(TypeError):
        hash(bbox)


def test_repr():
    bbox = BoundingBox(-1, 4, 2, 6)
    assert repr(bbox) == 'BoundingBox(ixmin=-1, ixmax=4, iymin=2, iymax=6)'


def test_overlap_slices_inside():
    bbox = BoundingBox(2, 5, 3, 7)
    slc_large, slc_small = bbox.get_overlap_slices((10, 10))
    assert slc_large == (slice(3, 7), slice(2, 5))
    assert slc_small == (slice(0, 4), slice(0, 3))


def test_overlap_slices_clipped():
    bbox = BoundingBox(-2, 3, 8, 12)
    slc_large, slc_small = bbox.get_overlap_slices((10, 6))
    assert slc_large == (slice(8, 10), slice(0, 3))
    assert slc_small == (slice(0, 2), slice(2, 5))

    data = np.arange(60).reshape(10, 6)
    box = np.full(bbox.shape, -1)
    box[slc_small] = data[slc_large]
    assert box[0, 2] == data[8, 0]
    assert box[1, 4] == data[9, 2]
    assert np.all(box[2:] == -1)
    assert np.all(box[:, :2] == -1)


@pytest.mark.parametrize('limits', [(10, 12, 0, 3), (-4, 0, 0, 3),
                                    (0, 3, -3, 0), (0, 3, 5, 9)])
def test_overlap_slices_disjoint(limits):
    assert BoundingBox(*limits).get_overlap_slices((5, 10)) == (None, None)


def test_overlap_slices_invalid_shape():
    with pytest.raises(ValueError):
        BoundingBox(0, 3, 0, 3).get_overlap_slices((10,))
