# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Tests for the core module.
"""

import astropy.units as u
import numpy as np
import pytest
from astropy import log
from numpy.testing import assert_allclose

from photoverlap.aperture.attributes import PixelPosition, PositiveScalar
from photoverlap.aperture.core import Aperture, PixelAperture, PixelOverlap
from photoverlap.aperture.rectangle import (RectangularAnnulus,
                                            RectangularAperture)
from photoverlap.aperture.subpixel import Subpixel


class BoxAperture(PixelAperture):
    """
    An axis-aligned square aperture with an analytic pixel overlap.
    """

    _params = ('position', 'half_size')
    position = PixelPosition('The center pixel position.')
    half_size = PositiveScalar('Half of the side length in pixels.')

    def __init__(self, position, half_size):
        self.position = position
        self.half_size = half_size

    @property
    def _xy_extents(self):
        return self.half_size, self.half_size

    @property
    def area(self):
        return (2.0 * self.half_size) ** 2

    def _exact(self, x, y):
        size = self.half_size
        dx = max(0.0, min(x + 0.5, size) - max(x - 0.5, -size))
        dy = max(0.0, min(y + 0.5, size) - max(y - 0.5, -size))
        return dx * dy

    def overlap(self, i, j):
        value = self._exact(*self._pixel_offsets(i, j))
        if value == 1.0:
            return PixelOverlap.INSIDE
        if value == 0.0:
            return PixelOverlap.OUTSIDE
        return PixelOverlap.PARTIAL

    def partial(self, subpixels=None):
        if subpixels is None:
            return self._exact

        size = self.half_size

        def overlap_func(x, y):
            offsets = (np.arange(subpixels) + 0.5) / subpixels - 0.5
            xx, yy = np.meshgrid(x + offsets, y + offsets)
            inside = (np.abs(xx) <= size) & (np.abs(yy) <= size)
            return np.count_nonzero(inside) / subpixels**2

        return overlap_func


def test_abstract_classes():
    with pytest.raises(TypeError):
        Aperture()
    with pytest.raises(TypeError):
        PixelAperture()


def test_pixel_overlap():
    assert set(PixelOverlap) == {PixelOverlap.INSIDE, PixelOverlap.OUTSIDE,
                                 PixelOverlap.PARTIAL}


def test_custom_aperture_mask():
    aper = BoxAperture((3.375, 4.625), 2.25)
    assert aper.bounds() == (1, 6, 2, 7)

    mask = aper.to_mask()
    assert mask.shape == (6, 6)
    assert_allclose(mask.data.sum(), aper.area)

    xmin, _, ymin, _ = aper.bounds()
    for (row, col), value in np.ndenumerate(mask.data):
        expected = aper._exact(*aper._pixel_offsets(ymin + row, xmin + col))
        assert_allclose(value, expected)


def test_custom_aperture_methods():
    aper = BoxAperture((3.375, 4.625), 2.25)

    center = aper.to_mask(method='center')
    assert set(np.unique(center.data)) <= {0.0, 1.0}

    subpixel = aper.to_mask(method='subpixel', subpixels=20)
    assert_allclose(subpixel.data.sum(), aper.area, atol=0.5)

    wrapped = Subpixel(aper, 20).to_mask()
    assert_allclose(wrapped.data, subpixel.data)


def test_custom_aperture_photometry():
    aper = BoxAperture((3.375, 4.625), 2.25)
    data = np.ones((10, 10))
    aper_sum, aper_sum_err = aper.do_photometry(data)
    assert_allclose(aper_sum, aper.area)
    assert np.isnan(aper_sum_err)
    assert_allclose(aper.area_overlap(data), aper.area)


def test_mask_debug_log():
    aper = BoxAperture((3.375, 4.625), 2.25)
    level = log.level
    log.setLevel('DEBUG')
    try:
        with log.log_to_list() as log_list:
            aper.to_mask()
    finally:
        log.setLevel(level)

    messages = [record.getMessage() for record in log_list]
    assert any('BoxAperture mask' in message for message in messages)
    assert any('16 inside and 20 partial pixels' in message
               for message in messages)


class TestRectanglePhotometry:
    aperture = RectangularAperture((10.0, 10.0), w=4.6, h=4.6, theta=30.0)
    data = np.ones((20, 20))

    def test_full_overlap(self):
        weight = self.aperture.to_mask().data.sum()
        assert weight <= self.aperture.area + 1e-10

        aper_sum, aper_sum_err = self.aperture.do_photometry(
            self.data, error=self.data)
        assert_allclose(aper_sum, weight)
        assert_allclose(aper_sum_err, np.sqrt(weight))
        assert_allclose(self.aperture.area_overlap(self.data), weight)

    @pytest.mark.parametrize('method', ['center', 'subpixel', 'exact'])
    def test_methods(self, method):
        weights = self.aperture.to_mask(method=method, subpixels=7).data
        aper_sum, _ = self.aperture.do_photometry(self.data, method=method,
                                                  subpixels=7)
        assert_allclose(aper_sum, weights.sum())

    def test_mask(self):
        mask = np.zeros(self.data.shape, dtype=bool)
        mask[10, 10] = True
        data = self.data.copy()
        data[10, 10] = np.nan

        # the masked pixel is fully inside the aperture
        weight = self.aperture.to_mask().data.sum() - 1.0
        aper_sum, _ = self.aperture.do_photometry(data, mask=mask)
        assert_allclose(aper_sum, weight)
        assert_allclose(self.aperture.area_overlap(data, mask=mask), weight)

        # the inputs are not modified
        assert np.isnan(data[10, 10])
        assert np.count_nonzero(mask) == 1

    def test_non_finite_without_mask(self):
        data = self.data.copy()
        data[10, 10] = np.inf
        aper_sum, _ = self.aperture.do_photometry(data)
        assert np.isinf(aper_sum)

    def test_units(self):
        unit = u.MJy / u.sr
        aper_sum, aper_sum_err = self.aperture.do_photometry(
            self.data * unit, error=self.data * unit)
        assert aper_sum.unit == unit
        assert aper_sum_err.unit == unit
        assert_allclose(aper_sum.value, self.aperture.to_mask().data.sum())

        with pytest.raises(ValueError, match='same units'):
            self.aperture.do_photometry(self.data * unit, error=self.data)
        with pytest.raises(ValueError, match='same units'):
            self.aperture.do_photometry(self.data * unit,
                                        error=self.data * u.Jy)

    def test_invalid_inputs(self):
        with pytest.raises(ValueError):
            self.aperture.do_photometry(np.ones(10))
        with pytest.raises(ValueError):
            self.aperture.do_photometry(self.data, error=np.ones((3, 3)))
        with pytest.raises(ValueError):
            self.aperture.do_photometry(self.data, mask=np.ones((3, 3)))
        with pytest.raises(ValueError):
            self.aperture.do_photometry(self.data, method='invalid')
        with pytest.raises(ValueError):
            self.aperture.do_photometry(self.data, method='subpixel',
                                        subpixels=0)


def test_photometry_partial_overlap():
    data = np.ones((20, 20))
    aper = RectangularAperture((0.0, 0.0), w=4.6, h=4.6)

    # the covered part is [-0.5, 2.3] along each axis
    aper_sum, aper_sum_err = aper.do_photometry(data, error=data)
    assert_allclose(aper_sum, 2.8**2)
    assert_allclose(aper_sum_err, 2.8)
    assert_allclose(aper.area_overlap(data), 2.8**2)

    unit = u.MJy / u.sr
    aper_sum, aper_sum_err = aper.do_photometry(data * unit,
                                                error=data * unit)
    assert_allclose(aper_sum.value, 2.8**2)
    assert_allclose(aper_sum_err.value, 2.8)


def test_photometry_no_overlap():
    data = np.ones((20, 20))
    aper = RectangularAnnulus((50.0, 50.0), 2.0, 4.0, 4.0)
    aper_sum, aper_sum_err = aper.do_photometry(data, error=data)
    assert np.isnan(aper_sum)
    assert np.isnan(aper_sum_err)
    assert np.isnan(aper.area_overlap(data))
