# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines a wrapper that selects subpixel sampling for the
overlap of partially covered pixels.
"""

from photoverlap.aperture.attributes import (PixelApertureInstance,
                                             PositiveInteger)
from photoverlap.aperture.core import PixelAperture

__all__ = ['Subpixel']


class Subpixel(PixelAperture):
    """
    Wrap a pixel aperture to use subpixel sampling for partially covered
    pixels.

    The wrapper does not change the aperture geometry. The bounding
    box, pixel classification, and area are those of the wrapped
    aperture; only the `partial` overlap function is replaced by one
    that samples each pixel with ``subpixels**2`` points.

    Parameters
    ----------
    aperture : `~photoverlap.aperture.PixelAperture`
        The aperture to wrap. If ``aperture`` is itself a `Subpixel`
        instance, its inner aperture is wrapped instead.

    subpixels : int, optional
        The number of subdivisions along each pixel edge. Must be a
        strictly positive integer.

    Raises
    ------
    ValueError : `ValueError`
        If ``subpixels`` is not a strictly positive integer.

    TypeError : `TypeError`
        If ``aperture`` is not a `~photoverlap.aperture.PixelAperture`.

    Examples
    --------
    >>> from photoverlap.aperture import RectangularAperture, Subpixel
    >>> aper = Subpixel(RectangularAperture((10.0, 20.0), 5.0, 3.0), 10)
    >>> mask = aper.to_mask()
    """

    _params = ('aperture', 'subpixels')
    aperture = PixelApertureInstance('The wrapped aperture.')
    subpixels = PositiveInteger('The number of subdivisions along each '
                                'pixel edge.')

    def __init__(self, aperture, subpixels=1):
        if isinstance(aperture, Subpixel):
            aperture = aperture.aperture

        self.aperture = aperture
        self.subpixels = subpixels

    @property
    def position(self):
        return self.aperture.position

    @property
    def _xy_extents(self):
        return self.aperture._xy_extents

    @property
    def bbox(self):
        return self.aperture.bbox

    @property
    def area(self):
        return self.aperture.area

    def overlap(self, i, j):
        return self.aperture.overlap(i, j)

    def partial(self, subpixels=None):
        """
        Return the subpixel-sampling overlap function of the wrapped
        aperture.

        The sampling resolution is always the one fixed by this
        wrapper; the ``subpixels`` keyword is accepted for interface
        compatibility and ignored.
        """
        return self.aperture.partial(subpixels=self.subpixels)
