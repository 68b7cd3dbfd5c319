# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines the integer pixel box that encloses an aperture.
"""

import math

import numpy as np

__all__ = ['BoundingBox']


def _first_pixel(value):
    """
    Return the index of the pixel whose span ``[i - 0.5, i + 0.5]``
    contains ``value``, taking the lower pixel for a value on an edge.
    """
    return math.ceil(value - 0.5)


class BoundingBox:
    """
    A box of whole pixels given by integer pixel indices.

    The lower limits are the first pixel in the box along each axis and
    the upper limits are one past the last pixel, so that
    ``array[iymin:iymax, ixmin:ixmax]`` selects the box.

    Parameters
    ----------
    ixmin, ixmax, iymin, iymax : int
        The pixel index limits of the box. The upper limits must not be
        less than the lower limits.

    Examples
    --------
    >>> from photoverlap.aperture import BoundingBox
    >>> bbox = BoundingBox(-5, 6, -2, 3)
    >>> bbox.shape
    (5, 11)
    >>> bbox.bounds
    (-5, 5, -2, 2)
    """

    def __init__(self, ixmin, ixmax, iymin, iymax):
        limits = (ixmin, ixmax, iymin, iymax)
        for value in limits:
            if (isinstance(value, bool)
                    or not isinstance(value, (int, np.integer))):
                raise TypeError('bounding box limits must be integers, '
                                f'got {value!r}')

        if ixmax < ixmin or iymax < iymin:
            raise ValueError('bounding box upper limits must not be less '
                             'than the lower limits')

        self.ixmin, self.ixmax, self.iymin, self.iymax = map(int, limits)

    @classmethod
    def from_float(cls, xmin, xmax, ymin, ymax):
        """
        Return the smallest box of whole pixels that covers the given
        float extents.

        Pixel ``i`` is centered on index ``i`` and spans one unit, so
        the first and last covered pixels along an axis are
        ``ceil(min - 0.5)`` and ``ceil(max - 0.5)``. An extent lying
        exactly on a pixel edge adds the pixel below the edge, which the
        extents do not cover.

        Parameters
        ----------
        xmin, xmax, ymin, ymax : float
            The float extents to cover.

        Returns
        -------
        bbox : `BoundingBox`
            The covering box.

        Examples
        --------
        >>> from photoverlap.aperture import BoundingBox
        >>> BoundingBox.from_float(-5.0, 5.0, -2.0, 2.0)
        BoundingBox(ixmin=-5, ixmax=6, iymin=-2, iymax=3)
        """
        return cls(_first_pixel(xmin), _first_pixel(xmax) + 1,
                   _first_pixel(ymin), _first_pixel(ymax) + 1)

    def __eq__(self, other):
        if not isinstance(other, BoundingBox):
            return NotImplemented
        return self._limits == other._limits

    __hash__ = None

    def __repr__(self):
        return (f'{self.__class__.__name__}(ixmin={self.ixmin}, '
                f'ixmax={self.ixmax}, iymin={self.iymin}, '
                f'iymax={self.iymax})')

    @property
    def _limits(self):
        return self.ixmin, self.ixmax, self.iymin, self.iymax

    @property
    def shape(self):
        """
        The ``(ny, nx)`` number of pixels in the box.
        """
        return self.iymax - self.iymin, self.ixmax - self.ixmin

    @property
    def bounds(self):
        """
        The inclusive ``(xmin, xmax, ymin, ymax)`` pixel indices of the
        box.
        """
        return self.ixmin, self.ixmax - 1, self.iymin, self.iymax - 1

    def get_overlap_slices(self, shape):
        """
        Get the slices selecting the part of the box that falls on an
        array of the given shape.

        Parameters
        ----------
        shape : 2-tuple of int
            The ``(ny, nx)`` shape of the array.

        Returns
        -------
        slices_large : tuple of slices or `None`
            The ``(y, x)`` slices into the array. `None` if the box and
            the array do not share any pixel.

        slices_small : tuple of slices or `None`
            The matching ``(y, x)`` slices into an array covering the
            box. `None` if the box and the array do not share any
            pixel.
        """
        if len(shape) != 2:
            raise ValueError('shape must be the (ny, nx) shape of a 2D '
                             'array')

        slices_large = []
        slices_small = []
        for lower, upper, size in ((self.iymin, self.iymax, shape[0]),
                                   (self.ixmin, self.ixmax, shape[1])):
            start = max(lower, 0)
            stop = min(upper, size)
            if start >= stop:
                return None, None
            slices_large.append(slice(start, stop))
            slices_small.append(slice(start - lower, stop - lower))

        return tuple(slices_large), tuple(slices_small)
