# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines rectangular and rectangular-annulus apertures in
pixel coordinates.
"""

import math

from photoverlap.aperture.attributes import (NonNegativeScalar,
                                             PixelPosition, PositiveScalar,
                                             ScalarAngleOrValue)
from photoverlap.aperture.core import PixelAperture, PixelOverlap
from photoverlap.geometry import (inside_rectangle,
                                  rectangular_annulus_overlap_single_subpixel,
                                  rectangular_overlap_exact,
                                  rectangular_overlap_single_subpixel)

__all__ = ['RectangularAnnulus', 'RectangularAperture',
           'RectangularMixin']

# offsets of the four pixel corners from the pixel center
_CORNERS = ((-0.5, -0.5), (-0.5, 0.5), (0.5, -0.5), (0.5, 0.5))


class RectangularMixin:
    """
    Mixin class for the geometry of rectangular or rectangular-annulus
    aperture objects.
    """

    @property
    def _theta_degrees(self):
        return self.theta.degree

    @staticmethod
    def _calc_extents(width, height, theta):
        """
        Calculate half of the bounding box extents of a rectangle
        rotated by ``theta`` degrees.
        """
        half_width = width / 2.0
        half_height = height / 2.0
        theta = math.radians(theta)
        sin_theta = math.sin(theta)
        cos_theta = math.cos(theta)
        x_extent1 = abs((half_width * cos_theta) - (half_height * sin_theta))
        x_extent2 = abs((half_width * cos_theta) + (half_height * sin_theta))
        y_extent1 = abs((half_width * sin_theta) + (half_height * cos_theta))
        y_extent2 = abs((half_width * sin_theta) - (half_height * cos_theta))
        x_extent = max(x_extent1, x_extent2)
        y_extent = max(y_extent1, y_extent2)

        return x_extent, y_extent

    def _corners_inside(self, i, j, width, height):
        """
        Return whether each of the four corners of pixel ``(i, j)`` is
        inside the centered rectangle of the given size.
        """
        x, y = self._pixel_offsets(i, j)
        return [bool(inside_rectangle(x + dx, y + dy, width, height,
                                      self._theta_degrees))
                for dx, dy in _CORNERS]


class RectangularAperture(RectangularMixin, PixelAperture):
    """
    A rectangular aperture defined in pixel coordinates.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    w : float
        The full width of the rectangle in pixels. For ``theta=0`` the
        width side is along the ``x`` axis.

    h : float
        The full height of the rectangle in pixels. For ``theta=0`` the
        height side is along the ``y`` axis.

    theta : float or `~astropy.units.Quantity`, optional
        The rotation angle as an angular quantity
        (`~astropy.units.Quantity` or `~astropy.coordinates.Angle`) or
        value in degrees (as a float) from the positive ``x`` axis. The
        rotation angle increases counterclockwise and is wrapped to the
        range [0, 360) degrees.

    Raises
    ------
    ValueError : `ValueError`
        If either width (``w``) or height (``h``) is negative or not
        finite.

    Examples
    --------
    >>> from photoverlap.aperture import RectangularAperture
    >>> aper = RectangularAperture((0.0, 0.0), w=10.0, h=4.0)
    >>> aper.bounds()
    (-5, 5, -2, 2)
    """

    _params = ('position', 'w', 'h', 'theta')
    position = PixelPosition('The center pixel position.')
    w = NonNegativeScalar('The full width in pixels.')
    h = NonNegativeScalar('The full height in pixels.')
    theta = ScalarAngleOrValue('The counterclockwise rotation angle from '
                               'the positive x axis, wrapped to [0, 360) '
                               'degrees.')

    def __init__(self, position, w, h, theta=0.0):
        self.position = position
        self.w = w
        self.h = h
        self.theta = theta

    @property
    def _xy_extents(self):
        return self._calc_extents(self.w, self.h, self._theta_degrees)

    @property
    def area(self):
        return self.w * self.h

    def overlap(self, i, j):
        flags = self._corners_inside(i, j, self.w, self.h)
        if all(flags):
            return PixelOverlap.INSIDE
        if not any(flags):
            return PixelOverlap.OUTSIDE

        return PixelOverlap.PARTIAL

    def partial(self, subpixels=None):
        w = self.w
        h = self.h
        theta = self._theta_degrees

        if subpixels is None:
            def overlap_func(x, y):
                return rectangular_overlap_exact(x - 0.5, y - 0.5, x + 0.5,
                                                 y + 0.5, w, h, theta)
        else:
            def overlap_func(x, y):
                return rectangular_overlap_single_subpixel(
                    x - 0.5, y - 0.5, x + 0.5, y + 0.5, w, h, theta,
                    subpixels)

        return overlap_func


class RectangularAnnulus(RectangularMixin, PixelAperture):
    r"""
    A rectangular annulus aperture defined in pixel coordinates.

    The annulus is the outer rectangle minus the inner rectangle. Both
    rectangles share the same center and rotation angle.

    Parameters
    ----------
    position : array_like
        The ``(x, y)`` pixel coordinates of the aperture center.

    w_in : float
        The inner full width of the rectangular annulus in pixels. For
        ``theta=0`` the width side is along the ``x`` axis.

    w_out : float
        The outer full width of the rectangular annulus in pixels. For
        ``theta=0`` the width side is along the ``x`` axis.

    h_out : float
        The outer full height of the rectangular annulus in pixels.

    theta : float or `~astropy.units.Quantity`, optional
        The rotation angle as an angular quantity
        (`~astropy.units.Quantity` or `~astropy.coordinates.Angle`) or
        value in degrees (as a float) from the positive ``x`` axis. The
        rotation angle increases counterclockwise and is wrapped to the
        range [0, 360) degrees.

    h_in : `None` or float, optional
        The inner full height of the rectangular annulus in pixels,
        given only by keyword. If `None`, then the inner full height is
        calculated as:

            .. math:: h_{in} = h_{out}
                \left(\frac{w_{in}}{w_{out}}\right)

        For ``theta=0`` the height side is along the ``y`` axis.

    Raises
    ------
    ValueError : `ValueError`
        If the inner width (``w_in``) is greater than the outer width
        (``w_out``) or the inner height (``h_in``) is greater than the
        outer height (``h_out``).

    ValueError : `ValueError`
        If any of the widths or heights is not strictly positive.

    Examples
    --------
    >>> from photoverlap.aperture import RectangularAnnulus
    >>> aper = RectangularAnnulus((0.0, 0.0), 5.0, 10.0, 8.0, theta=45.0)
    >>> aper.h_in
    4.0
    """

    _params = ('position', 'w_in', 'w_out', 'h_in', 'h_out', 'theta')
    position = PixelPosition('The center pixel position.')
    w_in = PositiveScalar('The inner full width in pixels.')
    w_out = PositiveScalar('The outer full width in pixels.')
    h_in = PositiveScalar('The inner full height in pixels.')
    h_out = PositiveScalar('The outer full height in pixels.')
    theta = ScalarAngleOrValue('The counterclockwise rotation angle from '
                               'the positive x axis, wrapped to [0, 360) '
                               'degrees.')

    def __init__(self, position, w_in, w_out, h_out, theta=0.0, *,
                 h_in=None):
        self.position = position
        self.w_in = w_in
        self.w_out = w_out
        self.h_out = h_out

        if not self.w_in <= self.w_out:
            raise ValueError('"w_out" must be greater than or equal to '
                             '"w_in"')

        if h_in is None:
            h_in = self.w_in / self.w_out * self.h_out
        self.h_in = h_in

        if not self.h_in <= self.h_out:
            raise ValueError('"h_out" must be greater than or equal to '
                             '"h_in"')

        self.theta = theta

    @property
    def _xy_extents(self):
        return self._calc_extents(self.w_out, self.h_out,
                                  self._theta_degrees)

    @property
    def area(self):
        return self.w_out * self.h_out - self.w_in * self.h_in

    def overlap(self, i, j):
        flags_out = self._corners_inside(i, j, self.w_out, self.h_out)
        flags_in = self._corners_inside(i, j, self.w_in, self.h_in)

        if all(flags_out) and not any(flags_in):
            return PixelOverlap.INSIDE
        if not any(flags_out) or all(flags_in):
            return PixelOverlap.OUTSIDE

        return PixelOverlap.PARTIAL

    def partial(self, subpixels=None):
        w_in = self.w_in
        h_in = self.h_in
        w_out = self.w_out
        h_out = self.h_out
        theta = self._theta_degrees

        if subpixels is None:
            def overlap_func(x, y):
                edges = (x - 0.5, y - 0.5, x + 0.5, y + 0.5)
                return (rectangular_overlap_exact(*edges, w_out, h_out, theta)
                        - rectangular_overlap_exact(*edges, w_in, h_in, theta))
        else:
            def overlap_func(x, y):
                return rectangular_annulus_overlap_single_subpixel(
                    x - 0.5, y - 0.5, x + 0.5, y + 0.5, w_in, h_in, w_out,
                    h_out, theta, subpixels)

        return overlap_func
