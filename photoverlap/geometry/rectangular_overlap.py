# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides tools to calculate the area of overlap between a
single pixel and a rotated rectangle or rectangular annulus.

All positions are given relative to the center of the rectangle, i.e.,
the pixel edges have already been translated into the rectangle frame.
"""

import numpy as np

from photoverlap.geometry.core import (clip_polygon, inside_rectangle,
                                       polygon_area, rotate)

__all__ = ['rectangular_annulus_overlap_single_subpixel',
           'rectangular_overlap_exact',
           'rectangular_overlap_single_subpixel']


def _validate_subpixels(subpixels):
    if (isinstance(subpixels, bool)
            or not isinstance(subpixels, (int, np.integer))
            or subpixels <= 0):
        raise ValueError('subpixels must be a strictly positive integer')


def rectangular_overlap_exact(xmin, ymin, xmax, ymax, width, height, theta):
    """
    Compute the exact area of overlap of a pixel and a rotated rectangle.

    The pixel polygon is rotated into the frame of the rectangle and
    clipped successively against each of the four rectangle edges. The
    area of the clipped polygon is the overlap area.

    Parameters
    ----------
    xmin, ymin, xmax, ymax : float
        The pixel edges relative to the rectangle center.

    width, height : float
        The full width and height of the rectangle.

    theta : float
        The counterclockwise rotation angle of the rectangle in degrees.

    Returns
    -------
    area : float
        The area of overlap, in the same (squared) units as the inputs.
        For a unit pixel this is the fractional overlap.
    """
    if width <= 0 or height <= 0:
        return 0.0

    xs = np.array([xmin, xmax, xmax, xmin], dtype=float)
    ys = np.array([ymin, ymin, ymax, ymax], dtype=float)
    xs, ys = rotate(xs, ys, -np.mod(theta, 360.0))
    vertices = list(zip(xs.tolist(), ys.tolist()))

    half_width = 0.5 * width
    half_height = 0.5 * height
    for a, b, c in ((1.0, 0.0, half_width), (-1.0, 0.0, half_width),
                    (0.0, 1.0, half_height), (0.0, -1.0, half_height)):
        vertices = clip_polygon(vertices, a, b, c)
        if len(vertices) < 3:
            return 0.0

    return polygon_area(vertices)


def _subpixel_centers(xmin, ymin, xmax, ymax, subpixels):
    """
    Return the centers of the ``subpixels x subpixels`` grid of
    sub-cells of a pixel.
    """
    offsets = (np.arange(subpixels) + 0.5) / subpixels
    xs = xmin + offsets * (xmax - xmin)
    ys = ymin + offsets * (ymax - ymin)
    return np.meshgrid(xs, ys)


def rectangular_overlap_single_subpixel(xmin, ymin, xmax, ymax, width,
                                        height, theta, subpixels):
    """
    Compute the fractional overlap of a pixel and a rotated rectangle by
    subpixel sampling.

    The pixel is divided into ``subpixels x subpixels`` equal sub-cells
    and the sub-cell centers are tested for being inside the rectangle.

    Parameters
    ----------
    xmin, ymin, xmax, ymax : float
        The pixel edges relative to the rectangle center.

    width, height : float
        The full width and height of the rectangle.

    theta : float
        The counterclockwise rotation angle of the rectangle in degrees.

    subpixels : int
        The number of subdivisions along each pixel edge.

    Returns
    -------
    fraction : float
        The fraction of the sub-cell centers inside the rectangle.
    """
    _validate_subpixels(subpixels)

    xx, yy = _subpixel_centers(xmin, ymin, xmax, ymax, subpixels)
    inside = inside_rectangle(xx, yy, width, height, theta)
    return np.count_nonzero(inside) / subpixels**2


def rectangular_annulus_overlap_single_subpixel(xmin, ymin, xmax, ymax,
                                                w_in, h_in, w_out, h_out,
                                                theta, subpixels):
    """
    Compute the fractional overlap of a pixel and a rotated rectangular
    annulus by subpixel sampling.

    The inner and outer rectangles are sampled on the same grid, so the
    result is always between 0 and 1.

    Parameters
    ----------
    xmin, ymin, xmax, ymax : float
        The pixel edges relative to the annulus center.

    w_in, h_in : float
        The full width and height of the inner rectangle.

    w_out, h_out : float
        The full width and height of the outer rectangle.

    theta : float
        The counterclockwise rotation angle of the annulus in degrees.

    subpixels : int
        The number of subdivisions along each pixel edge.

    Returns
    -------
    fraction : float
        The fraction of the sub-cell centers inside the annulus.
    """
    _validate_subpixels(subpixels)

    xx, yy = _subpixel_centers(xmin, ymin, xmax, ymax, subpixels)
    inside = (inside_rectangle(xx, yy, w_out, h_out, theta)
              & ~inside_rectangle(xx, yy, w_in, h_in, theta))
    return np.count_nonzero(inside) / subpixels**2
