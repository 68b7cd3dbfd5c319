# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module provides the low-level geometric primitives used to compute
the overlap of rectangles with pixels.
"""

import math

import numpy as np

__all__ = ['clip_polygon', 'inside_rectangle', 'polygon_area', 'rotate']


def rotate(x, y, theta):
    """
    Rotate points counterclockwise about the origin.

    Parameters
    ----------
    x, y : float or array_like
        The coordinates of the point(s).

    theta : float
        The rotation angle in degrees.

    Returns
    -------
    x_rot, y_rot : float or `~numpy.ndarray`
        The rotated coordinates.
    """
    theta = np.deg2rad(theta)
    sin_theta = np.sin(theta)
    cos_theta = np.cos(theta)
    return (x * cos_theta - y * sin_theta,
            x * sin_theta + y * cos_theta)


def inside_rectangle(x, y, width, height, theta):
    """
    Check if a point is inside a rotated rectangle.

    The point is rotated by ``-theta`` into the frame of the rectangle
    and tested against the rectangle half sizes. Points on the boundary
    are considered to be inside.

    Parameters
    ----------
    x, y : float or array_like
        The position(s) of the point(s) relative to the rectangle
        center.

    width, height : float
        The full width and height of the rectangle. For ``theta=0`` the
        width side is along the ``x`` axis.

    theta : float
        The counterclockwise rotation angle of the rectangle in degrees.

    Returns
    -------
    result : bool or `~numpy.ndarray` of bool
        `True` for each point inside (or on the edge of) the rectangle.
    """
    theta = np.mod(theta, 360.0)
    x_local, y_local = rotate(x, y, -theta)
    return ((np.abs(x_local) <= 0.5 * width)
            & (np.abs(y_local) <= 0.5 * height))


def clip_polygon(vertices, a, b, c):
    """
    Clip a convex polygon to the half plane ``a * x + b * y <= c``.

    This is a single step of the Sutherland-Hodgman algorithm.

    Parameters
    ----------
    vertices : list of (float, float)
        The polygon vertices, in order.

    a, b, c : float
        The coefficients of the half plane.

    Returns
    -------
    result : list of (float, float)
        The vertices of the clipped polygon. The list may have fewer
        than three vertices if the polygon is entirely outside the half
        plane.
    """
    if not vertices:
        return []

    clipped = []
    prev_x, prev_y = vertices[-1]
    prev_dist = a * prev_x + b * prev_y - c
    for x, y in vertices:
        dist = a * x + b * y - c
        if dist <= 0:
            if prev_dist > 0:
                frac = prev_dist / (prev_dist - dist)
                clipped.append((prev_x + frac * (x - prev_x),
                                prev_y + frac * (y - prev_y)))
            clipped.append((x, y))
        elif prev_dist <= 0:
            frac = prev_dist / (prev_dist - dist)
            clipped.append((prev_x + frac * (x - prev_x),
                            prev_y + frac * (y - prev_y)))
        prev_x, prev_y, prev_dist = x, y, dist

    return clipped


def polygon_area(vertices):
    """
    Return the area of a simple polygon using the shoelace formula.

    Polygons with fewer than three vertices have zero area.
    """
    if len(vertices) < 3:
        return 0.0

    area = 0.0
    x0, y0 = vertices[-1]
    for x1, y1 in vertices:
        area += x0 * y1 - x1 * y0
        x0, y0 = x1, y1

    return math.fabs(0.5 * area)
