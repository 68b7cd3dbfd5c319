# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This module defines the overlap-weight mask produced by an aperture.
"""

import numpy as np

__all__ = ['ApertureMask']


class ApertureMask:
    """
    The overlap weights of an aperture over its bounding box.

    Each element is the covered fraction of one pixel: 1 for pixels
    fully inside the aperture, 0 for pixels outside, and the partial
    overlap in between.

    Parameters
    ----------
    data : array_like
        The 2D array of overlap weights. Its shape must match the shape
        of ``bbox``.

    bbox : `~photoverlap.aperture.BoundingBox`
        The pixel box covered by ``data``.
    """

    def __init__(self, data, bbox):
        self.data = np.asanyarray(data)
        if self.data.shape != bbox.shape:
            raise ValueError(f'mask data shape {self.data.shape} does not '
                             f'match the bounding box shape {bbox.shape}')
        self.bbox = bbox

    def __array__(self, dtype=None, copy=None):
        """
        Array representation of the overlap weights.

        A new array is always returned when ``copy`` is `True`.
        """
        if copy:
            return np.array(self.data, dtype=dtype, copy=True)
        return np.asarray(self.data, dtype=dtype)

    def __repr__(self):
        return f'<{self.__class__.__name__}(shape={self.shape}, {self.bbox})>'

    @property
    def shape(self):
        """
        The ``(ny, nx)`` shape of the weights array.
        """
        return self.data.shape

    def _get_overlap_cutouts(self, shape, mask=None):
        """
        Return the weights that fall on an array of the given shape.

        The result is the ``(y, x)`` slices into the array, the matching
        weights, and a boolean array selecting the weighted pixels that
        are not masked. All three are `None` when the mask does not
        touch the array.
        """
        if mask is not None:
            mask = np.asarray(mask, dtype=bool)
            if mask.shape != tuple(shape):
                raise ValueError('mask and data must have the same shape')

        slc_large, slc_small = self.bbox.get_overlap_slices(shape)
        if slc_large is None:
            return None, None, None

        weights = self.data[slc_small]
        good = weights > 0
        if mask is not None:
            good &= ~mask[slc_large]

        return slc_large, weights, good
