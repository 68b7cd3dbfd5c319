# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Define the base aperture classes and the pixel classification driver.
"""

import abc
import enum
import warnings
from copy import deepcopy

import astropy.units as u
import numpy as np
from astropy import log
from astropy.utils import lazyproperty

from photoverlap.aperture.bounding_box import BoundingBox
from photoverlap.aperture.mask import ApertureMask

__all__ = ['Aperture', 'PixelAperture', 'PixelOverlap']


class PixelOverlap(enum.Enum):
    """
    The classification of a pixel with respect to an aperture.
    """

    INSIDE = 'inside'
    OUTSIDE = 'outside'
    PARTIAL = 'partial'


class Aperture(metaclass=abc.ABCMeta):
    """
    Abstract base class for all apertures.
    """

    _params = ()

    def __repr__(self):
        prefix = f'{self.__class__.__name__}'
        cls_info = []
        for param in self._params:
            value = getattr(self, param)
            if param == 'position':
                value = f'({value[0]}, {value[1]})'
            elif isinstance(value, Aperture):
                value = repr(value)
            cls_info.append(f'{param}={value}')
        cls_info = ', '.join(cls_info)
        return f'<{prefix}({cls_info})>'

    def __str__(self):
        cls_info = [('Aperture', self.__class__.__name__)]
        for param in self._params:
            cls_info.append((param, getattr(self, param)))
        fmt = [f'{key}: {val}' for key, val in cls_info]
        return '\n'.join(fmt)

    def __eq__(self, other):
        """
        Equality operator for `Aperture`.

        All Aperture parameters are compared for strict equality.
        """
        if not isinstance(other, self.__class__):
            return False

        if self._params != other._params:
            return False

        for param in self._params:
            if np.any(getattr(self, param) != getattr(other, param)):
                return False

        return True

    def __ne__(self, other):
        """
        Inequality operator for `Aperture`.
        """
        return not self == other

    def copy(self):
        """
        Make an deep copy of this object.

        Returns
        -------
        result : `Aperture`
            A deep copy of the Aperture object.
        """
        params_copy = {}
        for param in self._params:
            params_copy[param] = deepcopy(getattr(self, param))
        return self.__class__(**params_copy)

    @property
    @abc.abstractmethod
    def position(self):
        """
        The aperture ``(x, y)`` center position.
        """
        raise NotImplementedError('Needs to be implemented in a subclass')


class PixelAperture(Aperture):
    """
    Abstract base class for apertures defined in pixel coordinates.

    Subclasses define the aperture extents (``_xy_extents``), the
    classification of a pixel (`overlap`), and the function used to
    compute the overlap of partially-covered pixels (`partial`). The
    mask driver (`to_mask`) relies only on these.
    """

    @property
    def x(self):
        """
        The ``x`` pixel coordinate of the aperture center.
        """
        return float(self.position[0])

    @property
    def y(self):
        """
        The ``y`` pixel coordinate of the aperture center.
        """
        return float(self.position[1])

    @property
    @abc.abstractmethod
    def _xy_extents(self):
        """
        The (x, y) extents of the aperture measured from the center
        position.

        In other words, the (x, y) extents are half of the aperture
        minimal bounding box size in each dimension.
        """
        raise NotImplementedError('Needs to be implemented in a subclass')

    @lazyproperty
    def bbox(self):
        """
        The minimal `~photoverlap.aperture.BoundingBox` for the
        aperture.

        Every pixel with a nonzero overlap with the aperture is inside
        the bounding box.
        """
        x_delta, y_delta = self._xy_extents
        return BoundingBox.from_float(self.x - x_delta, self.x + x_delta,
                                      self.y - y_delta, self.y + y_delta)

    def bounds(self):
        """
        Return the inclusive ``(xmin, xmax, ymin, ymax)`` pixel indices
        of the aperture bounding box.
        """
        return self.bbox.bounds

    @property
    @abc.abstractmethod
    def area(self):
        """
        The exact geometric area of the aperture shape.
        """
        raise NotImplementedError('Needs to be implemented in a subclass')

    @abc.abstractmethod
    def overlap(self, i, j):
        """
        Classify a pixel as inside, outside, or partially covered by the
        aperture.

        Parameters
        ----------
        i, j : int
            The row (``y``) and column (``x``) indices of the pixel.

        Returns
        -------
        result : `PixelOverlap`
            The pixel classification.
        """
        raise NotImplementedError('Needs to be implemented in a subclass')

    @abc.abstractmethod
    def partial(self, subpixels=None):
        """
        Return the function used to compute the overlap of a partially
        covered pixel.

        Parameters
        ----------
        subpixels : `None` or int, optional
            If `None`, the returned function computes the exact overlap.
            Otherwise, it samples the pixel with ``subpixels**2``
            points.

        Returns
        -------
        func : callable
            A function ``func(x, y)`` returning the overlap fraction of
            the pixel whose center is at ``(x, y)`` relative to the
            aperture center.
        """
        raise NotImplementedError('Needs to be implemented in a subclass')

    def _pixel_offsets(self, i, j):
        """
        Return the offsets of the center of pixel ``(i, j)`` from the
        aperture center.
        """
        return j - self.x, i - self.y

    def _to_method_aperture(self, method, subpixels):
        """
        Return the aperture whose `partial` function implements the
        given mask method.
        """
        # prevent circular import
        from photoverlap.aperture.subpixel import Subpixel

        if method not in ('center', 'subpixel', 'exact'):
            raise ValueError(f'Invalid mask method: {method}')

        if method == 'exact':
            return self
        if method == 'center':
            subpixels = 1

        return Subpixel(self, subpixels)

    def _overlap_weights(self):
        """
        Compute the overlap weights of the aperture over its bounding
        box.

        Inside pixels have a weight of 1, outside pixels a weight of 0,
        and the `partial` function is evaluated only for the partially
        covered pixels.
        """
        bbox = self.bbox
        partial = self.partial()
        weights = np.zeros(bbox.shape, dtype=float)

        ninside = npartial = 0
        for row, i in enumerate(range(bbox.iymin, bbox.iymax)):
            for col, j in enumerate(range(bbox.ixmin, bbox.ixmax)):
                overlap = self.overlap(i, j)
                if overlap is PixelOverlap.INSIDE:
                    weights[row, col] = 1.0
                    ninside += 1
                elif overlap is PixelOverlap.PARTIAL:
                    weights[row, col] = partial(*self._pixel_offsets(i, j))
                    npartial += 1

        log.debug(f'{self.__class__.__name__} mask over {bbox}: '
                  f'{ninside} inside and {npartial} partial pixels')

        return weights

    def to_mask(self, method='exact', subpixels=5):
        """
        Return a mask for the aperture.

        Parameters
        ----------
        method : {'exact', 'center', 'subpixel'}, optional
            The method used to determine the overlap of the aperture on
            the pixel grid. Note that the more precise methods are
            generally slower. The following methods are available:

            * ``'exact'`` (default):
              The exact fractional overlap of the aperture and each
              partially covered pixel is calculated. The aperture
              weights will contain values between 0 and 1.

            * ``'center'``:
              A partially covered pixel is considered to be entirely in
              or out of the aperture depending on whether its center is
              in or out of the aperture. The aperture weights will
              contain values only of 0 (out) and 1 (in).

            * ``'subpixel'``:
              A partially covered pixel is divided into subpixels (see
              the ``subpixels`` keyword), each of which are considered
              to be entirely in or out of the aperture depending on
              whether its center is in or out of the aperture. If
              ``subpixels=1``, this method is equivalent to
              ``'center'``. The aperture weights will contain values
              between 0 and 1.

        subpixels : int, optional
            For the ``'subpixel'`` method, resample pixels by this
            factor in each dimension. That is, each pixel is divided
            into ``subpixels**2`` subpixels. This keyword is ignored
            unless ``method='subpixel'``.

        Returns
        -------
        mask : `~photoverlap.aperture.ApertureMask`
            A mask for the aperture.
        """
        aperture = self._to_method_aperture(method, subpixels)
        return ApertureMask(aperture._overlap_weights(), aperture.bbox)

    def area_overlap(self, data, *, mask=None, method='exact', subpixels=5):
        """
        Return the area of overlap between the data and the aperture.

        This method takes into account the aperture mask method, masked
        data pixels (``mask`` keyword), and partial/no overlap of the
        aperture with the data.

        Parameters
        ----------
        data : array_like or `~astropy.units.Quantity`
            A 2D array.

        mask : array_like (bool), optional
            A boolean mask with the same shape as ``data`` where a
            `True` value indicates the corresponding element of ``data``
            is masked. Masked data are excluded from the area overlap.

        method : {'exact', 'center', 'subpixel'}, optional
            The method used to determine the overlap of the aperture on
            the pixel grid. See `to_mask`.

        subpixels : int, optional
            For the ``'subpixel'`` method, resample pixels by this
            factor in each dimension. See `to_mask`.

        Returns
        -------
        area : float
            The area (in pixels**2) of overlap between the data and the
            aperture. `~numpy.nan` is returned if the aperture does not
            overlap the data.
        """
        data = np.asanyarray(data)
        apermask = self.to_mask(method=method, subpixels=subpixels)
        slc_large, aper_weights, pixel_mask = apermask._get_overlap_cutouts(
            data.shape, mask=mask)
        if slc_large is None:
            return np.nan

        return np.sum(aper_weights[pixel_mask])

    def do_photometry(self, data, error=None, mask=None, method='exact',
                      subpixels=5):
        """
        Perform aperture photometry on the input data.

        Parameters
        ----------
        data : array_like or `~astropy.units.Quantity` instance
            The 2D array on which to perform photometry. ``data`` should
            be background subtracted.

        error : array_like or `~astropy.units.Quantity`, optional
            The pixel-wise Gaussian 1-sigma errors of the input
            ``data``. ``error`` must have the same shape as the input
            ``data``.

        mask : array_like (bool), optional
            A boolean mask with the same shape as ``data`` where a
            `True` value indicates the corresponding element of ``data``
            is masked. Masked data are excluded from all calculations.

        method : {'exact', 'center', 'subpixel'}, optional
            The method used to determine the overlap of the aperture on
            the pixel grid. See `to_mask`.

        subpixels : int, optional
            For the ``'subpixel'`` method, resample pixels by this
            factor in each dimension. See `to_mask`.

        Returns
        -------
        aperture_sum : float or `~astropy.units.Quantity`
            The sum within the aperture.

        aperture_sum_err : float or `~astropy.units.Quantity`
            The error on the sum within the aperture. `~numpy.nan` if
            ``error`` is not input.
        """
        data = np.asanyarray(data)
        if data.ndim != 2:
            raise ValueError('data must be a 2D array')

        if error is not None:
            error = np.asanyarray(error)
            if error.shape != data.shape:
                raise ValueError('error and data must have the same shape')

        # check Quantity inputs
        unit = {getattr(arr, 'unit', None) for arr in (data, error)
                if arr is not None}
        if len(unit) > 1:
            raise ValueError('If data or error has units, then they both '
                             'must have the same units')

        # strip data and error units for performance
        unit = unit.pop()
        if unit is not None:
            data = data.value
            if error is not None:
                error = error.value

        apermask = self.to_mask(method=method, subpixels=subpixels)
        slc_large, aper_weights, pixel_mask = apermask._get_overlap_cutouts(
            data.shape, mask=mask)

        # no overlap of the aperture with the data
        if slc_large is None:
            aperture_sum = aperture_sum_err = np.nan
        else:
            with warnings.catch_warnings():
                # ignore multiplication with non-finite data values
                warnings.simplefilter('ignore', RuntimeWarning)

                values = (data[slc_large] * aper_weights)[pixel_mask]
                aperture_sum = values.sum()

                aperture_sum_err = np.nan
                if error is not None:
                    variance = (error[slc_large]**2
                                * aper_weights)[pixel_mask]
                    aperture_sum_err = np.sqrt(variance.sum())

        if unit is not None:
            aperture_sum = u.Quantity(aperture_sum, unit)
            aperture_sum_err = u.Quantity(aperture_sum_err, unit)

        return aperture_sum, aperture_sum_err
