# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Define descriptor classes for aperture attribute validation.

Aperture attributes are write-once: they are validated and set when
the aperture is constructed and cannot be changed afterwards.
"""

import astropy.units as u
import numpy as np
from astropy.coordinates import Angle

from photoverlap.aperture.core import PixelAperture

__all__ = [
    'ApertureAttribute',
    'NonNegativeScalar',
    'PixelApertureInstance',
    'PixelPosition',
    'PositiveInteger',
    'PositiveScalar',
    'ScalarAngleOrValue',
]


class ApertureAttribute:
    """
    Base descriptor class for aperture attribute validation.

    Parameters
    ----------
    doc : str, optional
        The description string for the attribute.
    """

    def __init__(self, doc=''):
        self.__doc__ = doc
        self.name = ''

    def __set_name__(self, owner, name):
        self.name = name

    def __get__(self, instance, owner):
        if instance is None:
            return self  # pragma: no cover
        return instance.__dict__[self.name]

    def __set__(self, instance, value):
        self._check_unset(instance)
        instance.__dict__[self.name] = self._convert(self._validate(value))

    def _check_unset(self, instance):
        if self.name in instance.__dict__:
            msg = (f'{self.name!r} is read-only; apertures cannot be '
                   'modified after they are created')
            raise AttributeError(msg)

    def __delete__(self, instance):
        msg = f'{self.name!r} cannot be deleted'
        raise AttributeError(msg)

    @staticmethod
    def _convert(value):
        return float(value)

    def _validate(self, value):
        """
        Validate the attribute value.

        An exception is raised if the value is invalid, otherwise the
        value is returned.
        """
        raise NotImplementedError  # pragma: no cover


class PixelPosition(ApertureAttribute):
    """
    Validate and set a single ``(x, y)`` pixel position.

    The position is converted to a 1D `~numpy.ndarray` of two floats.
    """

    @staticmethod
    def _convert(value):
        value.flags.writeable = False
        return value

    def _validate(self, value):
        if isinstance(value, u.Quantity):
            msg = f'{self.name!r} must not be a Quantity'
            raise TypeError(msg)

        try:
            value = np.array(value, dtype=float)
        except (TypeError, ValueError) as exc:
            msg = f'{self.name!r} must be a (x, y) pixel position'
            raise TypeError(msg) from exc

        if value.shape != (2,):
            msg = (f'{self.name!r} must be a single (x, y) pixel '
                   'position, e.g., (10.0, 20.0)')
            raise ValueError(msg)

        if np.any(~np.isfinite(value)):
            msg = (f'{self.name!r} must not contain any non-finite '
                   '(e.g., NaN or inf) values')
            raise ValueError(msg)

        return value


class NonNegativeScalar(ApertureAttribute):
    """
    Check that value is a finite, non-negative (>= 0) scalar.
    """

    def _validate(self, value):
        if (not np.isscalar(value) or isinstance(value, (str, bool))
                or not np.isfinite(value) or value < 0):
            msg = f'{self.name!r} must be a non-negative finite scalar'
            raise ValueError(msg)
        return value


class PositiveScalar(ApertureAttribute):
    """
    Check that value is a finite, strictly positive (> 0) scalar.
    """

    def _validate(self, value):
        if (not np.isscalar(value) or isinstance(value, (str, bool))
                or not np.isfinite(value) or value <= 0):
            msg = f'{self.name!r} must be a positive finite scalar'
            raise ValueError(msg)
        return value


class ScalarAngleOrValue(ApertureAttribute):
    """
    Check that value is a scalar angle, either as a
    `~astropy.coordinates.Angle` or `~astropy.units.Quantity` with
    angular units, or a scalar float.

    The value is always output as an `~astropy.coordinates.Angle`
    wrapped to the range [0, 360) degrees. If the value is not a
    `~astropy.units.Quantity`, it is assumed to be in degrees.
    """

    @staticmethod
    def _convert(value):
        return Angle(value).to(u.deg).wrap_at(360 * u.deg)

    def _validate(self, value):
        if isinstance(value, u.Quantity):
            if not value.isscalar:
                msg = f'{self.name!r} must be a scalar'
                raise ValueError(msg)

            if value.unit.physical_type != 'angle':
                msg = f'{self.name!r} must have angular units'
                raise ValueError(msg)
        elif (not np.isscalar(value) or isinstance(value, (str, bool))
              or not np.isfinite(value)):
            msg = (f'If not an angle Quantity, {self.name!r} must be a '
                   'finite scalar float in degrees')
            raise ValueError(msg)
        else:
            value = u.Quantity(value, u.deg)

        if not np.isfinite(value):
            msg = f'{self.name!r} must be finite'
            raise ValueError(msg)

        return value


class PixelApertureInstance(ApertureAttribute):
    """
    Check that value is a `~photoverlap.aperture.PixelAperture`
    instance.

    The aperture is stored as given; apertures are immutable, so no
    copy is made.
    """

    @staticmethod
    def _convert(value):
        return value

    def _validate(self, value):
        if not isinstance(value, PixelAperture):
            msg = f'{self.name!r} must be a PixelAperture instance'
            raise TypeError(msg)
        return value


class PositiveInteger(ApertureAttribute):
    """
    Check that value is a strictly positive (> 0) integer.

    Python and numpy integers are accepted and stored as `int`; `bool`
    values are rejected.
    """

    @staticmethod
    def _convert(value):
        return int(value)

    def _validate(self, value):
        if (isinstance(value, bool)
                or not isinstance(value, (int, np.integer)) or value <= 0):
            msg = f'{self.name!r} must be a strictly positive integer'
            raise ValueError(msg)
        return value
