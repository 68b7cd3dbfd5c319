# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
Photoverlap is a package to compute the exact fractional overlap of
rectangular apertures with a pixel grid, the computational core of
aperture photometry.
"""

try:
    from .version import version as __version__
except ImportError:
    __version__ = ''
