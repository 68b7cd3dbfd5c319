# Licensed under a 3-clause BSD style license - see LICENSE.rst
"""
This subpackage contains tools to compute the overlap of apertures with
a pixel grid and to perform aperture photometry.
"""

from .bounding_box import *  # noqa: F401, F403
from .core import *  # noqa: F401, F403
from .mask import *  # noqa: F401, F403
from .rectangle import *  # noqa: F401, F403
from .subpixel import *  # noqa: F401, F403
