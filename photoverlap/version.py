# Licensed under a 3-clause BSD style license - see LICENSE.rst
version = '0.1.0'
