#!/usr/bin/env python
# Licensed under a 3-clause BSD style license - see LICENSE.rst

from setuptools import find_packages, setup

setup(
    name='photoverlap',
    version='0.1.0',
    description=('Exact overlap of rectangular apertures with a pixel '
                 'grid for aperture photometry'),
    license='BSD-3-Clause',
    python_requires='>=3.10',
    packages=find_packages(include=['photoverlap', 'photoverlap.*']),
    install_requires=[
        'numpy>=1.23',
        'astropy>=5.1',
    ],
    extras_require={
        'test': [
            'pytest>=7.0',
            'pytest-astropy-header>=0.2.1',
        ],
    },
    zip_safe=False,
)
