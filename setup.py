from setuptools import setup

long_description = """
Scidat is a small Python library for reading the units found in the headers of
scientific, in particular atmospheric chemistry, data files. Unit strings such
as ``ug m-3`` or ``degrees C`` are sanitized with a configurable table of unit
aliases and converted into units of a `pint <https://pint.readthedocs.io>`_
registry.

Scidat furthermore bundles numerical helpers for working with such data: NaN
aware means, normalization, array dimension shuffling, conversion of unix
timestamps, and plotting of quantities with matplotlib.
"""

import os, re
with open(os.path.join('scidat', '__init__.py')) as f:
    version = next(filter(None, map(re.compile("^__version__ = version = '([a-zA-Z0-9.]+)'$").match, f))).group(1)

setup(
    name = 'scidat',
    version = version,
    description = 'Unit parsing and numeric utilities for scientific data files',
    packages = ['scidat'],
    package_data = {'scidat': ['standard_unit_aliases.txt']},
    long_description = long_description,
    license = 'MIT',
    python_requires = '>=3.8',
    install_requires = ['numpy>=1.17', 'treelog>=1.0b5', 'stringly', 'pint>=0.18'],
    extras_require = dict(
        docs=['Sphinx>=1.6', 'matplotlib>=3.0'],
        plotting=['matplotlib>=3.0'],
    ),
    entry_points = dict(
        console_scripts=['scidat-units=scidat.__main__:main'],
    ),
    command_options = dict(
        test=dict(test_loader=('setup.py', 'unittest:TestLoader')),
    ),
)
