"""Declarative command-line argument parsing and validation. Describe
flags, options, positional arguments, subcommands, and the constraints
between them, and gavel checks argv against the description.
"""

from setuptools import setup


__author__ = 'gavel contributors'
__version__ = '0.1.0dev'
__license__ = 'BSD'


setup(name='gavel',
      version=__version__,
      description="Declarative command-line argument parsing, with ranges, choices, groups, and subcommands.",
      long_description=__doc__,
      author=__author__,
      packages=['gavel', 'gavel.test'],
      include_package_data=True,
      zip_safe=False,
      license=__license__,
      platforms='any',
      install_requires=['boltons>=20.0.0'],
      extras_require={'test': ['pytest']},
      classifiers=[
          'Topic :: Utilities',
          'Intended Audience :: Developers',
          'Topic :: Software Development :: Libraries',
          'Programming Language :: Python :: 3.8',
          'Programming Language :: Python :: 3.9',
          'Programming Language :: Python :: 3.10',
          'Programming Language :: Python :: 3.11',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: 3 :: Only',
          'Programming Language :: Python :: Implementation :: CPython',
          'Programming Language :: Python :: Implementation :: PyPy', ]
      )

"""
A brief checklist for release:

* pytest
* git commit (if applicable)
* Bump setup.py version off of dev
* git commit -a -m "bump version for vx.y.z release"
* rm -rf dist/*
* python -m build
* twine upload dist/*
* git tag -a vx.y.z -m "brief summary"
* write CHANGELOG
* bump setup.py version onto n+1 dev
* git push

"""
