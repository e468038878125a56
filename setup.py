#!/usr/bin/env python

from setuptools import setup, find_packages

import pyvsa

setup(name='pyvsa',
      version=pyvsa.__version__,
      license='BSD',
      description='RADIUS Vendor-Specific Attribute encoding',
      long_description=open('README.rst').read(),
      classifiers=[
          'Development Status :: 5 - Production/Stable',
          'Intended Audience :: Developers',
          'License :: OSI Approved :: BSD License',
          'Programming Language :: Python :: 3.12',
          'Programming Language :: Python :: 3.13',
          'Topic :: Software Development :: Libraries :: Python Modules',
          'Topic :: System :: Systems Administration :: Authentication/Directory',
      ],
      packages=find_packages(),
      package_data={'pyvsa': ['dicts/dictionary*'],
                    'pyvsa.tests': ['data/*']},
      keywords=['radius', 'vendor-specific', 'vsa'],
      zip_safe=False,
      include_package_data=True,
      install_requires=['netaddr'],
      extras_require={'test': ['pytest']},
      )
