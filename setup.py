#!/usr/bin/env python
from setuptools import setup

setup(name='omicron',
      version='0.1',
      description='Parser for a small schema language describing native structs',
      packages=['omicron'],
      python_requires='>=3.7',
      install_requires=['lark>=1.0', 'dataslots>=1.0'],
      extras_require={'tests': ['pytest']},
)
