#!/usr/bin/env python
from pathlib import Path
from setuptools import setup, find_packages

long_description = Path("README.md").read_text(encoding="utf-8")

setup(
    name='popgen',
    version='0.1.0',
    description='Synthesizes commuter populations for a city partitioned into districts: network nodes are assigned to district polygons, every inhabitant gets a home and a workplace district drawn by distance rank under workplace capacity, and a home-work-home day plan with empirical departure times. Exports inter-district distance and worker-flow matrices.',
    long_description=long_description,
    long_description_content_type='text/markdown',

    packages=find_packages(include=['popgen', 'popgen.*']),
    python_requires='>=3.9',

    install_requires=[
        'pandas',
        'geopandas',
        'numpy',
        'shapely>=2.0',
        'matplotlib',
    ],

    extras_require={
        'test': [
            'pytest',
        ]
    },

    classifiers=[
        'Programming Language :: Python :: 3',
        'License :: OSI Approved :: MIT License',
        'Operating System :: OS Independent',
    ],
)
