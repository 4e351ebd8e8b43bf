#!/usr/bin/env python3

import setuptools
import os

try:
    with open(os.path.dirname(os.path.abspath(__file__)) + "/README.md") as readme_file:
        long_description = readme_file.read()
except (FileNotFoundError, FileExistsError):
    long_description = "Landmark and interval access to sequence features in CHADO databases."

setuptools.setup(
    name="chado-das",
    version="0.1.0",
    description="Landmark and interval access to sequence features in CHADO databases",
    long_description_content_type="text/markdown",
    long_description=long_description,
    packages=setuptools.find_packages(),
    package_data={
        "chadodas": [
            "data/*.yml",
            "sql/*.sql"
        ],
        "chadodas.tests": [
            "data/*"
        ]
    },
    entry_points={
        "console_scripts": [
            "chado-das = chadodas.chado_das:main",
        ]
    },
    python_requires=">=3.8",
    install_requires=[
        "sqlalchemy >= 1.4",
        "sqlalchemy-utils >= 0.37.0",
        "psycopg2 >= 2.8",
        "pyyaml >= 5.1",
        "gffutils >= 0.10"
    ],
    extras_require={
        "test": [
            "pytest >= 6.0"
        ]
    },
    license="GPLv3",
    classifiers=[
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: GNU General Public License v3 (GPLv3)",
        "Operating System :: OS Independent",
        "Topic :: Scientific/Engineering :: Bio-Informatics",
        "Development Status :: 3 - Alpha"
    ]
)
