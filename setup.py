#!/usr/bin/env python
#
# Copyright (c) 2026 blechunk developers
# This software is distributed under the terms of the MIT License.
#

import os
from setuptools import setup

__version__ = None
VERSION_FILE = os.path.join(os.path.dirname(__file__), "blechunk", "_version.py")
exec(open(VERSION_FILE).read())  # Adds __version__ to globals

with open("README.md", "r") as fh:
    long_description = fh.read()

args = dict(
    name="blechunk",
    version=__version__,
    description="Chunking protocol for carrying arbitrary payloads over Bluetooth LE and other small-MTU links.",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=[
        "blechunk",
        "blechunk.util",
        "blechunk.chunking",
        "blechunk.link",
        "blechunk._cli",
        "blechunk._cli.commands",
    ],
    python_requires=">=3.7",
    install_requires=[
        "ruamel.yaml >= 0.17",
        "coloredlogs >= 15.0",
    ],
    entry_points={
        "console_scripts": [
            "blechunk = blechunk._cli:main",
        ],
    },
    license="MIT",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Topic :: Software Development :: Libraries",
        "Topic :: System :: Networking",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
    ],
    keywords="bluetooth ble chunking fragmentation reassembly mtu",
)

setup(**args)
