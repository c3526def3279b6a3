#!/usr/bin/env python

import glob
import git
from git import InvalidGitRepositoryError

from setuptools import find_namespace_packages, setup
from pathlib import Path

scripts = sorted(glob.glob('bin/gammafn*'))

exec(open('py/gammafn/_version.py').read())
version = __version__

try:
    description = (f"Gamma, log-gamma and digamma kernels, "
                   f"commit hash: {git.Repo('.').head.object.hexsha}")
except (InvalidGitRepositoryError, ValueError):
    description = (f"Gamma, log-gamma and digamma kernels, "
                   f"version: {version}")
this_directory = Path(__file__).parent
long_description = (this_directory / "README.md").read_text()


setup(name="gammafn",
    version = version,
    description = description,
    long_description = long_description,
    long_description_content_type = 'text/markdown',
    packages = find_namespace_packages(where='py', include=['gammafn*']),
    package_dir = {'': 'py'},
    package_data = {'gammafn': ['tests/data/*.ini']},
    install_requires = ['numpy', 'scipy', 'fitsio', 'llvmlite', 'numba',
                        'setuptools', 'gitpython'],
    extras_require = {'test': ['pytest']},
    scripts = scripts
    )
