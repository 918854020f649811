#!/usr/bin/env python

"""Setup file and install script for the WRGL pipeline parsing and coverage core"""

import os
import subprocess

import setuptools

VERSION = '2.0.0'

# add version number and git commit hash of the current revision to version.py
try:
    git_run = subprocess.run(['git', 'rev-parse', '--short', 'HEAD'], stdout=subprocess.PIPE,
                             stderr=subprocess.DEVNULL)
    git_run.check_returncode()
except (OSError, subprocess.SubprocessError):
    commit_hash = ''
else:
    commit_hash = git_run.stdout.strip().decode()

here = os.path.dirname(os.path.abspath(__file__))
with open(os.path.join(here, 'wrgl', 'pipeline', 'version.py'), 'w') as version_file:
    version_file.writelines([f'__version__ = "{VERSION}"\n',
                             f'__git_revision__ = "{commit_hash}"\n'])

setuptools.setup(name='wrgl-pipeline',
                 version=VERSION,
                 description='VCF, BED and coverage gap analysis for clinical sequencing pipelines',
                 packages=setuptools.find_packages(exclude=['tests', 'tests.*']),
                 scripts=['scripts/wrgl_gaps.py', 'scripts/wrgl_compress_variants.py'],
                 python_requires='>=3.6',
                 install_requires=['logbook', 'numpy', 'PyYAML', 'toolz'],
                 extras_require={'test': ['pytest', 'pytest-mock', 'mock']})
