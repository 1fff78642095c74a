from setuptools import setup, find_packages
import os
import re

with open('README.md') as f:
    long_description = f.read()

# package imports its dependencies, so version is read from source
with open(os.path.join('select_tools', '__init__.py')) as f:
    __VERSION__ = re.search(r"__VERSION__ = '([^']+)'", f.read()).group(1)

setup(
    name='select_tools',
    version=__VERSION__,
    description='Selection state synchronization for items and selection hosts',
    long_description=long_description,
    long_description_content_type='text/markdown',
    packages = find_packages(),
    install_requires=[
        'PyYAML'],
    extras_require={
        'test': ['pytest']},
)
