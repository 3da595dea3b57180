import os

from setuptools import setup, find_packages

with open(os.path.join(os.path.dirname(__file__), "readme.md"), "r") as fh:
    long_description = fh.read()

setup(
    name='mockserver',
    version='1.0.0',
    license='MIT',
    description='An in-memory REST server for intercepting HTTP client calls in tests.',
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=("tests", "tests.*")),
    python_requires='>=3.8',
    install_requires=[
        'aiohttp',
        'marshmallow>=3.18',
    ],
    extras_require={
        'test': [
            'pytest',
            'faker',
        ],
    },
)
