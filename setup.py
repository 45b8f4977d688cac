"""
Script used during installation.
"""

from setuptools import setup, find_packages

with open('requirements.txt', 'r', encoding="utf-8") as f:
    requirements = [line.strip() for line in f if line.strip() and not line.startswith('#')]

LONG_DESCRIPTION = 'sqlscenario - helpers for pytest that run SQL statements \
(or SQL files) before and after a test or a group of tests. "{KEY}" \
placeholders in the SQL are replaced with values from a context map.'

setup(
    name='sqlscenario',
    version='0.1.0',
    description='pytest helpers wrapping tests with setup and teardown SQL',
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    license='MIT',
    packages=find_packages(exclude=['tests', 'tests.*']),
    python_requires='>=3.8',
    install_requires=requirements,
    entry_points={
        'pytest11': ['sqlscenario.plugin = sqlscenario.plugin'],
    },
    classifiers=(
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Framework :: Pytest",
    ),
    keywords='pytest sql fixtures database testing',
    zip_safe=False
)
