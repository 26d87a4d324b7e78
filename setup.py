#!/usr/bin/env python
# -*- coding: utf-8 -*-

"""The setup script."""

from setuptools import setup, find_packages

with open("README.rst") as readme_file:
    readme = readme_file.read()

with open("HISTORY.rst") as history_file:
    history = history_file.read()

with open("requirements.txt", "r") as f:
    requirements = [
        _.strip() for _ in f.readlines() if _.strip() and not _.startswith("-")
    ]

with open("boagent/__init__.py") as f:
    version = [_ for _ in f.readlines() if _.startswith("__version__")][0]
    version = version.split("=")[-1].strip().strip("\"'")

test_requirements = ["pytest", "hypothesis"]

setup(
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Intended Audience :: Science/Research",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    description="A BOA negotiation agent with an opponent-aware bidding strategy",
    install_requires=requirements,
    extras_require={"test": test_requirements},
    python_requires=">=3.9",
    long_description=readme + "\n\n" + history,
    long_description_content_type="text/x-rst",
    include_package_data=True,
    keywords="negotiation BOA agent opponent-model concession automated-negotiation",
    name="boagent",
    packages=find_packages(exclude=["tests", "tests.*"]),
    test_suite="tests",
    version=version,
    zip_safe=False,
)
