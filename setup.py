#!/usr/bin/python
# -*- encoding: utf-8 -*-
import ast
import re

from setuptools import find_packages
from setuptools import setup

## The version number is maintained in autoauth/__init__.py only
_version_re = re.compile(r"__version__\s+=\s+(.*)")
with open("autoauth/__init__.py", "rb") as f:
    version = str(
        ast.literal_eval(_version_re.search(f.read().decode("utf-8")).group(1))
    )

if __name__ == "__main__":
    test_packages = [
        "pytest",
        "pytest-asyncio",
        "pytest-coverage",
        "coverage",
    ]

    setup(
        name="autoauth",
        version=version,
        description="HTTP request executor negotiating Digest or Basic authentication",
        long_description=open("README.md").read(),
        long_description_content_type="text/markdown",
        classifiers=[
            "Development Status :: 4 - Beta",
            "Intended Audience :: Developers",
            "License :: OSI Approved :: Apache Software License",
            "Operating System :: OS Independent",
            "Programming Language :: Python",
            "Programming Language :: Python :: 3",
            "Topic :: Internet :: WWW/HTTP",
            "Topic :: Software Development :: Libraries " ":: Python Modules",
        ],
        keywords="http digest basic authentication",
        license="Apache",
        python_requires=">=3.9",
        packages=find_packages(exclude=["tests", "tests.*"]),
        include_package_data=True,
        zip_safe=False,
        install_requires=[
            "requests",
            "aiohttp",
            "pyyaml",
            "typing_extensions;python_version<'3.11'",
        ],
        extras_require={
            "test": test_packages,
        },
    )
