import re

import setuptools

# Read the version without importing the package (its dependencies may not be installed yet)
with open("pycatalog/__init__.py", "r") as fh:
    version_tuple = re.search(r"version_tuple = \((\d+), (\d+), (\d+)\)", fh.read()).groups()

with open("README.md", "r") as fh:
    long_description = fh.read()

setuptools.setup(
    name="pycatalog",
    version=".".join(version_tuple),
    author="pycatalog",
    description="Aggregates public REST catalogs (stars, pokemon, Star Wars) behind a small HTTP service",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=setuptools.find_packages(exclude=["*.tests", "*.tests.*", "tests"]),
    python_requires=">=3.8",
    install_requires=[
        'requests',
        'python-dotenv',
        'fastapi',
        'uvicorn',
        'pydantic>=2',
        'pydantic-settings',
    ],
    extras_require={
        'test': [
            'pytest',
            'pytest-asyncio',
            'httpx',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
