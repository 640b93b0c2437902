#!/usr/bin/env python
from setuptools import (
    find_packages,
    setup,
)

extras_require = {
    "dev": [
        "build>=0.9.0",
        "bumpversion>=0.5.3",
        "ipython",
        "pre-commit>=3.4.0",
        "tox>=4.0.0",
        "twine",
        "wheel",
    ],
    "chaincheck": [
        "dnspython>=2.3.0",
        "eth-typing>=3.3.0",
        "eth-utils>=2.0.0",
    ],
    "test": [
        "hypothesis>=5,<7",
        "pytest>=7.0.0",
        "pytest-cov>=4.0.0",
        "pytest-timeout>=2.0.0",
        "pytest-xdist>=3.0",
    ],
}


extras_require["dev"] = (
    extras_require["dev"]
    + extras_require["chaincheck"]
    + extras_require["test"]
)

install_requires = extras_require["chaincheck"]

with open("README.md") as readme_file:
    long_description = readme_file.read()

setup(
    name="py-chaincheck",
    # *IMPORTANT*: Don't manually change the version here. Use the 'bumpversion' utility.
    version="0.1.0-alpha.1",
    description="Checkpoint store guarding a full node against deep chain reorganizations",
    long_description=long_description,
    long_description_content_type="text/markdown",
    author="Evolution Network developers",
    include_package_data=True,
    install_requires=install_requires,
    python_requires=">=3.8, <4",
    extras_require=extras_require,
    license="MIT",
    zip_safe=False,
    keywords="blockchain checkpoints reorg",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"chaincheck": ["py.typed"]},
    entry_points={
        'console_scripts': [
            'chaincheck=chaincheck.main:run',
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Natural Language :: English",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
