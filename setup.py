from __future__ import annotations

from setuptools import find_packages, setup

setup(
    name="movie-catalog-client",
    version="0.1.0",
    # Repo convention: code lives under `backend/` and is imported as top-level
    # `domain`, `application` and `infrastructure` packages.
    package_dir={"": "backend"},
    packages=find_packages(
        where="backend",
        include=[
            "domain",
            "domain.*",
            "application",
            "application.*",
            "infrastructure",
            "infrastructure.*",
        ],
    ),
    python_requires=">=3.10",
    install_requires=[
        "aiohttp>=3.9",
        "pydantic>=2.6,<3",
        "python-dotenv>=1.0",
    ],
)
