"""Setup configuration for page-object-generator package."""

from setuptools import setup, find_namespace_packages

setup(
    name="page-object-generator",
    version="0.1.0",
    description="Generate Page Object Pattern sources from HTML documents",
    packages=find_namespace_packages(include=["src", "src.*"], exclude=["src.tests*"]),
    python_requires=">=3.8",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "click>=8.0.0",
        "rich>=13.0.0",
        "httpx>=0.24.0",
        "lxml>=4.9.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "pomgen=src.cli.app:main",
        ],
    },
)
