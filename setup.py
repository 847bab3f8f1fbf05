"""
Setup script for the jobboard web client.

Allows development installation with `pip install -e .`
Test dependencies: `pip install -e .[test]`
"""

from setuptools import setup, find_packages

setup(
    name="jobboard",
    version="0.1.0",
    packages=find_packages(include=["jobboard", "jobboard.*"]),
    package_data={"jobboard": ["templates/*.html", "templates/partials/*.html"]},
    python_requires=">=3.11",
    install_requires=[
        "flask>=3.0",
        "requests>=2.31",
        "python-dotenv>=1.0",
        "pydantic>=2.5",
        "pydantic-settings>=2.1",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-mock>=3.12",
        ],
    },
    entry_points={
        "console_scripts": [
            "jobboard=jobboard.app:main",
        ],
    },
)
