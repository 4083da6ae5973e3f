"""
Setup script for sbf-search.
"""

from setuptools import setup, find_packages

setup(
    name="sbf-search",
    version="0.1.0",
    description="Client-side full-text search for static sites using Spectral Bloom Filters",
    packages=find_packages(exclude=["tests", "tests.*", "examples"]),
    package_data={
        "sbf_search": ["py.typed", "assets/*.txt", "assets/*.html"],
    },
    python_requires=">=3.9",
    extras_require={"test": ["pytest"]},
    entry_points={"console_scripts": ["sbf-search=sbf_search.cli:main"]},
)
