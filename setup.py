# setup.py
from setuptools import setup, find_packages

setup(
    name="funspec",
    version="0.8.0",
    description="Named lists of deferred function calls for column summaries",
    packages=find_packages(include=["funspec", "funspec.*"]),
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    zip_safe=False,
)
