# setup.py
from setuptools import setup, find_packages

setup(
    name="quill",
    version="0.1.0",
    description="Tree-walking interpreter for the Quill scripting language",
    packages=find_packages(include=("quill", "quill.*")),
    python_requires=">=3.11",
    install_requires=[
        "click>=8.0",
    ],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["quill=quill.cli:main"],
    },
    zip_safe=False,
)
