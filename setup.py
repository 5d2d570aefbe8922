"""
setup.py

Установка Peg33 Solver.

Использование:
    pip install -e .            # движок, CLI и веб-API
    pip install -e .[test]      # + pytest
"""

from setuptools import setup

setup(
    name="peg33",
    version="3.0.0",
    description="Peg Solitaire advisory engine for the 33-hole English board",
    packages=["core", "solvers", "solutions", "peg_io", "utils", "web"],
    py_modules=["main"],
    python_requires=">=3.10",
    install_requires=[
        "flask",
    ],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        "console_scripts": [
            "peg33=main:main",
        ],
    },
    zip_safe=False,
)
