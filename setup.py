# setup.py
from setuptools import setup, find_packages

setup(
    name="ember",
    version="0.1.0",
    description="A small expression language: lexer, parser and tree-walking evaluator with a REPL",
    packages=find_packages(include=["ember", "ember.*"]),
    python_requires=">=3.10",
    install_requires=[
        "typer>=0.9",
        "rich>=13",
    ],
    extras_require={
        "test": [
            "pytest>=7",
            "hypothesis>=6",
        ],
    },
    entry_points={
        "console_scripts": [
            "ember=ember.cli:main",
        ],
    },
    zip_safe=False,
)
