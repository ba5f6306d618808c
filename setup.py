# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="lox",
    version="0.1.0",
    description="A tree-walking interpreter for the Lox scripting language",
    # sub-packages carry no __init__.py, so collect them as namespace packages
    packages=find_namespace_packages(include=["lox", "lox.*"]),
    python_requires=">=3.10",
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["lox=lox.__main__:main"],
    },
    zip_safe=False,
)
