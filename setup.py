# setup.py
from setuptools import setup, find_packages

setup(
    name="redlisp",
    version="0.1.0",
    description="A small homoiconic Lisp with closures, macros and memoized packages",
    packages=find_packages(include=["redlisp", "redlisp.*"]),
    package_data={"redlisp": ["packages/*.lisp"]},
    python_requires=">=3.10",
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    entry_points={
        "console_scripts": ["redlisp=redlisp.__main__:main"],
    },
    zip_safe=False,
)
