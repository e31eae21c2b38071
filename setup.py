from setuptools import setup, find_packages

setup(
    name="appflow-lang",
    version="0.1.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    package_data={"appflow": ["grammar.lark"]},
    install_requires=[
        "lark>=1.1",
        "pydantic>=2.0",
        "loguru>=0.7",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
