from setuptools import setup, find_packages

setup(
    name="graphanalytics",
    version="0.1.0",
    description="Ranked blocking reports for package build dependency graphs.",
    license="MIT",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "rich>=13.0.0",
        "pydot>=2.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "graphanalytics=graphanalytics.modules.cli:main",
        ],
    },
)
