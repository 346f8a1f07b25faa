from setuptools import setup, find_packages

setup(
    name="deephem",
    version="0.1.0",
    description="Reader and evaluator for JPL DE binary ephemeris files",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.20",
        "click>=8.2.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "deephem=deephem.cli:cli",
        ],
    },
    python_requires=">=3.8",
)
