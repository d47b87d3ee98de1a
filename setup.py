from setuptools import setup, find_packages

setup(
    name="verticareader",
    version="2.1.0",
    description="Read Vertica native binary files and convert them to CSV or JSON",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "numpy>=1.22.0",
        "pandas>=1.4.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "verticareader=verticareader.cli:main",
        ],
    },
    python_requires=">=3.10",
)
