from setuptools import setup, find_packages

setup(
    name="optstream",
    version="0.3",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "numpy>=1.24.3",
        "pandas>=2.0.3",
        "scipy>=1.11.4",
        "pydantic>=2.5.0",
        "python-dateutil>=2.8.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
        ],
    },
    python_requires=">=3.9",
)
