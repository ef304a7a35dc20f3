from setuptools import find_packages, setup


setup(
    name="tapline",
    version="0.0.1",
    description="Untappd APIv4 client and command line tool",
    url="https://github.com/tapline/tapline",
    packages=find_packages(include=["tapline", "tapline.*"]),
    python_requires=">=3.10",
    license="beerware",
    install_requires=[
        "Flask>=2.2.0",
        "click>=8.0",
        "pydantic>=2.0",
        "python-dotenv>=0.19.2",
        "requests>=2.24.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "untappdctl = tapline.cli.untappdctl:cli",
        ],
    },
)
