from setuptools import setup, find_packages

setup(
    name="gpml_codec",
    version="0.1.0",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "lxml>=4.9",
        "pydantic>=2.0.0",
        "networkx>=3.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": ["gpml-codec=gpml_codec.cli:main"],
    },
    python_requires=">=3.9",
)
