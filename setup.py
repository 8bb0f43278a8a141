from setuptools import setup, find_packages

setup(
    name="nestedstruct",
    version="1.0.0",
    description="nestedstruct: expand inline nested struct declarations into flat structs",
    author="nestedstruct Team",
    packages=find_packages(include=["nestedstruct", "nestedstruct.*"]),
    install_requires=[
        "pydantic>=2.0.0",
        "pyyaml>=6.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.4.0"],
    },
    python_requires=">=3.10",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Programming Language :: Python :: 3.10",
    ],
    entry_points={
        "console_scripts": [
            "nestedstruct=nestedstruct.cli:main",
        ],
    },
)
