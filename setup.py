from setuptools import setup, find_packages

setup(
    name="extstats",
    version="1.0.0",
    packages=find_packages(exclude=["tests", "tests.*"]),
    description="Walk directories and report disk usage by extension, by file kind, and the largest files.",
    author="Max Carlson",
    author_email="carlsonamax@gmail.com",
    python_requires=">=3.9",
    install_requires=[
        "rich>=13.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "extstats=extstats.cli:main",
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
