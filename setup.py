"""Setup configuration for udp-ping."""

from setuptools import setup, find_packages

setup(
    name="udp-ping",
    version="0.1.0",
    description="UDP broadcast discovery utility (server/client ping)",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.11",
    install_requires=[
        "pyyaml>=6.0",
        "click>=8.1.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "udp-ping=udp_ping.cli:main",
        ],
    },
)
