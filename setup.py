# setup.py
from setuptools import setup, find_namespace_packages

setup(
    name="chainlog",
    version="0.1.0",
    description="Leveled logging with ordered handler chains and size-based file rotation",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src", include=["chainlog", "chainlog.*"]),
    install_requires=[],
    extras_require={
        "test": ["pytest"],
    },
    entry_points={
        'console_scripts': [
            'chainlog=chainlog.interface.cli.app:main',
        ],
    },
    classifiers=[
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent",
    ],
)
