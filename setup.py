"""
Setup configuration for binview package.
"""

from setuptools import setup, find_packages

setup(
    name="binview",
    version="0.1.0",
    description="Terminal Hex Viewer with Multi-Encoding Text Preview",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "regex>=2023.0",
        "wcwidth>=0.2.6",
        "pyperclip>=1.8.2",
        "windows-curses>=2.4.1; platform_system == 'Windows'",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    entry_points={
        "console_scripts": [
            "binview=binview.__main__:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Environment :: Console :: Curses",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: Apache Software License",
        "Operating System :: POSIX :: Linux",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Topic :: Utilities",
    ],
)
