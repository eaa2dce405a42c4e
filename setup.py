#!/usr/bin/env python

import setuptools

setuptools.setup(
    name="pagewise",
    version="0.3.0",
    author="Chen Yang",
    author_email="healthonrails@gmail.com",
    description="A reading-session engine for reflowable documents: page index, position tracking, navigation and resize handling.",
    url="https://github.com/healthonrails/pagewise",
    packages=setuptools.find_packages(include=["pagewise", "pagewise.*"]),
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=['qtpy>=2.0.0',
                      'PyQt5>=5.15.7',
                      'termcolor>=1.1.0',
                      'colorama>=0.4.1; platform_system=="Windows"',  # colored log output on Windows consoles
                      ],
    extras_require={
        'test': ['pytest>=7.0'],
    },
    python_requires='>=3.10',
)
