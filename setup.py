#!/usr/bin/env python

import setuptools

setuptools.setup(
    name="docsync",
    version="0.3.0",
    description="Side-by-side PDF and extracted-content viewer with synchronized selection.",
    packages=setuptools.find_packages(include=["docsync", "docsync.*"]),
    package_data={"docsync": ["configs/*.yaml"]},
    classifiers=[
        "Programming Language :: Python :: 3",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
    install_requires=['qtpy>=2.0',
                      'PyQt5>=5.15',
                      'PyMuPDF>=1.23',
                      'PyYAML>=5.3',
                      'termcolor>=1.1',
                      'requests>=2.25',
                      'colorama>=0.4; sys_platform=="win32"',
                      ],
    extras_require={
        'test': ['pytest>=7'],
    },
    python_requires='>=3.10',

    entry_points={
        'console_scripts': [
            'docsync = docsync.gui.app:main',
        ],
    },


)
