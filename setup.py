"""
Setup file.
"""

import os

from setuptools import find_packages, setup

KEYWORDS = "wasm webassembly wasm-pack spa bundler build-script sass jinja2"
HERE = os.path.dirname(os.path.abspath(__file__))


if __name__ == "__main__":
    setup(
        name="webbundler",
        version="0.1.0",
        description="Bundles a WebAssembly single-page web application for publishing",
        maintainer="Zachary Vorhies",
        keywords=KEYWORDS,
        package_dir={"": "src"},
        packages=find_packages(where="src"),
        python_requires=">=3.9",
        install_requires=[
            "Jinja2>=3.0",
            "libsass>=0.22",
        ],
        extras_require={
            "test": ["pytest>=7.0"],
        },
        entry_points={
            "console_scripts": [
                "webbundler = webbundler.cli:main",
            ],
        },
        include_package_data=True)
