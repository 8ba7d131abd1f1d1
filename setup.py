"""
Setup script for the axlocator accessibility search engine.
"""

from setuptools import setup, find_packages

setup(
    name="axlocator",
    version="0.1.0",
    description="Locate and enumerate UI elements in accessibility trees by criteria and path hints",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    author="axlocator developers",
    python_requires=">=3.10",
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    install_requires=[
        "pydantic>=2.0.0",
        "rich>=13.0.0",
        "psutil>=5.9.0",
        "python-dotenv>=1.0.0",
    ],
    extras_require={
        "macos": [
            "atomacos>=3.3.0",
            "pyobjc-framework-ApplicationServices>=10.0",
            "pyobjc-framework-Cocoa>=10.0",
        ],
        "test": [
            "pytest>=7.0.0",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: MacOS",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
