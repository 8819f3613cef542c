from setuptools import setup, find_packages
import os

# Read version from __init__.py
def get_version():
    """Get version from floatimg/__init__.py"""
    init_file = os.path.join(os.path.dirname(__file__), "floatimg", "__init__.py")
    with open(init_file, "r") as f:
        for line in f:
            if line.startswith("__version__"):
                return line.split("=")[1].strip().strip('"\'')
    raise RuntimeError("Unable to find version string.")

# Installation Examples:
# - Base package only: pip install floatimg
# - With test tooling: pip install "floatimg[dev]"

extras_require = {
    # Development dependencies
    "dev": [
        "pytest>=7.4.0",
        "pytest-cov>=4.1.0",
        "coverage>=7.3.2",
        "scipy>=1.12.0",  # reference correlation in the convolution tests
    ],
}

setup(
    name="floatimg",
    version=get_version(),
    description="Planar floating-point image processing: convolution, sharpening and resampling",
    long_description=open("README.md", "r", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Image Processing",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Operating System :: OS Independent",
    ],
    python_requires=">=3.10",
    keywords="image-processing, convolution, unsharp-mask, interpolation, resampling",
    packages=find_packages(include=["floatimg", "floatimg.*"]),
    install_requires=[
        # Core image processing and scientific computing
        "numpy>=1.26.4",
        "scikit-image>=0.25.2",  # 8/16-bit/float sample conversion for decoded images

        # Configuration files
        "PyYAML>=6.0.2",
    ],
    extras_require=extras_require,
)
