from setuptools import setup

setup(
    name="AMOI",
    version="0.1.0",
    description="AMOI: Atlantic Multidecadal Oscillation index toolkit for gridded sea surface temperatures",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    license="MIT",

    # module files live in src/, not a package directory
    py_modules=[
        "sst_index_toolbox",
        "sst_validation",
        "sst_calendar",
        "sst_gridwork",
        "sst_regional",
        "sst_seasonal",
        "sst_trends",
        "sst_errors",
    ],
    package_dir={"": "src"},

    install_requires=[
        "numpy",
        "pandas",
        "xarray",
        "scipy",
    ],

    extras_require={
        "test": [
            "pytest",
        ],
    },

    python_requires=">=3.9",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Programming Language :: Python :: 3",
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering :: Atmospheric Science",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
    ],
)
