import setuptools

with open("README.md") as f:
    long_description = f.read()

setuptools.setup(
    name="proplogic",
    version='0.1.0',
    description="Propositional formulas and their Tseitin conversion to CNF",
    packages=setuptools.find_packages(include=["proplogic", "proplogic.*"]),
    package_data={
        'proplogic': ['py.typed'],  # Mark package as having inline types
    },
    python_requires='>=3.6',
    install_requires=[],
    extras_require={
        "test": ["pytest", "hypothesis"],
    },
    license="ISC",
    long_description=long_description,
    long_description_content_type="text/markdown",
    classifiers=[
        "Intended Audience :: Science/Research",
        "Topic :: Scientific/Engineering",
        "Topic :: Scientific/Engineering :: Mathematics",
        "Development Status :: 4 - Beta",
        "Programming Language :: Python",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3 :: Only",
        "License :: OSI Approved :: ISC License (ISCL)",
    ],
    keywords="logic cnf tseitin propositional",
    include_package_data=True,
    zip_safe=False,
)
