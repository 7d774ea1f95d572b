from setuptools import setup, find_packages

setup(
    name="crdt-counters",
    version="0.1.0",
    description="State-based G-Counter and PN-Counter CRDTs",
    packages=find_packages(include=["crdt_counters", "crdt_counters.*"]),
    install_requires=[
        "pandas",
    ],
    extras_require={
        "test": [
            "pytest",
        ],
    },
    include_package_data=True,
    python_requires=">=3.11",
)
