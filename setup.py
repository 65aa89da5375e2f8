from setuptools import setup, find_packages

setup(
    name="uiauto-elements",
    version="1.0.0",
    packages=find_packages(include=["uiauto_elements", "uiauto_elements.*"]),
    install_requires=[
        "pyyaml>=5.4",
        "jsonschema>=4.0.0",
        "pyhamcrest>=2.0.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    python_requires=">=3.8",
    package_data={
        "uiauto_elements": ["schemas/*.json"],
    },
)
