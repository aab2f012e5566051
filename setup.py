from setuptools import setup, find_packages

setup(
    name="route-follow-overlay",
    version="1.0.0",
    description="Route follow overlay: progress tracking and path display for waypoint routes",
    packages=find_packages(include=["follow", "follow.*"]),
    py_modules=["main"],
    include_package_data=True,
    package_data={"": ["*.json"]},
    install_requires=[
        "pygame>=2.1.0",
    ],
    extras_require={
        "test": ["pytest"],
    },
    python_requires=">=3.8",
)
