from setuptools import setup

setup(
    name="cellindex",
    version="0.1",
    description="Cell-index neighbor search for circular particles in a square box",
    packages=["cellindex"],
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "matplotlib",
        "plotly",
    ],
    extras_require={
        "test": ["pytest"],
    },
)
