from setuptools import setup, find_packages

setup(
    name="negamax-c4",
    version="1.0.0",
    description="Connect Four with a fixed-depth negamax computer opponent",
    packages=find_packages(include=["negamax_c4", "negamax_c4.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Environment wrapper around the computer opponent
    ],
    extras_require={
        "test": ["pytest"],
    },
)
