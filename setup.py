from setuptools import setup, find_packages

setup(
    name="dropfour",
    version="0.1.0",
    packages=find_packages(include=["dropfour", "dropfour.*"]),
    python_requires=">=3.8",
    install_requires=[
        "numpy",
        "gymnasium",  # Environment adapter for scripted play
    ],
    extras_require={
        "test": ["pytest"],
    },
)
