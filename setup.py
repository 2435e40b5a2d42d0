from setuptools import find_packages, setup

setup(
    name="nisp",
    version="0.1.0",
    description="A minimal Lisp front end: tokenizer, reader, printer and lowering pass",
    packages=find_packages(include=["nisp", "nisp.*"]),
    python_requires=">=3.9",
    extras_require={
        # Tests are unittest.TestCase classes, collected with pytest
        "test": ["pytest"],
    },
)
