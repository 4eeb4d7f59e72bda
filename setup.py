from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="devents",
    version="0.1.0",
    author="devents contributors",
    description="An embeddable, synchronous publish/subscribe event channel with cross-object listening",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(include=["devents", "devents.*"], exclude=["devents.tests*"]),
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
    ],
    python_requires=">=3.10",
    install_requires=[
        "python-dotenv>=1.0.1",
        "pydantic>=2.10.3",
        "colorlog>=6.9.0",
    ],
    extras_require={
        "test": [
            "pytest>=8.0.0",
        ],
    },
)
