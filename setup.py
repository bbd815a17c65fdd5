from setuptools import setup

setup(
    name = "pybtcscript",
    license = "MIT",
    classifiers = [
        "License :: OSI Approved :: MIT License",
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "Operating System :: OS Independent",
        "Programming Language :: Python :: 3",
        "Topic :: Security :: Cryptography",
        "Topic :: Software Development :: Assemblers",
    ],
    description = "Bitcoin Script assembler in Python",
    packages = ["pybtcscript"],
    entry_points = {
        "console_scripts": ["pybtcscript = pybtcscript.cli:main"],
    },
    python_requires = ">=3.6",
    version = '0.1.0',
    long_description = open('README.md').read(),
    long_description_content_type = "text/markdown",
)
