from setuptools import setup, find_packages

setup(
    name="sss-recover",
    version="1.0.0",
    description="Shamir secret reconstruction from arbitrary-base shares. Exact rational or GF(p) Lagrange interpolation.",
    long_description=open("README.md").read() if __import__("os").path.exists("README.md") else "",
    long_description_content_type="text/markdown",
    packages=find_packages(include=["sss_recover", "sss_recover.*"]),
    py_modules=["cli"],
    python_requires=">=3.8",
    install_requires=[],
    extras_require={
        "web": ["aiohttp>=3.9"],
        "test": ["pytest>=7.0", "aiohttp>=3.9"],
    },
    entry_points={
        "console_scripts": [
            "sss-recover=cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 5 - Production/Stable",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Programming Language :: Python :: 3.13",
        "Topic :: Security :: Cryptography",
    ],
    license="MIT",
)
