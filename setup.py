# setup.py
from setuptools import setup, find_packages

setup(
    name="eth-explorer-api",
    version="0.1.0",  # Match eth_explorer.__version__
    packages=find_packages(where="src"),
    package_dir={"": "src"},
    python_requires=">=3.9",
    install_requires=[
        "fastapi>=0.100",
        "uvicorn>=0.15.0",
        "web3>=6.0",
        "pydantic>=2.0",
        "httpx>=0.24",
        "aiohttp>=3.8",
        "prometheus-client>=0.16",
        "python-dotenv>=1.0",
        "pyyaml>=6.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.0",
            "pytest-asyncio>=0.21",
            "pytest-cov>=4.1",
            "pytest-mock>=3.10",
            "black>=23.0",
            "isort>=5.12",
            "flake8>=6.0",
            "mypy>=1.0"
        ],
    },
    entry_points={
        "console_scripts": [
            "eth-explorer=eth_explorer.cli.cli:main",
        ],
    },
    description="REST API over an Ethereum node and the Etherscan API",
    long_description=open("README.md").read(),
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Developers",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
)
