# setup.py
from setuptools import setup, find_packages

setup(
    name="text_scout",
    version="0.1.0",
    description="TextScout: asynchronous depth-bounded crawler that saves page text",
    packages=find_packages(include=["text_scout", "text_scout.*"]),
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "click>=8.1",
        "pydantic>=2.5",
        "PyYAML>=6.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.4",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "text_scout=text_scout.cli:cli",
        ],
    },
    python_requires=">=3.11",
)
