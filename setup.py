# setup.py
from setuptools import setup, find_packages

setup(
    name="page_scout",
    version="0.1.0",
    description="Асинхронный веб-краулер PageScout",
    packages=find_packages(exclude=("tests", "tests.*")),
    package_data={"page_scout.report": ["templates/*.j2"]},
    install_requires=[
        "aiohttp>=3.9",
        "beautifulsoup4>=4.12",
        "lxml>=5.0",
        "pydantic>=2.6",
        "PyYAML>=6.0",
        "python-dotenv>=1.0",
        "click>=8.1",
        "jinja2>=3.1",
        "pymongo>=4.6",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": ["page_scout=page_scout.cli:cli"],
    },
    python_requires=">=3.11",
)
