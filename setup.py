# setup.py
from setuptools import find_packages, setup

setup(
    name="geo-fallback",
    version="0.1.0",
    description="IP-based geolocation fallback API with a background-refreshed cache",
    packages=find_packages(include=["geofallback", "geofallback.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi>=0.110",
        "httpx>=0.27",
        "pydantic>=2.6",
        "pydantic-settings>=2.2",
        "sentry-sdk>=1.40",
        "structlog>=24.1",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
    entry_points={
        "console_scripts": [
            "geo-fallback=geofallback.cli:main",
        ],
    },
)
