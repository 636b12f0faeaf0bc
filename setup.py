from setuptools import setup, find_namespace_packages

setup(
    name="reunion-api",
    version="1.0.0",
    packages=find_namespace_packages(include=["reunion", "reunion.*"]),
    python_requires=">=3.11",
    install_requires=[
        "fastapi",
        "uvicorn",
        "sqlalchemy[asyncio]>=2.0",
        "aiosqlite",
        "pydantic[email]>=2.0",
        "pydantic-settings",
        "python-jose[cryptography]",
        "passlib[bcrypt]",
        "bcrypt==4.0.1",
        "python-multipart",
        "python-json-logger",
        "prometheus-client",
        "pycountry>=22.1",
        "geonamescache>=2.0"
    ],
    extras_require={
        "test": [
            "pytest",
            "pytest-asyncio",
            "httpx"
        ]
    },
)
