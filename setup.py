"""Setup script for RateTheDogs."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

base_requirements = [
    "python-dotenv>=1.0.0",
    "pydantic>=2.5.0",
    "pydantic-settings>=2.1.0",
    "fastapi>=0.104.0",
    "uvicorn[standard]>=0.24.0",
    "aiohttp>=3.9.0",
    "httpx>=0.25.0",
    "loguru>=0.7.2",
    "sqlalchemy>=2.0.23",
]

# Production database driver (optional, SQLite is the default)
postgres_requirements = [
    "psycopg2-binary>=2.9.9",
]

setup(
    name="ratethedogs",
    version="1.0.0",
    description="Anonymous dog rating API with personal stats and Dog CEO catalog import",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Developers",
        "Framework :: FastAPI",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
    ],
    python_requires=">=3.11",
    install_requires=base_requirements,
    extras_require={
        "postgres": postgres_requirements,
        "dev": [
            "pytest>=7.4.3",
            "pytest-asyncio>=0.21.1",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.12.0",
            "black>=23.12.0",
            "flake8>=6.1.0",
            "mypy>=1.7.1",
            "freezegun>=1.4.0",
        ]
    },
    entry_points={
        "console_scripts": [
            "ratethedogs-api=ratethedogs.api:main",
            "ratethedogs-fetch-images=ratethedogs.scripts.fetch_images:main",
            "ratethedogs-seed=ratethedogs.scripts.seed_images:main",
            "ratethedogs-seed-test-data=ratethedogs.scripts.seed_test_data:main",
        ],
    },
)
