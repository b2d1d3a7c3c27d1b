"""Setup script for subsheet, a YouTube subscriptions to Google Sheets transfer tool."""

from setuptools import setup, find_namespace_packages

setup(
    name="subsheet",
    version="0.1.0",
    description="Export YouTube subscriptions to Google Sheets and import them back",
    package_dir={"": "src"},
    packages=find_namespace_packages(where="src"),
    python_requires=">=3.8",
    install_requires=[
        "google-api-python-client>=2.0.0",
        "google-auth>=2.0.0",
        "google-auth-oauthlib>=0.4.0",
        "python-dotenv>=0.19.0",
        "tqdm>=4.0.0",
        "fastapi>=0.95.0",
        "pydantic>=1.10.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-mock>=3.10.0",
            "httpx>=0.24.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "subsheet=subsheet.cli:main",
        ]
    },
)
