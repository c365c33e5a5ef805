"""
TaskView setup.py — Package configuration and CLI entry point.
"""

from setuptools import find_packages, setup

setup(
    name="taskview",
    version="1.0.0",
    description="TaskView — browser-rendered task list with client-side search and pagination",
    packages=find_packages(include=["taskview", "taskview.*"]),
    python_requires=">=3.11",
    entry_points={
        "console_scripts": [
            "taskview=taskview.cli:main",
        ],
    },
    install_requires=[
        "reflex>=0.8.0",
        "pydantic>=2.5",
        "pyyaml>=6.0",
        "httpx>=0.27",
        "fastapi>=0.110",
        "uvicorn>=0.29",
    ],
    extras_require={
        "test": [
            "pytest>=8.0",
            "pytest-asyncio>=0.23",
        ],
    },
)
