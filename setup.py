"""Setup configuration for advisor-audit package."""

from setuptools import setup, find_packages

setup(
    name="advisor-audit",
    version="0.1.0",
    description="Browser audits of Forbes Advisor regional pages with performance reports",
    packages=find_packages(include=["advisor_audit", "advisor_audit.*"]),
    python_requires=">=3.9",
    install_requires=[
        "pydantic>=2.0.0",
        "python-dotenv>=1.0.0",
        "pyyaml>=6.0",
        "click>=8.1.0",
        "rich>=13.0.0",
        "playwright>=1.40.0",
    ],
    extras_require={
        "dev": [
            "pytest>=7.4.0",
            "pytest-asyncio>=0.21.0",
            "pytest-cov>=4.1.0",
            "pytest-mock>=3.11.0",
            "ruff>=0.1.0",
            "mypy>=1.5.0",
            "black>=23.0.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "advisor-audit=advisor_audit.cli.app:main",
        ],
    },
)
