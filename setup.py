"""Package setup for SME Compliance Calendar."""

from setuptools import setup, find_packages

setup(
    name="sme-compliance-calendar",
    version="1.0.0",
    description="Compliance obligation matching and 12-month deadline calendar for Indian SMEs",
    long_description=open("README.md", encoding="utf-8").read(),
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "examples"]),
    package_data={"compliance_calendar": ["data/*.json"]},
    include_package_data=True,
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "pandas>=2.0",
        "pydantic-settings>=2.0",
    ],
    extras_require={
        "test": ["pytest>=7.0"],
    },
    entry_points={
        "console_scripts": [
            "compliance-calendar=compliance_calendar.cli:main",
        ],
    },
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Financial and Insurance Industry",
        "License :: OSI Approved :: MIT License",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
        "Programming Language :: Python :: 3.12",
        "Topic :: Office/Business :: Financial :: Accounting",
    ],
    keywords="compliance gst epf esi tds calendar sme india",
)
