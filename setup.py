"""Setup script for the syllabus-to-assignments extractor."""

from setuptools import setup, find_packages

with open("README.md", "r", encoding="utf-8") as fh:
    long_description = fh.read()

setup(
    name="syllabus-assignment-extractor",
    version="0.1.0",
    author="Syllabus Assignment Extractor",
    description="Recover a structured assignment list from course syllabus text and PDFs",
    long_description=long_description,
    long_description_content_type="text/markdown",
    packages=find_packages(exclude=["tests", "tests.*"]),
    python_requires=">=3.8",
    install_requires=[
        "pdfplumber>=0.10.0",
        "dateparser>=1.2.0",
        "icalendar>=5.0.0",
        "flask>=2.3.0",
        "psycopg2-binary>=2.9.0",
        "openai>=1.0.0",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "syllabus-extract=syllabus_extractor.main:main",
        ],
    },
    classifiers=[
        "Development Status :: 3 - Alpha",
        "Intended Audience :: Education",
        "Topic :: Education",
        "Programming Language :: Python :: 3",
        "Programming Language :: Python :: 3.8",
        "Programming Language :: Python :: 3.9",
        "Programming Language :: Python :: 3.10",
        "Programming Language :: Python :: 3.11",
    ],
)
