from setuptools import setup, find_packages

setup(
    name="geminiscribe",
    version="0.1.0",
    description="Audio/video transcription with Google Gemini, with TXT/PDF/Word export",
    author="",
    python_requires=">=3.9",
    packages=find_packages(exclude=["tests", "tests.*"]),
    install_requires=[
        "rich>=12.5.0",
        "click>=8.1.0",
        "pyyaml>=6.0.0",
        "pypubsub>=4.0.3",
        "aiohttp>=3.8.0",
        "fpdf2>=2.7.6",
        "pyperclip>=1.8.2",
    ],
    extras_require={
        "test": [
            "pytest>=7.0.0",
            "pytest-asyncio>=0.21.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "geminiscribe=geminiscribe.main:main",
        ],
    },
)
