from pathlib import Path
import re

from setuptools import find_packages, setup

ROOT = Path(__file__).parent


def _read_version() -> str:
    init = (ROOT / "src" / "jsembed" / "__init__.py").read_text(encoding="utf-8")
    match = re.search(r"^__version__ = ['\"]([^'\"]+)['\"]", init, re.M)
    if not match:
        raise RuntimeError("__version__ not found in src/jsembed/__init__.py")
    return match.group(1)


setup(
    name="jsembed",
    version=_read_version(),
    description="Safe JSON-to-JavaScript serialization and script templates",
    author="GAHEOS",
    python_requires=">=3.8",
    package_dir={"": "src"},
    packages=find_packages(where="src"),
    install_requires=[
        "lxml>=4.9",
    ],
    extras_require={
        "test": ["pytest>=7"],
    },
    entry_points={
        "console_scripts": ["jsembed = jsembed.cli:main"],
    },
)
