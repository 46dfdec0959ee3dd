import logging
from pathlib import Path

from setuptools import find_packages, setup

log = logging.getLogger(__name__)

root = Path(__file__).parent


def read_version() -> str:
    """Version from git tags when setuptools_scm is available."""
    try:
        from setuptools_scm import get_version

        return get_version(root=str(root), relative_to=__file__)
    except Exception as e:
        log.warning(f"Could not determine version from git, using fallback: {e}")
        return "0.1.0"


setup(
    name="wirebind",
    version=read_version(),
    description="Compiler for reactive element attribute directives",
    package_dir={"": "src"},
    packages=find_packages("src"),
    python_requires=">=3.10",
    install_requires=[
        "rich>=13.0",
        "rich-click>=1.7",
    ],
    extras_require={
        "test": [
            "pytest>=7.0",
            "click>=8.0",
        ],
    },
    entry_points={
        "console_scripts": [
            "wirebind=wirebind.cli.main:cli",
        ],
    },
    zip_safe=False,
)
