"""Service version, read from the VERSION file shipped with the package."""

from pathlib import Path

VERSION_FILE = Path(__file__).with_name("VERSION")


def read_version() -> str:
    """Return the version string with surrounding whitespace stripped."""
    return VERSION_FILE.read_text(encoding="utf-8").strip()
