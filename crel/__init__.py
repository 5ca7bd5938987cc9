"""crel: conventional-commit driven semantic versioning and release tagging."""

__version__ = "0.3.0"
