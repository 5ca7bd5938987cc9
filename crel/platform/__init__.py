"""Platform helpers: subprocess execution and file writes."""

from crel.platform.files import atomic_write_text, read_text_exact
from crel.platform.process import ProcessError, run

__all__ = [
    "ProcessError",
    "atomic_write_text",
    "read_text_exact",
    "run",
]
