"""Utility functions for fleet-deploy"""

from .formatting import format_duration, format_release
from .git_utils import GitScm, run_local
from .version_utils import extract_version, parse_version, satisfies_minimum

__all__ = [
    "format_duration",
    "format_release",
    "GitScm",
    "run_local",
    "extract_version",
    "parse_version",
    "satisfies_minimum",
]
