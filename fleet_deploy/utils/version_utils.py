"""Version management utilities"""

from typing import Optional

from packaging.version import parse, Version, InvalidVersion

from ..constants import VERSION_NUMBER_PATTERN


def parse_version(version_str: str) -> Optional[Version]:
    """
    Parse version string

    Args:
        version_str: Version string

    Returns:
        Version object or None if invalid
    """
    try:
        return parse(version_str)
    except InvalidVersion:
        return None


def extract_version(text: Optional[str]) -> Optional[str]:
    """
    Find the first version number in a text

    Args:
        text: Output of a ``--version`` call, a constraint...

    Returns:
        Version string or None

    Examples:
        >>> extract_version("v18.17.1")
        '18.17.1'
        >>> extract_version("^7.4 || >=8.0")
        '7.4'
    """
    if not text:
        return None

    match = VERSION_NUMBER_PATTERN.search(text)
    return match.group(1) if match else None


def satisfies_minimum(current: Optional[str], constraint: Optional[str]) -> bool:
    """
    Check a version against the lowest version a constraint accepts

    Args:
        current: Installed version
        constraint: Requirement such as ``>=14``, ``^7.4`` or ``2.7.1``

    Returns:
        True if no constraint applies or the version is high enough
    """
    minimum = parse_version(extract_version(constraint) or "")
    if minimum is None:
        return True

    installed = parse_version(extract_version(current) or "")
    if installed is None:
        return False

    return installed >= minimum
