"""Version information for fleet-deploy package"""

__version__ = "0.3.0"
__version_info__ = (0, 3, 0)
__author__ = "vistart"
__email__ = "i@vistart.me"
__license__ = "MIT"
__copyright__ = "Copyright 2025-2026 vistart"


def get_version():
    """Get the version string"""
    return __version__


def get_version_info():
    """Get the version tuple"""
    return __version_info__
