"""
Fetch and install Go toolchain releases
"""
from .config import UpdaterConfig
from .releases import list_available_versions, latest_version, sort_versions, compare_versions
from .install import install_release

__version__ = '0.1'
