"""Utilities for Maintenance Tracker."""

from .config_manager import ConfigManager
from .directory_manager import DirectoryManager

__all__ = [
    'ConfigManager',
    'DirectoryManager'
]
