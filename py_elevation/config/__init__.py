"""
Configuration for elevation plotting.
"""

from .config import Settings, load_env_file, settings

__all__ = ['Settings', 'load_env_file', 'settings']
