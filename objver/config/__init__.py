"""
Configuration loading for objver.
"""

from .settings import ObjverSettings, load_settings

__all__ = ["ObjverSettings", "load_settings"]
