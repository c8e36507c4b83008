"""
wired configuration core

Hot-reloadable, validated configuration for the wired notification daemon.
"""

__version__ = "0.1.0"
