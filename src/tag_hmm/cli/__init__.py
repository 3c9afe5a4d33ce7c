"""
Command-line interface module.

CLI tools for training, tagging, scoring and evaluation.
"""

from .main import app

__all__ = [
    "app"
]
