"""
CLI Module

Terminal front-end: formatted output, numbered resource selection and the
interactive explorer menu.
"""

from .interactive import InteractiveExplorer
from .resource_selector import ResourceSelector

__all__ = [
    "InteractiveExplorer",
    "ResourceSelector",
]
