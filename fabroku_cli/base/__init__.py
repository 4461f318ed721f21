"""
Fabroku CLI Base Command Classes

Abstract base classes for consistent command structure.
"""

from .base_command import BaseCommand
from .authenticated_command import AuthenticatedCommand

__all__ = [
    "BaseCommand",
    "AuthenticatedCommand",
]
