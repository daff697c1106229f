"""
Command registry for dependency injection and command factory functionality.
"""

from .command_registry import CommandRegistry

__all__ = ["CommandRegistry"]
