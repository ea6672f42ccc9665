"""
Built-in event builders.

Importing this package registers every builder on statements.registry.REGISTRY.
"""

from . import assignment

__all__ = ["assignment"]
