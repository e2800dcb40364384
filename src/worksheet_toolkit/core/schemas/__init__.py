"""
Schemas Package

JSON schema definitions and validation utilities for block records.
"""

from .validator import validate_block, ValidationError

__all__ = [
    "validate_block",
    "ValidationError",
]
