"""
Loading Module

Reads block records and format settings from disk.
"""

from .loader import LoaderError, Material, load_blocks, load_material, load_options

__all__ = [
    "LoaderError",
    "Material",
    "load_blocks",
    "load_material",
    "load_options",
]
