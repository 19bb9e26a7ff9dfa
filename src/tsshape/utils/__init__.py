"""
tsshape utilities package
"""

from .io_utils import read_source_file, is_supported_source

__all__ = ["read_source_file", "is_supported_source"]
