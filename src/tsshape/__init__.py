"""
tsshape: canonical shape descriptors for TypeScript class, interface and
type-alias declarations.
"""

__version__ = "0.1.0"
