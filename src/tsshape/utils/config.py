"""
Configuration constants to replace magic strings throughout tsshape
"""

import os
import tempfile

# Parser configuration constants (cache under temp dir to avoid cluttering project root)
DEFAULT_PARSER_CACHE_FILE = os.path.join(tempfile.gettempdir(), "tsshape_parser.cache")
DEFAULT_SOURCE_FILE = "<input>"

# File encoding constants
DEFAULT_FILE_ENCODING = "utf-8"

# Source files the CLI and driver accept (".d.ts" is covered by ".ts")
SUPPORTED_EXTENSIONS = (".ts", ".tsx", ".mts", ".cts")

# Keyword types that normalize to PrimitiveType
PRIMITIVE_TYPE_NAMES = frozenset({
    "string", "number", "boolean", "any", "null",
    "unknown", "undefined", "void", "never", "object",
    "bigint", "symbol", "intrinsic",
})

# Boolean literal types
BOOLEAN_TRUE_LITERAL = "true"
BOOLEAN_FALSE_LITERAL = "false"

# Reference names that are aliases of the array constructor type (Array<T> == T[])
ARRAY_TYPE_NAMES = frozenset({"Array"})

# Class member modifiers that remove a member from the instance shape
NON_INSTANCE_MODIFIERS = frozenset({"static"})

# Equivalence checker defaults
IMPLICIT_MATCHES_ANY = True

# Error codes (rendered as error[E0101])
PARSE_ERROR_CODE = "E0001"
DUPLICATE_FIELD_ERROR_CODE = "E0101"
UNSUPPORTED_CONSTRUCT_ERROR_CODE = "E0201"

# Serialization
SEXPR_MAX_LINE = 100
SEXPR_INDENT = "  "

# CLI exit codes
EXIT_OK = 0
EXIT_ERROR = 1
EXIT_NOT_EQUIVALENT = 2
