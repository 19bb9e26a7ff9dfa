"""
Centralized file I/O utilities.

- Single place for encoding and extension handling
- Use Path.read_text() consistently (no raw open/read)
"""

from pathlib import Path
from typing import Union

from .config import DEFAULT_FILE_ENCODING, SUPPORTED_EXTENSIONS


def read_source_file(path: Union[Path, str]) -> str:
    """Read source file with standard encoding."""
    p = Path(path) if not isinstance(path, Path) else path
    return p.read_text(encoding=DEFAULT_FILE_ENCODING)


def is_supported_source(path: Union[Path, str]) -> bool:
    """True if path has a TypeScript source extension."""
    return str(path).lower().endswith(SUPPORTED_EXTENSIONS)
