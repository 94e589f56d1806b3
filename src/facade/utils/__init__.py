"""Shared utilities for facade.

- file_ops: export directories, output paths and size formatting
"""

from .file_ops import (
    add_pdf_extension,
    ensure_export_dir,
    format_file_size,
    resolve_output_path,
)

__all__ = [
    'add_pdf_extension',
    'ensure_export_dir',
    'format_file_size',
    'resolve_output_path',
]
