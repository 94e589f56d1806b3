"""File operations and path handling utilities."""

import pathlib
from typing import Union

DEFAULT_PDF_NAME = 'flashcards.pdf'


def ensure_export_dir(export_dir: Union[str, pathlib.Path]) -> pathlib.Path:
    """Ensure export directory exists and return Path object."""
    export_path = pathlib.Path(export_dir)
    export_path.mkdir(parents=True, exist_ok=True)
    return export_path


def resolve_output_path(
    output: Union[str, pathlib.Path], export_dir: Union[str, pathlib.Path]
) -> pathlib.Path:
    """Place relative outputs inside the export directory; keep absolute ones."""
    out = pathlib.Path(output)
    if out.is_absolute():
        return out
    return pathlib.Path(export_dir) / out


def add_pdf_extension(path: Union[str, pathlib.Path]) -> pathlib.Path:
    """Append '.pdf' unless the path already ends in it (case-insensitive)."""
    path_obj = pathlib.Path(path)
    if path_obj.suffix.lower() == '.pdf':
        return path_obj
    if not path_obj.name:
        return path_obj / DEFAULT_PDF_NAME
    return path_obj.with_name(path_obj.name + '.pdf')


def format_file_size(size_bytes: int) -> str:
    """Format file size in human-readable format."""
    if size_bytes == 0:
        return "0 B"

    units = ["B", "KB", "MB", "GB", "TB"]
    unit_index = 0
    size = float(size_bytes)

    while size >= 1024 and unit_index < len(units) - 1:
        size /= 1024
        unit_index += 1

    if unit_index == 0:
        return f"{int(size)} {units[unit_index]}"
    else:
        return f"{size:.1f} {units[unit_index]}"
