import pathlib
import sys
from typing import Dict, Iterable, List, Optional, Set

from .utils.file_ops import format_file_size

# Generic CSS families are resolved by the SVG renderer itself
GENERIC_FAMILIES = {'serif', 'sans-serif', 'monospace', 'cursive', 'fantasy', 'system-ui'}

FONT_EXTENSIONS = {'.ttf', '.otf', '.ttc', '.otc'}


def _system_font_dirs() -> List[pathlib.Path]:
    if sys.platform == 'darwin':
        return [
            pathlib.Path('/System/Library/Fonts'),
            pathlib.Path('/Library/Fonts'),
            pathlib.Path.home() / 'Library' / 'Fonts',
        ]
    if sys.platform.startswith('win'):
        return [pathlib.Path('C:/Windows/Fonts')]
    return [
        pathlib.Path('/usr/share/fonts'),
        pathlib.Path('/usr/local/share/fonts'),
        pathlib.Path.home() / '.local' / 'share' / 'fonts',
        pathlib.Path.home() / '.fonts',
    ]


def get_font_paths() -> List[str]:
    """Get font paths in order of preference.

    Order:
    1) Project-local assets/fonts (+/static)
    2) Platform system font directories
    """
    font_paths: List[str] = []

    local_fonts = pathlib.Path('assets/fonts')
    if local_fonts.exists():
        font_paths.append(str(local_fonts))
        static_path = local_fonts / 'static'
        if static_path.exists():
            font_paths.append(str(static_path))

    for sys_dir in _system_font_dirs():
        if sys_dir.exists():
            font_paths.append(str(sys_dir))

    # Return unique paths, preserving order
    return list(dict.fromkeys(fp for fp in font_paths if fp))


def discover_fonts_in_path(font_path: pathlib.Path) -> Dict:
    """Discover font files in a given path, grouped by top-level directory"""
    font_info: Dict = {'path': str(font_path), 'exists': font_path.exists(), 'families': {}}

    if not font_path.exists():
        return font_info

    try:
        for item in font_path.rglob('*'):
            if item.is_file() and item.suffix.lower() in FONT_EXTENSIONS:
                relative_path = item.relative_to(font_path)
                family_name = relative_path.parts[0] if len(relative_path.parts) > 1 else 'Root'

                if family_name not in font_info['families']:
                    font_info['families'][family_name] = {'files': [], 'total_size': 0}

                file_size = item.stat().st_size
                font_info['families'][family_name]['files'].append(
                    {
                        'name': item.name,
                        'path': str(item),
                        'size': file_size,
                        'size_human': format_file_size(file_size),
                    }
                )
                font_info['families'][family_name]['total_size'] += file_size

        for family in font_info['families'].values():
            family['total_size_human'] = format_file_size(family['total_size'])

    except OSError as e:
        font_info['error'] = str(e)

    return font_info


def _family_names(font) -> Set[str]:
    names: Set[str] = set()
    nm = font.get('name')
    if not nm:
        return names
    # Preferred Family (16) then Family (1)
    for rec in nm.names:
        if rec.nameID in (1, 16):
            try:
                names.add(rec.toUnicode().strip())
            except UnicodeDecodeError:
                pass
    return names


def collect_font_families(paths: Iterable[str]) -> Set[str]:
    """Collect real font family names via fontTools (with TTC support).

    Unreadable or corrupt font files are skipped.
    """
    from fontTools.ttLib import TTFont
    from fontTools.ttLib.ttCollection import TTCollection

    names: Set[str] = set()
    for p in paths:
        root = pathlib.Path(p)
        if not root.exists():
            continue
        for f in root.rglob('*'):
            if not f.is_file() or f.suffix.lower() not in FONT_EXTENSIONS:
                continue
            try:
                if f.suffix.lower() in {'.ttc', '.otc'}:
                    tc = TTCollection(str(f), lazy=True)
                    for ttf in tc.fonts:
                        names |= _family_names(ttf)
                    tc.close()
                else:
                    t = TTFont(str(f), lazy=True)
                    names |= _family_names(t)
                    t.close()
            except Exception:
                # Ignore unreadable/corrupt font files
                continue
    return {n for n in names if n}


def font_is_available(family: str, paths: Optional[Iterable[str]] = None) -> bool:
    """Check whether ``family`` can be resolved, ignoring case."""
    wanted = family.strip().strip('\'"').lower()
    if not wanted:
        return False
    if wanted in GENERIC_FAMILIES:
        return True
    if paths is None:
        paths = get_font_paths()
    return wanted in {n.lower() for n in collect_font_families(paths)}
