#!/usr/bin/env python3
"""Unit tests for font helper utilities in facade.fonts.

Covers:
- discover_fonts_in_path: groups files by top-level family directory and totals sizes
- collect_font_families: corrupt font files are skipped, not fatal
- font_is_available: generic CSS families always resolve
"""

import os
import pathlib
import sys
import tempfile
import unittest

# Ensure src is importable
PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))

from facade.fonts import (  # noqa: E402
    collect_font_families,
    discover_fonts_in_path,
    font_is_available,
    get_font_paths,
)


class TestFontHelpers(unittest.TestCase):
    def setUp(self):
        self._td = tempfile.TemporaryDirectory()
        self.root = pathlib.Path(self._td.name)
        (self.root / 'Family').mkdir()
        (self.root / 'Family' / 'Family-Regular.ttf').write_bytes(b'x' * 2048)
        (self.root / 'Family' / 'Family-Bold.otf').write_bytes(b'y' * 1024)
        (self.root / 'loose.ttf').write_bytes(b'not a font')
        (self.root / 'readme.txt').write_text('ignored')

    def tearDown(self):
        self._td.cleanup()

    def test_discover_fonts_in_path_groups_by_family(self):
        info = discover_fonts_in_path(self.root)
        self.assertTrue(info['exists'])
        families = info['families']
        self.assertEqual(set(families), {'Family', 'Root'})
        self.assertEqual(len(families['Family']['files']), 2)
        self.assertEqual(families['Family']['total_size'], 3072)
        self.assertEqual(families['Family']['total_size_human'], '3.0 KB')
        self.assertEqual(families['Root']['files'][0]['name'], 'loose.ttf')

    def test_discover_missing_path(self):
        info = discover_fonts_in_path(self.root / 'nope')
        self.assertFalse(info['exists'])
        self.assertEqual(info['families'], {})

    def test_corrupt_fonts_skipped(self):
        self.assertEqual(collect_font_families([str(self.root)]), set())

    def test_generic_families_available(self):
        for fam in ('serif', 'Sans-Serif', ' monospace '):
            self.assertTrue(font_is_available(fam, paths=[]))

    def test_unknown_family_not_available(self):
        self.assertFalse(font_is_available('Definitely Missing', paths=[str(self.root)]))
        self.assertFalse(font_is_available('', paths=[]))

    def test_font_paths_unique(self):
        paths = get_font_paths()
        self.assertEqual(len(paths), len(set(paths)))


if __name__ == '__main__':
    unittest.main()
