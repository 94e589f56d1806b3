#!/usr/bin/env python3
"""Optional integration tests for SVG -> PDF export.
Skips gracefully if cairosvg (or the cairo library it loads) is unavailable.
"""
import unittest
import os
import sys
import tempfile
import subprocess
from pathlib import Path

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
SRC_PATH = os.path.join(PROJECT_ROOT, 'src')
sys.path.insert(0, SRC_PATH)
from facade.deck import Card, DeckLayout, render_deck
from facade.export import export_pdf, svg_to_pdf


def _has_cairosvg() -> bool:
    try:
        import cairosvg  # noqa: F401
    except (ImportError, OSError):
        return False
    return True


class TestPDFExport(unittest.TestCase):
    def setUp(self):
        if not _has_cairosvg():
            self.skipTest("cairosvg or cairo not available; skipping PDF export test")

    def test_single_page(self):
        deck = render_deck([Card('Term', 'Definition')], DeckLayout())
        with tempfile.TemporaryDirectory() as td:
            out = Path(td) / 'page.pdf'
            res = svg_to_pdf(deck.pages[0], out)
            self.assertTrue(res.ok, res.reason)
            self.assertTrue(out.read_bytes().startswith(b'%PDF'))

    def test_merged_deck(self):
        from pypdf import PdfReader

        deck = render_deck([Card('Term', 'Definition')], DeckLayout())
        with tempfile.TemporaryDirectory() as td:
            pdf_path = Path(td) / 'deck.pdf'
            res = export_pdf(deck.pages, pdf_path, Path(td) / 'work')
            self.assertTrue(res.ok, res.reason)
            self.assertEqual(len(PdfReader(str(pdf_path)).pages), 2)
            self.assertEqual(list((Path(td) / 'work').glob('*.pdf')), [])

    def test_cli_pdf(self):
        fixtures = Path(PROJECT_ROOT) / 'tests' / 'fixtures'
        csv_path = fixtures / 'basic.csv'
        with tempfile.TemporaryDirectory() as td:
            cmd = [sys.executable, '-m', 'facade.cli', 'pdf', str(csv_path), '--export-dir', td, '-o', 'out', '--no-clean']
            env = os.environ.copy(); env['PYTHONPATH'] = SRC_PATH + os.pathsep + env.get('PYTHONPATH','')
            res = subprocess.run(cmd, cwd=PROJECT_ROOT, env=env, capture_output=True, text=True)
            if res.returncode != 0:
                self.fail(f"CLI pdf failed. STDOUT:\n{res.stdout}\nSTDERR:\n{res.stderr}")
            self.assertIn('success=True', res.stdout)
            self.assertTrue((Path(td)/'out.pdf').exists())
            self.assertTrue((Path(td)/'flashcards0.svg').exists())
            self.assertTrue((Path(td)/'flashcards1.pdf').exists())

if __name__ == '__main__':
    unittest.main()
