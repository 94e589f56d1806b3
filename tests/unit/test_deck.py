#!/usr/bin/env python3
import os
import pathlib
import sys
import tempfile
import unittest

PROJECT_ROOT = os.path.join(os.path.dirname(__file__), '..', '..')
sys.path.insert(0, os.path.join(PROJECT_ROOT, 'src'))
from facade.deck import (
    PAGE_SIZES_MM,
    Card,
    DeckLayout,
    parse_page_size,
    read_cards,
    render_deck,
    render_sheet,
)
from facade.errors import LayoutError

FIXTURES = pathlib.Path(PROJECT_ROOT) / 'tests' / 'fixtures'


class TestPageSize(unittest.TestCase):
    def test_presets_case_insensitive(self):
        self.assertEqual(parse_page_size('letter'), PAGE_SIZES_MM['Letter'])
        self.assertEqual(parse_page_size('A4'), (210.0, 297.0))

    def test_custom_size(self):
        self.assertEqual(parse_page_size('100x150'), (100.0, 150.0))
        self.assertEqual(parse_page_size('100.5 X 150mm'), (100.5, 150.0))

    def test_invalid(self):
        for val in ('B5', '0x100', '100', '', None):
            self.assertIsNone(parse_page_size(val), val)


class TestReadCards(unittest.TestCase):
    def test_fixture(self):
        cards = read_cards(FIXTURES / 'basic.csv')
        self.assertEqual(len(cards), 3)
        self.assertEqual(cards[0].term, 'Photosynthesis')
        self.assertIn('<u>green plants</u>', cards[0].definition)

    def test_no_header_and_short_rows(self):
        with tempfile.TemporaryDirectory() as td:
            path = pathlib.Path(td) / 'cards.csv'
            path.write_text('alpha,first letter\n\nbeta\n,\n', encoding='utf-8')
            cards = read_cards(path, has_header=False)
        self.assertEqual(cards, [Card('alpha', 'first letter'), Card('beta', '')])


class TestGeometry(unittest.TestCase):
    def test_default_letter_grid(self):
        layout = DeckLayout()
        self.assertEqual(layout.cards_per_page, 12)
        card_w, card_h = layout.card_size_mm()
        self.assertAlmostEqual(card_w, 215.9 / 3)
        self.assertAlmostEqual(card_h, 279.4 / 4)
        self.assertEqual(layout.front.max_chars(card_w), 11)
        self.assertEqual(layout.back.max_chars(card_w), 26)

    def test_card_centers(self):
        layout = DeckLayout(page_width_mm=300, page_height_mm=400, cards_across=3, cards_down=4)
        self.assertEqual(layout.card_center_mm(0, 0), (50.0, 50.0))
        self.assertEqual(layout.card_center_mm(2, 3), (250.0, 350.0))

    def test_front_order_is_column_major(self):
        layout = DeckLayout(cards_across=2, cards_down=2)
        self.assertEqual(layout.slot_order(), [(0, 0), (0, 1), (1, 0), (1, 1)])

    def test_back_order_mirrored(self):
        layout = DeckLayout(cards_across=2, cards_down=2)
        self.assertEqual(layout.slot_order(back=True), [(1, 0), (1, 1), (0, 0), (0, 1)])
        layout.flip_horizontal = False
        layout.flip_vertical = True
        self.assertEqual(layout.slot_order(back=True), [(0, 1), (0, 0), (1, 1), (1, 0)])


class TestRender(unittest.TestCase):
    def test_sheet_structure(self):
        svg, issues = render_sheet([Card('Term', 'Def')], DeckLayout())
        self.assertEqual(issues, [])
        self.assertTrue(svg.startswith('<svg width="215.9mm" height="279.4mm"'))
        self.assertTrue(svg.endswith('</svg>'))
        # 2 vertical + 3 horizontal cut lines
        self.assertEqual(svg.count('<line '), 5)
        self.assertIn('<text x="35.983333mm" y="34.925mm"', svg)
        self.assertIn('>Term</tspan>', svg)

    def test_back_sheet_is_flipped(self):
        svg, _ = render_sheet([Card('Term', 'Def')], DeckLayout(), back=True)
        self.assertIn('<text x="179.916667mm" y="34.925mm"', svg)
        self.assertIn('font-size:12pt', svg)
        self.assertIn('>Def</tspan>', svg)

    def test_deck_alternates_front_and_back(self):
        cards = [Card(f'T{i}', f'D{i}') for i in range(13)]
        deck = render_deck(cards, DeckLayout())
        self.assertEqual(deck.page_count, 4)
        self.assertIn('>T0<', deck.pages[0])
        self.assertIn('>D0<', deck.pages[1])
        self.assertIn('>T12<', deck.pages[2])
        self.assertNotIn('>T0<', deck.pages[2])
        self.assertEqual(deck.issues, [])

    def test_failed_card_left_blank(self):
        cards = [Card('good', 'fine'), Card('bad</u>', 'ok')]
        deck = render_deck(cards, DeckLayout())
        self.assertEqual(len(deck.issues), 1)
        self.assertEqual(deck.issues[0].path, '/cards/1/term')
        self.assertNotIn('bad', deck.pages[0])
        self.assertIn('>ok<', deck.pages[1])

    def test_empty_deck_has_no_pages(self):
        self.assertEqual(render_deck([], DeckLayout()).pages, [])

    def test_empty_grid_rejected(self):
        with self.assertRaises(LayoutError):
            render_deck([Card('a')], DeckLayout(cards_across=0))
        # Product is positive but there are no slots to fill
        with self.assertRaises(LayoutError):
            render_deck([Card('alpha', 'beta')], DeckLayout(cards_across=-2, cards_down=-2))
        with self.assertRaises(LayoutError):
            render_deck([Card('a')], DeckLayout(cards_across=3, cards_down=-1))


if __name__ == '__main__':
    unittest.main()
