"""Flashcard decks: CSV ingestion, card grid geometry and SVG sheets.

Pages alternate fronts (terms) and backs (definitions). Back pages mirror the
card order so that duplex prints line up with their fronts.
"""

import csv
import math
import pathlib
import re
from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from .errors import LayoutError, MarkupError
from .text_layout import _fmt_num, generate_centered_text_element
from .validation import ValidationIssue

PAGE_SIZES_MM = {
    'A4': (210.0, 297.0),
    'Letter': (215.9, 279.4),
    'Legal': (215.9, 355.6),
    'Tabloid': (279.0, 432.0),
}

DEFAULTS = {
    'PAGESIZE': 'Letter',
    'CARDS_ACROSS': 3,
    'CARDS_DOWN': 4,
    'FLIP_HORIZONTAL': True,
    'FLIP_VERTICAL': False,
    'HEADER': True,
    'FONT_FAMILY': 'Arial',
    'LINE_HEIGHT': 1.1,
}

# Characters per mm of card width, tuned for each side's font size
FRONT_CHARS_PER_MM = 0.153
BACK_CHARS_PER_MM = 0.37054191755

SIZE_RE = re.compile(r'^\s*(?P<w>\d+(?:\.\d+)?)\s*[xX]\s*(?P<h>\d+(?:\.\d+)?)\s*(?:mm)?\s*$')


@dataclass
class Card:
    term: str
    definition: str = ""


@dataclass
class CardStyle:
    font_size_pt: float
    chars_per_mm: float
    line_height: float = DEFAULTS['LINE_HEIGHT']
    font_family: str = DEFAULTS['FONT_FAMILY']

    def max_chars(self, card_width_mm: float) -> int:
        return math.floor(self.chars_per_mm * card_width_mm)


def front_style() -> CardStyle:
    return CardStyle(font_size_pt=30.0, chars_per_mm=FRONT_CHARS_PER_MM)


def back_style() -> CardStyle:
    return CardStyle(font_size_pt=12.0, chars_per_mm=BACK_CHARS_PER_MM)


@dataclass
class DeckLayout:
    page_width_mm: float = PAGE_SIZES_MM['Letter'][0]
    page_height_mm: float = PAGE_SIZES_MM['Letter'][1]
    cards_across: int = DEFAULTS['CARDS_ACROSS']
    cards_down: int = DEFAULTS['CARDS_DOWN']
    flip_horizontal: bool = DEFAULTS['FLIP_HORIZONTAL']
    flip_vertical: bool = DEFAULTS['FLIP_VERTICAL']
    front: CardStyle = field(default_factory=front_style)
    back: CardStyle = field(default_factory=back_style)

    @property
    def cards_per_page(self) -> int:
        return self.cards_across * self.cards_down

    def card_size_mm(self) -> Tuple[float, float]:
        return (self.page_width_mm / self.cards_across, self.page_height_mm / self.cards_down)

    def card_center_mm(self, col: int, row: int) -> Tuple[float, float]:
        card_w, card_h = self.card_size_mm()
        return ((col * card_w + (col + 1) * card_w) / 2, (row * card_h + (row + 1) * card_h) / 2)

    def slot_order(self, back: bool = False) -> List[Tuple[int, int]]:
        """Grid slots (col, row) in fill order: column by column, top to bottom."""
        cols = list(range(self.cards_across))
        rows = list(range(self.cards_down))
        if back and self.flip_horizontal:
            cols.reverse()
        if back and self.flip_vertical:
            rows.reverse()
        return [(c, r) for c in cols for r in rows]


@dataclass
class DeckResult:
    pages: List[str]
    issues: List[ValidationIssue]

    @property
    def page_count(self) -> int:
        return len(self.pages)


def parse_page_size(val: Optional[str]) -> Optional[Tuple[float, float]]:
    """Parse a preset name (case-insensitive) or 'WxH' in mm. Returns None if invalid."""
    if val is None:
        return None
    s = str(val).strip()
    for name, size in PAGE_SIZES_MM.items():
        if name.lower() == s.lower():
            return size
    m = SIZE_RE.match(s)
    if not m:
        return None
    w, h = float(m.group('w')), float(m.group('h'))
    if w <= 0 or h <= 0:
        return None
    return (w, h)


def read_cards(path: Union[str, pathlib.Path], has_header: bool = DEFAULTS['HEADER']) -> List[Card]:
    """Read (term, definition) rows from a CSV file.

    The first column is the term, the second the definition; extra columns are
    ignored and blank rows skipped.
    """
    cards: List[Card] = []
    with open(path, newline='', encoding='utf-8-sig') as f:
        reader = csv.reader(f)
        if has_header:
            next(reader, None)
        for row in reader:
            if not row or all(not cell.strip() for cell in row):
                continue
            term = row[0]
            definition = row[1] if len(row) > 1 else ""
            cards.append(Card(term=term, definition=definition))
    return cards


def _svg_open(layout: DeckLayout) -> str:
    return (
        f'<svg width="{_fmt_num(layout.page_width_mm)}mm" height="{_fmt_num(layout.page_height_mm)}mm" '
        f'version="1.1" style=\'background-color: white;\' xmlns="http://www.w3.org/2000/svg">'
    )


def _cut_lines(layout: DeckLayout) -> List[str]:
    card_w, card_h = layout.card_size_mm()
    out = []
    for i in range(1, layout.cards_across):
        x = _fmt_num(i * card_w)
        out.append(
            f'<line x1="{x}mm" y1="0mm" x2="{x}mm" y2="{_fmt_num(layout.page_height_mm)}mm" '
            f'stroke="black" stroke-width="1"/>'
        )
    for j in range(1, layout.cards_down):
        y = _fmt_num(j * card_h)
        out.append(
            f'<line x1="0mm" y1="{y}mm" x2="{_fmt_num(layout.page_width_mm)}mm" y2="{y}mm" '
            f'stroke="black" stroke-width="1"/>'
        )
    return out


def render_sheet(
    cards: List[Card], layout: DeckLayout, back: bool = False, first_index: int = 0
) -> Tuple[str, List[ValidationIssue]]:
    """Render one page of card fronts (or backs) as an SVG document.

    Cards whose text cannot be laid out are left blank and reported as issues;
    ``first_index`` is the deck index of ``cards[0]`` for issue paths.
    """
    style = layout.back if back else layout.front
    card_w, _ = layout.card_size_mm()
    max_chars = style.max_chars(card_w)
    field_name = 'definition' if back else 'term'

    issues: List[ValidationIssue] = []
    parts = [_svg_open(layout)]
    parts.extend(_cut_lines(layout))
    for offset, (card, (col, row)) in enumerate(zip(cards, layout.slot_order(back=back))):
        text = card.definition if back else card.term
        cx, cy = layout.card_center_mm(col, row)
        try:
            parts.append(
                generate_centered_text_element(
                    text, cx, cy, max_chars, style.font_size_pt, style.line_height, style.font_family
                )
            )
        except (MarkupError, LayoutError) as e:
            issues.append(
                ValidationIssue(path=f"/cards/{first_index + offset}/{field_name}", message=str(e))
            )
    parts.append('</svg>')
    return ''.join(parts), issues


def render_deck(cards: List[Card], layout: DeckLayout) -> DeckResult:
    """Render all cards as alternating front/back SVG pages."""
    pages: List[str] = []
    issues: List[ValidationIssue] = []
    per_page = layout.cards_per_page
    if layout.cards_across < 1 or layout.cards_down < 1:
        raise LayoutError(
            f"Card grid {layout.cards_across}x{layout.cards_down} has no room for cards"
        )
    for start in range(0, len(cards), per_page):
        chunk = cards[start : start + per_page]
        for back in (False, True):
            svg, page_issues = render_sheet(chunk, layout, back=back, first_index=start)
            pages.append(svg)
            issues.extend(page_issues)
    return DeckResult(pages=pages, issues=issues)
