"""Centered, wrapped SVG text blocks.

A card's text is tokenized, hyphenated and wrapped to a character budget,
then emitted as one SVG ``<text>`` element with a ``<tspan>`` per line.
Lines are stacked with relative ``dy`` offsets so the block is vertically
centered on the anchor point.
"""

from dataclasses import dataclass, field
from typing import List, Sequence
from xml.sax.saxutils import escape

from .hyphenation import hyphenate
from .markup import Tag, Token, token_to_string, tokenize
from .wrapping import wrap_tokens

# Approximate conversion: 1pt ~ 0.35mm
PT_TO_MM = 0.35
UNDERLINE_TAG = 'u'


def _fmt_num(val: float) -> str:
    """Format a number removing trailing zeros."""
    s = (f"{float(val):.6f}").rstrip('0').rstrip('.')
    if s in ('', '-0'):
        return '0'
    return s


@dataclass
class StyleRun:
    text: str
    underlined: bool = False


@dataclass
class PositionedRun:
    """One wrapped line and its vertical offset from the previous line."""

    dy_mm: float
    runs: List[StyleRun] = field(default_factory=list)

    @property
    def text(self) -> str:
        return ''.join(run.text for run in self.runs)


@dataclass
class TextBlock:
    center_x_mm: float
    center_y_mm: float
    font_size_pt: float
    font_family: str
    line_height_mm: float
    lines: List[PositionedRun] = field(default_factory=list)

    def to_svg(self) -> str:
        cx = _fmt_num(self.center_x_mm)
        cy = _fmt_num(self.center_y_mm)
        family = escape(self.font_family, {'"': '&quot;'})
        style = f"font-size:{_fmt_num(self.font_size_pt)}pt;font-family:{family};text-anchor:middle"
        out = [f'<text x="{cx}mm" y="{cy}mm" style="{style}">\n  ']
        for line in self.lines:
            out.append(f'<tspan x="{cx}mm" dy="{_fmt_num(line.dy_mm)}mm">')
            for run in line.runs:
                if run.underlined:
                    out.append(f'<tspan text-decoration="underline">{escape(run.text)}</tspan>')
                else:
                    out.append(escape(run.text))
            out.append('</tspan>\n  ')
        out.append('</text>')
        return ''.join(out)


def build_style_runs(line: Sequence[Token]) -> List[StyleRun]:
    """Split a wrapped line into plain and underlined runs.

    ``<u>`` switches underlining on and ``</u>`` switches it off; nesting is
    not counted. Other tags are kept as literal text. Empty runs are dropped.
    """
    runs: List[StyleRun] = []
    buf: List[str] = []
    underlined = False
    for token in line:
        if isinstance(token, Tag) and token.name == UNDERLINE_TAG:
            if buf:
                runs.append(StyleRun(''.join(buf), underlined))
                buf = []
            underlined = not token.is_closing
        else:
            buf.append(token_to_string(token))
    if buf:
        runs.append(StyleRun(''.join(buf), underlined))
    return runs


def line_offsets_mm(line_count: int, line_height_mm: float) -> List[float]:
    """Relative ``dy`` for each line, centering the block on the anchor."""
    if line_count <= 0:
        return []
    first = -((line_count - 1) * line_height_mm / 2.0)
    return [first] + [line_height_mm] * (line_count - 1)


def layout_text(
    text: str,
    center_x: float,
    center_y: float,
    max_chars: int,
    font_size_pt: float,
    line_height_factor: float,
    font_family: str,
) -> TextBlock:
    """Wrap ``text`` to ``max_chars`` and position its lines around the anchor.

    Raises MarkupError for unbalanced tags and LayoutError when ``max_chars``
    is not positive. Nothing is returned on failure.
    """
    tokens = hyphenate(tokenize(text), max_chars)
    wrapped = wrap_tokens(tokens, max_chars)

    font_size_mm = font_size_pt * PT_TO_MM
    line_height_mm = font_size_mm * line_height_factor

    block = TextBlock(
        center_x_mm=center_x,
        center_y_mm=center_y,
        font_size_pt=font_size_pt,
        font_family=font_family,
        line_height_mm=line_height_mm,
    )
    for line, dy in zip(wrapped, line_offsets_mm(len(wrapped), line_height_mm)):
        block.lines.append(PositionedRun(dy_mm=dy, runs=build_style_runs(line)))
    return block


def generate_centered_text_element(
    text: str,
    center_x: float,
    center_y: float,
    max_chars: int,
    font_size_pt: float,
    line_height_factor: float,
    font_family: str,
) -> str:
    """Render ``text`` as an SVG ``<text>`` element centered on (center_x, center_y) mm."""
    return layout_text(
        text, center_x, center_y, max_chars, font_size_pt, line_height_factor, font_family
    ).to_svg()
