#!/usr/bin/env python3
"""Unified CLI for facade

Subcommands:
  layout    lay out a single text as an SVG <text> element
  validate  check a CSV deck for markup and geometry problems
  build     CSV -> SVG pages (optional PNG previews)
  pdf       CSV -> SVG pages -> merged PDF
  fonts     font discovery utilities

"""

import argparse
import pathlib
import sys

from .deck import (
    DEFAULTS,
    PAGE_SIZES_MM,
    DeckLayout,
    front_style,
    parse_page_size,
    read_cards,
    render_deck,
)
from .errors import LayoutError, MarkupError
from .export import export_pdf, write_png_previews, write_svg_pages
from .fonts import collect_font_families, discover_fonts_in_path, font_is_available, get_font_paths
from .text_layout import generate_centered_text_element
from .utils.file_ops import add_pdf_extension, ensure_export_dir, resolve_output_path
from .validation import ValidationResult, validate_deck

DEFAULT_EXPORT_DIR = 'export'


def _print_issues(result: ValidationResult) -> None:
    for issue in result.issues:
        stream = sys.stderr if issue.severity == 'error' else sys.stdout
        print(f"{issue.severity.upper()}: {issue.path}: {issue.message}", file=stream)


def _layout_from_args(args) -> DeckLayout:
    size = parse_page_size(args.page_size)
    if size is None:
        print(
            f"ERROR: Unknown page size '{args.page_size}' "
            f"(use one of {', '.join(PAGE_SIZES_MM)} or WxH in mm)",
            file=sys.stderr,
        )
        sys.exit(2)
    layout = DeckLayout(
        page_width_mm=size[0],
        page_height_mm=size[1],
        cards_across=args.cards_across,
        cards_down=args.cards_down,
        flip_horizontal=not args.no_flip_horizontal,
        flip_vertical=args.flip_vertical,
    )
    if args.font_family:
        layout.front.font_family = args.font_family
        layout.back.font_family = args.font_family
    return layout


def _load_checked_deck(args):
    """Read and validate the deck; exits with status 1 on validation errors."""
    try:
        cards = read_cards(args.csv, has_header=not args.no_header)
    except FileNotFoundError:
        print(f"ERROR: CSV file not found: {args.csv}", file=sys.stderr)
        sys.exit(1)
    layout = _layout_from_args(args)
    result = validate_deck(
        cards,
        layout,
        check_fonts=getattr(args, 'check_fonts', False) or getattr(args, 'strict_fonts', False),
    )
    if getattr(args, 'strict_fonts', False):
        for issue in result.issues:
            if issue.path == '/layout/font_family':
                issue.severity = 'error'
    _print_issues(result)
    if not result.ok():
        sys.exit(1)
    return cards, layout


def cmd_layout(args):
    try:
        element = generate_centered_text_element(
            args.text,
            args.center_x,
            args.center_y,
            args.max_chars,
            args.font_size,
            args.line_height,
            args.font_family,
        )
    except (MarkupError, LayoutError) as e:
        print(f"ERROR: could not lay out text: {e}", file=sys.stderr)
        sys.exit(1)
    print(element)


def cmd_validate(args):
    _load_checked_deck(args)
    print("Deck valid: no errors")


def cmd_build(args):
    cards, layout = _load_checked_deck(args)
    deck = render_deck(cards, layout)
    export_dir = ensure_export_dir(args.export_dir)
    write_svg_pages(deck.pages, export_dir)
    if args.png:
        res = write_png_previews(deck.pages, export_dir)
        if not res.ok:
            print(f"ERROR: PNG preview failed: {res.reason}", file=sys.stderr)
            sys.exit(1)
    print(f"Built SVG: {export_dir} pages={deck.page_count}")


def cmd_pdf(args):
    cards, layout = _load_checked_deck(args)
    deck = render_deck(cards, layout)
    export_dir = ensure_export_dir(args.export_dir)
    pdf_out = args.output or f"{pathlib.Path(args.csv).stem}.pdf"
    pdf_path = add_pdf_extension(resolve_output_path(pdf_out, export_dir))

    if args.no_clean:
        write_svg_pages(deck.pages, export_dir)
    res = export_pdf(deck.pages, pdf_path, export_dir, clean=not args.no_clean)

    print(f"PDF build success={res.ok} pdf={pdf_path} pages={deck.page_count}")
    if not res.ok:
        print(f"ERROR: {res.reason}", file=sys.stderr)
        sys.exit(1)


def cmd_fonts_list(args):
    paths = get_font_paths()
    if not paths:
        print("No font directories found")
        return
    for p in paths:
        info = discover_fonts_in_path(pathlib.Path(p))
        print(f"{info['path']}: {len(info['families'])} families")
        if args.details:
            for name, fam in sorted(info['families'].items()):
                print(f"  {name} ({len(fam['files'])} files, {fam['total_size_human']})")
    if args.details:
        families = sorted(collect_font_families(paths))
        print(f"Font families ({len(families)}):")
        for fam in families:
            print(f"  {fam}")


def cmd_fonts_validate(args):
    if font_is_available(args.font):
        print(f"Font '{args.font}' is available")
    else:
        print(f"ERROR: Font '{args.font}' not found in font paths", file=sys.stderr)
        sys.exit(1)


def _add_deck_args(p):
    p.add_argument('csv')
    p.add_argument('--no-header', action='store_true', help='first CSV row is a card, not a header')
    p.add_argument('--page-size', default=DEFAULTS['PAGESIZE'], help='preset name or WxH in mm')
    p.add_argument('--cards-across', type=int, default=DEFAULTS['CARDS_ACROSS'])
    p.add_argument('--cards-down', type=int, default=DEFAULTS['CARDS_DOWN'])
    p.add_argument(
        '--no-flip-horizontal',
        action='store_true',
        help='do not mirror back pages left-to-right',
    )
    p.add_argument(
        '--flip-vertical', action='store_true', help='mirror back pages top-to-bottom'
    )
    p.add_argument('--font-family', help=f"font for both sides (default: {DEFAULTS['FONT_FAMILY']})")
    p.add_argument(
        '--strict-fonts', action='store_true', help='fail if the font family is not installed'
    )


def build_parser():
    p = argparse.ArgumentParser(prog='facade')
    sub = p.add_subparsers(dest='command', required=True)

    front = front_style()
    lay = sub.add_parser('layout', help='lay out text as an SVG <text> element')
    lay.add_argument('text')
    lay.add_argument('--max-chars', type=int, default=20)
    lay.add_argument('--font-size', type=float, default=front.font_size_pt)
    lay.add_argument('--line-height', type=float, default=front.line_height)
    lay.add_argument('--font-family', default=front.font_family)
    lay.add_argument('--center-x', type=float, default=0.0)
    lay.add_argument('--center-y', type=float, default=0.0)
    lay.set_defaults(func=cmd_layout)

    val = sub.add_parser('validate', help='validate a CSV deck')
    _add_deck_args(val)
    val.add_argument(
        '--check-fonts', action='store_true', help='warn when the font family is not installed'
    )
    val.set_defaults(func=cmd_validate)

    b = sub.add_parser('build', help='CSV -> SVG pages')
    _add_deck_args(b)
    b.add_argument('--export-dir', default=DEFAULT_EXPORT_DIR)
    b.add_argument('--png', action='store_true', help='also write PNG previews')
    b.set_defaults(func=cmd_build)

    pdf = sub.add_parser('pdf', help='CSV -> SVG -> pdf')
    _add_deck_args(pdf)
    pdf.add_argument('-o', '--output', help='PDF file name (default: <csv stem>.pdf)')
    pdf.add_argument('--export-dir', default=DEFAULT_EXPORT_DIR)
    pdf.add_argument('--no-clean', action='store_true', help='keep per-page SVG and PDF files')
    pdf.set_defaults(func=cmd_pdf)

    fonts = sub.add_parser('fonts', help='font discovery utilities')
    fonts_sub = fonts.add_subparsers(dest='fonts_command', required=True, title='font commands')

    # fonts list
    list_fonts = fonts_sub.add_parser('list', help='list font directories and families')
    list_fonts.add_argument('--details', action='store_true', help='show families and file sizes')
    list_fonts.set_defaults(func=cmd_fonts_list)

    # fonts validate
    validate_font = fonts_sub.add_parser('validate', help='validate font availability')
    validate_font.add_argument('font', help='font family name to validate')
    validate_font.set_defaults(func=cmd_fonts_validate)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)


if __name__ == '__main__':
    main()
