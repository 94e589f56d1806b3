import re
import warnings
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .errors import LayoutError, MarkupError
from .fonts import font_is_available
from .hyphenation import hyphenate
from .markup import Tag, tokenize
from .text_layout import UNDERLINE_TAG
from .wrapping import check_tag_balance, wrap_tokens

# '<>', '</>', '< />' and friends: dropped by the tokenizer
EMPTY_TAG_RE = re.compile(r'<(?:[/\\]|(?![/\\]))\s*(?:[>/\\]|$)')


@dataclass
class ValidationIssue:
    path: str
    message: str
    severity: str = "error"  # 'error' | 'warn'


@dataclass
class ValidationResult:
    issues: List[ValidationIssue]

    def ok(self) -> bool:
        return all(i.severity != 'error' for i in self.issues)

    def errors(self) -> List[ValidationIssue]:
        return [i for i in self.issues if i.severity == 'error']


def validate_markup(text: str, max_chars: Optional[int] = None, path: str = "/") -> ValidationResult:
    """Check card text without raising.

    max_chars: when given, the text is also wrapped at that width so that
    geometry problems are reported too.
    """
    issues: List[ValidationIssue] = []
    if not isinstance(text, str):
        return ValidationResult([ValidationIssue(path=path, message="Text is not a string")])

    if EMPTY_TAG_RE.search(text):
        issues.append(
            ValidationIssue(path=path, message="Empty tag is ignored", severity='warn')
        )

    tokens = tokenize(text)
    seen_names = set()
    for token in tokens:
        if isinstance(token, Tag) and token.name != UNDERLINE_TAG and token.name not in seen_names:
            seen_names.add(token.name)
            issues.append(
                ValidationIssue(
                    path=path,
                    message=f"Tag <{token.name}> has no style and is shown as text",
                    severity='warn',
                )
            )

    try:
        unclosed = check_tag_balance(tokens)
    except MarkupError as e:
        issues.append(ValidationIssue(path=path, message=str(e)))
        return ValidationResult(issues)

    for tag in unclosed:
        issues.append(
            ValidationIssue(
                path=path, message=f"Tag <{tag.name}> is never closed", severity='warn'
            )
        )

    if max_chars is not None:
        if max_chars <= 0:
            issues.append(
                ValidationIssue(path=path, message=f"Line width {max_chars} leaves no room for text")
            )
        else:
            try:
                with warnings.catch_warnings():
                    # unclosed tags are already reported above
                    warnings.simplefilter("ignore", UserWarning)
                    wrap_tokens(hyphenate(tokens, max_chars), max_chars)
            except LayoutError as e:
                issues.append(ValidationIssue(path=path, message=str(e)))
    return ValidationResult(issues)


def validate_deck(cards: Iterable, layout, check_fonts: bool = False) -> ValidationResult:
    """Validate a deck of cards against a page layout.

    check_fonts: when True, font families that cannot be found produce warnings.
    """
    issues: List[ValidationIssue] = []
    cards = list(cards)

    geometry_ok = True
    if not (layout.page_width_mm > 0 and layout.page_height_mm > 0):
        issues.append(ValidationIssue(path="/layout/page_size", message="Page size must be > 0"))
        geometry_ok = False
    if not isinstance(layout.cards_across, int) or layout.cards_across < 1:
        issues.append(
            ValidationIssue(path="/layout/cards_across", message="Cards across must be >= 1")
        )
        geometry_ok = False
    if not isinstance(layout.cards_down, int) or layout.cards_down < 1:
        issues.append(
            ValidationIssue(path="/layout/cards_down", message="Cards down must be >= 1")
        )
        geometry_ok = False

    front_chars = back_chars = None
    if geometry_ok:
        card_w, _ = layout.card_size_mm()
        front_chars = layout.front.max_chars(card_w)
        back_chars = layout.back.max_chars(card_w)
        for side, chars in (('front', front_chars), ('back', back_chars)):
            if chars < 1:
                issues.append(
                    ValidationIssue(
                        path=f"/layout/{side}",
                        message=f"Cards are too narrow for {side} text ({card_w:.1f}mm wide)",
                    )
                )
                geometry_ok = False

    if not cards:
        issues.append(ValidationIssue(path="/cards", message="Deck has no cards"))

    for idx, card in enumerate(cards):
        for field_name, text, chars in (
            ('term', card.term, front_chars),
            ('definition', card.definition, back_chars),
        ):
            res = validate_markup(
                text, max_chars=chars if geometry_ok else None, path=f"/cards/{idx}/{field_name}"
            )
            issues.extend(res.issues)

    if check_fonts:
        for family in dict.fromkeys((layout.front.font_family, layout.back.font_family)):
            if not font_is_available(family):
                issues.append(
                    ValidationIssue(
                        path="/layout/font_family",
                        message=f"Font '{family}' not found in font paths",
                        severity='warn',
                    )
                )
    return ValidationResult(issues)
