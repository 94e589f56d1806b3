from .markup import (
    Word as Word,
    Tag as Tag,
    Space as Space,
    tokenize as tokenize,
    tokens_to_string as tokens_to_string,
)
from .hyphenation import (
    hyphenate as hyphenate,
    hyphenate_word as hyphenate_word,
)
from .wrapping import (
    OpenTagStack as OpenTagStack,
    wrap_tokens as wrap_tokens,
)
from .text_layout import (
    layout_text as layout_text,
    generate_centered_text_element as generate_centered_text_element,
)
from .errors import (
    MarkupError as MarkupError,
    LayoutError as LayoutError,
)
from .deck import (
    Card as Card,
    DeckLayout as DeckLayout,
    read_cards as read_cards,
    render_deck as render_deck,
    PAGE_SIZES_MM as PAGE_SIZES_MM,
    DEFAULTS as DEFAULTS,
)
from .validation import (
    validate_markup as validate_markup,
    validate_deck as validate_deck,
    ValidationIssue as ValidationIssue,
    ValidationResult as ValidationResult,
)
