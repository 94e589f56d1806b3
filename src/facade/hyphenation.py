"""Fixed-width hyphenation of over-long words."""

from typing import Iterable, List

from .errors import LayoutError
from .markup import Token, Word


def hyphenate_word(word: str, max_length: int) -> List[str]:
    """Split ``word`` into chunks of ``max_length`` characters.

    Every chunk except the last gets a trailing hyphen, so a fragment can be
    one character wider than ``max_length``. Words that already fit are
    returned unchanged as a single fragment.
    """
    if max_length <= 0:
        raise LayoutError(f"Hyphenation length must be positive, got {max_length}")
    if len(word) <= max_length:
        return [word]
    fragments = []
    for start in range(0, len(word), max_length):
        end = start + max_length
        chunk = word[start:end]
        if end < len(word):
            chunk += '-'
        fragments.append(chunk)
    return fragments


def hyphenate(tokens: Iterable[Token], max_length: int) -> List[Token]:
    """Return a new token list with every over-long word split into fragments.

    Must run before wrapping: the wrapper treats fragments as ordinary words.
    """
    if max_length <= 0:
        raise LayoutError(f"Hyphenation length must be positive, got {max_length}")
    out: List[Token] = []
    for token in tokens:
        if isinstance(token, Word) and token.width > max_length:
            out.extend(Word(frag) for frag in hyphenate_word(token.text, max_length))
        else:
            out.append(token)
    return out
