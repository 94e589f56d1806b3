"""Inline markup tokenizer.

Card text is plain words with a small set of inline tags such as
``<u>underlined</u>``. The tokenizer only classifies characters; tag
structure is recovered later by the line wrapper's open-tag stack.
"""

from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

# '/' and '\' both mark a closing tag: <u>text</u> and <u>text<\u>
CLOSING_MARKERS = ('/', '\\')
TAG_TERMINATORS = ('>', '/', '\\')


@dataclass(frozen=True)
class Word:
    """A run of non-whitespace characters that does not start a tag."""

    text: str

    @property
    def width(self) -> int:
        return len(self.text)


@dataclass(frozen=True)
class Tag:
    """An inline markup delimiter. Tags take no horizontal space."""

    name: str
    is_closing: bool = False

    @property
    def width(self) -> int:
        return 0

    def opening(self) -> 'Tag':
        return Tag(self.name, False)

    def closing(self) -> 'Tag':
        return Tag(self.name, True)


@dataclass(frozen=True)
class Space:
    """A single whitespace character."""

    @property
    def width(self) -> int:
        return 1


Token = Union[Word, Tag, Space]


def tokenize(text: str) -> List[Token]:
    """Split ``text`` into words, tags and spaces.

    Every whitespace character becomes its own ``Space`` token. Inside a tag
    whitespace is ignored, and a tag with an empty name is dropped. A
    self-closing ``<br/>`` is read as an opening ``br`` tag.
    """
    tokens: List[Token] = []
    i = 0
    n = len(text)
    while i < n:
        ch = text[i]
        if ch == '<':
            i += 1
            is_closing = i < n and text[i] in CLOSING_MARKERS
            if is_closing:
                i += 1
            name_chars = []
            while i < n:
                c = text[i]
                i += 1
                if c in TAG_TERMINATORS:
                    if c == '/' and i < n and text[i] == '>':
                        i += 1
                    break
                if not c.isspace():
                    name_chars.append(c)
            name = ''.join(name_chars)
            if name:
                tokens.append(Tag(name, is_closing))
        elif ch.isspace():
            tokens.append(Space())
            i += 1
        else:
            start = i
            i += 1
            while i < n and not text[i].isspace() and text[i] != '<':
                i += 1
            tokens.append(Word(text[start:i]))
    return tokens


def token_to_string(token: Token) -> str:
    if isinstance(token, Word):
        return token.text
    if isinstance(token, Tag):
        return f"</{token.name}>" if token.is_closing else f"<{token.name}>"
    return ' '


def tokens_to_string(tokens: Iterable[Token]) -> str:
    """Serialize tokens back to markup (closing tags always use '/')."""
    return ''.join(token_to_string(t) for t in tokens)


def next_word(tokens: Sequence[Token], start: int = 0) -> Optional[Word]:
    """Return the first ``Word`` at or after ``start``, skipping tags and spaces."""
    for idx in range(start, len(tokens)):
        token = tokens[idx]
        if isinstance(token, Word):
            return token
    return None


def has_word(tokens: Iterable[Token]) -> bool:
    return any(isinstance(t, Word) for t in tokens)
