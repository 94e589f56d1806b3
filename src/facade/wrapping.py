"""Greedy line wrapping that keeps inline tags balanced on every line.

Widths are character counts: a word counts its characters, a space counts
one and tags count zero. A tag still open at a line break is closed at the
end of that line and reopened at the start of the next, so each line can be
rendered on its own.
"""

import warnings
from typing import Iterable, List, Sequence

from .errors import LayoutError, MarkupError
from .markup import Space, Tag, Token, Word, has_word, next_word


class OpenTagStack:
    """Tags open at the current wrap position.

    ``push``/``pop`` track real tags from the input. ``reopen_for_new_line``
    and ``close_for_line_end`` only read the stack; they produce the
    synthetic tags placed at line boundaries.
    """

    def __init__(self):
        self._tags: List[Tag] = []

    def __len__(self) -> int:
        return len(self._tags)

    def __iter__(self):
        return iter(self._tags)

    def push(self, tag: Tag) -> None:
        self._tags.append(tag.opening())

    def pop(self, closing: Tag) -> Tag:
        """Close the innermost open tag, which must be named like ``closing``."""
        if not self._tags:
            raise MarkupError(f"Closing tag </{closing.name}> has no matching opening tag")
        top = self._tags.pop()
        if top.name != closing.name:
            raise MarkupError(
                f"Closing tag </{closing.name}> does not match open tag <{top.name}>"
            )
        return top

    def reopen_for_new_line(self) -> List[Tag]:
        # Outermost first
        return [tag.opening() for tag in self._tags]

    def close_for_line_end(self) -> List[Tag]:
        # Innermost first
        return [tag.closing() for tag in reversed(self._tags)]


def check_tag_balance(tokens: Iterable[Token]) -> List[Tag]:
    """Raise MarkupError on the first closing tag that does not match.

    Returns the tags left open at the end of the sequence, outermost first.
    """
    stack = OpenTagStack()
    for token in tokens:
        if isinstance(token, Tag):
            if token.is_closing:
                stack.pop(token)
            else:
                stack.push(token)
    return list(stack)


def line_width(line: Iterable[Token]) -> int:
    return sum(token.width for token in line)


def wrap_tokens(tokens: Sequence[Token], max_line_length: int) -> List[List[Token]]:
    """Pack ``tokens`` into lines of at most ``max_line_length`` characters.

    Words are never split here; a word wider than the line sits on a line of
    its own (hyphenate first to avoid that). Tags and spaces after the last
    word are dropped.

    Raises:
        MarkupError: a closing tag does not match the innermost open tag.
        LayoutError: the width is not positive or a line makes no progress.
    """
    if max_line_length <= 0:
        raise LayoutError(f"Line width must be positive, got {max_line_length}")

    check_tag_balance(tokens)
    # Tags after the last word are dropped, so only earlier ones can stay open
    last_word = max((i for i, t in enumerate(tokens) if isinstance(t, Word)), default=-1)
    unclosed = check_tag_balance(tokens[: last_word + 1])
    if unclosed:
        names = ', '.join(f"<{t.name}>" for t in unclosed)
        warnings.warn(f"Unclosed tags at end of text: {names}", UserWarning)

    queue = list(tokens)
    pos = 0
    stack = OpenTagStack()
    lines: List[List[Token]] = []

    while has_word(queue[pos:]):
        line: List[Token] = list(stack.reopen_for_new_line())
        width = 0
        line_start = pos
        while width < max_line_length and pos < len(queue):
            token = queue[pos]
            remaining = max_line_length - width
            if isinstance(token, Tag):
                word = next_word(queue, pos)
                if word is None:
                    break
                # A line with no words yet takes the tag regardless
                if width > 0 and word.width > remaining:
                    break
                if token.is_closing:
                    stack.pop(token)
                else:
                    stack.push(token)
                line.append(token)
                pos += 1
            elif isinstance(token, Space):
                word = next_word(queue, pos)
                if word is None:
                    break
                if word.width + 1 > remaining:
                    pos += 1
                    if width == 0:
                        continue
                    break
                line.append(token)
                width += token.width
                pos += 1
            else:
                # Adjacent words (e.g. around a dropped empty tag) must fit too
                if width > 0 and token.width > remaining:
                    break
                line.append(token)
                width += token.width
                pos += 1
        if pos == line_start:
            raise LayoutError(f"Nothing fits on an empty line of width {max_line_length}")
        line.extend(stack.close_for_line_end())
        lines.append(line)

    return lines
