"""
Width-to-span tokenizer.

Turns one line of text plus a width specification into half-open
``(start, end)`` spans. Widths and separators are counted in characters
(code points), so multi-byte text never shifts a field boundary.
"""
from __future__ import annotations
from typing import List, Sequence, Tuple

from .errors import EmptyLine, WidthMismatch

__all__ = ["Span", "tokenize"]

Span = Tuple[int, int]


def tokenize(line: str, widths: Sequence[int], separator_length: int, flexible_width: bool) -> List[Span]:
    """
    Split ``line`` into one span per width.

    The cursor starts at 0. A field that fits is followed by ``separator_length``
    skipped characters, whose content is never inspected. When fewer characters
    remain than a width asks for, a flexible parse gives the field whatever is
    left (every later field is then empty); a strict parse fails at once.

    :param line: Terminator-stripped line text.
    :param widths: Field widths in characters.
    :param separator_length: Characters skipped after each field.
    :param flexible_width: Tolerate a short trailing field instead of failing.
    :returns: Spans in field order, ``len(widths)`` of them.
    :raises EmptyLine: If ``line`` is empty, regardless of ``widths``.
    :raises WidthMismatch: On the first field that cannot be filled when
        ``flexible_width`` is false.
    """
    if not line:
        raise EmptyLine()

    end = len(line)
    cursor = 0
    spans: List[Span] = []
    for width in widths:
        remaining = end - cursor
        if remaining < width:
            if not flexible_width:
                raise WidthMismatch(cursor, width)
            spans.append((cursor, end))
            cursor = end
        elif remaining == width:
            spans.append((cursor, end))
            cursor = end
        else:
            boundary = cursor + width
            assert boundary < end, f"field boundary {boundary} outside line of length {end}"
            spans.append((cursor, boundary))
            # a separator running past the end leaves the cursor on the end
            cursor = min(boundary + separator_length, end)
    return spans
