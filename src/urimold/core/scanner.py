"""Splits a template into literal text and ``{...}`` expressions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator

from urimold.errors import UnbalancedBraceError


@dataclass(frozen=True)
class Literal:
    """Text outside any expression, passed through expansion unchanged."""

    text: str


@dataclass(frozen=True)
class Expression:
    """The body of a ``{...}`` expression, braces excluded."""

    body: str
    position: int = 0


Segment = Literal | Expression


def scan(template: str) -> Iterator[Segment]:
    """Yield the literal and expression segments of a template in order.

    Segments are produced lazily, so an error is raised only once the scan
    reaches the malformed part of the template.

    Args:
        template: Raw template text.

    Yields:
        Literal and Expression segments. Empty literals are never yielded.

    Raises:
        UnbalancedBraceError: On an unclosed ``{``, a ``{`` inside an
            expression, a stray ``}`` or an empty ``{}``.
    """
    cursor = 0
    length = len(template)

    while cursor < length:
        start = template.find("{", cursor)
        literal_end = length if start == -1 else start

        stray = template.find("}", cursor, literal_end)
        if stray != -1:
            raise UnbalancedBraceError(
                f"Unmatched '}}' at position {stray}", template, stray
            )

        if literal_end > cursor:
            yield Literal(template[cursor:literal_end])
        if start == -1:
            return

        end = template.find("}", start + 1)
        if end == -1:
            raise UnbalancedBraceError(
                f"Unclosed expression starting at position {start}", template, start
            )

        nested = template.find("{", start + 1, end)
        if nested != -1:
            raise UnbalancedBraceError(
                f"Nested '{{' at position {nested}", template, nested
            )

        if end == start + 1:
            raise UnbalancedBraceError(
                f"Empty expression at position {start}", template, start
            )

        yield Expression(template[start + 1 : end], start)
        cursor = end + 1


def expressions(template: str) -> Iterator[Expression]:
    """Yield only the expression segments of a template."""
    for segment in scan(template):
        if isinstance(segment, Expression):
            yield segment
