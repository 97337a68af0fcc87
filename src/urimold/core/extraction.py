"""Reverse expansion: pull variable values back out of a concrete URI.

A template is compiled in two passes. The scanner splits it into segments,
then each segment is mapped on its own: literal text is escaped and each
expression becomes one capture group per variable. Captures under simple
expansion only match unreserved and pct-encoded text; captures under any
other operator are greedy ``(.*)`` groups and include the operator's own
prefix and ``name=`` text.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass

from urimold.core import codec
from urimold.core.expansion import parse_expression
from urimold.core.operators import SIMPLE
from urimold.core.scanner import Literal, scan
from urimold.errors import PatternCompileError

logger = logging.getLogger(__name__)

SIMPLE_CAPTURE = r"([A-Za-z0-9%_.~-]+)"
OPERATOR_CAPTURE = r"(.*)"


@dataclass(frozen=True)
class ExtractionPattern:
    """Compiled extraction regex and the variable labels of its groups."""

    regex: re.Pattern[str]
    labels: tuple[str, ...]

    def extract(self, uri: str) -> dict[str, str] | None:
        """Match a URI and map each capture group to its variable.

        Returns:
            Decoded values keyed by variable label, or None when the URI does
            not match. A label that appears more than once takes the value of
            its last occurrence.
        """
        match = self.regex.fullmatch(uri)
        if match is None:
            logger.debug(f"URI {uri!r} does not match {self.regex.pattern!r}")
            return None

        extracted: dict[str, str] = {}
        for label, value in zip(self.labels, match.groups()):
            if value is not None:
                extracted[label] = codec.decode(value)
        return extracted


def compile_pattern(template: str) -> ExtractionPattern:
    """Compile a template into an anchored extraction pattern.

    Raises:
        TemplateParseError: If the template is malformed.
        PatternCompileError: If the generated pattern does not compile.
    """
    parts: list[str] = []
    labels: list[str] = []

    for segment in scan(template):
        if isinstance(segment, Literal):
            parts.append(re.escape(segment.text))
            continue

        op, varspecs = parse_expression(segment.body)
        capture = SIMPLE_CAPTURE if op is SIMPLE else OPERATOR_CAPTURE
        parts.append(re.escape(op.joiner).join(capture for _ in varspecs))
        labels.extend(varspec.label for varspec in varspecs)

    pattern = "".join(parts)
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise PatternCompileError(
            f"Could not compile extraction pattern for {template!r}: {e}",
            template,
            e.pos,
        ) from e

    logger.debug(f"Compiled extraction pattern {pattern!r} for {template!r}")
    return ExtractionPattern(regex=regex, labels=tuple(labels))
