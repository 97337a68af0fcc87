"""Template expansion: variable specification parsing and substitution."""

from __future__ import annotations

import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from urimold.core.operators import Operator, split_operator
from urimold.core.scanner import Literal, scan
from urimold.core.values import coerce
from urimold.errors import InvalidVarSpecError

MAX_PREFIX_LENGTH = 9999

_VARCHAR = r"(?:[A-Za-z0-9_]|%[0-9A-Fa-f]{2})"
_VARNAME = re.compile(rf"{_VARCHAR}+(?:\.{_VARCHAR}+)*")
_PREFIX = re.compile(r"[1-9][0-9]{0,3}")


@dataclass(frozen=True)
class VarSpec:
    """A variable reference inside an expression, with at most one modifier."""

    name: str
    prefix: int | None = None
    explode: bool = False

    @property
    def label(self) -> str:
        """Name as reported by ``URITemplate.variables``.

        The explode marker is dropped; a prefix modifier is kept.
        """
        if self.prefix is None:
            return self.name
        return f"{self.name}:{self.prefix}"


def parse_varspec(text: str) -> VarSpec:
    """Parse ``name``, ``name:N`` or ``name*``.

    Raises:
        InvalidVarSpecError: If the name is not a valid RFC 6570 varname, the
            prefix is not an integer in 1..9999, or both modifiers are used.
    """
    name = text
    prefix = None
    explode = text.endswith("*")

    if explode:
        name = text[:-1]
        if ":" in name:
            raise InvalidVarSpecError(
                f"Variable {text!r} combines prefix and explode modifiers", text
            )
    elif ":" in text:
        name, _, digits = text.partition(":")
        if not _PREFIX.fullmatch(digits):
            raise InvalidVarSpecError(
                f"Invalid prefix length in {text!r}: expected 1-{MAX_PREFIX_LENGTH}",
                text,
                len(name) + 1,
            )
        prefix = int(digits)

    if not _VARNAME.fullmatch(name):
        raise InvalidVarSpecError(f"Invalid variable name {name!r}", text, 0)

    return VarSpec(name=name, prefix=prefix, explode=explode)


def parse_expression(body: str) -> tuple[Operator, list[VarSpec]]:
    """Split an expression body into its operator and variable specs."""
    op, variable_list = split_operator(body)
    if not variable_list:
        raise InvalidVarSpecError(f"Expression {{{body}}} has no variables", body)
    return op, [parse_varspec(part) for part in variable_list.split(",")]


def expand_expression(body: str, variables: Mapping[str, Any]) -> str:
    """Expand a single expression body against the supplied variables.

    The operator prefix is added once, and only when at least one variable
    contributed. Otherwise the expression expands to an empty string.
    """
    op, varspecs = parse_expression(body)

    expansions = []
    for varspec in varspecs:
        expanded = op.expand(varspec, coerce(variables.get(varspec.name)))
        if expanded is not None:
            expansions.append(expanded)

    if not expansions:
        return ""
    return op.prefix + op.joiner.join(expansions)


def expand(template: str, variables: Mapping[str, Any]) -> str:
    """Expand every expression of a template, passing literals through."""
    return "".join(
        segment.text
        if isinstance(segment, Literal)
        else expand_expression(segment.body, variables)
        for segment in scan(template)
    )
