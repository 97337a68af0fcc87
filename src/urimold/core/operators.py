"""RFC 6570 expression operators.

Each operator is a table entry rather than a subclass: the per-operator
differences (prefix, joiner, encoding policy, ``name=value`` rendering and
empty-value handling) are data, and the per-shape expansion methods read them.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from urimold.core import codec
from urimold.core.values import ListValue, MapValue, Scalar, VariableValue

if TYPE_CHECKING:
    from urimold.core.expansion import VarSpec


@dataclass(frozen=True)
class Operator:
    """One RFC 6570 expansion form.

    Expansion methods return None when the variable contributes nothing to
    the expression, and a (possibly empty) string otherwise.
    """

    name: str
    char: str | None
    prefix: str
    joiner: str
    reserved: bool = False
    named: bool = False
    empty_scalar: str = "="
    skip_empty_list: bool = False
    skip_empty_map: bool = False

    def encode(self, value: str) -> str:
        return codec.encode(value, reserved=self.reserved)

    def expand(self, varspec: VarSpec, value: VariableValue) -> str | None:
        """Expand one variable, dispatching on the shape of its value."""
        if isinstance(value, Scalar):
            return self.expand_scalar(varspec, value)
        if isinstance(value, ListValue):
            return self.expand_list(varspec, value)
        if isinstance(value, MapValue):
            return self.expand_map(varspec, value)
        return self.expand_missing(varspec)

    def expand_missing(self, varspec: VarSpec) -> str | None:
        return None

    def expand_scalar(self, varspec: VarSpec, value: Scalar) -> str:
        text = value.value
        if varspec.prefix is not None:
            text = text[: varspec.prefix]
        encoded = self.encode(text)

        if not self.named:
            return encoded
        if not encoded:
            return f"{varspec.name}{self.empty_scalar}"
        return f"{varspec.name}={encoded}"

    def expand_list(self, varspec: VarSpec, value: ListValue) -> str | None:
        if not value.items and self.skip_empty_list:
            return None

        encoded = [self.encode(item) for item in value.items]
        if varspec.explode:
            if self.named:
                encoded = [f"{varspec.name}={item}" for item in encoded]
            return self.joiner.join(encoded)

        joined = ",".join(encoded)
        return f"{varspec.name}={joined}" if self.named else joined

    def expand_map(self, varspec: VarSpec, value: MapValue) -> str | None:
        if not value.pairs and self.skip_empty_map:
            return None

        if varspec.explode:
            return self.joiner.join(
                f"{self.encode(key)}={self.encode(item)}" for key, item in value.pairs
            )

        joined = ",".join(
            f"{self.encode(key)},{self.encode(item)}" for key, item in value.pairs
        )
        return f"{varspec.name}={joined}" if self.named else joined


SIMPLE = Operator(name="simple", char=None, prefix="", joiner=",")

OPERATORS: tuple[Operator, ...] = (
    SIMPLE,
    Operator(name="reserved", char="+", prefix="", joiner=",", reserved=True),
    Operator(name="fragment", char="#", prefix="#", joiner=",", reserved=True),
    Operator(name="label", char=".", prefix=".", joiner=".", skip_empty_list=True),
    Operator(name="path", char="/", prefix="/", joiner="/", skip_empty_list=True),
    Operator(
        name="path-param",
        char=";",
        prefix=";",
        joiner=";",
        named=True,
        empty_scalar="",
    ),
    Operator(
        name="query",
        char="?",
        prefix="?",
        joiner="&",
        named=True,
        skip_empty_list=True,
        skip_empty_map=True,
    ),
    Operator(name="query-continuation", char="&", prefix="&", joiner="&", named=True),
)

_BY_CHAR: dict[str, Operator] = {op.char: op for op in OPERATORS if op.char}


def lookup(char: str) -> Operator | None:
    """Return the operator for an operator character, or None if unknown."""
    return _BY_CHAR.get(char)


def split_operator(body: str) -> tuple[Operator, str]:
    """Split an expression body into its operator and the variable list.

    Bodies without a known leading operator character use simple expansion
    and are returned unchanged.
    """
    op = lookup(body[:1])
    if op is None:
        return SIMPLE, body
    return op, body[1:]
