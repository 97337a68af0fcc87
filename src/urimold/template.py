"""RFC 6570 URI templates with expansion and variable extraction."""

from __future__ import annotations

from collections.abc import Mapping
from functools import cached_property
from typing import Any

from pydantic import GetCoreSchemaHandler
from pydantic_core import core_schema

from urimold.core import expansion
from urimold.core.extraction import ExtractionPattern, compile_pattern
from urimold.core.scanner import expressions


class URITemplate:
    """An immutable URI template such as ``'file:///logs/{date}.log'``.

    Construction never validates the template. A malformed template raises a
    TemplateParseError the first time it is expanded, extracted from or asked
    for its variables.
    """

    def __init__(self, template: str) -> None:
        self._template = template

    @property
    def template(self) -> str:
        """The raw template text."""
        return self._template

    def __str__(self) -> str:
        return self._template

    def __repr__(self) -> str:
        return f"URITemplate({self._template!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, URITemplate):
            return NotImplemented
        return self._template == other._template

    def __hash__(self) -> int:
        return hash(self._template)

    def variables(self) -> list[str]:
        """Return the variable names in template order.

        Duplicates are kept so names line up with extraction capture groups.
        The explode marker ``*`` is stripped but a ``:N`` prefix is not.

        Raises:
            TemplateParseError: If the template is malformed.
        """
        names: list[str] = []
        for expression in expressions(self._template):
            _, varspecs = expansion.parse_expression(expression.body)
            names.extend(varspec.label for varspec in varspecs)
        return names

    def expand(
        self, variables: Mapping[str, Any] | None = None, /, **kwargs: Any
    ) -> str:
        """Expand the template into a URI.

        Missing variables contribute nothing; they are never an error.

        Args:
            variables: Values keyed by variable name. Values may be None,
                strings (or other scalars), lists/tuples or mappings.
            **kwargs: Extra values, taking precedence over ``variables``. The
                mapping is positional-only, so a template variable may itself
                be named ``variables``.

        Returns:
            The expanded URI.

        Raises:
            TemplateParseError: If the template is malformed.
        """
        values = {**(variables or {}), **kwargs}
        return expansion.expand(self._template, values)

    def extract(self, uri: str) -> dict[str, str] | None:
        """Extract variable values from a URI produced by this template.

        Returns:
            Percent-decoded values keyed by variable name, or None when the URI
            does not match the template.

        Raises:
            TemplateParseError: If the template is malformed.
        """
        return self._extraction_pattern.extract(uri)

    def matches(self, uri: str) -> bool:
        """Check whether a URI could have been generated from this template."""
        return self.extract(uri) is not None

    @cached_property
    def _extraction_pattern(self) -> ExtractionPattern:
        return compile_pattern(self._template)

    @classmethod
    def __get_pydantic_core_schema__(
        cls, source_type: Any, handler: GetCoreSchemaHandler
    ) -> core_schema.CoreSchema:
        return core_schema.no_info_plain_validator_function(
            cls._validate,
            serialization=core_schema.plain_serializer_function_ser_schema(str),
        )

    @classmethod
    def _validate(cls, value: Any) -> URITemplate:
        """Accept a URITemplate or a string, checking the template syntax."""
        if isinstance(value, str):
            value = cls(value)
        if not isinstance(value, URITemplate):
            raise ValueError(
                f"Expected a URI template string, got {type(value).__name__}"
            )
        # Parse errors are ValueErrors, which pydantic reports as validation errors
        value.variables()
        return value
