"""Exception hierarchy for URI template errors.

Malformed templates raise a TemplateParseError subclass at the point the
template is first processed. A URI that does not match a template is not an
error: extraction returns None instead.
"""

from __future__ import annotations


class URITemplateError(Exception):
    """Base exception for all URI template errors."""

    pass


class TemplateParseError(URITemplateError, ValueError):
    """Raised when a template cannot be parsed.

    Attributes:
        template: The raw template text (or the expression body) being parsed.
        position: Offset of the problem within ``template``, when known.
    """

    def __init__(
        self, message: str, template: str = "", position: int | None = None
    ) -> None:
        super().__init__(message)
        self.template = template
        self.position = position


class UnbalancedBraceError(TemplateParseError):
    """Raised when expression braces are unbalanced, nested or empty."""

    pass


class InvalidVarSpecError(TemplateParseError):
    """Raised when a variable specification has an invalid name or modifier."""

    pass


class PatternCompileError(TemplateParseError):
    """Raised when the extraction pattern built from a template fails to compile.

    Literal text is always escaped, so this indicates a bug rather than bad
    input, but it is still reported as a recoverable error.
    """

    pass
