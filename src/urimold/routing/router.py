"""Routes concrete URIs to handlers registered against resource templates."""

import logging
from copy import deepcopy
from dataclasses import dataclass
from typing import Any, Awaitable, Callable

from urimold.routing.resources import ResourceTemplate

# Handlers receive the requested URI and the variables extracted from it.
TemplateHandler = Callable[[str, dict[str, str]], Awaitable[Any]]


@dataclass(frozen=True)
class RouteMatch:
    """A resolved URI: the template that matched and its extracted variables."""

    template: ResourceTemplate
    uri: str
    variables: dict[str, str]


class TemplateRouter:
    """Maps URIs onto registered resource templates and their handlers.

    Templates are tried in registration order and the first one that extracts
    the URI wins.
    """

    def __init__(self):
        self.templates: dict[str, ResourceTemplate] = {}
        self.handlers: dict[str, TemplateHandler] = {}
        self.logger = logging.getLogger("urimold.routing.router")

    def add_template(
        self,
        template: ResourceTemplate,
        handler: TemplateHandler,
    ) -> None:
        """Add a resource template with its handler function.

        Adding a template with the same URI template text replaces the
        previous registration.

        Args:
            template: ResourceTemplate definition with URI pattern and metadata.
            handler: Async function that processes matching URIs. Must take the
                URI and the extracted variables as arguments.
        """
        key = template.uri_template.template
        self.templates[key] = template
        self.handlers[key] = handler
        self.logger.debug(f"Added template {key}")

    def get_templates(self) -> dict[str, ResourceTemplate]:
        """Get all registered templates."""
        return deepcopy(self.templates)

    def remove_template(self, uri_template: str) -> None:
        """Remove a template by its URI template text."""
        removed = self.templates.pop(uri_template, None)
        self.handlers.pop(uri_template, None)
        if removed is not None:
            self.logger.debug(f"Removed template {uri_template}")

    def clear_templates(self) -> None:
        """Remove all templates and their handlers."""
        self.templates.clear()
        self.handlers.clear()

    def resolve(self, uri: str) -> RouteMatch | None:
        """Find the first registered template that extracts the URI.

        Returns:
            RouteMatch for the matching template, or None if no template matches.
        """
        for key, template in self.templates.items():
            variables = template.uri_template.extract(uri)
            if variables is not None:
                self.logger.debug(f"Resolved {uri} to template {key}")
                return RouteMatch(template=template, uri=uri, variables=variables)
        return None

    def expand(self, uri_template: str, variables: dict[str, Any]) -> str:
        """Expand a registered template into a concrete URI.

        Raises:
            KeyError: If the template is not registered.
        """
        if uri_template not in self.templates:
            raise KeyError(f"Unknown template: {uri_template}")
        return self.templates[uri_template].expand(variables)

    async def handle(self, uri: str) -> Any:
        """Resolve a URI and await the matching template's handler.

        Handler exceptions bubble up to the caller unchanged.

        Args:
            uri: Concrete URI to route.

        Returns:
            Whatever the handler returns.

        Raises:
            KeyError: If the URI matches no registered template.
            Exception: Any exception from the handler.
        """
        match = self.resolve(uri)
        if match is None:
            raise KeyError(f"Unknown resource: {uri}")

        handler = self.handlers[match.template.uri_template.template]
        try:
            return await handler(uri, match.variables)
        except Exception as e:
            self.logger.warning(f"Handler for {uri} raised: {e}")
            raise
