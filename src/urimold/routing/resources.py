"""Resource template definitions served by a TemplateRouter."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from urimold.template import URITemplate


class ResourceTemplate(BaseModel):
    """A URI template for a family of resources, with descriptive metadata.

    The template is syntax-checked on validation, so a malformed template is
    rejected when the model is built rather than when a URI is routed.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    uri_template: URITemplate = Field(alias="uriTemplate")
    name: str
    title: str | None = None
    description: str | None = None
    mime_type: str | None = Field(default=None, alias="mimeType")
    metadata: dict[str, Any] | None = Field(default=None, alias="_meta")

    def expand(
        self, variables: dict[str, Any] | None = None, /, **kwargs: Any
    ) -> str:
        """Expand the template into a concrete resource URI."""
        return self.uri_template.expand(variables, **kwargs)

    def to_protocol(self) -> dict[str, Any]:
        """Serialize to wire format, using aliases and omitting unset fields."""
        return self.model_dump(by_alias=True, exclude_none=True)

    @classmethod
    def from_protocol(cls, payload: dict[str, Any]) -> "ResourceTemplate":
        """Build a ResourceTemplate from its wire format."""
        return cls.model_validate(payload)
