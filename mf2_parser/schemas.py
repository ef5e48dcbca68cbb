"""
Pydantic schemas for the parse result.

Internally every property value is a tagged variant (``kind`` discriminator):
  TextValue     → plain string properties (p-, u-, dt-)
  EmbeddedValue → e- properties carrying both text and markup
  Item          → compound properties (a property node that is also an item root)

The exchange encoding is untagged, so the tag is dropped only at the
serialization boundary (``to_dict`` / ``to_json``).
"""

import json
from typing import Annotated, Literal, Optional, Union
from pydantic import BaseModel, Field


# --- Property values ---

class TextValue(BaseModel):
    """A plain string property value."""
    kind: Literal["text"] = "text"
    value: str


class EmbeddedValue(BaseModel):
    """An e-* property value: trimmed text plus the inner markup."""
    kind: Literal["embedded"] = "embedded"
    value: str
    html: str


class Item(BaseModel):
    """
    A microformats2 item.

    ``types`` holds the h-* tokens in the order they were written.
    ``value`` and ``html`` are only set when the item is the value of a
    property of its enclosing item (compound property).
    """
    kind: Literal["item"] = "item"
    types: list[str] = Field(min_length=1)
    properties: dict[str, list["PropertyValue"]] = Field(default_factory=dict)
    children: list["Item"] = Field(default_factory=list)
    shape: Optional[str] = None     # Only for <area> item roots
    coords: Optional[str] = None
    value: Optional[str] = None
    html: Optional[str] = None

    def add_property(self, name: str, value: "PropertyValue") -> None:
        self.properties.setdefault(name, []).append(value)

    def has_property(self, name: str) -> bool:
        return name in self.properties

    def to_dict(self) -> dict:
        """Untagged exchange encoding of this item."""
        data = {
            "type": list(self.types),
            "properties": {
                name: [project_value(v) for v in values]
                for name, values in self.properties.items()
            },
        }
        # Optional fields are omitted when empty
        for key in ("value", "html", "shape", "coords"):
            field_value = getattr(self, key)
            if field_value:
                data[key] = field_value
        if self.children:
            data["children"] = [child.to_dict() for child in self.children]
        return data


PropertyValue = Annotated[
    Union[TextValue, EmbeddedValue, Item],
    Field(discriminator="kind")
]

Item.model_rebuild()


def project_value(value: PropertyValue) -> Union[str, dict]:
    """Drop the internal tag: string, {value, html} pair, or item object."""
    if isinstance(value, Item):
        return value.to_dict()
    if isinstance(value, EmbeddedValue):
        return {"value": value.value, "html": value.html}
    return value.value


# --- Relation records ---

class RelURL(BaseModel):
    """Metadata about one URL reached through rel links."""
    rels: list[str] = Field(default_factory=list)
    text: str = ""
    media: str = ""
    hreflang: str = ""
    type: str = ""

    def to_dict(self) -> dict:
        data = {"rels": list(self.rels)}
        for key in ("text", "media", "hreflang", "type"):
            field_value = getattr(self, key)
            if field_value:
                data[key] = field_value
        return data


class AlternateRel(BaseModel):
    """A rel="alternate ..." link; ``rel`` holds the other tokens."""
    url: str = ""
    rel: str = ""
    media: str = ""
    hreflang: str = ""
    type: str = ""

    def to_dict(self) -> dict:
        return {
            key: getattr(self, key)
            for key in ("url", "rel", "media", "hreflang", "type")
            if getattr(self, key)
        }


# --- Whole-document output ---

class DocumentResult(BaseModel):
    """Output of one traversal: top-level items plus document-level relations."""
    items: list[Item] = Field(default_factory=list)
    rels: dict[str, list[str]] = Field(default_factory=dict)
    rel_urls: dict[str, RelURL] = Field(default_factory=dict)
    alternates: list[AlternateRel] = Field(default_factory=list)

    def to_dict(self) -> dict:
        data = {
            "items": [item.to_dict() for item in self.items],
            "rels": {token: list(urls) for token, urls in self.rels.items()},
            "rel-urls": {url: rel.to_dict() for url, rel in self.rel_urls.items()},
        }
        if self.alternates:
            data["alternates"] = [alt.to_dict() for alt in self.alternates]
        return data

    def to_json(self, indent: Optional[int] = 2) -> str:
        # ensure_ascii=False keeps non-ASCII text readable in the output
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)


# --- Configuration ---

class ParserLimits(BaseModel):
    """Traversal ceilings for untrusted markup."""
    max_depth: int = Field(default=400, gt=0)       # Element nesting depth
    max_nodes: int = Field(default=250_000, gt=0)   # Elements visited per document
