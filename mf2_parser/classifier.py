"""
Class-token classification.

Microformats2 markup is encoded in ``class`` tokens:
  h-*               → the element is an item root (h-card, h-entry, ...)
  p-* u-* dt-* e-*  → the element is a typed property of the enclosing item

A single element can carry several root tokens (multi-type items) and
several property tokens at once; each property token is reported separately.
"""

import re
from typing import NamedTuple

from bs4 import Tag

ROOT_CLASS_PATTERN = re.compile(r'^h-\S+$')
PROPERTY_CLASS_PATTERN = re.compile(r'^(p|u|dt|e)-(\S+)$')


class PropertyMarker(NamedTuple):
    """One property token split into its prefix and property name."""
    prefix: str  # "p", "u", "dt" or "e"
    name: str


def get_classes(node) -> list[str]:
    """
    Class tokens of a node in the order they were written.

    BeautifulSoup already splits ``class`` into a list for the HTML tree
    builders; a plain string (e.g. multi-valued attributes disabled) is split
    on whitespace here.
    """
    if not isinstance(node, Tag):
        return []
    for key, value in node.attrs.items():
        if key.lower() != 'class':
            continue
        if isinstance(value, str):
            return value.split()
        return [token for token in value if token]
    return []


def root_classes(classes: list[str]) -> list[str]:
    """Tokens that mark an item root, in token order."""
    return [c for c in classes if ROOT_CLASS_PATTERN.match(c)]


def property_classes(classes: list[str]) -> list[PropertyMarker]:
    """Property markers, in token order."""
    markers = []
    for c in classes:
        match = PROPERTY_CLASS_PATTERN.match(c)
        if match:
            markers.append(PropertyMarker(match.group(1), match.group(2)))
    return markers


def is_item_root(node) -> bool:
    return bool(root_classes(get_classes(node)))


def has_property_marker(node) -> bool:
    return bool(property_classes(get_classes(node)))
