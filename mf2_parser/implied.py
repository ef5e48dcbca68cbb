"""
Implied properties.

When an item does not mark up ``name``, ``photo`` or ``url`` explicitly they
are inferred from the item's own element, or from an only child (or an only
child's only child) that is not itself marked up.
"""

from typing import Optional

from bs4 import Tag

from .classifier import has_property_marker, is_item_root
from .schemas import Item, TextValue
from .values import get_attr, resolve_url, text_content
from .logger import get_module_logger

logger = get_module_logger("implied")

# (tag name, attribute) pairs, checked in order
PHOTO_SOURCES = [('img', 'src'), ('object', 'data'), ('video', 'poster')]
URL_SOURCES = [('a', 'href'), ('area', 'href')]


def _child_elements(node) -> list:
    return [child for child in node.children if isinstance(child, Tag)]


def _is_unmarked(node) -> bool:
    return not is_item_root(node) and not has_property_marker(node)


def _only_child(node) -> Optional[Tag]:
    """The single child element of ``node``, if it has exactly one and it carries no markers."""
    children = _child_elements(node)
    if len(children) == 1 and _is_unmarked(children[0]):
        return children[0]
    return None


def _candidates(node) -> list:
    """The node's only child, then that child's only child."""
    found = []
    child = _only_child(node)
    if child is not None:
        found.append(child)
        grandchild = _only_child(child)
        if grandchild is not None:
            found.append(grandchild)
    return found


def _attr_from(node, sources: list[tuple[str, str]]) -> Optional[str]:
    for tag_name, attr in sources:
        if node.name == tag_name:
            value = get_attr(node, attr)
            if value is not None:
                return value
    return None


def implied_name(node) -> str:
    if node.name in ('img', 'area'):
        return (get_attr(node, 'alt') or "").strip()
    if node.name == 'abbr' and get_attr(node, 'title') is not None:
        return get_attr(node, 'title').strip()

    for candidate in _candidates(node):
        if candidate.name in ('img', 'area'):
            alt = get_attr(candidate, 'alt')
            if alt is not None:
                return alt.strip()
        elif candidate.name == 'abbr':
            title = get_attr(candidate, 'title')
            if title is not None:
                return title.strip()
        elif candidate.name == 'a':
            return text_content(candidate)

    return text_content(node)


def implied_photo(node, base: Optional[str] = None) -> str:
    photo = _attr_from(node, PHOTO_SOURCES)
    if photo is None:
        for candidate in _candidates(node):
            photo = _attr_from(candidate, PHOTO_SOURCES)
            if photo is not None:
                break
    return resolve_url(photo, base) or ""


def implied_url(node, base: Optional[str] = None) -> str:
    url = _attr_from(node, URL_SOURCES)
    if url is None:
        for candidate in _candidates(node):
            url = _attr_from(candidate, URL_SOURCES)
            if url is not None:
                break
    return resolve_url(url, base) or ""


def apply_implied_properties(item: Item, node, base: Optional[str] = None) -> None:
    """
    Fill in ``name``, ``photo`` and ``url`` on ``item`` where they are absent.

    Must run after the item's subtree has been walked, so explicit
    properties are already in place. Empty inferences are not recorded.
    """
    if not item.has_property('name'):
        name = implied_name(node)
        if name:
            item.add_property('name', TextValue(value=name))

    if not item.has_property('photo'):
        photo = implied_photo(node, base)
        if photo:
            item.add_property('photo', TextValue(value=photo))

    if not item.has_property('url'):
        url = implied_url(node, base)
        if url:
            item.add_property('url', TextValue(value=url))

    logger.debug(f"Implied properties applied to {item.types}")
