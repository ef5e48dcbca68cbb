"""
Property value resolution.

Each property prefix has a fixed fallback chain; the first source that
yields a value wins:

  p-   value-class-pattern → abbr@title → data/input@value → img/area@alt → text
  u-   a/area@href → img/audio/video/source@src → object@data
       → value-class-pattern → abbr@title → data/input@value → text
       (then made absolute against the document base)
  e-   trimmed text + serialized markup of the children
  dt-  value-class-pattern → time/ins/del@datetime → abbr@title → data/input@value

Attribute lookups return ``None`` when the attribute is absent, so an empty
attribute still ends the chain while a missing one falls through.
"""

from typing import NamedTuple, Optional
from urllib.parse import urljoin

from bs4 import NavigableString, Tag
from bs4.element import PreformattedString

from .classifier import get_classes, root_classes
from .logger import get_module_logger

logger = get_module_logger("values")

# Block-level elements. Value fragments taken from two neighbouring block
# elements are separated by a space, inline fragments are glued together.
BLOCK_TAGS = ['address', 'article', 'aside', 'blockquote', 'dd', 'div', 'dl',
              'dt', 'fieldset', 'figcaption', 'figure', 'footer', 'form',
              'h1', 'h2', 'h3', 'h4', 'h5', 'h6', 'header', 'hr', 'li',
              'main', 'nav', 'ol', 'p', 'pre', 'section', 'table', 'td',
              'th', 'tr', 'ul']

# Their text never counts as visible content
SKIPPED_TEXT_TAGS = ['script', 'style', 'template']


class ResolvedValue(NamedTuple):
    """A resolved property value; ``html`` is only filled for e-* properties."""
    value: Optional[str]
    html: str = ""


# --- Node helpers ---

def get_attr(node, name: str) -> Optional[str]:
    """
    Attribute value, or None when the attribute is absent.

    Names match case-insensitively. Multi-valued attributes (which
    BeautifulSoup hands back as lists, e.g. ``rel``) are re-joined with spaces.
    """
    if not isinstance(node, Tag):
        return None
    for key, value in node.attrs.items():
        if key.lower() == name:
            if isinstance(value, list):
                return " ".join(value)
            return value
    return None


def text_content(node) -> str:
    """Concatenated descendant text, trimmed. Comments and script/style bodies are skipped."""
    if isinstance(node, NavigableString):
        return str(node).strip()
    parts = []
    stack = list(reversed(node.contents))
    while stack:
        child = stack.pop()
        if isinstance(child, Tag):
            if child.name in SKIPPED_TEXT_TAGS:
                continue
            stack.extend(reversed(child.contents))
        elif isinstance(child, NavigableString) and not isinstance(child, PreformattedString):
            parts.append(str(child))
    return "".join(parts).strip()


def inner_html(node) -> str:
    """Serialized markup of every child node, in document order."""
    return node.decode_contents()


def resolve_url(url: Optional[str], base: Optional[str]) -> Optional[str]:
    """
    Make ``url`` absolute against ``base``.

    Without a base, or for an empty value, the URL passes through unchanged.
    URLs that cannot be joined also pass through (fail-open).
    """
    if not base or not url:
        return url
    try:
        return urljoin(base, url.strip())
    except ValueError as e:
        logger.warning(f"Could not resolve URL '{url}' against '{base}': {e}")
        return url


# --- Value-class-pattern ---

def _value_elements(node):
    """
    Yield descendants carrying ``value`` or ``value-title``, in document order.

    Nested item roots are not entered, and neither is a matched element.
    """
    stack = list(reversed(node.contents))
    while stack:
        child = stack.pop()
        if not isinstance(child, Tag):
            continue
        classes = get_classes(child)
        if root_classes(classes):
            continue
        if 'value' in classes or 'value-title' in classes:
            yield child, classes
            continue
        stack.extend(reversed(child.contents))


def _value_element_text(elem, classes: list[str], prefix: str) -> str:
    if 'value-title' in classes:
        return get_attr(elem, 'title') or ""

    name = elem.name
    if name in ('img', 'area'):
        alt = get_attr(elem, 'alt')
        if alt is not None:
            return alt
    if name == 'data':
        value = get_attr(elem, 'value')
        if value is not None:
            return value
    if name == 'abbr':
        title = get_attr(elem, 'title')
        if title is not None:
            return title
    if prefix == 'dt' and name in ('time', 'ins', 'del'):
        stamp = get_attr(elem, 'datetime')
        if stamp is not None:
            return stamp
    return text_content(elem)


def value_class_pattern(node, prefix: str) -> Optional[str]:
    """
    Value assembled from ``value`` / ``value-title`` descendants.

    Returns None when there is no such descendant or the assembled value is
    empty, so the caller moves on to its next fallback.
    """
    fragments = [
        (_value_element_text(elem, classes, prefix), elem.name in BLOCK_TAGS)
        for elem, classes in _value_elements(node)
    ]
    if not fragments:
        return None

    # Document order; raw strings, no datetime reformatting
    result = ""
    previous_block = False
    for text, is_block in fragments:
        if (result and text and is_block and previous_block
                and not result[-1].isspace() and not text[0].isspace()):
            result += " "
        result += text
        previous_block = is_block

    return result or None


# --- Per-prefix resolution ---

def _plain_value(node) -> str:
    name = node.name
    value = value_class_pattern(node, 'p')
    if value is None and name == 'abbr':
        value = get_attr(node, 'title')
    if value is None and name in ('data', 'input'):
        value = get_attr(node, 'value')
    if value is None and name in ('img', 'area'):
        value = get_attr(node, 'alt')
    if value is None:
        value = text_content(node)
    return value


def _url_value(node, base: Optional[str]) -> str:
    name = node.name
    value = None
    if name in ('a', 'area'):
        value = get_attr(node, 'href')
    if value is None and name in ('img', 'audio', 'video', 'source'):
        value = get_attr(node, 'src')
    if value is None and name == 'object':
        value = get_attr(node, 'data')
    if value is None:
        value = value_class_pattern(node, 'u')
    if value is None and name == 'abbr':
        value = get_attr(node, 'title')
    if value is None and name in ('data', 'input'):
        value = get_attr(node, 'value')
    if value is None:
        value = text_content(node)
    return resolve_url(value, base)


def _datetime_value(node) -> Optional[str]:
    name = node.name
    value = value_class_pattern(node, 'dt')
    if value is None and name in ('time', 'ins', 'del'):
        value = get_attr(node, 'datetime')
    if value is None and name == 'abbr':
        value = get_attr(node, 'title')
    if value is None and name in ('data', 'input'):
        value = get_attr(node, 'value')
    return value


def resolve_property(node, prefix: str, base: Optional[str] = None) -> ResolvedValue:
    """
    Resolve the value a property marker with ``prefix`` takes on ``node``.

    Args:
        node: Element carrying the property marker
        prefix: "p", "u", "dt" or "e"
        base: Current document base URL, if known

    Returns:
        ResolvedValue; ``value`` is None only for dt- properties with no source
    """
    if prefix == 'p':
        return ResolvedValue(_plain_value(node))
    if prefix == 'u':
        return ResolvedValue(_url_value(node, base))
    if prefix == 'e':
        return ResolvedValue(text_content(node), inner_html(node))
    if prefix == 'dt':
        return ResolvedValue(_datetime_value(node))
    raise ValueError(f"Unknown property prefix: {prefix!r}")
