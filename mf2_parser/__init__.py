"""
Microformats2 parser.

Extracts microformats2 items (h-card, h-entry, h-event, ...) and rel links
from HTML element trees.
- DocumentLoader: raw HTML → BeautifulSoup tree
- DocumentWalker: tree → DocumentResult, in one depth-first traversal

Public API surface:
  Entry points:    MicroformatsParser, parse_html, parse_html_file
  Building blocks: DocumentLoader, DocumentWalker
  Data models:     DocumentResult, Item, TextValue, EmbeddedValue, RelURL, AlternateRel, ParserLimits
  Error types:     MF2ParserError, InvalidInputError, TraversalLimitError, DocumentLoadError
"""

from .main import MicroformatsParser, parse_html, parse_html_file
from .document import DocumentLoader
from .walker import DocumentWalker

from .schemas import (
    DocumentResult,
    Item,
    TextValue,
    EmbeddedValue,
    RelURL,
    AlternateRel,
    ParserLimits,
)

from .exceptions import (
    MF2ParserError,
    InvalidInputError,
    TraversalLimitError,
    DocumentLoadError,
)

__version__ = "0.1.0"
__all__ = [
    "MicroformatsParser",
    "parse_html",
    "parse_html_file",
    "DocumentLoader",
    "DocumentWalker",
    "DocumentResult",
    "Item",
    "TextValue",
    "EmbeddedValue",
    "RelURL",
    "AlternateRel",
    "ParserLimits",
    "MF2ParserError",
    "InvalidInputError",
    "TraversalLimitError",
    "DocumentLoadError",
]
