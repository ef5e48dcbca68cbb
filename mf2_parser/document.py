"""
Document loading: raw markup → BeautifulSoup element tree.

The walker only needs a parsed tree; this module is the adapter that
produces one from strings or bytes.

Design principle: NEVER FAIL on bad HTML while any parser backend can still
produce a tree.
"""

import re
from typing import Union

from bs4 import BeautifulSoup

from .exceptions import DocumentLoadError
from .logger import get_module_logger

logger = get_module_logger("document")


class DocumentLoader:
    """Builds element trees from raw HTML."""

    # html5lib implements the WHATWG parsing algorithm and copes best with
    # broken markup; lxml is faster but less faithful; html.parser needs no
    # C extensions and is always available.
    PARSER_CHAIN = ['html5lib', 'lxml', 'html.parser']

    # WHATWG encoding spec: browsers silently remap these charsets.
    # https://encoding.spec.whatwg.org/#names-and-labels
    WHATWG_CHARSET_MAP = {
        'iso-8859-1': 'windows-1252',
        'iso8859-1': 'windows-1252',
        'iso88591': 'windows-1252',
        'latin-1': 'windows-1252',
        'latin1': 'windows-1252',
        'us-ascii': 'windows-1252',
        'ascii': 'windows-1252',
        'iso-8859-9': 'windows-1254',
        'iso-8859-11': 'windows-874',
    }

    @staticmethod
    def detect_charset_from_bytes(raw_bytes: bytes) -> str:
        """
        Detect charset from raw HTML bytes by scanning the first 2048 bytes
        for <meta charset=...> or <meta http-equiv="Content-Type" content="...; charset=...">.

        Returns the browser-equivalent charset or 'utf-8' as default.
        """
        # Charset declarations must appear within the first 1024 bytes
        head_str = raw_bytes[:2048].decode('ascii', errors='ignore')

        charset = None

        m = re.search(r'<meta[^>]+charset=["\']?\s*([^\s"\';>]+)', head_str, re.IGNORECASE)
        if m:
            charset = m.group(1).strip().lower()

        if not charset:
            m = re.search(
                r'<meta[^>]+content=["\'][^"\']*charset=([^\s"\';>]+)',
                head_str, re.IGNORECASE
            )
            if m:
                charset = m.group(1).strip().lower()

        if not charset:
            return 'utf-8'

        return DocumentLoader.WHATWG_CHARSET_MAP.get(charset, charset)

    def __init__(self, parsers: list[str] = None):
        self.parsers = parsers or list(self.PARSER_CHAIN)

    def decode(self, raw_bytes: bytes) -> str:
        """Decode bytes with the charset the page declares."""
        charset = self.detect_charset_from_bytes(raw_bytes)
        try:
            return raw_bytes.decode(charset, errors='replace')
        except LookupError:
            logger.warning(f"Unknown charset '{charset}', decoding as utf-8")
            return raw_bytes.decode('utf-8', errors='replace')

    def load(self, html: Union[str, bytes]) -> BeautifulSoup:
        """
        Parse markup into a tree, trying each parser backend in turn.

        Raises:
            DocumentLoadError: every backend failed
        """
        if isinstance(html, bytes):
            html = self.decode(html)

        # NULL bytes crash some parsers and are never valid in HTML text
        if '\x00' in html:
            html = html.replace('\x00', '')
            logger.warning("Removed NULL bytes from input")

        errors = {}
        for parser in self.parsers:
            try:
                return BeautifulSoup(html, parser)
            except Exception as e:
                # Covers both a missing backend (FeatureNotFound) and parser crashes
                logger.warning(f"{parser} parsing failed: {e}")
                errors[parser] = str(e)

        raise DocumentLoadError("No parser backend could parse the document", details=errors)
