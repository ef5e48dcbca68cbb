"""
Main entry point for the microformats2 parser.

Wires the document loader to the walker:
  raw HTML (str / bytes / file) → DocumentLoader → element tree
  element tree + base URL       → DocumentWalker → DocumentResult

``parse_node`` skips the loader for callers that already hold a tree.
"""

import os
from pathlib import Path
from typing import Optional, Union

from .document import DocumentLoader
from .walker import DocumentWalker
from .schemas import DocumentResult, ParserLimits
from .logger import get_module_logger, setup_logger

logger = get_module_logger("main")


def _env_int(name: str) -> Optional[int]:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring non-integer {name}={raw!r}")
        return None


class MicroformatsParser:
    """
    Extracts microformats2 items and rel links from HTML.

    Limits come from the arguments, else from the MF2_MAX_DEPTH /
    MF2_MAX_NODES environment variables, else from ParserLimits defaults.
    A parser instance holds no per-document state and can be reused.
    """

    def __init__(
        self,
        max_depth: Optional[int] = None,
        max_nodes: Optional[int] = None,
        log_level: int = None
    ):
        if log_level is not None:
            setup_logger(level=log_level)

        limits = {}
        depth = max_depth if max_depth is not None else _env_int("MF2_MAX_DEPTH")
        nodes = max_nodes if max_nodes is not None else _env_int("MF2_MAX_NODES")
        if depth is not None:
            limits["max_depth"] = depth
        if nodes is not None:
            limits["max_nodes"] = nodes
        self.limits = ParserLimits(**limits)

        self.loader = DocumentLoader()
        self.walker = DocumentWalker(self.limits)

        logger.debug(f"MicroformatsParser initialized with {self.limits}")

    def parse_node(self, tree, base_url: Optional[str] = None) -> DocumentResult:
        """
        Parse an already-built element tree.

        Args:
            tree: BeautifulSoup document or any Tag within one
            base_url: Base for relative URLs

        Returns:
            DocumentResult
        """
        return self.walker.walk(tree, base_url)

    def parse(self, html: Union[str, bytes], base_url: Optional[str] = None) -> DocumentResult:
        """Parse an HTML string (or bytes, decoded with the declared charset)."""
        tree = self.loader.load(html)
        return self.parse_node(tree, base_url)

    def parse_bytes(self, raw_bytes: bytes, base_url: Optional[str] = None) -> DocumentResult:
        """Parse raw bytes, decoding with the charset the page declares."""
        return self.parse(self.loader.decode(raw_bytes), base_url)

    def parse_file(
        self,
        file_path: Union[str, Path],
        base_url: Optional[str] = None
    ) -> DocumentResult:
        """Parse an HTML file."""
        file_path = Path(file_path)
        logger.info(f"Parsing {file_path}")
        # Raw bytes, so the charset can be detected from <meta> before decoding
        return self.parse_bytes(file_path.read_bytes(), base_url)


def parse_html(html: Union[str, bytes], base_url: Optional[str] = None) -> DocumentResult:
    """Convenience function to parse HTML."""
    return MicroformatsParser().parse(html, base_url)


def parse_html_file(file_path: Union[str, Path], base_url: Optional[str] = None) -> DocumentResult:
    """Convenience function to parse an HTML file."""
    return MicroformatsParser().parse_file(file_path, base_url)
