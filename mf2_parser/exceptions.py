"""
Custom exceptions for the microformats2 parser.

Error philosophy:
  - InvalidInputError   → FAIL HARD: there is no tree to walk.
  - TraversalLimitError → FAIL HARD: the document is deeper or larger than the
                          configured ceiling; no partial result is returned.
  - DocumentLoadError   → FAIL HARD: no parser backend could build a tree.

Everything else (missing attributes, unresolvable URLs, items without
properties) is fail-open and never raises.
"""

from typing import Optional


class MF2ParserError(Exception):
    """Base exception for all microformats2 parser errors."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to an error payload for callers that report errors as data."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "details": self.details
        }


class InvalidInputError(MF2ParserError):
    """Raised when the input tree is absent or is not an element."""
    pass


class TraversalLimitError(MF2ParserError):
    """
    Raised when traversal exceeds a configured ceiling.

    Markup is often externally supplied, so nesting depth and element count
    are bounded instead of letting the interpreter's call stack decide.
    """

    def __init__(
        self,
        message: str,
        limit: str,
        value: int,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.limit = limit  # "max_depth" or "max_nodes"
        self.value = value

    def to_response(self) -> dict:
        response = super().to_response()
        response["limit"] = self.limit
        response["value"] = self.value
        return response


class DocumentLoadError(MF2ParserError):
    """Raised when raw markup cannot be turned into a tree by any parser backend."""
    pass
