"""Exceptions raised by the document sorter.

Extraction failures are caught at the processor boundary and turned
into an ``Unclassified`` result, so they never reach API callers.
"""


class DocsortError(Exception):
    """Base exception for all document sorting errors."""


class ExtractionError(DocsortError):
    """Raised when text cannot be extracted from a document.

    Covers engine start-up, recognition and session teardown failures.
    """
