"""Keyword-based document classification."""

from docsort.categories import CategoryTable
from docsort.utils.logger import get_logger

logger = get_logger(__name__)


class KeywordClassifier:
    """Assigns text to the first category with a matching keyword.

    Matching is literal substring containment after lowercasing. Table
    order decides between categories and list order between keywords,
    so the result is deterministic.

    Args:
        table: Ordered category table to match against.
    """

    def __init__(self, table: CategoryTable) -> None:
        self.table = table

    def classify(self, text: str) -> str | None:
        """Return the matching category name, or ``None`` if nothing matches.

        Args:
            text: Extracted document text.

        Returns:
            Name of the first matching category, or ``None``.
        """
        haystack = text.lower()
        for category in self.table:
            for keyword in category.keywords:
                if keyword.lower() in haystack:
                    logger.debug(
                        "Keyword %r matched category %s", keyword, category.name
                    )
                    return category.name
        return None
