"""Ordered keyword table used to classify documents.

Categories are checked in declaration order and the first one with a
matching keyword wins, so more specific categories must come first.
"""

from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass

from docsort.models import UNCLASSIFIED

DEFAULT_CATEGORIES: dict[str, list[str]] = {
    "Aadhar": ["aadhar", "uidai", "govt of india", "government of india", "आधार"],
    "10th": [
        "10th",
        "class 10",
        "class x",
        "ssc",
        "high school",
        "हाई स्कूल",
        "दसवीं",
    ],
    "12th": [
        "12th",
        "class 12",
        "class xii",
        "hsc",
        "senior secondary",
        "इंटरमीडिएट",
        "बारहवीं",
    ],
    "Semester Marksheets": [
        "semester",
        "1st sem",
        "2nd sem",
        "3rd sem",
        "sgpa",
        "cgpa",
        "marks obtained",
    ],
    "NPTEL": [
        "nptel",
        "motivated learners",
        "online certification",
        "discipline stars",
    ],
    "Certificates": [
        "certificate",
        "completion",
        "recommendation",
        "achievement",
        "letter",
    ],
}


@dataclass(frozen=True)
class Category:
    """A named document class and its ordered keywords."""

    name: str
    keywords: tuple[str, ...]


@dataclass(frozen=True)
class CategoryTable:
    """Immutable, ordered sequence of categories."""

    categories: tuple[Category, ...]

    def __post_init__(self) -> None:
        seen: set[str] = set()
        for category in self.categories:
            if not category.name:
                raise ValueError("Category names must be non-empty")
            if category.name == UNCLASSIFIED:
                raise ValueError(f"{UNCLASSIFIED!r} is a reserved category name")
            if category.name in seen:
                raise ValueError(f"Duplicate category name: {category.name}")
            if not all(category.keywords):
                raise ValueError(f"Category {category.name!r} has an empty keyword")
            seen.add(category.name)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Sequence[str]]) -> "CategoryTable":
        """Build a table from a name to keyword-list mapping.

        Insertion order of the mapping becomes table order. Keywords are
        stripped and lowercased.

        Args:
            mapping: Category name mapped to its ordered keywords.

        Returns:
            The corresponding category table.

        Raises:
            ValueError: If a name or keyword is empty.
        """
        return cls(
            categories=tuple(
                Category(
                    name=name.strip(),
                    keywords=tuple(kw.strip().lower() for kw in keywords),
                )
                for name, keywords in mapping.items()
            )
        )

    @classmethod
    def default(cls) -> "CategoryTable":
        return cls.from_mapping(DEFAULT_CATEGORIES)

    def names(self) -> list[str]:
        return [c.name for c in self.categories]

    def __iter__(self) -> Iterator[Category]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)
