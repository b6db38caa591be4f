"""Data types passed into and out of the document processor."""

import mimetypes
from dataclasses import asdict, dataclass
from pathlib import Path

UNCLASSIFIED = "Unclassified"
ERROR_PLACEHOLDER = "Error processing document"
DEFAULT_CONTENT_TYPE = "application/octet-stream"


@dataclass(frozen=True)
class DocumentBlob:
    """A single uploaded document.

    Attributes:
        name: Display name, usually the original filename.
        declared_type: MIME-style content type, e.g. ``image/png``.
        content: Raw file bytes.
    """

    name: str
    declared_type: str
    content: bytes

    @classmethod
    def from_path(cls, path: Path) -> "DocumentBlob":
        """Read a document from disk, guessing its type from the extension.

        Args:
            path: Path to the document file.

        Returns:
            A blob holding the file contents.
        """
        path = Path(path)
        declared_type, _ = mimetypes.guess_type(path.name)
        return cls(
            name=path.name,
            declared_type=declared_type or DEFAULT_CONTENT_TYPE,
            content=path.read_bytes(),
        )


@dataclass(frozen=True)
class ProcessingResult:
    """Outcome of classifying one document.

    ``confidence`` is 1.0 exactly when ``category`` names a table entry
    and 0.0 exactly when it is ``Unclassified``. Use the constructors
    below rather than building instances by hand.
    """

    category: str
    confidence: float
    extracted_text: str

    @classmethod
    def matched(cls, category: str, extracted_text: str) -> "ProcessingResult":
        if category == UNCLASSIFIED:
            raise ValueError(f"{UNCLASSIFIED!r} is not a matchable category")
        return cls(category=category, confidence=1.0, extracted_text=extracted_text)

    @classmethod
    def unmatched(cls, extracted_text: str) -> "ProcessingResult":
        return cls(category=UNCLASSIFIED, confidence=0.0, extracted_text=extracted_text)

    @classmethod
    def failed(cls) -> "ProcessingResult":
        return cls(
            category=UNCLASSIFIED, confidence=0.0, extracted_text=ERROR_PLACEHOLDER
        )

    @property
    def is_classified(self) -> bool:
        return self.category != UNCLASSIFIED

    @property
    def is_error(self) -> bool:
        return not self.is_classified and self.extracted_text == ERROR_PLACEHOLDER

    def to_dict(self) -> dict[str, object]:
        return asdict(self)
