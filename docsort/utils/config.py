"""Configuration management for the document sorter.

Loads and validates YAML configuration with defaults for the OCR
engine, PDF handling and the category keyword table.
"""

import logging
import os
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from docsort.categories import DEFAULT_CATEGORIES, CategoryTable

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCSORT_CONFIG"
DEFAULT_CONFIG_PATH = "configs/config.yaml"


class OCRConfig(BaseModel):
    """Configuration for the Tesseract OCR engine."""

    tesseract_cmd: str | None = None
    languages: list[str] = Field(default_factory=lambda: ["eng", "hin"], min_length=1)
    psm: int = Field(default=6, ge=0, le=13)
    timeout: float = Field(default=0, ge=0)

    @property
    def lang(self) -> str:
        """Language set in Tesseract's ``eng+hin`` notation."""
        return "+".join(self.languages)


class PDFConfig(BaseModel):
    """Configuration for PDF text extraction."""

    mode: Literal["decode", "rasterize"] = "decode"
    dpi: int = Field(default=300, gt=0)


class AppConfig(BaseModel):
    """Top-level application configuration."""

    ocr: OCRConfig = Field(default_factory=OCRConfig)
    pdf: PDFConfig = Field(default_factory=PDFConfig)
    categories: dict[str, list[str]] = Field(
        default_factory=lambda: {k: list(v) for k, v in DEFAULT_CATEGORIES.items()}
    )
    log_level: str = "INFO"

    def category_table(self) -> CategoryTable:
        """Build the immutable category table from ``categories``."""
        return CategoryTable.from_mapping(self.categories)


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to ``$DOCSORT_CONFIG``, then configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH))

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path, encoding="utf-8") as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
