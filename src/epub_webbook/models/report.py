"""Data models for the result of a conversion run."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from epub_webbook.models.package import RewriteResult, RootfileReference


class ConversionOutcome(str, Enum):
    """How a conversion run ended when no error was raised."""

    CONVERTED = "converted"
    ALREADY_WEBBOOK = "already_webbook"
    NO_RENDITION = "no_rendition"


class ConversionReport(BaseModel):
    """Everything a conversion run found and changed."""

    source: Path
    package_root: Path
    extracted_entries: int | None = None  # None when run on an existing tree
    rootfile: RootfileReference | None = None
    outcome: ConversionOutcome
    rewrite: RewriteResult | None = None
    warnings: list[str] = Field(default_factory=list)
