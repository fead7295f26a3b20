"""Data models."""

from epub_webbook.models.config import ConversionConfig
from epub_webbook.models.package import (
    NavigationItem,
    NavigationRewrite,
    RewriteResult,
    RootfileReference,
)
from epub_webbook.models.report import ConversionOutcome, ConversionReport

__all__ = [
    # Package models
    "RootfileReference",
    "NavigationItem",
    "NavigationRewrite",
    "RewriteResult",
    # Run models
    "ConversionOutcome",
    "ConversionReport",
    "ConversionConfig",
]
