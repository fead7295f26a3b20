"""Data models for the documents of an EPUB3 package."""

from pathlib import Path

from pydantic import BaseModel


class RootfileReference(BaseModel):
    """A ``rootfile`` entry of ``META-INF/container.xml``."""

    full_path: str  # Relative to the package root
    media_type: str


class NavigationItem(BaseModel):
    """The manifest item of the package document flagged with the ``nav`` property."""

    id: str | None = None
    href: str
    media_type: str


class NavigationRewrite(BaseModel):
    """Outcome of relocating the navigation document."""

    source: Path
    target: Path
    rewritten: int = 0  # References given a new value
    skipped: int = 0  # Local fragments and external references


class RewriteResult(BaseModel):
    """Outcome of processing the package document."""

    opf_path: Path
    nav_item: NavigationItem
    nav_source: Path
    nav_target: Path
    new_href: str
    changed: bool = True
    navigation: NavigationRewrite | None = None
    warning: str | None = None  # Set when nothing had to be done
