"""Conversion settings."""

from pathlib import Path

from pydantic import BaseModel, Field


class ConversionConfig(BaseModel):
    """Settings shared by every stage of the pipeline."""

    workdir: Path = Path("extracted")
    index_name: str = "index.xhtml"
    supported_versions: tuple[str, ...] = Field(default=("3.0", "3.1"))
