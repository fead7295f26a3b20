"""Sequence the conversion stages: container, package document, navigation."""

import logging
from pathlib import Path

from epub_webbook.core.archive import ArchiveSource
from epub_webbook.core.container import ContainerReader
from epub_webbook.core.errors import StructuralError
from epub_webbook.core.package_document import PackageDocumentProcessor
from epub_webbook.core.paths import resolve_href
from epub_webbook.models.config import ConversionConfig
from epub_webbook.models.report import ConversionOutcome, ConversionReport

log = logging.getLogger(__name__)


class WebBookPipeline:
    """Turn an EPUB3 package into a WebBook served from ``index.xhtml``."""

    def __init__(self, config: ConversionConfig | None = None):
        self.config = config or ConversionConfig()
        self.container_reader = ContainerReader()

    def convert_archive(self, archive_path: Path) -> ConversionReport:
        """Extract ``archive_path`` into the working directory and convert it.

        Raises:
            WebBookError: On the first fatal condition of any stage
        """
        extracted = ArchiveSource(self.config.workdir).extract(archive_path)
        report = self.convert_tree(extracted.root)
        return report.model_copy(
            update={
                "source": archive_path,
                "extracted_entries": extracted.entries,
                "warnings": extracted.warnings + report.warnings,
            }
        )

    def convert_tree(self, package_root: Path) -> ConversionReport:
        """Convert an extracted package in place.

        Raises:
            WebBookError: On the first fatal condition of any stage
        """
        package_root = package_root.resolve()

        rootfile = self.container_reader.read_tree(package_root)
        if rootfile is None:
            log.info("No main rendition declared, stopping")
            return ConversionReport(
                source=package_root,
                package_root=package_root,
                outcome=ConversionOutcome.NO_RENDITION,
            )

        opf_path = resolve_href(rootfile.full_path, package_root)
        if not opf_path.is_file():
            raise StructuralError(f"Package document not found: {opf_path}")

        processor = PackageDocumentProcessor(package_root, self.config)
        rewrite = processor.process(opf_path)

        if not rewrite.changed:
            return ConversionReport(
                source=package_root,
                package_root=package_root,
                rootfile=rootfile,
                outcome=ConversionOutcome.ALREADY_WEBBOOK,
                rewrite=rewrite,
                warnings=[rewrite.warning],
            )

        return ConversionReport(
            source=package_root,
            package_root=package_root,
            rootfile=rootfile,
            outcome=ConversionOutcome.CONVERTED,
            rewrite=rewrite,
        )
