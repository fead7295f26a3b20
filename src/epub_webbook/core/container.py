"""Read ``META-INF/container.xml`` to find the main rendition."""

import logging
from pathlib import Path

from epub_webbook.core.errors import StructuralError
from epub_webbook.core.xml_io import parse_bytes, read_file
from epub_webbook.models.package import RootfileReference

log = logging.getLogger(__name__)

CONTAINER_PATH = Path("META-INF") / "container.xml"
OEBPS_PACKAGE_MEDIA_TYPE = "application/oebps-package+xml"


class ContainerReader:
    """Locate the package document declared by an EPUB container."""

    def read(
        self, data: bytes, path: Path = CONTAINER_PATH
    ) -> RootfileReference | None:
        """Return the first OEBPS package rootfile, or None when there is none.

        Raises:
            ParseError: If the container is not well-formed XML
        """
        tree = parse_bytes(data, path)

        for rootfile in tree.xpath('//*[local-name()="rootfile"]'):
            media_type = rootfile.get("media-type")
            full_path = rootfile.get("full-path")
            if media_type == OEBPS_PACKAGE_MEDIA_TYPE and full_path:
                return RootfileReference(full_path=full_path, media_type=media_type)

        log.info(f"No {OEBPS_PACKAGE_MEDIA_TYPE} rootfile in {path}")
        return None

    def read_tree(self, package_root: Path) -> RootfileReference | None:
        """Read the container of an extracted package.

        Raises:
            StructuralError: If the tree has no container document
            ParseError: If the container is not well-formed XML
        """
        container_path = package_root / CONTAINER_PATH
        if not container_path.is_file():
            raise StructuralError(f"No container document at {container_path}")

        log.info(f"Found container.xml: {container_path}")
        return self.read(read_file(container_path), container_path)
