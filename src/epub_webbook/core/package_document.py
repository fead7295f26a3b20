"""Validate the OPF package document and point its nav item at the WebBook entry."""

import logging
from pathlib import Path

from lxml import etree

from epub_webbook.core.errors import IncompatibleVersionError, StructuralError
from epub_webbook.core.navigation import NavigationRewriter
from epub_webbook.core.paths import relative_href, resolve_href
from epub_webbook.core.xml_io import parse_file, write_file
from epub_webbook.models.config import ConversionConfig
from epub_webbook.models.package import NavigationItem, RewriteResult

log = logging.getLogger(__name__)

XHTML_MEDIA_TYPE = "application/xhtml+xml"

# properties is a whitespace-separated list, "nav" may share it with others
NAV_ITEM_XPATH = (
    '//*[local-name()="item"]'
    '[contains(concat(" ", normalize-space(@properties), " "), " nav ")]'
)
MANIFEST_ITEMS_XPATH = '//*[local-name()="item"][@href]'


class PackageDocumentProcessor:
    """Move the navigation document of a package to ``<root>/index.xhtml``."""

    def __init__(
        self,
        package_root: Path,
        config: ConversionConfig | None = None,
        rewriter: NavigationRewriter | None = None,
    ):
        """Initialize the processor.

        Args:
            package_root: Root directory of the extracted package
            config: Conversion settings (target name, accepted versions)
            rewriter: Navigation rewriter invoked when relocation is needed
        """
        self.package_root = package_root.resolve()
        self.config = config or ConversionConfig()
        self.rewriter = rewriter or NavigationRewriter()

    @property
    def target_path(self) -> Path:
        """Canonical location of the WebBook entry point."""
        return self.package_root / self.config.index_name

    def process(self, opf_path: Path) -> RewriteResult:
        """Relocate the navigation document declared by the OPF at ``opf_path``.

        Nothing is written unless every check passes and the navigation
        document was rewritten successfully.

        Raises:
            ParseError: If the OPF or navigation document is not well-formed
            IncompatibleVersionError: If the package is not EPUB 3.0/3.1
            StructuralError: If the nav item is missing, unusable or the
                target location is taken by another manifest item
        """
        opf_path = opf_path.resolve()
        log.info(f"Found main rendition: {opf_path}")
        tree = parse_file(opf_path)

        self._check_version(tree)
        nav_element = self._find_nav_element(tree)
        nav_item = self._to_navigation_item(nav_element)

        opf_dir = opf_path.parent
        nav_source = resolve_href(nav_item.href, opf_dir)
        nav_target = self.target_path
        new_href = relative_href(nav_target, opf_dir)

        if nav_source == nav_target:
            return RewriteResult(
                opf_path=opf_path,
                nav_item=nav_item,
                nav_source=nav_source,
                nav_target=nav_target,
                new_href=nav_item.href,
                changed=False,
                warning=(
                    "Nothing to do, package already has a "
                    f"{self.config.index_name} file in topmost directory"
                ),
            )

        if not nav_source.is_file():
            raise StructuralError(f"Navigation document not found: {nav_source}")
        self._check_target_free(tree, opf_dir, nav_element, nav_target)

        navigation = self.rewriter.rewrite(nav_source, nav_target)

        log.info(f"Changing navigation item to target file {new_href}")
        nav_element.set("href", new_href)
        write_file(tree, opf_path)
        log.info(f"Package document saved: {opf_path}")

        return RewriteResult(
            opf_path=opf_path,
            nav_item=nav_item,
            nav_source=nav_source,
            nav_target=nav_target,
            new_href=new_href,
            navigation=navigation,
        )

    def _check_version(self, tree: etree._ElementTree) -> None:
        """Only EPUB 3.x structural rules are handled."""
        version = tree.getroot().get("version")
        if version not in self.config.supported_versions:
            raise IncompatibleVersionError(version)

    def _find_nav_element(self, tree: etree._ElementTree) -> etree._Element:
        """Return the manifest item carrying the ``nav`` property."""
        matches = tree.xpath(NAV_ITEM_XPATH)
        if not matches:
            raise StructuralError("No navigation document, nothing we can do now")
        log.info(f"Found navigation item in OPF: {matches[0].get('href')}")
        return matches[0]

    def _to_navigation_item(self, element: etree._Element) -> NavigationItem:
        """Read the nav item, which must be an XHTML document with an href."""
        href = element.get("href")
        media_type = element.get("media-type")
        if media_type != XHTML_MEDIA_TYPE:
            raise StructuralError(
                f"The Navigation Document is not a XHTML document! ({media_type})"
            )
        if not href:
            raise StructuralError("The navigation item has no href")
        return NavigationItem(id=element.get("id"), href=href, media_type=media_type)

    def _check_target_free(
        self,
        tree: etree._ElementTree,
        opf_dir: Path,
        nav_element: etree._Element,
        nav_target: Path,
    ) -> None:
        """Refuse to overwrite a content document already living at the target."""
        for item in tree.xpath(MANIFEST_ITEMS_XPATH):
            if item is nav_element:
                continue
            href = item.get("href").partition("#")[0]
            if resolve_href(href, opf_dir) == nav_target:
                raise StructuralError(
                    f"Manifest item {item.get('id') or href} already occupies "
                    f"{nav_target}"
                )
