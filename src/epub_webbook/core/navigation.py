"""Relocate the EPUB navigation document and fix the references it holds."""

import logging
from pathlib import Path

from lxml import etree

from epub_webbook.core.errors import StructuralError
from epub_webbook.core.paths import is_external, is_local_fragment, rebase_reference
from epub_webbook.core.xml_io import parse_file, write_file
from epub_webbook.models.package import NavigationRewrite

log = logging.getLogger(__name__)

EPUB_OPS_NS = "http://www.idpf.org/2007/ops"
XLINK_NS = "http://www.w3.org/1999/xlink"
TOC_ROLE = "doc-toc"

NAMESPACES = {"epub": EPUB_OPS_NS, "xlink": XLINK_NS}

# Every attribute holding a reference to another resource
REFERENCE_XPATH = (
    "//@href"
    ' | //*[local-name()="video"]/@poster'
    " | //@src"
    " | //@xlink:href"
)

# epub:type is a whitespace-separated list of terms
TOC_XPATH = (
    '//*[contains(concat(" ", normalize-space(@epub:type), " "), " toc ")]'
)


class NavigationRewriter:
    """Move a navigation document while keeping all of its links valid."""

    def rewrite(self, current_path: Path, target_path: Path) -> NavigationRewrite:
        """Write the navigation document at ``current_path`` to ``target_path``.

        Every ``href``, ``src``, ``xlink:href`` and video ``poster`` is rebased
        from the old directory to the new one, and the toc ``nav`` is given the
        ``doc-toc`` landmark role. The source file is left in place.

        Raises:
            ParseError: If the document is not well-formed XML
            StructuralError: If the document has no toc navigation element
        """
        log.info(f"Reading Navigation Document: {current_path}")
        tree = parse_file(current_path)

        rewritten, skipped = self._rebase_references(
            tree, current_path.parent, target_path.parent
        )
        self._mark_toc(tree, current_path)

        write_file(tree, target_path)
        log.info(f"Navigation Document written to {target_path}")

        return NavigationRewrite(
            source=current_path,
            target=target_path,
            rewritten=rewritten,
            skipped=skipped,
        )

    def _rebase_references(
        self, tree: etree._ElementTree, old_dir: Path, new_dir: Path
    ) -> tuple[int, int]:
        """Rebase reference attributes in place. Returns (rewritten, skipped)."""
        rewritten = 0
        skipped = 0

        for attr in tree.xpath(REFERENCE_XPATH, namespaces=NAMESPACES):
            value = str(attr)
            if is_local_fragment(value) or is_external(value):
                skipped += 1
                continue

            new_value = rebase_reference(value, old_dir, new_dir)
            element = attr.getparent()
            element.set(attr.attrname, new_value)
            log.debug(f"  {value} -> {new_value}")
            rewritten += 1

        return rewritten, skipped

    def _mark_toc(self, tree: etree._ElementTree, path: Path) -> None:
        """Give the toc element, and only it, the ``doc-toc`` role."""
        matches = tree.xpath(TOC_XPATH, namespaces=NAMESPACES)
        if not matches:
            raise StructuralError(f"No toc nav element in Navigation Document {path}")
        if len(matches) > 1:
            log.warning(
                f"{len(matches)} toc elements in {path}, using the first one"
            )

        toc = matches[0]
        for element in tree.xpath(f'//*[@role="{TOC_ROLE}"]'):
            if element is not toc:
                del element.attrib["role"]
        toc.set("role", TOC_ROLE)
