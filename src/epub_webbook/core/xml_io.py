"""lxml parsing and serialization shared by the rewriting stages."""

from pathlib import Path

from lxml import etree

from epub_webbook.core.errors import FileAccessError, ParseError


def make_parser() -> etree.XMLParser:
    """Parser that keeps the document as written and never goes to the network."""
    return etree.XMLParser(
        resolve_entities=False,
        no_network=True,
        remove_blank_text=False,
        remove_comments=False,
        remove_pis=False,
    )


def parse_bytes(data: bytes, path: Path) -> etree._ElementTree:
    """Parse raw XML; ``path`` is only used in error messages."""
    try:
        root = etree.fromstring(data, make_parser())
    except etree.XMLSyntaxError as e:
        raise ParseError(path, str(e)) from e
    return root.getroottree()


def read_file(path: Path) -> bytes:
    """Read a package file, reporting OS failures as conversion errors."""
    try:
        return path.read_bytes()
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e


def parse_file(path: Path) -> etree._ElementTree:
    """Read and parse an XML file."""
    return parse_bytes(read_file(path), path)


def write_file(tree: etree._ElementTree, path: Path) -> None:
    """Serialize a document, keeping its doctype and declared encoding."""
    encoding = tree.docinfo.encoding or "UTF-8"
    data = etree.tostring(tree, xml_declaration=True, encoding=encoding)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
    except OSError as e:
        raise FileAccessError(path, e.strerror or str(e)) from e
