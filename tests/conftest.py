"""Fixtures building extracted EPUB3 packages and archives."""

import zipfile
from pathlib import Path

import pytest

CONTAINER_XML = """<?xml version="1.0" encoding="UTF-8"?>
<container version="1.0" xmlns="urn:oasis:names:tc:opendocument:xmlns:container">
  <rootfiles>
    <rootfile full-path="{opf_path}" media-type="application/oebps-package+xml"/>
  </rootfiles>
</container>
"""

PACKAGE_OPF = """<?xml version="1.0" encoding="UTF-8"?>
<package xmlns="http://www.idpf.org/2007/opf" version="{version}" unique-identifier="uid">
  <metadata xmlns:dc="http://purl.org/dc/elements/1.1/">
    <dc:identifier id="uid">urn:uuid:0b4c8a52-7f5e-4d3c-9c1e-3f0a7c6b2d11</dc:identifier>
    <dc:title>Test Book</dc:title>
    <dc:language>en</dc:language>
  </metadata>
  <!-- manifest -->
  <manifest>
    <item id="nav" href="{nav_href}" media-type="{nav_media_type}"{nav_properties}/>
    <item id="ch1" href="chapter1.xhtml" media-type="application/xhtml+xml"/>
    <item id="ch2" href="text/chapter2.xhtml" media-type="application/xhtml+xml"/>
    <item id="cover" href="images/cover.jpg" media-type="image/jpeg" properties="cover-image"/>
{extra_items}  </manifest>
  <spine>
    <itemref idref="ch1"/>
    <itemref idref="ch2"/>
  </spine>
</package>
"""

NAV_XHTML = """<?xml version="1.0" encoding="UTF-8"?>
<!DOCTYPE html>
<html xmlns="http://www.w3.org/1999/xhtml" xmlns:epub="http://www.idpf.org/2007/ops">
<head>
  <title>Navigation</title>
  <link rel="stylesheet" type="text/css" href="css/style.css"/>
</head>
<body>
  <nav epub:type="toc" id="toc">
    <h1>Contents</h1>
    <ol>
      <li><a href="chapter1.xhtml">Chapter 1</a></li>
      <li><a href="text/chapter2.xhtml#sec-2">Chapter 2</a></li>
      <li><a href="#toc">Top</a></li>
      <li><a href="https://example.com/book">Website</a></li>
    </ol>
  </nav>
  <nav epub:type="landmarks" hidden="">
    <ol>
      <li><a epub:type="bodymatter" href="chapter1.xhtml">Start</a></li>
    </ol>
  </nav>
  <img src="images/cover.jpg" alt="Cover"/>
  <video src="video/clip.mp4" poster="images/poster.jpg"></video>
</body>
</html>
"""


def write_package(
    root: Path,
    opf_dir: str = "OEBPS",
    version: str | None = "3.0",
    nav_href: str = "nav.xhtml",
    nav_media_type: str = "application/xhtml+xml",
    nav_properties: str | None = "nav",
    nav_xhtml: str = NAV_XHTML,
    extra_items: str = "",
) -> Path:
    """Write an extracted EPUB3 package under ``root`` and return the OPF path."""
    opf_rel = f"{opf_dir}/package.opf" if opf_dir else "package.opf"
    content_dir = root / opf_dir if opf_dir else root

    (root / "META-INF").mkdir(parents=True, exist_ok=True)
    (root / "mimetype").write_text("application/epub+zip")
    (root / "META-INF" / "container.xml").write_text(
        CONTAINER_XML.format(opf_path=opf_rel)
    )

    opf = PACKAGE_OPF.format(
        version=version or "",
        nav_href=nav_href,
        nav_media_type=nav_media_type,
        nav_properties=f' properties="{nav_properties}"' if nav_properties else "",
        extra_items=extra_items,
    )
    if version is None:
        opf = opf.replace(' version=""', "")

    content_dir.mkdir(parents=True, exist_ok=True)
    opf_path = content_dir / "package.opf"
    opf_path.write_text(opf)

    nav_path = content_dir / nav_href
    nav_path.parent.mkdir(parents=True, exist_ok=True)
    nav_path.write_text(nav_xhtml)

    (content_dir / "text").mkdir(exist_ok=True)
    (content_dir / "images").mkdir(exist_ok=True)
    (content_dir / "chapter1.xhtml").write_text("<html/>")
    (content_dir / "text" / "chapter2.xhtml").write_text("<html/>")
    (content_dir / "images" / "cover.jpg").write_bytes(b"\xff\xd8\xff")

    return opf_path


def zip_package(root: Path, archive_path: Path) -> Path:
    """Pack an extracted package into an EPUB archive."""
    with zipfile.ZipFile(archive_path, "w") as zf:
        zf.write(root / "mimetype", "mimetype", compress_type=zipfile.ZIP_STORED)
        for path in sorted(root.rglob("*")):
            if path.is_file() and path.name != "mimetype":
                zf.write(path, path.relative_to(root).as_posix(), zipfile.ZIP_DEFLATED)
    return archive_path


def snapshot(root: Path) -> dict[str, bytes]:
    """Contents of every file under ``root``, keyed by relative path."""
    return {
        path.relative_to(root).as_posix(): path.read_bytes()
        for path in sorted(root.rglob("*"))
        if path.is_file()
    }


@pytest.fixture
def package_root(tmp_path: Path) -> Path:
    """An extracted package with its OPF and navigation document in OEBPS/."""
    root = tmp_path / "book"
    write_package(root)
    return root


@pytest.fixture
def epub_archive(tmp_path: Path) -> Path:
    """The default package as a .epub archive."""
    source = tmp_path / "source"
    write_package(source)
    return zip_package(source, tmp_path / "book.epub")
