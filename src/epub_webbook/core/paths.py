"""Relative path algebra for references inside relocated documents.

Filesystem locations are handled as native paths, while values embedded in
XML attributes are always ``/``-separated, percent-encoded URL references.
"""

import os
import re
from pathlib import Path, PurePath
from urllib.parse import quote, unquote

# RFC 3986 scheme: "http:", "mailto:", "data:", ...
SCHEME_PATTERN = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*:")

# Characters written as-is in a path segment; ":" is left out so a first
# segment never reads as a scheme.
SEGMENT_SAFE = "!$&'()*+,;=@~"


def relative_href(target: Path, start_dir: Path) -> str:
    """Return the URL path leading from ``start_dir`` to ``target``.

    Segments are percent-encoded, so names with spaces, ``#`` or ``?`` stay
    a single path.
    """
    rel = os.path.relpath(os.path.normpath(target), os.path.normpath(start_dir))
    segments = PurePath(rel).as_posix().split("/")
    return "/".join(quote(segment, safe=SEGMENT_SAFE) for segment in segments)


def resolve_href(href: str, base_dir: Path) -> Path:
    """Resolve a relative URL path against ``base_dir`` to an absolute location.

    Percent-escapes are decoded and ``.``/``..`` segments collapsed; the
    result need not exist.
    """
    segments = [unquote(s) for s in href.split("/") if s]
    joined = os.path.join(os.path.abspath(base_dir), *segments)
    return Path(os.path.normpath(joined))


def is_local_fragment(value: str) -> bool:
    """Check whether a reference targets the document it appears in."""
    return value == "" or value.startswith("#")


def is_external(value: str) -> bool:
    """Check whether a reference does not depend on the document's location."""
    if SCHEME_PATTERN.match(value):
        return True
    return value.startswith("/")


def rebase_reference(value: str, old_dir: Path, new_dir: Path) -> str:
    """Rewrite a reference written for ``old_dir`` so it works from ``new_dir``.

    Query and fragment parts are kept as they are. Same-document fragments and
    external references come back unchanged.
    """
    if is_local_fragment(value) or is_external(value):
        return value

    path, hash_mark, fragment = value.partition("#")
    path, question_mark, query = path.partition("?")
    if not path:
        # "?query" only
        return value

    new_path = relative_href(resolve_href(path, old_dir), new_dir)
    if path.endswith("/") and not new_path.endswith("/"):
        new_path += "/"
    return new_path + question_mark + query + hash_mark + fragment
