"""Extract EPUB archives into a fresh working directory."""

import logging
import shutil
import zipfile
from dataclasses import dataclass, field
from pathlib import Path

from epub_webbook.core.errors import ArchiveError

log = logging.getLogger(__name__)

ENCRYPTION_ENTRY = "META-INF/encryption.xml"


@dataclass
class ExtractedArchive:
    """An archive unpacked on disk."""

    root: Path
    entries: int
    warnings: list[str] = field(default_factory=list)


class ArchiveSource:
    """Unpack EPUB archives into ``workdir``, recreated on every extraction."""

    def __init__(self, workdir: Path):
        self.workdir = workdir

    def extract(self, archive_path: Path) -> ExtractedArchive:
        """Extract every entry of ``archive_path`` into the working directory.

        Raises:
            ArchiveError: If the archive is missing, not a zip file or unreadable,
                or if recreating the working directory would delete the archive
                or the current directory
        """
        if not archive_path.is_file():
            raise ArchiveError(f"File not found: {archive_path}")
        self._check_workdir(archive_path)

        try:
            with zipfile.ZipFile(archive_path) as zf:
                bad_entry = zf.testzip()
                if bad_entry is not None:
                    raise ArchiveError(f"Corrupt entry in {archive_path}: {bad_entry}")

                names = zf.namelist()
                warnings = []
                if ENCRYPTION_ENTRY in names:
                    message = (
                        f"{archive_path.name} declares encrypted resources, "
                        "they are extracted as-is"
                    )
                    warnings.append(message)

                self._recreate_workdir()
                zf.extractall(self.workdir)
        except zipfile.BadZipFile as e:
            raise ArchiveError(f"Not a valid EPUB archive: {archive_path} ({e})") from e
        except OSError as e:
            raise ArchiveError(f"Cannot extract {archive_path}: {e}") from e

        count = sum(1 for name in names if not name.endswith("/"))
        log.info(f"Extracted {count} entries into {self.workdir}")
        return ExtractedArchive(
            root=self.workdir.resolve(), entries=count, warnings=warnings
        )

    def _check_workdir(self, archive_path: Path) -> None:
        """The working directory is deleted, it must not hold anything we need."""
        workdir = self.workdir.resolve()
        if archive_path.resolve().is_relative_to(workdir):
            raise ArchiveError(
                f"Working directory {workdir} contains the archive {archive_path}"
            )
        if Path.cwd().resolve().is_relative_to(workdir):
            raise ArchiveError(
                f"Working directory {workdir} contains the current directory"
            )

    def _recreate_workdir(self) -> None:
        """Destroy any previous extraction and start from an empty directory."""
        if self.workdir.exists():
            shutil.rmtree(self.workdir)
        self.workdir.mkdir(parents=True)
