"""OS-specific filesystem primitives.

The cleanup core is OS-agnostic. This module supplies the few pieces that
differ between POSIX and Windows targets: pattern case sensitivity and the
delete primitives (Windows refuses to remove read-only entries until their
write bit is set).
"""

import logging
import os
import shutil
import stat
import sys
from dataclasses import dataclass
from pathlib import Path

logger = logging.getLogger(__name__)


def _make_writable_and_retry(func, path, _exc) -> None:
    """rmtree error hook: clear the read-only bit and retry once."""
    os.chmod(path, stat.S_IWRITE)
    func(path)


@dataclass(frozen=True, slots=True)
class FilesystemAdapter:
    """Filesystem primitives for one platform.

    Attributes:
        name: Platform label shown in verbose output.
        case_sensitive: Whether glob patterns match case-sensitively.
        clear_readonly: Retry failed deletes after clearing the read-only bit.
    """

    name: str
    case_sensitive: bool
    clear_readonly: bool = False

    @property
    def is_windows(self) -> bool:
        return self.name == "windows"

    def remove_file(self, path: Path) -> None:
        """Remove a single file or symlink."""
        try:
            path.unlink()
        except PermissionError:
            if not self.clear_readonly:
                raise
            logger.debug("Clearing read-only bit on %s", path)
            os.chmod(path, stat.S_IWRITE)
            path.unlink()

    def remove_tree(self, path: Path) -> None:
        """Remove a directory and everything below it."""
        if not self.clear_readonly:
            shutil.rmtree(path)
        elif sys.version_info >= (3, 12):
            shutil.rmtree(path, onexc=_make_writable_and_retry)
        else:
            shutil.rmtree(path, onerror=_make_writable_and_retry)


POSIX = FilesystemAdapter(name="posix", case_sensitive=True)
WINDOWS = FilesystemAdapter(name="windows", case_sensitive=False, clear_readonly=True)


def default_adapter() -> FilesystemAdapter:
    """Pick the adapter for the running OS."""
    return WINDOWS if os.name == "nt" else POSIX
