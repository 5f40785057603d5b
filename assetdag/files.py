# assetdag/files.py
"""
Filesystem access used for cache busting.
"""

from pathlib import Path
from typing import Optional


class Filesystem:
    """Modification-time lookups for asset files."""

    def last_modified(self, path: Path | str) -> Optional[int]:
        """
        Get a file's modification time as whole seconds since the epoch.

        Raises OSError (e.g. FileNotFoundError) if the file cannot be read.
        """
        return int(Path(path).stat().st_mtime)
