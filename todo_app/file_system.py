"""
File-system access for static pages and the users file.

Route handlers never open files themselves; they go through the
``FileSystem`` instance handed to ``create_app``. Tests replace it with
an in-memory double exposing the same three methods.
"""

import os
import tempfile
from pathlib import Path


class FileSystem:
    """Read and write UTF-8 text files on local disk."""

    def read_text(self, path: str) -> str:
        """
        Return the contents of *path*.

        Raises:
            FileNotFoundError: If the file does not exist.
        """
        return Path(path).read_text(encoding="utf-8")

    def write_text(self, path: str, content: str) -> None:
        """
        Replace the contents of *path*.

        The content goes to a temporary file in the same directory which is
        then renamed over *path*, so readers see either the old or the new
        file, never a partial one.
        """
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=target.parent, prefix=f".{target.name}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                handle.write(content)
            os.replace(tmp_path, target)
        except BaseException:
            Path(tmp_path).unlink(missing_ok=True)
            raise

    def exists(self, path: str) -> bool:
        return Path(path).is_file()
