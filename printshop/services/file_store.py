"""Local disk storage for uploaded design files."""

import logging
import random
import time
from dataclasses import dataclass
from pathlib import Path, PurePath

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StoredFile:
    """Location of a file written by the store."""

    path: str
    stored_name: str


class LocalFileStore:
    """Writes uploads under a root directory with collision-resistant names."""

    def __init__(self, root: str | Path) -> None:
        """Initialize the file store.

        Args:
            root: Directory that receives uploaded files. Created on demand.
        """
        self.root = Path(root)

    def _generate_name(self, original_name: str, prefix: str) -> str:
        extension = PurePath(original_name).suffix.lower()
        unique_suffix = f"{int(time.time() * 1000)}-{random.randint(0, 999_999_999)}"
        return f"{prefix}-{unique_suffix}{extension}"

    def store(self, content: bytes, original_name: str, prefix: str = "design") -> StoredFile:
        """Write file content to the store.

        Args:
            content: Raw file bytes.
            original_name: Client-supplied file name, used for its extension.
            prefix: Leading part of the generated name.

        Returns:
            StoredFile: Path and generated name of the written file.

        Raises:
            OSError: If the directory or file cannot be written.
        """
        self.root.mkdir(parents=True, exist_ok=True)

        stored_name = self._generate_name(original_name, prefix)
        path = self.root / stored_name
        path.write_bytes(content)

        logger.debug("Stored upload %s as %s (%d bytes)", original_name, path, len(content))
        return StoredFile(path=str(path), stored_name=stored_name)

    def read(self, path: str) -> bytes:
        return Path(path).read_bytes()

    def delete(self, path: str) -> bool:
        """Delete a stored file.

        Errors are logged and never raised.

        Returns:
            bool: True if the file was removed.
        """
        try:
            Path(path).unlink()
            logger.info("Deleted stored file %s", path)
            return True
        except OSError as e:
            logger.error("Failed to delete stored file %s: %s", path, str(e))
            return False

    def is_writable(self) -> bool:
        """Check that the root directory exists or can be created."""
        try:
            self.root.mkdir(parents=True, exist_ok=True)
        except OSError:
            return False
        return self.root.is_dir()
