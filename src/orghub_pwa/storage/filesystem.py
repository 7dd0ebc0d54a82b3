# src/orghub_pwa/storage/filesystem.py
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Union

from loguru import logger

from orghub_pwa.models.enums import ArtifactKind
from orghub_pwa.rendering.naming import INSTALL_DIR_NAME, MANIFESTS_DIR_NAME


class StorageError(Exception):
    """Raised when an artifact cannot be listed, read, written or deleted."""

    pass


class ArtifactStorage(ABC):
    """Abstract base class for wherever generated artifacts are kept."""

    @abstractmethod
    def ensure_ready(self) -> None:
        """Create whatever containers the artifact kinds need."""
        pass

    @abstractmethod
    def list(self, kind: ArtifactKind) -> List[str]:
        """Return the filenames currently stored for an artifact kind."""
        pass

    @abstractmethod
    def read(self, kind: ArtifactKind, filename: str) -> Optional[str]:
        """Return the stored text, or None when the file does not exist."""
        pass

    @abstractmethod
    def write(self, kind: ArtifactKind, filename: str, content: str) -> None:
        pass

    @abstractmethod
    def delete(self, kind: ArtifactKind, filename: str) -> None:
        pass


class LocalArtifactStorage(ArtifactStorage):
    """Stores artifacts as UTF-8 files under <root>/manifests and <root>/install."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)
        self._dirs: Dict[ArtifactKind, Path] = {
            ArtifactKind.MANIFEST: self.root / MANIFESTS_DIR_NAME,
            ArtifactKind.INSTALLER: self.root / INSTALL_DIR_NAME,
            ArtifactKind.INDEX: self.root / INSTALL_DIR_NAME,
        }

    def _path(self, kind: ArtifactKind, filename: str) -> Path:
        # Filenames come from normalized ids, but never let one escape its directory.
        if Path(filename).name != filename:
            raise StorageError(f"Refusing unsafe artifact filename: {filename!r}")
        return self._dirs[kind] / filename

    def ensure_ready(self) -> None:
        for directory in set(self._dirs.values()):
            try:
                directory.mkdir(parents=True, exist_ok=True)
            except OSError as e:
                raise StorageError(f"Cannot create directory {directory}: {e}") from e
        logger.debug(f"Output directories ready under {self.root.resolve()}")

    def list(self, kind: ArtifactKind) -> List[str]:
        directory = self._dirs[kind]
        if not directory.is_dir():
            return []
        try:
            return sorted(p.name for p in directory.iterdir() if p.is_file())
        except OSError as e:
            raise StorageError(f"Cannot list {directory}: {e}") from e

    def read(self, kind: ArtifactKind, filename: str) -> Optional[str]:
        path = self._path(kind, filename)
        if not path.exists():
            return None
        try:
            # newline="" keeps \r\n visible so a changed line ending counts as a change
            with open(path, "r", encoding="utf-8", newline="") as f:
                return f.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}") from e

    def write(self, kind: ArtifactKind, filename: str, content: str) -> None:
        path = self._path(kind, filename)
        try:
            # Encode up front so unencodable text never truncates an existing file
            data = content.encode("utf-8")
        except UnicodeError as e:
            raise StorageError(f"Cannot encode {path}: {e}") from e
        try:
            with open(path, "wb") as f:
                f.write(data)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    def delete(self, kind: ArtifactKind, filename: str) -> None:
        path = self._path(kind, filename)
        try:
            path.unlink()
        except FileNotFoundError:
            logger.debug(f"{path} already gone, nothing to delete.")
        except OSError as e:
            raise StorageError(f"Cannot delete {path}: {e}") from e
