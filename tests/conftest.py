"""Shared fixtures: an in-memory artifact store and raw club payloads."""

from typing import Dict, List, Optional, Set, Tuple

import pytest

from orghub_pwa.models.enums import ArtifactKind
from orghub_pwa.storage.filesystem import ArtifactStorage, StorageError

# Index pages share the installer directory, same as on disk.
_BUCKETS = {
    ArtifactKind.MANIFEST: "manifests",
    ArtifactKind.INSTALLER: "install",
    ArtifactKind.INDEX: "install",
}


class InMemoryStorage(ArtifactStorage):
    """Dict-backed storage that counts mutations and can be told to fail."""

    def __init__(self):
        self.files: Dict[str, Dict[str, str]] = {"manifests": {}, "install": {}}
        self.writes: List[Tuple[str, str]] = []
        self.deletes: List[Tuple[str, str]] = []
        self.fail_on: Set[str] = set()
        self.ready = False

    def seed(self, bucket: str, filename: str, content: str = "old\n") -> None:
        self.files[bucket][filename] = content

    def ensure_ready(self) -> None:
        self.ready = True

    def list(self, kind: ArtifactKind) -> List[str]:
        return sorted(self.files[_BUCKETS[kind]])

    def read(self, kind: ArtifactKind, filename: str) -> Optional[str]:
        return self.files[_BUCKETS[kind]].get(filename)

    def write(self, kind: ArtifactKind, filename: str, content: str) -> None:
        if filename in self.fail_on:
            raise StorageError(f"disk full writing {filename}")
        self.files[_BUCKETS[kind]][filename] = content
        self.writes.append((_BUCKETS[kind], filename))

    def delete(self, kind: ArtifactKind, filename: str) -> None:
        if filename in self.fail_on:
            raise StorageError(f"permission denied deleting {filename}")
        del self.files[_BUCKETS[kind]][filename]
        self.deletes.append((_BUCKETS[kind], filename))

    @property
    def mutations(self) -> int:
        return len(self.writes) + len(self.deletes)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def raw_clubs() -> List[dict]:
    return [
        {"clubId": "alpha", "name": "Alpha SC", "shortName": "Alpha"},
        {"clubId": "beta", "name": "Beta FC", "themeColor": "#112233"},
        {"clubId": "gamma", "name": "Gamma", "backgroundColor": "#000000"},
    ]
