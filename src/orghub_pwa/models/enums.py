from enum import Enum


class ArtifactKind(str, Enum):
    MANIFEST = "manifest"
    INSTALLER = "installer"
    INDEX = "index"  # Stored next to the installers, never cleaned up


class ChangeAction(str, Enum):
    WRITE = "write"
    DELETE = "delete"
