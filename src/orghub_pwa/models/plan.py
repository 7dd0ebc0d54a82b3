from typing import List

from pydantic import BaseModel, ConfigDict, Field

from .enums import ArtifactKind, ChangeAction


class PlannedDelete(BaseModel):
    """An orphaned artifact scheduled for removal."""

    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind
    filename: str


class PlannedWrite(BaseModel):
    """A rendered artifact; written only when the stored content differs."""

    model_config = ConfigDict(frozen=True)

    kind: ArtifactKind
    filename: str
    content: str


class SyncPlan(BaseModel):
    """Everything needed to bring the output directories in line with a club list."""

    model_config = ConfigDict(frozen=True)

    deletes: List[PlannedDelete] = []
    writes: List[PlannedWrite] = []
    club_count: int = 0


class SyncFailure(BaseModel):
    """A storage operation that failed while applying a plan."""

    action: ChangeAction
    kind: ArtifactKind
    filename: str
    error: str


class SyncReport(BaseModel):
    """Outcome of applying a SyncPlan."""

    club_count: int = 0
    written: List[str] = Field(default_factory=list)
    unchanged: List[str] = Field(default_factory=list)
    deleted: List[str] = Field(default_factory=list)
    failures: List[SyncFailure] = Field(default_factory=list)
    dry_run: bool = False

    @property
    def mutation_count(self) -> int:
        return len(self.written) + len(self.deleted)
