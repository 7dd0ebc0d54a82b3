from typing import List

from loguru import logger

from orghub_pwa.config.branding import Branding, DEFAULT_BRANDING
from orghub_pwa.models.club import Club
from orghub_pwa.models.enums import ArtifactKind, ChangeAction
from orghub_pwa.models.plan import SyncFailure, SyncPlan, SyncReport
from orghub_pwa.rendering.naming import INSTALL_DIR_NAME, MANIFESTS_DIR_NAME
from orghub_pwa.storage.filesystem import ArtifactStorage, StorageError

from .planner import plan_sync


class SyncError(Exception):
    """Raised after a sync pass in which at least one storage operation failed."""

    def __init__(self, report: SyncReport):
        self.report = report
        failed = ", ".join(f.filename for f in report.failures)
        super().__init__(
            f"{len(report.failures)} artifact operation(s) failed: {failed}"
        )


def artifact_label(kind: ArtifactKind, filename: str) -> str:
    directory = MANIFESTS_DIR_NAME if kind == ArtifactKind.MANIFEST else INSTALL_DIR_NAME
    return f"{directory}/{filename}"


def apply_plan(
    plan: SyncPlan, storage: ArtifactStorage, dry_run: bool = False
) -> SyncReport:
    """Applies a plan: orphans are deleted first, then changed artifacts written.

    A failing operation is recorded and the pass continues, so one bad file
    never leaves the remaining clubs stale. SyncError is raised at the end
    if anything failed.
    """
    report = SyncReport(club_count=plan.club_count, dry_run=dry_run)
    prefix = "[dry-run] " if dry_run else ""

    for planned in plan.deletes:
        label = artifact_label(planned.kind, planned.filename)
        logger.info(f"{prefix}Deleting orphaned {label}")
        if dry_run:
            report.deleted.append(label)
            continue
        try:
            storage.delete(planned.kind, planned.filename)
            report.deleted.append(label)
        except StorageError as e:
            logger.error(f"Failed to delete {label}: {e}")
            report.failures.append(
                SyncFailure(
                    action=ChangeAction.DELETE,
                    kind=planned.kind,
                    filename=planned.filename,
                    error=str(e),
                )
            )

    for planned in plan.writes:
        label = artifact_label(planned.kind, planned.filename)
        try:
            if storage.read(planned.kind, planned.filename) == planned.content:
                logger.debug(f"{label} unchanged.")
                report.unchanged.append(label)
                continue
            logger.info(f"{prefix}Writing {label}")
            if not dry_run:
                storage.write(planned.kind, planned.filename, planned.content)
            report.written.append(label)
        except StorageError as e:
            logger.error(f"Failed to write {label}: {e}")
            report.failures.append(
                SyncFailure(
                    action=ChangeAction.WRITE,
                    kind=planned.kind,
                    filename=planned.filename,
                    error=str(e),
                )
            )

    if report.failures:
        raise SyncError(report)
    return report


def sync_clubs(
    clubs: List[Club],
    storage: ArtifactStorage,
    branding: Branding = DEFAULT_BRANDING,
    dry_run: bool = False,
) -> SyncReport:
    """Reconciles the stored artifacts with a freshly fetched club list."""
    if not dry_run:
        storage.ensure_ready()

    plan = plan_sync(
        clubs,
        storage.list(ArtifactKind.MANIFEST),
        storage.list(ArtifactKind.INSTALLER),
        branding,
    )
    logger.info(
        f"Planned {len(plan.deletes)} deletion(s) and {len(plan.writes)} candidate write(s) "
        f"for {plan.club_count} clubs."
    )
    return apply_plan(plan, storage, dry_run=dry_run)
